"""
Build projections from textual descriptors.

Descriptors are comma-separated token lists as stored in project files:

    "Geographic"
    "HRAP"
    "Unknown"
    "UTM,<zone>[,<datum>,<false_easting>,<false_northing>,<central_longitude>,<origin_latitude>,<scale>]"

The first token selects the family and is compared case-insensitively.
"""

import logging
from typing import Callable, Dict, List

from cartoproj.core.errors import UnrecognizedProjectionError
from cartoproj.core.projections.base import Projection
from cartoproj.core.projections.geographic import GeographicProjection
from cartoproj.core.projections.hrap import HRAPProjection
from cartoproj.core.projections.unknown import UnknownProjection
from cartoproj.core.projections.utm import UTMProjection

logger = logging.getLogger(__name__)

_FAMILIES: Dict[str, Callable[[str], Projection]] = {
    "Geographic": lambda descriptor: GeographicProjection(),
    "HRAP": lambda descriptor: HRAPProjection(),
    "UTM": UTMProjection.parse,
    "Unknown": lambda descriptor: UnknownProjection(),
}


def available_projection_names() -> List[str]:
    """Projection families parse_projection() understands."""
    return list(_FAMILIES)


def parse_projection(descriptor: str) -> Projection:
    """
    Construct a projection from a descriptor string.

    Args:
        descriptor: Projection descriptor, e.g. "HRAP" or "UTM,13,NAD83"

    Returns:
        New projection instance

    Raises:
        UnrecognizedProjectionError: If the family is not known
        InvalidZoneError: If a UTM zone is missing or out of range
        ProjectionConfigurationError: If a UTM descriptor is incomplete
    """
    family = descriptor.split(",", 1)[0].strip().casefold()
    for name, factory in _FAMILIES.items():
        if name.casefold() == family:
            projection = factory(descriptor.strip())
            logger.debug(f'Parsed projection descriptor "{descriptor}" as {projection!r}')
            return projection
    raise UnrecognizedProjectionError(descriptor)
