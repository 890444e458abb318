"""
Reference ellipsoids used by the projection family.

Axis values follow the GCTP spheroid table (sphdz): Clarke 1866 for NAD27,
GRS 1980 for NAD83, and the 6370997 m sphere used for spherical forms.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from cartoproj.core.config import settings
from cartoproj.core.errors import UnrecognizedDatumError

logger = logging.getLogger(__name__)

# GCTP 19: sphere of radius 6370997 meters
MEAN_SPHERE_RADIUS = 6370997.0


@dataclass(frozen=True)
class Spheroid:
    """
    Reference ellipsoid for a datum.

    Attributes:
        datum: Datum name (e.g., "NAD83")
        r_major: Semi-major axis in meters
        r_minor: Semi-minor axis in meters
        radius: Radius of the mean sphere in meters
    """

    datum: str
    r_major: float
    r_minor: float
    radius: float = MEAN_SPHERE_RADIUS

    @property
    def eccentricity_squared(self) -> float:
        """Square of the first eccentricity."""
        temp = self.r_minor / self.r_major
        return 1.0 - temp * temp

    @property
    def flattening(self) -> float:
        """Flattening (a - b) / a."""
        return (self.r_major - self.r_minor) / self.r_major

    @property
    def is_sphere(self) -> bool:
        """True when both axes are equal."""
        return self.r_major == self.r_minor

    @classmethod
    def from_datum(cls, datum: str, strict: Optional[bool] = None) -> "Spheroid":
        """
        Look up the spheroid for a datum name (case-insensitive).

        Unrecognized names fall back to NAD27 unless strict is enabled.

        Args:
            datum: Datum name ("NAD27", "NAD83" or "Sphere")
            strict: Raise instead of falling back, defaults to settings.strict_datum

        Returns:
            Spheroid for the datum

        Raises:
            UnrecognizedDatumError: If strict and the datum is not recognized
        """
        key = (datum or "").strip().upper()
        if key in SPHEROIDS:
            return SPHEROIDS[key]

        if strict is None:
            strict = settings.strict_datum
        if strict:
            raise UnrecognizedDatumError(datum)

        logger.warning(f'Unrecognized datum "{datum}", using NAD27')
        return NAD27

    def __str__(self) -> str:
        """String representation."""
        return self.datum


# GCTP 0: Clarke 1866
NAD27 = Spheroid(datum="NAD27", r_major=6378206.4, r_minor=6356583.8)

# GCTP 8: GRS 1980
NAD83 = Spheroid(datum="NAD83", r_major=6378137.0, r_minor=6356752.31414)

SPHERE = Spheroid(datum="Sphere", r_major=MEAN_SPHERE_RADIUS, r_minor=MEAN_SPHERE_RADIUS)

SPHEROIDS: Dict[str, Spheroid] = {
    "NAD27": NAD27,
    "NAD83": NAD83,
    "SPHERE": SPHERE,
}
