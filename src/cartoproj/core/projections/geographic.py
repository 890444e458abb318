"""
Geographic projection: longitude/latitude passed through unchanged.
"""

import math
from typing import Optional, Tuple

from pyproj import CRS

from cartoproj.core.projections.base import Projection
from cartoproj.core.projections.registry import ProjectionRegistry
from cartoproj.models.shapes import Point

# Kilometers per degree of arc along the equator, rounded
KM_PER_DEGREE = 111.3


class GeographicProjection(Projection):
    """Identity projection for data already in decimal degrees."""

    def __init__(self, registry: Optional[ProjectionRegistry] = None):
        super().__init__("Geographic", registry)

    def forward(self, lon: float, lat: float) -> Tuple[float, float]:
        return lon, lat

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        return x, y

    def kilometers_per_unit(self, point: Point, reuse: bool = False) -> Point:
        """
        Rough kilometers per degree at the point's latitude.

        Suitable for indicative scale display only. Both x and y of the
        result hold 111.3 * cos(latitude).
        """
        scale = KM_PER_DEGREE * math.cos(math.radians(point.y))
        target = point if reuse else point.copy()
        target.set_xy(scale, scale)
        return target

    def to_crs(self) -> Optional[CRS]:
        # NAD83 geographic
        return CRS.from_epsg(4269)


# Shared instance for code that needs a geodetic reference projection
geographic_projection = GeographicProjection()
