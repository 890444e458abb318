"""
HRAP (Hydrologic Rainfall Analysis Project) grid projection.

HRAP is the polar stereographic grid used by the National Weather Service
for precipitation products. The grid origin is in the southwest; x grows to
the east and y to the north. Conversions follow the NWS formulas
(http://www.nws.noaa.gov/oh/hrl/dmip/lat_lon.txt):

- reference meridian 105 W, true at 60 N
- earth radius 6371.2 km, mesh length 4.7625 km at 60 N
- the north pole sits at HRAP (401, 1601)

Points are (longitude, latitude) on one side and (HRAP x, HRAP y) on the
other. The inverse always returns a western (negative) longitude.
"""

import math
from typing import Optional, Tuple

from cartoproj.core.projections.base import Projection
from cartoproj.core.projections.dispatcher import project_shape
from cartoproj.core.projections.gctp import D2R
from cartoproj.core.projections.geographic import geographic_projection
from cartoproj.core.projections.registry import ProjectionRegistry
from cartoproj.models.shapes import Point

# The NWS formulas use this truncated value of pi; keep it for round trips.
HRAP_PI = 3.141592654

EARTH_RADIUS_KM = 6371.2
MESH_LENGTH_KM = 4.7625
REFERENCE_LATITUDE = 60.0
REFERENCE_LONGITUDE = 105.0
POLE_X = 401.0
POLE_Y = 1601.0


class HRAPProjection(Projection):
    """NWS HRAP polar stereographic grid."""

    def __init__(self, registry: Optional[ProjectionRegistry] = None):
        super().__init__("HRAP", registry)
        self.earth_radius = EARTH_RADIUS_KM

    def forward(self, lon: float, lat: float) -> Tuple[float, float]:
        # HRAP works with positive (west) longitude
        rlon = -lon if lon < 0 else lon
        d2rad = HRAP_PI / 180.0
        tlat = REFERENCE_LATITUDE * d2rad
        re = (self.earth_radius * (1.0 + math.sin(tlat))) / MESH_LENGTH_KM
        flat = lat * d2rad
        flon = ((rlon + 180.0) - REFERENCE_LONGITUDE) * d2rad
        r = re * math.cos(flat) / (1.0 + math.sin(flat))
        x = r * math.sin(flon)
        y = r * math.cos(flon)
        return x + POLE_X, y + POLE_Y

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        raddeg = 180.0 / HRAP_PI
        tlat = REFERENCE_LATITUDE / raddeg
        x = x - POLE_X
        y = y - POLE_Y
        rr = x * x + y * y
        gi = (self.earth_radius * (1.0 + math.sin(tlat))) / MESH_LENGTH_KM
        gi = gi * gi
        rlat = math.asin((gi - rr) / (gi + rr)) * raddeg
        ang = math.atan2(y, x) * raddeg
        if ang < 0:
            ang = ang + 360.0
        rlon = 270.0 + REFERENCE_LONGITUDE - ang
        if rlon < 0:
            rlon = rlon + 360.0
        if rlon > 360.0:
            rlon = rlon - 360.0
        # TODO: support eastern-hemisphere grids; longitude is assumed west.
        return -rlon, rlat

    def kilometers_per_unit(self, point: Point, reuse: bool = False) -> Point:
        """
        Kilometers per HRAP unit at a location given in HRAP coordinates.

        The scale only depends on latitude and is the same in x and y.
        """
        geodetic = project_shape(self, geographic_projection, point, reuse=False)
        scale = MESH_LENGTH_KM / (
            (1.0 + math.sin(REFERENCE_LATITUDE * D2R))
            / (1.0 + math.sin(geodetic.y * D2R))
        )
        target = point if reuse else point.copy()
        target.set_xy(scale, scale)
        return target
