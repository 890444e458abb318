"""
Unknown projection: placeholder for data whose projection is not known.

need_to_project() never asks for a reprojection involving it.
"""

from typing import Optional, Tuple

from cartoproj.core.projections.base import UNKNOWN_PROJECTION_NAME, Projection
from cartoproj.core.projections.registry import ProjectionRegistry


class UnknownProjection(Projection):
    """Sentinel projection; transforms return coordinates unchanged."""

    def __init__(self, registry: Optional[ProjectionRegistry] = None):
        super().__init__(UNKNOWN_PROJECTION_NAME, registry)

    def forward(self, lon: float, lat: float) -> Tuple[float, float]:
        return lon, lat

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        return x, y
