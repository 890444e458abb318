"""
Geometry and spheroid models.
"""

from .shapes import (
    Arc,
    Box,
    MultiPoint,
    Point,
    PointSequence,
    PointZM,
    Polygon,
    PolygonList,
    Polyline,
    PolylineList,
    PolylineZM,
    PolylineZMList,
    Shape,
    ShapeList,
    ShapeType,
)
from .spheroid import MEAN_SPHERE_RADIUS, NAD27, NAD83, SPHERE, SPHEROIDS, Spheroid

__all__ = [
    # Shapes
    "Shape",
    "ShapeType",
    "Point",
    "PointZM",
    "PointSequence",
    "Polyline",
    "PolylineZM",
    "Polygon",
    "MultiPoint",
    "ShapeList",
    "PolylineList",
    "PolylineZMList",
    "PolygonList",
    "Arc",
    "Box",
    # Spheroids
    "Spheroid",
    "SPHEROIDS",
    "NAD27",
    "NAD83",
    "SPHERE",
    "MEAN_SPHERE_RADIUS",
]
