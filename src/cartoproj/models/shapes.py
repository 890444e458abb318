"""
Shape variants for projected and geographic geometry.

This module defines the closed set of shapes the reprojection engine knows
about. Every shape caches its axis-aligned extent (xmin, ymin, xmax, ymax)
together with a limits_found flag. Setters that place a vertex grow the
extent incrementally; when limits_found is False the next vertex seeds the
extent, so clearing the flag before rewriting every vertex rebuilds it.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, List, Tuple

import numpy as np
from shapely.geometry import LineString, MultiLineString, MultiPoint as ShapelyMultiPoint
from shapely.geometry import MultiPolygon
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry import box as shapely_box
from shapely.geometry.base import BaseGeometry

from cartoproj.core.errors import GeometryError


class ShapeType(str, Enum):
    """Tags for the supported shape variants."""

    UNKNOWN = "unknown"
    POINT = "point"
    POINT_ZM = "point_zm"
    POLYLINE = "polyline"
    POLYLINE_ZM = "polyline_zm"
    POLYGON = "polygon"
    MULTI_POINT = "multi_point"
    POLYLINE_LIST = "polyline_list"
    POLYLINE_ZM_LIST = "polyline_zm_list"
    POLYGON_LIST = "polygon_list"
    ARC = "arc"
    BOX = "box"


@dataclass
class Shape:
    """
    Base class for all shapes.

    Attributes:
        index: Attribute lookup key (-1 when not associated with a record)
        is_visible: Whether the shape should be drawn
        is_selected: Whether the shape is selected
        xmin: Minimum x of the cached extent
        ymin: Minimum y of the cached extent
        xmax: Maximum x of the cached extent
        ymax: Maximum y of the cached extent
        limits_found: Whether the cached extent is valid
    """

    shape_type: ClassVar[ShapeType] = ShapeType.UNKNOWN

    index: int = field(default=-1, init=False, repr=False, compare=False)
    is_visible: bool = field(default=True, init=False, repr=False, compare=False)
    is_selected: bool = field(default=False, init=False, repr=False, compare=False)
    xmin: float = field(default=0.0, init=False, repr=False, compare=False)
    ymin: float = field(default=0.0, init=False, repr=False, compare=False)
    xmax: float = field(default=0.0, init=False, repr=False, compare=False)
    ymax: float = field(default=0.0, init=False, repr=False, compare=False)
    limits_found: bool = field(default=False, init=False, repr=False, compare=False)

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """Cached extent as (xmin, ymin, xmax, ymax)."""
        return (self.xmin, self.ymin, self.xmax, self.ymax)

    def invalidate_limits(self) -> None:
        """Mark the cached extent stale so the next vertex reseeds it."""
        self.limits_found = False

    def _extend_limits(self, xmin: float, ymin: float, xmax: float, ymax: float) -> None:
        if not self.limits_found:
            self.xmin = xmin
            self.ymin = ymin
            self.xmax = xmax
            self.ymax = ymax
            self.limits_found = True
            return
        if xmax > self.xmax:
            self.xmax = xmax
        if xmin < self.xmin:
            self.xmin = xmin
        if ymax > self.ymax:
            self.ymax = ymax
        if ymin < self.ymin:
            self.ymin = ymin

    def compute_limits(self) -> None:
        """Recompute the cached extent from the shape's data."""
        self.limits_found = False

    def contains(self, other: "Shape", completely: bool = False) -> bool:
        """
        Coarse containment test using the cached extents.

        Args:
            other: Shape to evaluate
            completely: If True, other must lie entirely within this extent

        Returns:
            True if the extents overlap (or nest, when completely is True)
        """
        if (
            other.xmax < self.xmin
            or other.xmin > self.xmax
            or other.ymax < self.ymin
            or other.ymin > self.ymax
        ):
            return False
        if (
            other.xmin >= self.xmin
            and other.xmax <= self.xmax
            and other.ymin >= self.ymin
            and other.ymax <= self.ymax
        ):
            return True
        return not completely

    def copy(self) -> "Shape":
        """Return a deep copy of the shape."""
        return copy.deepcopy(self)

    def to_shapely(self) -> BaseGeometry:
        """Convert to a shapely geometry."""
        raise GeometryError(
            f"{type(self).__name__} has no shapely equivalent",
            geometry_type=self.shape_type.value,
        )


@dataclass
class Point(Shape):
    """A single x, y vertex. Its extent is the point itself."""

    shape_type: ClassVar[ShapeType] = ShapeType.POINT

    x: float = 0.0
    y: float = 0.0

    def __post_init__(self) -> None:
        self.compute_limits()

    def set_xy(self, x: float, y: float) -> None:
        """Move the point and collapse its extent onto it."""
        self.x = x
        self.y = y
        self.compute_limits()

    def compute_limits(self) -> None:
        self.xmin = self.xmax = self.x
        self.ymin = self.ymax = self.y
        self.limits_found = True

    def to_shapely(self) -> BaseGeometry:
        return ShapelyPoint(self.x, self.y)


@dataclass
class PointZM(Point):
    """A vertex that also carries z and measure ordinates."""

    shape_type: ClassVar[ShapeType] = ShapeType.POINT_ZM

    z: float = 0.0
    m: float = 0.0

    def to_shapely(self) -> BaseGeometry:
        return ShapelyPoint(self.x, self.y, self.z)


@dataclass
class PointSequence(Shape):
    """
    Base class for shapes made of an ordered list of vertices.

    Attributes:
        points: Vertices in order
    """

    points: List[Point] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.compute_limits()

    @property
    def npts(self) -> int:
        """Number of vertices."""
        return len(self.points)

    def set_point(self, i: int, pt: Point) -> None:
        """
        Store a vertex and grow the cached extent to include it.

        Args:
            i: Vertex position (must already exist)
            pt: Vertex to store (a reference, not a copy)
        """
        self.points[i] = pt
        self._extend_limits(pt.x, pt.y, pt.x, pt.y)

    def add_point(self, pt: Point) -> None:
        """Append a vertex and grow the cached extent to include it."""
        self.points.append(pt)
        self._extend_limits(pt.x, pt.y, pt.x, pt.y)

    def compute_limits(self) -> None:
        self.limits_found = False
        for pt in self.points:
            self._extend_limits(pt.x, pt.y, pt.x, pt.y)

    def coordinates(self) -> List[Tuple[float, float]]:
        """Vertices as (x, y) tuples."""
        return [(pt.x, pt.y) for pt in self.points]


@dataclass
class Polyline(PointSequence):
    """An open line through its vertices."""

    shape_type: ClassVar[ShapeType] = ShapeType.POLYLINE

    def to_shapely(self) -> BaseGeometry:
        if self.npts < 2:
            raise GeometryError(
                "A polyline needs at least 2 points",
                geometry_type=self.shape_type.value,
            )
        return LineString(self.coordinates())


@dataclass
class PolylineZM(Polyline):
    """A polyline whose vertices are PointZM."""

    shape_type: ClassVar[ShapeType] = ShapeType.POLYLINE_ZM

    def to_shapely(self) -> BaseGeometry:
        if self.npts < 2:
            raise GeometryError(
                "A polyline needs at least 2 points",
                geometry_type=self.shape_type.value,
            )
        return LineString([(pt.x, pt.y, getattr(pt, "z", 0.0)) for pt in self.points])


@dataclass
class Polygon(PointSequence):
    """A closed ring. The closing vertex may or may not be repeated."""

    shape_type: ClassVar[ShapeType] = ShapeType.POLYGON

    def to_shapely(self) -> BaseGeometry:
        if self.npts < 3:
            raise GeometryError(
                "A polygon needs at least 3 points",
                geometry_type=self.shape_type.value,
            )
        return ShapelyPolygon(self.coordinates())


@dataclass
class MultiPoint(PointSequence):
    """An unordered collection of points."""

    shape_type: ClassVar[ShapeType] = ShapeType.MULTI_POINT

    def to_shapely(self) -> BaseGeometry:
        return ShapelyMultiPoint(self.coordinates())


@dataclass
class ShapeList(Shape):
    """
    Base class for multi-part shapes.

    Attributes:
        shapes: Child shapes; the parent extent is the union of theirs
    """

    shapes: List[Any] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.compute_limits()

    def __len__(self) -> int:
        return len(self.shapes)

    def set_child(self, i: int, shape: Shape) -> None:
        """
        Store a child shape and grow the cached extent to include it.

        Args:
            i: Child position (must already exist)
            shape: Child to store
        """
        self.shapes[i] = shape
        self._extend_with_child(shape)

    def add(self, shape: Shape) -> None:
        """Append a child shape and grow the cached extent."""
        self.shapes.append(shape)
        self._extend_with_child(shape)

    def compute_limits(self) -> None:
        self.limits_found = False
        for shape in self.shapes:
            self._extend_with_child(shape)

    def _extend_with_child(self, shape: Shape) -> None:
        # Empty children have no extent to contribute
        if shape.limits_found:
            self._extend_limits(shape.xmin, shape.ymin, shape.xmax, shape.ymax)


@dataclass
class PolylineList(ShapeList):
    """Several polylines treated as one shape."""

    shape_type: ClassVar[ShapeType] = ShapeType.POLYLINE_LIST

    shapes: List[Polyline] = field(default_factory=list)

    def to_shapely(self) -> BaseGeometry:
        return MultiLineString([line.to_shapely() for line in self.shapes])


@dataclass
class PolylineZMList(PolylineList):
    """Several ZM polylines treated as one shape."""

    shape_type: ClassVar[ShapeType] = ShapeType.POLYLINE_ZM_LIST

    shapes: List[PolylineZM] = field(default_factory=list)


@dataclass
class PolygonList(ShapeList):
    """Several polygons treated as one shape."""

    shape_type: ClassVar[ShapeType] = ShapeType.POLYGON_LIST

    shapes: List[Polygon] = field(default_factory=list)

    def to_shapely(self) -> BaseGeometry:
        return MultiPolygon([polygon.to_shapely() for polygon in self.shapes])


@dataclass
class Arc(Shape):
    """
    An elliptical arc.

    Radii are in the units of the center point and are not reprojected
    with it.

    Attributes:
        center: Center of the ellipse
        xradius: Radius in the x direction
        yradius: Radius in the y direction
        angle1: Start angle, degrees counter-clockwise from east
        angle2: End angle, degrees counter-clockwise from east
    """

    shape_type: ClassVar[ShapeType] = ShapeType.ARC

    center: Point = field(default_factory=Point)
    xradius: float = 0.0
    yradius: float = 0.0
    angle1: float = 0.0
    angle2: float = 0.0

    def __post_init__(self) -> None:
        self.set_center(self.center)

    def set_center(self, pt: Point) -> None:
        """Move the center and recompute the extent from the radii."""
        self.center = pt
        self.compute_limits()

    def compute_limits(self) -> None:
        self.xmin = self.center.x - self.xradius
        self.xmax = self.center.x + self.xradius
        self.ymin = self.center.y - self.yradius
        self.ymax = self.center.y + self.yradius
        self.limits_found = True

    def to_shapely(self, segments: int = 64) -> BaseGeometry:
        end = self.angle2 if self.angle2 != self.angle1 else self.angle1 + 360.0
        angles = np.radians(np.linspace(self.angle1, end, segments + 1))
        xs = self.center.x + self.xradius * np.cos(angles)
        ys = self.center.y + self.yradius * np.sin(angles)
        coords = np.column_stack([xs, ys])
        if end != self.angle2:
            # Full ellipse
            coords[-1] = coords[0]
        return LineString(coords)


@dataclass
class Box(Shape):
    """
    A rectangle given by its left, bottom, right and top coordinates.

    Axes may be reversed (e.g., a downward y axis for device coordinates);
    the min/max values are derived from the corners.
    """

    shape_type: ClassVar[ShapeType] = ShapeType.BOX

    left_x: float = 0.0
    bottom_y: float = 0.0
    right_x: float = 1.0
    top_y: float = 1.0

    def __post_init__(self) -> None:
        self.compute_limits()

    def set_corners(self, left_x: float, bottom_y: float, right_x: float, top_y: float) -> None:
        """Set all four sides and recompute the derived values."""
        self.left_x = left_x
        self.bottom_y = bottom_y
        self.right_x = right_x
        self.top_y = top_y
        self.compute_limits()

    def compute_limits(self) -> None:
        self.xmin = min(self.left_x, self.right_x)
        self.xmax = max(self.left_x, self.right_x)
        self.ymin = min(self.bottom_y, self.top_y)
        self.ymax = max(self.bottom_y, self.top_y)
        self.limits_found = True

    @property
    def width(self) -> float:
        return abs(self.right_x - self.left_x)

    @property
    def height(self) -> float:
        return abs(self.top_y - self.bottom_y)

    @property
    def center(self) -> Tuple[float, float]:
        return (
            (self.left_x + self.right_x) / 2,
            (self.bottom_y + self.top_y) / 2,
        )

    def contains_point(self, x: float, y: float) -> bool:
        """
        Check whether a point lies in the box, for either axis orientation.

        Args:
            x: X coordinate
            y: Y coordinate

        Returns:
            True if the point is inside or on the edge
        """
        in_x = (self.left_x <= x <= self.right_x) or (self.right_x <= x <= self.left_x)
        in_y = (self.bottom_y <= y <= self.top_y) or (self.top_y <= y <= self.bottom_y)
        return in_x and in_y

    def to_shapely(self) -> BaseGeometry:
        return shapely_box(self.xmin, self.ymin, self.xmax, self.ymax)
