"""
Tests for shape variants and their cached extents.
"""

import pytest
from shapely.geometry import LineString, MultiLineString, MultiPolygon
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon

from cartoproj.core.errors import GeometryError
from cartoproj.models.shapes import (
    Arc,
    Box,
    MultiPoint,
    Point,
    PointZM,
    Polygon,
    PolygonList,
    Polyline,
    PolylineList,
    Shape,
    ShapeType,
)


class TestPoint:
    """Tests for Point and PointZM."""

    def test_extent_is_point(self) -> None:
        """Test that a point's extent collapses onto it."""
        point = Point(3.0, 4.0)
        assert point.limits_found is True
        assert point.extent == (3.0, 4.0, 3.0, 4.0)

    def test_set_xy(self) -> None:
        """Test that moving a point moves its extent."""
        point = Point(3.0, 4.0)
        point.set_xy(-1.0, 2.0)
        assert point.extent == (-1.0, 2.0, -1.0, 2.0)

    def test_defaults(self) -> None:
        """Test default flags."""
        point = Point()
        assert point.index == -1
        assert point.is_visible is True
        assert point.is_selected is False
        assert point.shape_type == ShapeType.POINT

    def test_equality_ignores_flags(self) -> None:
        """Test that equality compares coordinates only."""
        a = Point(1.0, 2.0)
        b = Point(1.0, 2.0)
        b.is_selected = True
        assert a == b

    def test_point_zm(self) -> None:
        """Test that PointZM carries z and m."""
        point = PointZM(1.0, 2.0, 3.0, 4.0)
        assert point.shape_type == ShapeType.POINT_ZM
        assert point.to_shapely().has_z

    def test_copy_is_deep(self) -> None:
        """Test that copy() is independent of the original."""
        point = Point(1.0, 2.0)
        clone = point.copy()
        clone.set_xy(5.0, 6.0)
        assert point.x == 1.0


class TestPointSequence:
    """Tests for polylines, polygons and multi-points."""

    def test_extent_on_construction(self) -> None:
        """Test that the extent is computed from the initial points."""
        line = Polyline([Point(0.0, 5.0), Point(2.0, -1.0), Point(-3.0, 1.0)])
        assert line.npts == 3
        assert line.extent == (-3.0, -1.0, 2.0, 5.0)

    def test_set_point_grows_extent(self) -> None:
        """Test that set_point() extends the cached extent."""
        line = Polyline([Point(0.0, 0.0), Point(1.0, 1.0)])
        line.set_point(1, Point(10.0, -5.0))
        assert line.extent == (0.0, -5.0, 10.0, 1.0)

    def test_invalidate_reseeds(self) -> None:
        """Test that the first vertex after invalidation seeds the extent."""
        line = Polyline([Point(0.0, 0.0), Point(1.0, 1.0)])
        line.invalidate_limits()
        line.set_point(0, Point(100.0, 100.0))
        assert line.extent == (100.0, 100.0, 100.0, 100.0)
        line.set_point(1, Point(50.0, 200.0))
        assert line.extent == (50.0, 100.0, 100.0, 200.0)

    def test_add_point(self) -> None:
        """Test appending a vertex."""
        points = MultiPoint()
        assert points.limits_found is False
        points.add_point(Point(2.0, 3.0))
        assert points.limits_found is True
        assert points.extent == (2.0, 3.0, 2.0, 3.0)

    def test_polygon_to_shapely(self) -> None:
        """Test polygon export."""
        polygon = Polygon([Point(0.0, 0.0), Point(0.0, 1.0), Point(1.0, 1.0), Point(1.0, 0.0)])
        geometry = polygon.to_shapely()
        assert isinstance(geometry, ShapelyPolygon)
        assert geometry.area == pytest.approx(1.0)

    def test_degenerate_polygon(self) -> None:
        """Test that a polygon with two points cannot be exported."""
        with pytest.raises(GeometryError):
            Polygon([Point(0.0, 0.0), Point(1.0, 1.0)]).to_shapely()

    def test_polyline_to_shapely(self) -> None:
        """Test polyline export."""
        geometry = Polyline([Point(0.0, 0.0), Point(3.0, 4.0)]).to_shapely()
        assert isinstance(geometry, LineString)
        assert geometry.length == pytest.approx(5.0)

    def test_short_polyline(self) -> None:
        """Test that a single-point polyline cannot be exported."""
        with pytest.raises(GeometryError):
            Polyline([Point(0.0, 0.0)]).to_shapely()


class TestShapeList:
    """Tests for multi-part shapes."""

    def test_union_extent(self) -> None:
        """Test that the extent covers every child."""
        shapes = PolylineList(
            [
                Polyline([Point(0.0, 0.0), Point(1.0, 1.0)]),
                Polyline([Point(5.0, -2.0), Point(6.0, 0.0)]),
            ]
        )
        assert len(shapes) == 2
        assert shapes.extent == (0.0, -2.0, 6.0, 1.0)
        assert isinstance(shapes.to_shapely(), MultiLineString)

    def test_set_child(self) -> None:
        """Test that set_child() extends the extent."""
        square = Polygon([Point(0.0, 0.0), Point(0.0, 1.0), Point(1.0, 1.0)])
        shapes = PolygonList([square])
        shapes.set_child(0, Polygon([Point(-4.0, 0.0), Point(0.0, 9.0), Point(1.0, 1.0)]))
        assert shapes.extent == (-4.0, 0.0, 1.0, 9.0)
        assert isinstance(shapes.to_shapely(), MultiPolygon)

    def test_add(self) -> None:
        """Test appending a child."""
        shapes = PolygonList()
        shapes.add(Polygon([Point(0.0, 0.0), Point(0.0, 2.0), Point(2.0, 2.0)]))
        assert shapes.extent == (0.0, 0.0, 2.0, 2.0)

    def test_empty_child_ignored(self) -> None:
        """Test that a child without an extent does not widen the union."""
        triangle = Polygon([Point(5.0, 5.0), Point(5.0, 7.0), Point(8.0, 7.0)])
        shapes = PolygonList([Polygon([]), triangle])
        assert shapes.limits_found
        assert shapes.extent == (5.0, 5.0, 8.0, 7.0)

        shapes.add(Polygon([]))
        shapes.set_child(0, Polygon([]))
        assert shapes.extent == (5.0, 5.0, 8.0, 7.0)

    def test_all_children_empty(self) -> None:
        """Test that a list of empty children has no extent."""
        shapes = PolygonList([Polygon([]), Polygon([])])
        assert not shapes.limits_found


class TestArc:
    """Tests for Arc."""

    def test_extent(self) -> None:
        """Test that the extent is the center plus and minus the radii."""
        arc = Arc(center=Point(10.0, 20.0), xradius=2.0, yradius=3.0)
        assert arc.extent == (8.0, 17.0, 12.0, 23.0)

    def test_set_center(self) -> None:
        """Test that moving the center moves the extent."""
        arc = Arc(center=Point(0.0, 0.0), xradius=1.0, yradius=1.0)
        arc.set_center(Point(5.0, 5.0))
        assert arc.extent == (4.0, 4.0, 6.0, 6.0)

    def test_to_shapely_quarter(self) -> None:
        """Test tessellation of a quarter arc."""
        arc = Arc(center=Point(0.0, 0.0), xradius=1.0, yradius=1.0, angle1=0.0, angle2=90.0)
        geometry = arc.to_shapely(segments=8)
        coords = list(geometry.coords)
        assert len(coords) == 9
        assert coords[0] == pytest.approx((1.0, 0.0))
        assert coords[-1] == pytest.approx((0.0, 1.0), abs=1e-12)

    def test_full_circle(self) -> None:
        """Test that equal angles produce a closed ellipse."""
        arc = Arc(center=Point(0.0, 0.0), xradius=1.0, yradius=1.0)
        geometry = arc.to_shapely()
        assert geometry.is_closed


class TestBox:
    """Tests for Box."""

    def test_derived_values(self) -> None:
        """Test width, height and center."""
        box = Box(0.0, 0.0, 4.0, 2.0)
        assert box.width == 4.0
        assert box.height == 2.0
        assert box.center == (2.0, 1.0)

    def test_reversed_axes(self) -> None:
        """Test that reversed y axes still give a proper extent."""
        box = Box(0.0, 10.0, 4.0, 0.0)
        assert box.extent == (0.0, 0.0, 4.0, 10.0)
        assert box.height == 10.0
        assert box.contains_point(2.0, 5.0)
        assert not box.contains_point(2.0, 11.0)

    def test_to_shapely(self) -> None:
        """Test box export."""
        assert Box(0.0, 0.0, 2.0, 3.0).to_shapely().area == pytest.approx(6.0)


class TestContains:
    """Tests for the coarse extent containment test."""

    def test_disjoint(self) -> None:
        """Test shapes whose extents do not touch."""
        assert not Box(0.0, 0.0, 1.0, 1.0).contains(Box(2.0, 2.0, 3.0, 3.0))

    def test_inside(self) -> None:
        """Test a shape fully inside."""
        outer = Box(0.0, 0.0, 10.0, 10.0)
        assert outer.contains(Point(5.0, 5.0), completely=True)

    def test_overlap(self) -> None:
        """Test partial overlap with and without completely."""
        outer = Box(0.0, 0.0, 10.0, 10.0)
        other = Box(5.0, 5.0, 15.0, 15.0)
        assert outer.contains(other)
        assert not outer.contains(other, completely=True)


class TestBaseShape:
    """Tests for the base Shape."""

    def test_unknown_type(self) -> None:
        """Test the base shape tag and export."""
        shape = Shape()
        assert shape.shape_type == ShapeType.UNKNOWN
        with pytest.raises(GeometryError):
            shape.to_shapely()

    def test_point_to_shapely(self) -> None:
        """Test point export."""
        assert Point(1.0, 2.0).to_shapely() == ShapelyPoint(1.0, 2.0)
