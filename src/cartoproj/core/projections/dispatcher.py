"""
Shape reprojection dispatcher.

project_shape() re-projects every vertex of any supported shape from one
projection to another: each vertex is un-projected to longitude/latitude by
the source projection and projected by the destination projection.

With reuse=True the given shape is mutated and returned; with reuse=False a
deep copy is made first and the copy is returned. Cached extents are cleared
before vertices are rewritten and then grown one vertex at a time.

A Point object referenced from several places (a ring closed on its first
vertex, or a vertex shared by two parts of a list) is transformed once per
project_shape() call.
"""

import logging
from typing import Callable, Dict, Optional, Sequence, Set, Tuple

import numpy as np

from cartoproj.core.config import settings
from cartoproj.core.errors import GeometryError, UnsupportedShapeError
from cartoproj.core.projections.base import Projection
from cartoproj.models.shapes import Arc, Box, Point, PointSequence, Shape, ShapeList, ShapeType

logger = logging.getLogger(__name__)


def _reproject_xy(
    from_projection: Projection, to_projection: Projection, x: float, y: float
) -> Tuple[float, float]:
    lon, lat = from_projection.inverse(x, y)
    return to_projection.forward(lon, lat)


def _project_point(
    from_projection: Projection, to_projection: Projection, shape: Point, seen: Set[int]
) -> None:
    if id(shape) in seen:
        return
    seen.add(id(shape))
    x, y = _reproject_xy(from_projection, to_projection, shape.x, shape.y)
    shape.set_xy(x, y)


def _project_sequence(
    from_projection: Projection, to_projection: Projection, shape: PointSequence, seen: Set[int]
) -> None:
    shape.invalidate_limits()
    for i, pt in enumerate(shape.points):
        _project_point(from_projection, to_projection, pt, seen)
        shape.set_point(i, pt)


def _project_list(
    from_projection: Projection, to_projection: Projection, shape: ShapeList, seen: Set[int]
) -> None:
    shape.invalidate_limits()
    for i, child in enumerate(shape.shapes):
        projected = _project(from_projection, to_projection, child, seen, None)
        shape.set_child(i, projected)


def _project_arc(
    from_projection: Projection, to_projection: Projection, shape: Arc, seen: Set[int]
) -> None:
    # Radii stay in source units
    shape.invalidate_limits()
    _project_point(from_projection, to_projection, shape.center, seen)
    shape.set_center(shape.center)


def _project_box(
    from_projection: Projection, to_projection: Projection, shape: Box, seen: Set[int]
) -> None:
    # Corners are projected independently, which only approximates the
    # projected region for nonlinear projections.
    left_x, bottom_y = _reproject_xy(from_projection, to_projection, shape.xmin, shape.ymin)
    right_x, top_y = _reproject_xy(from_projection, to_projection, shape.xmax, shape.ymax)
    shape.invalidate_limits()
    shape.set_corners(left_x, bottom_y, right_x, top_y)


_Handler = Callable[[Projection, Projection, Shape, Set[int]], None]

_HANDLERS: Dict[ShapeType, _Handler] = {
    ShapeType.POINT: _project_point,
    ShapeType.POINT_ZM: _project_point,
    ShapeType.POLYLINE: _project_sequence,
    ShapeType.POLYLINE_ZM: _project_sequence,
    ShapeType.POLYGON: _project_sequence,
    ShapeType.MULTI_POINT: _project_sequence,
    ShapeType.POLYLINE_LIST: _project_list,
    ShapeType.POLYLINE_ZM_LIST: _project_list,
    ShapeType.POLYGON_LIST: _project_list,
    ShapeType.ARC: _project_arc,
    ShapeType.BOX: _project_box,
}


def supported_shape_types() -> Tuple[ShapeType, ...]:
    """Shape types project_shape() knows how to reproject."""
    return tuple(_HANDLERS)


def project_shape(
    from_projection: Projection,
    to_projection: Projection,
    shape: Shape,
    reuse: bool = False,
    strict: Optional[bool] = None,
) -> Shape:
    """
    Re-project a shape from one projection to another.

    Args:
        from_projection: Projection the shape's coordinates are in
        to_projection: Projection to convert to
        shape: Any supported shape variant
        reuse: Mutate and return the given shape instead of a copy
        strict: Raise on unsupported shapes, defaults to settings.strict_shapes

    Returns:
        The projected shape (the same object when reuse is True)

    Raises:
        UnsupportedShapeError: If the shape type is not supported and strict
    """
    if shape.shape_type not in _HANDLERS:
        return _project(from_projection, to_projection, shape, set(), strict)

    target = shape if reuse else shape.copy()
    return _project(from_projection, to_projection, target, set(), strict)


def _project(
    from_projection: Projection,
    to_projection: Projection,
    shape: Shape,
    seen: Set[int],
    strict: Optional[bool],
) -> Shape:
    handler = _HANDLERS.get(shape.shape_type)
    if handler is None:
        if settings.strict_shapes if strict is None else strict:
            raise UnsupportedShapeError(shape)
        logger.debug(f"Skipping reprojection of unsupported shape {type(shape).__name__}")
        return shape
    handler(from_projection, to_projection, shape, seen)
    return shape


def project_coordinates(
    from_projection: Projection,
    to_projection: Projection,
    xs: Sequence[float],
    ys: Sequence[float],
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Re-project parallel coordinate arrays without building shapes.

    Args:
        from_projection: Projection of the input coordinates
        to_projection: Projection to convert to
        xs: X coordinates
        ys: Y coordinates

    Returns:
        Tuple of float64 arrays (projected_xs, projected_ys)

    Raises:
        GeometryError: If xs and ys differ in length
    """
    xs = np.asarray(xs, dtype=np.float64).ravel()
    ys = np.asarray(ys, dtype=np.float64).ravel()
    if xs.shape != ys.shape:
        raise GeometryError(
            f"Coordinate arrays differ in length ({xs.size} vs {ys.size})",
            details={"x_count": int(xs.size), "y_count": int(ys.size)},
        )

    out_x = np.empty_like(xs)
    out_y = np.empty_like(ys)
    for i in range(xs.size):
        out_x[i], out_y[i] = _reproject_xy(from_projection, to_projection, float(xs[i]), float(ys[i]))
    return out_x, out_y
