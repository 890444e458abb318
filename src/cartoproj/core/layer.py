"""
Collection of shapes that share one projection.
"""

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from cartoproj.core.logging_config import LogContext
from cartoproj.core.projections.base import Projection, need_to_project
from cartoproj.core.projections.dispatcher import project_shape
from cartoproj.models.shapes import Shape
from cartoproj.utils.logging import PerformanceTimer

logger = logging.getLogger(__name__)


class ShapeLayer:
    """
    Shapes in a single projection with an overall extent.

    Attributes:
        name: Layer name, attached to log records as "layer"
        shapes: Shapes in the layer
        projection: Projection of every shape's coordinates
        extent: (xmin, ymin, xmax, ymax) over the shapes, or None
    """

    def __init__(
        self,
        shapes: Optional[Sequence[Shape]] = None,
        projection: Optional[Projection] = None,
        name: str = "layer",
    ):
        self.name = name
        self.shapes: List[Shape] = list(shapes) if shapes is not None else []
        self.projection = projection
        self.extent: Optional[Tuple[float, float, float, float]] = None
        self.compute_limits()

    def __len__(self) -> int:
        return len(self.shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.shapes)

    def add(self, shape: Shape) -> None:
        """Append a shape and refresh the layer extent."""
        self.shapes.append(shape)
        self.compute_limits()

    def compute_limits(self, include_invisible: bool = True) -> Optional[Tuple[float, float, float, float]]:
        """
        Recompute the layer extent from the cached shape extents.

        Shapes whose extent is not known are skipped.

        Args:
            include_invisible: Include shapes that are not visible

        Returns:
            The new extent, or None if no shape has a known extent
        """
        extent = None
        for shape in self.shapes:
            if not shape.limits_found:
                continue
            if not include_invisible and not shape.is_visible:
                continue
            if extent is None:
                extent = [shape.xmin, shape.ymin, shape.xmax, shape.ymax]
                continue
            extent[0] = min(extent[0], shape.xmin)
            extent[1] = min(extent[1], shape.ymin)
            extent[2] = max(extent[2], shape.xmax)
            extent[3] = max(extent[3], shape.ymax)
        self.extent = tuple(extent) if extent is not None else None
        return self.extent

    def project(self, projection: Projection) -> None:
        """
        Re-project every shape in place and adopt the new projection.

        Does nothing when need_to_project() says the projections are
        compatible (or either is unknown).

        Args:
            projection: Projection to convert the layer to
        """
        if not need_to_project(self.projection, projection):
            logger.debug(f"Layer already in {projection}, not projecting")
            return

        with LogContext(layer=self.name, projection=str(projection)):
            logger.info(f"Projecting layer {self.name} from {self.projection} to {projection}")
            with PerformanceTimer(f"Project {len(self.shapes)} shapes"):
                for shape in self.shapes:
                    project_shape(self.projection, projection, shape, reuse=True)

        self.compute_limits()
        self.projection = projection
