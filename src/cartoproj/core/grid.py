"""
Dense grid of floating-point cell values.

GeoGrid describes a regular grid whose origin is the lower-left cell, with
columns increasing in x and rows increasing in y. Cells are addressed by
(column, row) within the active range [min_column, max_column] x
[min_row, max_row]. Values live in a numpy array of shape (rows, columns),
indexed [row - min_row, column - min_column].

The grid only touches the projection engine when cells are exported as
polygons.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np
from shapely.geometry.base import BaseGeometry

from cartoproj.core.errors import GridError
from cartoproj.core.projections.base import Projection, need_to_project
from cartoproj.core.projections.dispatcher import project_shape
from cartoproj.models.shapes import Point, Polygon

logger = logging.getLogger(__name__)

DEFAULT_MISSING = -999.0


class GeoGrid:
    """
    Regular grid with in-memory double-precision data.

    Attributes:
        xmin, ymin, xmax, ymax: Extent of the active grid in data units
        cell_width: Width of one column in data units
        cell_height: Height of one row in data units
        missing: Value marking missing data
        units: Data units (e.g., "MM")
        max_value: Maximum value, maintained by the caller
        num_positive_values: Count of positive values, maintained by the caller
    """

    def __init__(self, missing: float = DEFAULT_MISSING, units: str = ""):
        self.xmin = 0.0
        self.ymin = 0.0
        self.xmax = 0.0
        self.ymax = 0.0
        self.cell_width = 0.0
        self.cell_height = 0.0

        self.min_column = 0
        self.min_row = 0
        self.max_column = 0
        self.max_row = 0

        self.min_column_full = 0
        self.min_row_full = 0
        self.max_column_full = 0
        self.max_row_full = 0

        self.missing = missing
        self.units = units
        self.max_value = DEFAULT_MISSING
        self.num_positive_values = 0

        self.data: Optional[np.ndarray] = None

    @property
    def columns(self) -> int:
        """Number of columns in the active grid."""
        return self.max_column - self.min_column + 1

    @property
    def rows(self) -> int:
        """Number of rows in the active grid."""
        return self.max_row - self.min_row + 1

    @property
    def columns_full(self) -> int:
        return self.max_column_full - self.min_column_full + 1

    @property
    def rows_full(self) -> int:
        return self.max_row_full - self.min_row_full + 1

    def set_extent(self, xmin: float, ymin: float, xmax: float, ymax: float) -> None:
        """Set the data-unit extent of the active grid. Call before set_size()."""
        self.xmin = xmin
        self.ymin = ymin
        self.xmax = xmax
        self.ymax = ymax

    def set_size(self, min_column: int, min_row: int, max_column: int, max_row: int) -> None:
        """
        Set the active cell range and derive the cell size from the extent.

        Args:
            min_column: Left-most column
            min_row: Bottom-most row
            max_column: Right-most column
            max_row: Top-most row
        """
        self.min_column = min_column
        self.min_row = min_row
        self.max_column = max_column
        self.max_row = max_row
        if self.columns > 0:
            self.cell_width = (self.xmax - self.xmin) / self.columns
        if self.rows > 0:
            self.cell_height = (self.ymax - self.ymin) / self.rows

    def set_size_full(self, min_column: int, min_row: int, max_column: int, max_row: int) -> None:
        """Set the cell range of the full grid (as stored in the source file)."""
        self.min_column_full = min_column
        self.min_row_full = min_row
        self.max_column_full = max_column
        self.max_row_full = max_row

    def allocate_data_space(self) -> None:
        """
        Allocate the data array for the active grid, filled with the missing value.

        Raises:
            GridError: If the active grid has no rows or columns
        """
        if self.rows < 1 or self.columns < 1:
            raise GridError(
                f"Cannot allocate a {self.rows} x {self.columns} grid",
                details={"rows": self.rows, "columns": self.columns},
            )
        self.data = np.full((self.rows, self.columns), self.missing, dtype=np.float64)

    def _require_data(self) -> np.ndarray:
        if self.data is None:
            raise GridError(
                "Grid data space has not been allocated",
                suggestions=["Call allocate_data_space() after set_size()"],
            )
        return self.data

    def contains(self, column: int, row: int) -> bool:
        """Whether (column, row) lies in the active grid."""
        return self.min_column <= column <= self.max_column and self.min_row <= row <= self.max_row

    def get_value(self, column: int, row: int) -> float:
        """
        Return the value of a cell.

        Raises:
            GridError: If data is not allocated or the cell is outside the grid
        """
        data = self._require_data()
        if not self.contains(column, row):
            raise GridError(
                f"Cell ({column}, {row}) is outside the grid",
                details={"column": column, "row": row},
            )
        return float(data[row - self.min_row, column - self.min_column])

    def set_value(self, column: int, row: int, value: float) -> None:
        """
        Set the value of a cell.

        Raises:
            GridError: If data is not allocated or the cell is outside the grid
        """
        data = self._require_data()
        if not self.contains(column, row):
            raise GridError(
                f"Cell ({column}, {row}) is outside the grid",
                details={"column": column, "row": row},
            )
        data[row - self.min_row, column - self.min_column] = value

    def get_absolute_value(self, column_index: int, row_index: int) -> float:
        """Return a value by zero-based array index rather than cell number."""
        data = self._require_data()
        try:
            return float(data[row_index, column_index])
        except IndexError as e:
            raise GridError(
                f"Array index ({column_index}, {row_index}) is outside the grid",
                details={"column_index": column_index, "row_index": row_index},
            ) from e

    def resize(self, left_column: int, bottom_row: int, columns: int, rows: int) -> None:
        """
        Move and resize the active grid, keeping overlapping values.

        Cells that were not in the old grid are set to the missing value.
        The extent and cell size are not changed.

        Args:
            left_column: New minimum column
            bottom_row: New minimum row
            columns: Number of columns in the new grid
            rows: Number of rows in the new grid

        Raises:
            GridError: If columns or rows is less than 1
        """
        if columns < 1:
            raise GridError(f"Invalid number of columns: {columns}", details={"columns": columns})
        if rows < 1:
            raise GridError(f"Invalid number of rows: {rows}", details={"rows": rows})

        max_column = left_column + columns - 1
        max_row = bottom_row + rows - 1
        if (
            left_column == self.min_column
            and bottom_row == self.min_row
            and max_column == self.max_column
            and max_row == self.max_row
        ):
            return

        resized = np.full((rows, columns), self.missing, dtype=np.float64)
        if self.data is not None:
            overlap_col0 = max(left_column, self.min_column)
            overlap_col1 = min(max_column, self.max_column)
            overlap_row0 = max(bottom_row, self.min_row)
            overlap_row1 = min(max_row, self.max_row)
            if overlap_col0 <= overlap_col1 and overlap_row0 <= overlap_row1:
                resized[
                    overlap_row0 - bottom_row : overlap_row1 - bottom_row + 1,
                    overlap_col0 - left_column : overlap_col1 - left_column + 1,
                ] = self.data[
                    overlap_row0 - self.min_row : overlap_row1 - self.min_row + 1,
                    overlap_col0 - self.min_column : overlap_col1 - self.min_column + 1,
                ]

        logger.debug(
            f"Resized grid from {self.columns}x{self.rows} at ({self.min_column}, {self.min_row}) "
            f"to {columns}x{rows} at ({left_column}, {bottom_row})"
        )
        self.min_column = self.min_column_full = left_column
        self.min_row = self.min_row_full = bottom_row
        self.max_column = self.max_column_full = max_column
        self.max_row = self.max_row_full = max_row
        self.data = resized

    def cell_polygon(self, column: int, row: int) -> Polygon:
        """
        Polygon outlining one cell in grid data units.

        The five points run clockwise from the southwest corner: southwest,
        northwest, northeast, southeast, southwest.
        """
        x_sw = self.xmin + (column - self.min_column) * self.cell_width
        y_sw = self.ymin + (row - self.min_row) * self.cell_height
        x_ne = x_sw + self.cell_width
        y_ne = y_sw + self.cell_height
        return Polygon(
            points=[
                Point(x_sw, y_sw),
                Point(x_sw, y_ne),
                Point(x_ne, y_ne),
                Point(x_ne, y_sw),
                Point(x_sw, y_sw),
            ]
        )

    def projected_cell_polygon(
        self,
        column: int,
        row: int,
        from_projection: Optional[Projection],
        to_projection: Optional[Projection],
    ) -> Polygon:
        """
        Cell polygon converted from the grid projection to another projection.

        Args:
            column: Cell column
            row: Cell row
            from_projection: Projection of the grid
            to_projection: Projection to export in

        Returns:
            The cell polygon, projected when the projections differ
        """
        polygon = self.cell_polygon(column, row)
        if need_to_project(from_projection, to_projection):
            project_shape(from_projection, to_projection, polygon, reuse=True)
        return polygon

    def iter_cells(self) -> Iterator[Tuple[int, int, float]]:
        """Yield (column, row, value) for every cell in the active grid."""
        data = self._require_data()
        for row_index in range(data.shape[0]):
            for column_index in range(data.shape[1]):
                yield (
                    self.min_column + column_index,
                    self.min_row + row_index,
                    float(data[row_index, column_index]),
                )

    def to_features(
        self,
        from_projection: Optional[Projection],
        to_projection: Optional[Projection],
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
    ) -> List[Tuple[BaseGeometry, Dict[str, Any]]]:
        """
        Export cells as vector features.

        Args:
            from_projection: Projection of the grid
            to_projection: Projection of the output geometry
            min_value: Skip cells with values below this
            max_value: Skip cells with values above this

        Returns:
            List of (shapely Polygon, {"column", "row", "value"}) pairs
        """
        features = []
        for column, row, value in self.iter_cells():
            if min_value is not None and value < min_value:
                continue
            if max_value is not None and value > max_value:
                continue
            polygon = self.projected_cell_polygon(column, row, from_projection, to_projection)
            features.append(
                (polygon.to_shapely(), {"column": column, "row": row, "value": value})
            )
        logger.debug(f"Exported {len(features)} of {self.rows * self.columns} grid cells")
        return features

    def __repr__(self) -> str:
        return (
            f"GeoGrid(columns={self.min_column}..{self.max_column}, "
            f"rows={self.min_row}..{self.max_row}, units='{self.units}')"
        )
