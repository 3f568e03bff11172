"""
rasterkit Raster Grid

This module provides the two-dimensional, georeferenced view over a typed cell
store: row/column indexing, the affine geotransform between cell positions and
projected coordinates, type conversion and cloning.
"""

import logging
from typing import Optional, Tuple, Union
import numpy as np

from ..core.config import COORD_SNAP_TOLERANCE, FLOAT_UNSPECIFIED, INT_UNSPECIFIED
from ..core.core_types import CellKind, Coordinate, Extent, RowCol, is_legal_kind
from ..core.exceptions import (
    DataProcessingError, UnsupportedTypeError, ValueRangeError
)
from .cell_store import TypedCellStore

logger = logging.getLogger('rasterkit.raster.grid')


def _snap_floor(position: np.ndarray) -> np.ndarray:
    """Floor fractional cell positions, snapping near-integers first."""
    position = np.asarray(position, dtype=np.float64)
    nearest = np.round(position)
    snapped = np.where(np.abs(position - nearest) <= COORD_SNAP_TOLERANCE, nearest, position)
    return np.floor(snapped).astype(np.int64)

# ============================================================================
# Raster Grid
# ============================================================================

class RasterGrid:
    """
    Row-major grid of cells with uniform square resolution.

    Cell (row, col) lives at linear index row * num_cols + col. The origin is
    the upper-left corner of the grid: origin_x is the west edge and origin_y
    the north edge (maximum Y).

    Attributes:
        store: Typed cell store holding num_rows * num_cols values
        num_rows: Number of rows
        num_cols: Number of columns
        cell_resolution: Cell size in both axes
        origin_x: West edge
        origin_y: North edge
    """

    def __init__(self):
        self.store: Optional[TypedCellStore] = None
        self.num_rows = INT_UNSPECIFIED
        self.num_cols = INT_UNSPECIFIED
        self.cell_resolution = FLOAT_UNSPECIFIED
        self.origin_x = FLOAT_UNSPECIFIED
        self.origin_y = FLOAT_UNSPECIFIED

    @classmethod
    def create(
        cls,
        rows: int,
        cols: int,
        kind: Union[str, CellKind],
        resolution: float,
        origin_x: float,
        origin_y: float
    ) -> 'RasterGrid':
        """Build and initialize a grid in one call."""
        grid = cls()
        grid.init(rows, cols, kind, resolution, origin_x, origin_y)
        return grid

    def init(
        self,
        rows: int,
        cols: int,
        kind: Union[str, CellKind],
        resolution: float,
        origin_x: float,
        origin_y: float
    ) -> None:
        """
        Set the grid geometry and allocate a fresh, zero-filled store.

        Args:
            rows: Number of rows
            cols: Number of columns
            kind: Storage kind ("byte", "integer", "float"/"real")
            resolution: Cell size, positive
            origin_x: West edge
            origin_y: North edge

        Raises:
            UnsupportedTypeError: If kind is unknown
            ValueRangeError: If rows/cols are negative, or the grid has cells
                and resolution is not positive
        """
        cell_kind = CellKind.from_name(kind)
        if rows < 0:
            raise ValueRangeError("Row count", rows, "[0, inf)")
        if cols < 0:
            raise ValueRangeError("Column count", cols, "[0, inf)")
        # An empty grid carries no cells to size, so any resolution is accepted
        if rows * cols > 0 and not resolution > 0:
            raise ValueRangeError("Cell resolution", resolution, "(0, inf)")

        self.num_rows = int(rows)
        self.num_cols = int(cols)
        self.cell_resolution = float(resolution)
        self.origin_x = float(origin_x)
        self.origin_y = float(origin_y)
        self.store = TypedCellStore(cell_kind, self.num_rows * self.num_cols)

    # ------------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self.store is not None

    @property
    def kind(self) -> CellKind:
        return self.require_store().kind

    @property
    def num_cells(self) -> int:
        return self.num_rows * self.num_cols

    @property
    def shape(self) -> RowCol:
        return (self.num_rows, self.num_cols)

    @property
    def extent(self) -> Extent:
        """Extent spanned by the grid's cells."""
        return Extent(
            min_x=self.origin_x,
            max_x=self.origin_x + self.cell_resolution * self.num_cols,
            min_y=self.origin_y - self.cell_resolution * self.num_rows,
            max_y=self.origin_y,
        )

    def __len__(self) -> int:
        return self.num_cells

    def __repr__(self) -> str:
        kind = self.store.kind.label if self.store is not None else None
        return (
            f"RasterGrid(rows={self.num_rows}, cols={self.num_cols}, kind={kind!r}, "
            f"resolution={self.cell_resolution}, origin=({self.origin_x}, {self.origin_y}))"
        )

    def require_store(self) -> TypedCellStore:
        if self.store is None:
            raise DataProcessingError("grid access", "Grid has not been initialized")
        return self.store

    # ------------------------------------------------------------------------
    # Cell Access
    # ------------------------------------------------------------------------

    def in_bounds(self, row: int, col: int) -> bool:
        """Check whether (row, col) addresses a cell of this grid."""
        return 0 <= row < self.num_rows and 0 <= col < self.num_cols

    def check_row_col(self, row: int, col: int) -> None:
        """Raise ValueRangeError if (row, col) is outside the grid."""
        if row < 0 or row >= self.num_rows:
            raise ValueRangeError("Row index", row, f"[0, {self.num_rows})")
        if col < 0 or col >= self.num_cols:
            raise ValueRangeError("Column index", col, f"[0, {self.num_cols})")

    def get(self, row: int, col: int) -> float:
        """Return the value of cell (row, col)."""
        self.check_row_col(row, col)
        return self.require_store().get(row * self.num_cols + col)

    def set(self, row: int, col: int, value: float) -> None:
        """Store a value in cell (row, col)."""
        self.check_row_col(row, col)
        self.require_store().set(row * self.num_cols + col, value)

    def get_index(self, index: int) -> float:
        """Return the value at a linear cell index."""
        return self.require_store().get(index)

    def set_index(self, index: int, value: float) -> None:
        """Store a value at a linear cell index."""
        self.require_store().set(index, value)

    def get_at(self, easting: float, northing: float) -> float:
        """Return the value of the cell containing a coordinate."""
        row, col = self.coord_to_row_col(easting, northing)
        return self.get(row, col)

    def set_at(self, easting: float, northing: float, value: float) -> None:
        """Store a value in the cell containing a coordinate."""
        row, col = self.coord_to_row_col(easting, northing)
        self.set(row, col, value)

    def values(self) -> np.ndarray:
        """Return every cell as a flat float64 array in row-major order."""
        return self.require_store().values()

    def as_array(self) -> np.ndarray:
        """Return every cell as a (num_rows, num_cols) float64 array."""
        return self.values().reshape(self.num_rows, self.num_cols)

    def assign(self, values) -> None:
        """Replace every cell, range-checked as a whole."""
        self.require_store().assign(values)

    def fill(self, value: float) -> None:
        """Set every cell to one value."""
        self.require_store().fill(value)

    # ------------------------------------------------------------------------
    # Geotransform
    # ------------------------------------------------------------------------

    def row_col_to_coord(self, row: float, col: float) -> Coordinate:
        """
        Map a (possibly fractional) row/column position to projected coordinates.

        Integer positions map to the upper-left corner of the cell; add 0.5 to
        both for the cell center.
        """
        easting = col * self.cell_resolution + self.origin_x
        northing = self.origin_y - row * self.cell_resolution
        return (easting, northing)

    def coord_to_row_col(self, easting: float, northing: float) -> RowCol:
        """
        Map projected coordinates to the row/column of the containing cell.

        Positions are floored, so coordinates west or north of the origin give
        negative indices. The result is not bounds-checked: validate it with
        in_bounds() before use.
        """
        rows, cols = self.coords_to_rows_cols(easting, northing)
        return (int(rows), int(cols))

    def coords_to_rows_cols(self, eastings, northings) -> Tuple[np.ndarray, np.ndarray]:
        """Vectorized coord_to_row_col over arrays of coordinates."""
        eastings = np.asarray(eastings, dtype=np.float64)
        northings = np.asarray(northings, dtype=np.float64)
        cols = _snap_floor((eastings - self.origin_x) / self.cell_resolution)
        rows = _snap_floor((self.origin_y - northings) / self.cell_resolution)
        return rows, cols

    def cell_coordinates(self) -> Tuple[np.ndarray, np.ndarray]:
        """Upper-left corner coordinates of every cell in row-major order."""
        rows, cols = np.divmod(np.arange(self.num_cells, dtype=np.int64), self.num_cols or 1)
        eastings = cols * self.cell_resolution + self.origin_x
        northings = self.origin_y - rows * self.cell_resolution
        return eastings, northings

    # ------------------------------------------------------------------------
    # Type Conversion and Cloning
    # ------------------------------------------------------------------------

    def convert_type(self, new_kind: Union[str, CellKind]) -> None:
        """
        Re-allocate the store with a new kind, copying every value across.

        The conversion is all-or-nothing: if any value falls outside the new
        kind's range the grid keeps its old store.

        Raises:
            UnsupportedTypeError: If new_kind is not byte, integer or float
            ValueRangeError: If a value cannot be represented by the new kind
        """
        if isinstance(new_kind, str) and not is_legal_kind(new_kind):
            raise UnsupportedTypeError(new_kind, ["byte", "float", "integer"])
        kind = CellKind.from_name(new_kind)
        old = self.require_store()

        converted = TypedCellStore(kind, old.length)
        converted.assign(old.values())
        self.store = converted

        logger.info("Converted grid from %s to %s", old.kind.label, kind.label)

    def clone_from(self, source: 'RasterGrid') -> None:
        """Deep-copy geometry, kind and every cell value from another grid."""
        self.init(
            source.num_rows, source.num_cols, source.kind,
            source.cell_resolution, source.origin_x, source.origin_y
        )
        self.store.assign(source.values())

    def same_geometry(self, other: 'RasterGrid') -> bool:
        """Check whether two grids share rows, columns, resolution and origin."""
        return (
            self.num_rows == other.num_rows
            and self.num_cols == other.num_cols
            and self.cell_resolution == other.cell_resolution
            and self.origin_x == other.origin_x
            and self.origin_y == other.origin_y
        )
