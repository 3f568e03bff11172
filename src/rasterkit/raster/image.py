"""
rasterkit Raster Image

This module composes a raster grid and its header into one georeferenced
raster. The grid is the source of truth for geometry; the header's geometry
fields are refreshed from it before persistence.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Union

from ..core.core_types import CellKind, is_legal_kind
from ..core.exceptions import UnsupportedTypeError
from .grid import RasterGrid
from .header import RasterHeader

logger = logging.getLogger('rasterkit.raster.image')


class RasterImage:
    """
    A raster grid paired with its header.

    Attributes:
        grid: Cell values and geometry
        header: Provenance, legend and descriptive metadata
    """

    def __init__(self):
        self.grid = RasterGrid()
        self.header = RasterHeader()

    def __repr__(self) -> str:
        return f"RasterImage(title={self.header.file_title!r}, grid={self.grid!r})"

    def init(
        self,
        title: str,
        rows: int,
        cols: int,
        kind: Union[str, CellKind],
        resolution: float,
        origin_x: float,
        origin_y: float
    ) -> None:
        """Allocate the grid and initialize a matching header."""
        self.grid.init(rows, cols, kind, resolution, origin_x, origin_y)
        self.header.init(title, rows, cols, kind, resolution, origin_x, origin_y)

    def clone_from(self, source: RasterImage) -> None:
        """Deep-copy grid and header from another image."""
        self.grid.clone_from(source.grid)
        self.header.clone_from(source.header)

    def convert_type(self, new_kind: Union[str, CellKind]) -> None:
        """
        Change the storage kind of every cell.

        Raises:
            UnsupportedTypeError: If new_kind is not byte, integer or float
            ValueRangeError: If a value cannot be represented by the new kind
        """
        if isinstance(new_kind, str):
            new_kind = new_kind.strip().lower()
            if not is_legal_kind(new_kind):
                raise UnsupportedTypeError(new_kind, ["byte", "float", "integer"])
        self.grid.convert_type(new_kind)
        self.header.data_kind = self.grid.kind.label

    def sync_header(self) -> None:
        """Copy geometry and storage kind from the grid into the header."""
        grid = self.grid
        self.header.data_kind = grid.kind.label
        self.header.set_geometry(
            grid.num_rows, grid.num_cols, grid.cell_resolution, grid.origin_x, grid.origin_y
        )
        if self.header.legend:
            self.header.legend_cats = len(self.header.legend)

    @property
    def kind(self) -> CellKind:
        return self.grid.kind

    @property
    def num_cells(self) -> int:
        return self.grid.num_cells

    def read(self, path: Union[str, Path]) -> None:
        """Read header and data files into this image."""
        from ..io.image_file import read_image
        read_image(path, self)

    def write(self, path: Union[str, Path]) -> Path:
        """Write header and data files; returns the base path."""
        from ..io.image_file import write_image
        return write_image(path, self)
