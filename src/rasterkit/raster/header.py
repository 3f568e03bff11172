"""
rasterkit Raster Header

This module defines the metadata record that accompanies every raster grid:
geometry, value range, provenance, legend and descriptive fields.
"""

from __future__ import annotations
import copy
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Union

from ..core.config import (
    DEFAULT_DATA_KIND, DEFAULT_FILE_FORMAT, DEFAULT_FILE_TYPE, DEFAULT_REF_UNITS,
    DEFAULT_UNIT_DISTANCE, FLOAT_UNSPECIFIED, INT_UNSPECIFIED, STR_UNSPECIFIED
)
from ..core.core_types import CellKind, Extent, LegendMapping

# ============================================================================
# Raster Header
# ============================================================================

@dataclass
class RasterHeader:
    """
    Header record of a raster.

    Geometry invariant after init(): max_x = min_x + cell_resolution * num_cols
    and min_y = max_y - cell_resolution * num_rows. After read(),
    cell_resolution is derived from the extent and num_cols.

    Attributes:
        lineage: Provenance lines
        comments: Free-text comment lines
        completeness: Completeness statements
        consistency: Consistency statements
        legend: Category code -> label
        file_format: Format identifier
        file_title: Title of the raster
        data_kind: Storage kind name ("byte", "integer", "float")
        file_type: Encoding of the data file
        num_cols: Number of columns
        num_rows: Number of rows
        ref_system: Reference system name
        ref_units: Reference system units
        unit_distance: Unit distance
        min_x, max_x, min_y, max_y: Extent
        position_error: Positional error statement
        resolution_note: Resolution statement
        min_value, max_value: Range of stored values
        display_min, display_max: Display range
        value_units: Units of cell values
        value_error: Value error statement
        flag_value: No-data flag value
        flag_definition: Meaning of the flag value
        legend_cats: Number of legend categories
        cell_resolution: Cell size
    """
    lineage: List[str] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)
    completeness: List[str] = field(default_factory=list)
    consistency: List[str] = field(default_factory=list)
    legend: LegendMapping = field(default_factory=dict)
    file_format: str = DEFAULT_FILE_FORMAT
    file_title: str = STR_UNSPECIFIED
    data_kind: str = DEFAULT_DATA_KIND
    file_type: str = DEFAULT_FILE_TYPE
    num_cols: int = INT_UNSPECIFIED
    num_rows: int = INT_UNSPECIFIED
    ref_system: str = STR_UNSPECIFIED
    ref_units: str = DEFAULT_REF_UNITS
    unit_distance: float = DEFAULT_UNIT_DISTANCE
    min_x: float = FLOAT_UNSPECIFIED
    max_x: float = FLOAT_UNSPECIFIED
    min_y: float = FLOAT_UNSPECIFIED
    max_y: float = FLOAT_UNSPECIFIED
    position_error: str = STR_UNSPECIFIED
    resolution_note: str = STR_UNSPECIFIED
    min_value: float = FLOAT_UNSPECIFIED
    max_value: float = FLOAT_UNSPECIFIED
    display_min: float = FLOAT_UNSPECIFIED
    display_max: float = FLOAT_UNSPECIFIED
    value_units: str = STR_UNSPECIFIED
    value_error: str = STR_UNSPECIFIED
    flag_value: str = STR_UNSPECIFIED
    flag_definition: str = STR_UNSPECIFIED
    legend_cats: int = 0
    cell_resolution: float = FLOAT_UNSPECIFIED

    def blank(self) -> None:
        """Return every field to its unspecified state."""
        for name, value in vars(RasterHeader()).items():
            setattr(self, name, value)

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
        """Blank the header and set its geometry from explicit parameters."""
        self.blank()
        self.file_title = title
        self.data_kind = CellKind.from_name(kind).label
        self.set_geometry(rows, cols, resolution, origin_x, origin_y)

    def set_geometry(
        self,
        rows: int,
        cols: int,
        resolution: float,
        origin_x: float,
        origin_y: float
    ) -> None:
        """Set row/column counts, resolution and the extent they imply."""
        self.num_rows = rows
        self.num_cols = cols
        self.cell_resolution = resolution
        self.min_x = origin_x
        self.max_x = origin_x + resolution * cols
        self.max_y = origin_y
        self.min_y = origin_y - resolution * rows

    def clone_from(self, source: RasterHeader) -> None:
        """Deep-copy every field from another header."""
        for item in fields(self):
            setattr(self, item.name, copy.deepcopy(getattr(source, item.name)))

    @property
    def kind(self) -> CellKind:
        """Storage kind named by data_kind."""
        return CellKind.from_name(self.data_kind)

    @property
    def extent(self) -> Extent:
        return Extent(self.min_x, self.max_x, self.min_y, self.max_y)

    def read(self, path: Union[str, Path]) -> None:
        """Populate every field from a header file."""
        from ..io.header_file import read_header
        read_header(path, self)

    def write(self, path: Union[str, Path]) -> Path:
        """Persist every field to a header file."""
        from ..io.header_file import write_header
        return write_header(path, self)
