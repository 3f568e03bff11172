"""
rasterkit Grid Data File I/O

This module reads and writes the flat binary data file of a raster: the
num_rows * num_cols cells in row-major order, fixed width per cell, least
significant byte first, no embedded header.
"""

from pathlib import Path
from typing import Union

from ..core.config import GRID_EXTENSION
from ..raster.grid import RasterGrid
from .file_utils import check_file_path


def read_grid(path: Union[str, Path], grid: RasterGrid) -> Path:
    """
    Read cell values into an initialized grid.

    Args:
        path: Data file path (the .rst extension is appended when missing)
        grid: Grid whose geometry and kind describe the file

    Returns:
        Path: The file that was read

    Raises:
        InvalidExtensionError: If the path carries another extension
        InvalidDirectoryError: If the directory does not exist
        RasterFileNotFoundError: If the file does not exist
        DataFileError: If the file size does not match the grid
    """
    grid_path = check_file_path(path, GRID_EXTENSION, must_exist=True, file_type="Raster data")
    grid.require_store().read_all(grid_path)
    return grid_path


def write_grid(path: Union[str, Path], grid: RasterGrid) -> Path:
    """Write every cell of a grid to its binary data file."""
    grid_path = check_file_path(path, GRID_EXTENSION, must_exist=False, file_type="Raster data")
    grid.require_store().write_all(grid_path)
    return grid_path
