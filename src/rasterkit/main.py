"""
rasterkit Main Interface

This module provides the main API functions for opening, creating and saving
rasters. Utility functions live in the utils package.
"""

import logging
from pathlib import Path
from typing import Union

from .core.core_types import CellKind
from .io.envi_header import read_envi_header
from .io.header_file import copy_header
from .io.image_file import read_image, write_image
from .raster.image import RasterImage

# Get logger for this module
logger = logging.getLogger('rasterkit.main')

# Import utility functions for convenience
from .utils import (
    get_raster_info,
    to_dataarray,
    from_dataarray,
)


# ============================================================================
# Main API Functions
# ============================================================================

def open_raster(path: Union[str, Path]) -> RasterImage:
    """
    Open a raster from its header (.rdc) and data (.rst) files.

    Args:
        path: Base path, or either file's path

    Returns:
        RasterImage: The loaded raster

    Examples:
        >>> image = open_raster("/data/elevation")
        >>> image.grid.get_at(5.0, 15.0)
    """
    return read_image(path)


def save_raster(path: Union[str, Path], image: RasterImage) -> Path:
    """
    Save a raster as a header (.rdc) and data (.rst) file pair.

    The header's value range and geometry are refreshed from the grid first.

    Args:
        path: Base path, or either file's path
        image: Raster to save

    Returns:
        Path: The base path shared by both files
    """
    return write_image(path, image)


def create_raster(
    title: str,
    rows: int,
    cols: int,
    kind: Union[str, CellKind],
    resolution: float,
    origin_x: float,
    origin_y: float,
    fill_value: float = 0.0
) -> RasterImage:
    """
    Create a new raster with every cell set to fill_value.

    Args:
        title: Raster title
        rows: Number of rows
        cols: Number of columns
        kind: Storage kind ("byte", "integer", "float")
        resolution: Cell size
        origin_x: West edge
        origin_y: North edge
        fill_value: Initial value of every cell

    Returns:
        RasterImage: The new raster

    Examples:
        >>> image = create_raster("dem", 100, 200, "float", 30.0, 500000.0, 4000000.0, -9999.0)
    """
    image = RasterImage()
    image.init(title, rows, cols, kind, resolution, origin_x, origin_y)
    if fill_value != 0.0:
        image.grid.fill(fill_value)

    logger.debug("Created raster %r (%d x %d %s)", title, rows, cols, image.kind.label)
    return image


__all__ = [
    'open_raster',
    'save_raster',
    'create_raster',
    'copy_header',
    'read_envi_header',
    'get_raster_info',
    'to_dataarray',
    'from_dataarray',
]
