"""
rasterkit Image File I/O

This module reads and writes a raster's two files, the text header (.rdc) and
the binary data file (.rst), which share one base name.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..core.config import GRID_EXTENSION, HEADER_EXTENSION
from ..raster.image import RasterImage
from .file_utils import split_raster_path
from .grid_file import read_grid, write_grid
from .header_file import read_header, write_header

logger = logging.getLogger('rasterkit.io.image_file')


def _with_extension(base_path: Path, extension: str) -> Path:
    return base_path.with_name(base_path.name + extension)


def read_image(path: Union[str, Path], image: Optional[RasterImage] = None) -> RasterImage:
    """
    Read a raster from its header and data files.

    The header is read first; the grid is then allocated from the header's
    geometry and kind, and filled from the data file.

    Args:
        path: Base path, or either file's path (.rst or .rdc)
        image: Image to populate; a new one is created if None

    Returns:
        RasterImage: The populated image

    Raises:
        InvalidExtensionError: If the path carries another extension
        RasterFileNotFoundError: If either file is missing
        HeaderParseError: If the header is malformed
        UnsupportedTypeError: If the header names an unknown data type
        DataFileError: If the data file size does not match the header
    """
    base_path = split_raster_path(path)
    if image is None:
        image = RasterImage()

    header = read_header(_with_extension(base_path, HEADER_EXTENSION), image.header)
    image.grid.init(
        header.num_rows, header.num_cols, header.data_kind,
        header.cell_resolution, header.min_x, header.max_y
    )
    read_grid(_with_extension(base_path, GRID_EXTENSION), image.grid)

    logger.info(
        "Read raster %s (%d x %d %s)",
        base_path, header.num_rows, header.num_cols, header.data_kind
    )
    return image


def write_image(path: Union[str, Path], image: RasterImage) -> Path:
    """
    Write a raster's header and data files.

    The value range is refreshed from the grid and the header's geometry is
    synchronized with the grid before anything is written.

    Args:
        path: Base path, or either file's path (.rst or .rdc)
        image: Image to persist

    Returns:
        Path: The base path shared by both files
    """
    from ..processing.statistics import update_min_max

    base_path = split_raster_path(path)
    update_min_max(image)
    image.sync_header()
    write_header(_with_extension(base_path, HEADER_EXTENSION), image.header)
    write_grid(_with_extension(base_path, GRID_EXTENSION), image.grid)

    logger.info("Wrote raster %s", base_path)
    return base_path
