"""
rasterkit - A Python package for single-band georeferenced rasters.

This package reads, writes and processes rasters stored as a text header
(.rdc) paired with a raw little-endian binary data file (.rst).

Key Features:
- Typed cell storage (byte, integer, float) with range checking
- Affine geotransform between row/column positions and projected coordinates
- Header persistence with legends and provenance lists
- Raster algebra: pointwise formulas, nearest-cell resampling, statistics
- ENVI header metadata reader
- xarray DataArray conversion

Quick Start:
    >>> import rasterkit as rk
    >>> image = rk.create_raster("temperature", 2, 2, "float", 10.0, 0.0, 20.0)
    >>> image.grid.set_at(5.0, 15.0, 300.0)
    >>> rk.apply_unary(image, "kelvin_to_celsius", no_data=-9999.0, fill=0.0)
    >>> rk.save_raster("/tmp/temperature", image)
"""

__version__ = "1.0.0"
__author__ = "rasterkit Development Team"

# Import main interface functions
from .main import (
    open_raster,
    save_raster,
    create_raster,
    copy_header,
    read_envi_header,

    # Utility functions
    get_raster_info,
    to_dataarray,
    from_dataarray,
)

# Import raster model classes
from .raster import (
    TypedCellStore,
    RasterGrid,
    RasterHeader,
    RasterImage,
)

# Import data types
from .core.core_types import (
    CellKind,
    Extent,
    RegressionResult,
    Descriptives,
)
from .io.envi_header import EnviHeader

# Import raster algebra
from .processing import (
    apply_unary,
    apply_binary,
    set_constant,
    resample,
    random_valid_cells,
    count_valid,
    count_valid_paired,
    extract_valid,
    extract_valid_paired,
    mean,
    describe,
    regress,
    pearson,
    rect_mean,
    update_min_max,
    register_formula,
    get_formula,
    list_formulas,
)

# Import exceptions for user error handling
from .core.exceptions import (
    RasterKitError,
    CellIndexError,
    ValueRangeError,
    UnsupportedTypeError,
    TypeMismatchError,
    ShapeMismatchError,
    HeaderParseError,
    RasterFileNotFoundError,
    InvalidExtensionError,
    InvalidDirectoryError,
    DataFileError,
    DataProcessingError,
)

# Import logging configuration
from .core.logging_config import setup_logging, set_log_level, get_logger

__all__ = [
    # Main interface
    'open_raster',
    'save_raster',
    'create_raster',
    'copy_header',
    'read_envi_header',

    # Utility functions
    'get_raster_info',
    'to_dataarray',
    'from_dataarray',

    # Raster model
    'TypedCellStore',
    'RasterGrid',
    'RasterHeader',
    'RasterImage',

    # Data types
    'CellKind',
    'Extent',
    'RegressionResult',
    'Descriptives',
    'EnviHeader',

    # Raster algebra
    'apply_unary',
    'apply_binary',
    'set_constant',
    'resample',
    'random_valid_cells',
    'count_valid',
    'count_valid_paired',
    'extract_valid',
    'extract_valid_paired',
    'mean',
    'describe',
    'regress',
    'pearson',
    'rect_mean',
    'update_min_max',
    'register_formula',
    'get_formula',
    'list_formulas',

    # Exceptions
    'RasterKitError',
    'CellIndexError',
    'ValueRangeError',
    'UnsupportedTypeError',
    'TypeMismatchError',
    'ShapeMismatchError',
    'HeaderParseError',
    'RasterFileNotFoundError',
    'InvalidExtensionError',
    'InvalidDirectoryError',
    'DataFileError',
    'DataProcessingError',

    # Logging configuration
    'setup_logging',
    'set_log_level',
    'get_logger',
]

import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
