"""
rasterkit Raster Model

This package provides the in-memory raster: the typed cell store, the
georeferenced grid, the header record and the image pairing them.
"""

from .cell_store import TypedCellStore
from .grid import RasterGrid
from .header import RasterHeader
from .image import RasterImage

__all__ = [
    "TypedCellStore",
    "RasterGrid",
    "RasterHeader",
    "RasterImage",
]
