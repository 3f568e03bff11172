"""
rasterkit Utilities

This package provides raster information queries and xarray conversion.
"""

# Information functions
from .info import get_raster_info

# Conversion functions
from .conversion import (
    to_dataarray,
    from_dataarray,
)

__all__ = [
    # Information functions
    "get_raster_info",
    # Conversion functions
    "to_dataarray",
    "from_dataarray",
]
