"""
rasterkit Information Utilities

This module summarizes a raster from its header alone, without reading the
data file.
"""

from pathlib import Path
from typing import Dict, Union

from ..core.config import GRID_EXTENSION, HEADER_EXTENSION
from ..io.file_utils import split_raster_path
from ..io.header_file import read_header


def get_raster_info(path: Union[str, Path]) -> Dict:
    """
    Get information about a raster on disk.

    Args:
        path: Base path, or either file's path (.rst or .rdc)

    Returns:
        Dict: Title, shape, storage kind, resolution, extent, value range,
        legend size and whether the data file is present
    """
    base_path = split_raster_path(path)
    header = read_header(base_path.with_name(base_path.name + HEADER_EXTENSION))
    data_path = base_path.with_name(base_path.name + GRID_EXTENSION)

    return {
        'path': str(base_path),
        'title': header.file_title,
        'rows': header.num_rows,
        'cols': header.num_cols,
        'kind': header.data_kind,
        'resolution': header.cell_resolution,
        'extent': {
            'min_x': header.min_x,
            'max_x': header.max_x,
            'min_y': header.min_y,
            'max_y': header.max_y,
        },
        'value_range': (header.min_value, header.max_value),
        'value_units': header.value_units,
        'ref_system': header.ref_system,
        'legend_size': len(header.legend),
        'has_data_file': data_path.is_file(),
    }
