"""
rasterkit ENVI Header Reader

This module reads ENVI-style text headers as a pure metadata source. It never
touches pixel data: no multi-band codec exists for this dialect.

File layout:
- First non-empty line reads "ENVI"
- Records are "key = value" pairs, keys case-insensitive
- Values opening with '{' continue over following lines until the closing
  '}'; free-text blocks also end at a blank line
- Numeric lists (wavelength, fwhm) are comma separated inside braces

Data type codes:
    1=uint8, 2=int16, 3=int32, 4=float32, 5=float64, 6=complex64,
    9=complex128, 12=uint16, 13=uint32, 14=int64, 15=uint64
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union
import numpy as np

from ..core.config import (
    ENVI_BYTE_ORDERS, ENVI_DATA_TYPES, ENVI_HEADER_EXTENSION, ENVI_INTERLEAVES, ENVI_MAGIC
)
from ..core.exceptions import HeaderParseError
from .file_utils import check_file_path

logger = logging.getLogger('rasterkit.io.envi_header')

# ============================================================================
# ENVI Header Record
# ============================================================================

@dataclass
class EnviHeader:
    """
    Metadata parsed from an ENVI header.

    Attributes:
        description: Free-text description
        num_cols: Samples per line
        num_rows: Lines per band
        num_bands: Number of bands
        header_offset: Bytes of embedded header to skip in the data file
        file_type: ENVI file type string
        data_type: numpy dtype name of the cells
        interleave: "bsq", "bil" or "bip"
        byte_order: "little" or "big"
        sensor_type: Sensor name
        band_names: One name per band
        wavelength: Band center wavelengths
        wavelength_units: Units of wavelength and fwhm
        fwhm: Band widths
        x_start: File x coordinate of the upper-left pixel
        y_start: File y coordinate of the upper-left pixel
        map_info: Map info items (projection, reference pixel, easting, ...)
        map_units: Units named in map info
        coordinate_system: Coordinate system string
        extra: Unrecognized keys and their raw values
    """
    description: Optional[str] = None
    num_cols: Optional[int] = None
    num_rows: Optional[int] = None
    num_bands: Optional[int] = None
    header_offset: Optional[int] = None
    file_type: Optional[str] = None
    data_type: Optional[str] = None
    interleave: Optional[str] = None
    byte_order: Optional[str] = None
    sensor_type: Optional[str] = None
    band_names: List[str] = field(default_factory=list)
    wavelength: List[float] = field(default_factory=list)
    wavelength_units: Optional[str] = None
    fwhm: List[float] = field(default_factory=list)
    x_start: Optional[int] = None
    y_start: Optional[int] = None
    map_info: List[str] = field(default_factory=list)
    map_units: Optional[str] = None
    coordinate_system: Optional[str] = None
    extra: Dict[str, str] = field(default_factory=dict)

    @property
    def num_elements(self) -> Optional[int]:
        """Total number of cells across all bands."""
        if None in (self.num_rows, self.num_cols, self.num_bands):
            return None
        return self.num_rows * self.num_cols * self.num_bands

    @property
    def dtype(self) -> Optional[np.dtype]:
        """Cell dtype including byte order, when both are known."""
        if self.data_type is None:
            return None
        dtype = np.dtype(self.data_type)
        if self.byte_order is not None:
            dtype = dtype.newbyteorder('<' if self.byte_order == "little" else '>')
        return dtype

# ============================================================================
# Value Parsers
# ============================================================================

def _strip_braces(value: str) -> str:
    return value.strip().lstrip('{').rstrip('}').strip()

def _split_list(value: str) -> List[str]:
    return [item.strip() for item in _strip_braces(value).split(',') if item.strip()]

def _parse_int(key: str, value: str, path: Path) -> int:
    try:
        return int(value)
    except ValueError:
        raise HeaderParseError(f"{key} = {value}", f"Expected integer value for '{key}'", path)

def _parse_float_list(key: str, value: str, path: Path) -> List[float]:
    try:
        return [float(item) for item in _split_list(value)]
    except ValueError:
        raise HeaderParseError(f"{key} = {value}", f"Expected numeric list for '{key}'", path)

def _parse_coded(key: str, value: str, codes: Dict[int, str], path: Path) -> str:
    code = _parse_int(key, value, path)
    if code not in codes:
        raise HeaderParseError(
            f"{key} = {value}", f"Unrecognized {key} code, expected one of {sorted(codes)}", path
        )
    return codes[code]

# ============================================================================
# Record Scanning
# ============================================================================

def _scan_records(lines: List[str], path: Path) -> List[tuple]:
    """Group header lines into (key, raw value) records, joining brace blocks."""
    records = []
    i = 0
    n = len(lines)

    while i < n and not lines[i].strip():
        i += 1
    if i == n or lines[i].strip().upper() != ENVI_MAGIC:
        raise HeaderParseError(
            lines[i] if i < n else "", f"First line of an ENVI header must read {ENVI_MAGIC}", path
        )
    i += 1

    while i < n:
        line = lines[i]
        i += 1
        if not line.strip():
            continue

        key, delimiter, value = line.partition('=')
        if not delimiter:
            raise HeaderParseError(line, "Missing '=' delimiter", path)
        key = key.strip().lower()
        value = value.strip()

        # Block opening on the following line
        if not value and i < n and lines[i].lstrip().startswith('{'):
            value = lines[i].strip()
            i += 1

        if value.startswith('{') and '}' not in value:
            parts = [value]
            while i < n:
                continuation = lines[i]
                i += 1
                if not continuation.strip():
                    break
                parts.append(continuation.strip())
                if '}' in continuation:
                    break
            value = ' '.join(parts)

        records.append((key, value))

    return records

# ============================================================================
# Reader
# ============================================================================

def read_envi_header(path: Union[str, Path]) -> EnviHeader:
    """
    Read an ENVI header file.

    Args:
        path: Header path (the .hdr extension is appended when missing)

    Returns:
        EnviHeader: Parsed metadata; unrecognized keys are logged and kept in extra

    Raises:
        InvalidExtensionError: If the path carries another extension
        RasterFileNotFoundError: If the file does not exist
        HeaderParseError: If the magic line, a delimiter or a coded value is invalid
    """
    header_path = check_file_path(path, ENVI_HEADER_EXTENSION, must_exist=True, file_type="ENVI header")

    with open(header_path, 'r', encoding='utf-8') as f:
        lines = f.read().splitlines()

    header = EnviHeader()
    for key, value in _scan_records(lines, header_path):
        if key == "description":
            header.description = ' '.join(_strip_braces(value).split())
        elif key == "samples":
            header.num_cols = _parse_int(key, value, header_path)
        elif key == "lines":
            header.num_rows = _parse_int(key, value, header_path)
        elif key == "bands":
            header.num_bands = _parse_int(key, value, header_path)
        elif key == "header offset":
            header.header_offset = _parse_int(key, value, header_path)
        elif key == "file type":
            header.file_type = value
        elif key == "data type":
            header.data_type = _parse_coded(key, value, ENVI_DATA_TYPES, header_path)
        elif key == "interleave":
            interleave = value.lower()
            if interleave not in ENVI_INTERLEAVES:
                raise HeaderParseError(
                    f"{key} = {value}", f"Interleave must be one of {ENVI_INTERLEAVES}", header_path
                )
            header.interleave = interleave
        elif key == "byte order":
            header.byte_order = _parse_coded(key, value, ENVI_BYTE_ORDERS, header_path)
        elif key == "sensor type":
            header.sensor_type = value
        elif key == "band names":
            header.band_names = _split_list(value)
        elif key == "wavelength":
            header.wavelength = _parse_float_list(key, value, header_path)
        elif key == "wavelength units":
            header.wavelength_units = value
        elif key == "fwhm":
            header.fwhm = _parse_float_list(key, value, header_path)
        elif key == "x start":
            header.x_start = _parse_int(key, value, header_path)
        elif key == "y start":
            header.y_start = _parse_int(key, value, header_path)
        elif key == "map info":
            items = _split_list(value)
            if items and '=' in items[-1]:
                header.map_units = items.pop().partition('=')[2].strip()
            header.map_info = items
        elif key == "coordinate system string":
            header.coordinate_system = _strip_braces(value)
        else:
            logger.warning("ENVI header %s had an unrecognized key: %s", header_path, key)
            header.extra[key] = value

    logger.debug(
        "Read ENVI header %s: %s lines x %s samples x %s bands",
        header_path, header.num_rows, header.num_cols, header.num_bands
    )
    return header
