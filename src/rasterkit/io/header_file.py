"""
rasterkit Header File I/O

This module reads and writes the line-oriented `key : value` header file that
accompanies each raster data file.

File layout:
- One record per line: the key left-justified in a 12-character field, a ':'
  delimiter, a space and the value
- lineage, comment, completeness and consistency may repeat; each occurrence
  appends one line to the matching list
- "code <n>" records carry legend labels keyed by the integer n
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from ..core.config import (
    FLOAT_UNSPECIFIED, HEADER_EXTENSION, INT_UNSPECIFIED, KIND_DISK_NAMES,
    KIND_SYNONYMS, LEGEND_CODE_KEY, LEGEND_CODE_WIDTH, LIST_KEYS, STR_UNSPECIFIED
)
from ..core.exceptions import HeaderParseError
from ..raster.header import RasterHeader
from .file_utils import check_file_path, format_header_line, parse_header_line

logger = logging.getLogger('rasterkit.io.header_file')

# ============================================================================
# Scalar Field Table
# ============================================================================

# (on-disk key, header attribute, value type) in the order fields are written
SCALAR_FIELDS = (
    ("file format", "file_format", str),
    ("file title", "file_title", str),
    ("data type", "data_kind", str),
    ("file type", "file_type", str),
    ("columns", "num_cols", int),
    ("rows", "num_rows", int),
    ("ref. system", "ref_system", str),
    ("ref. units", "ref_units", str),
    ("unit dist.", "unit_distance", float),
    ("min. X", "min_x", float),
    ("max. X", "max_x", float),
    ("min. Y", "min_y", float),
    ("max. Y", "max_y", float),
    ("pos'n error", "position_error", str),
    ("resolution", "resolution_note", str),
    ("min. value", "min_value", float),
    ("max. value", "max_value", float),
    ("display min", "display_min", float),
    ("display max", "display_max", float),
    ("value units", "value_units", str),
    ("value error", "value_error", str),
    ("flag value", "flag_value", str),
    ("flag def'n", "flag_definition", str),
    ("legend cats", "legend_cats", int),
)

_UNSPECIFIED_BY_TYPE = {
    str: STR_UNSPECIFIED,
    int: INT_UNSPECIFIED,
    float: FLOAT_UNSPECIFIED,
}

# ============================================================================
# Reading
# ============================================================================

def _parse_legend_code(key: str, line: str, path: Path) -> int:
    """Parse the integer suffix of a "code <n>" key."""
    pieces = key.split()
    if len(pieces) != 2 or pieces[0] != LEGEND_CODE_KEY:
        raise HeaderParseError(line, "Legend code line must read 'code <n>'", path)
    try:
        return int(pieces[1])
    except ValueError:
        raise HeaderParseError(line, f"Legend code is not an integer: {pieces[1]!r}", path)

def _convert_value(raw: str, value_type: type, key: str, path: Path):
    """Convert the raw text of a scalar field to its declared type."""
    if value_type is str:
        return raw
    if raw.lower() == STR_UNSPECIFIED.lower():
        return _UNSPECIFIED_BY_TYPE[value_type]
    try:
        return value_type(raw)
    except ValueError:
        raise HeaderParseError(
            f"{key} : {raw}", f"Expected {value_type.__name__} value for '{key}'", path
        )

def _normalize_kind(raw: str) -> str:
    """Map on-disk kind spellings ("real") to internal names ("float")."""
    name = raw.strip().lower()
    return KIND_SYNONYMS.get(name, name)

def _derive_resolution(header: RasterHeader) -> float:
    """Cell size from the X extent, or the Y extent when there are no columns."""
    if header.num_cols > 0:
        return (header.max_x - header.min_x) / header.num_cols
    if header.num_rows > 0:
        return (header.max_y - header.min_y) / header.num_rows
    return FLOAT_UNSPECIFIED

def read_header(
    path: Union[str, Path],
    header: Optional[RasterHeader] = None
) -> RasterHeader:
    """
    Read a header file.

    Args:
        path: Header file path (the .rdc extension is appended when missing)
        header: Header to populate; a new one is created if None

    Returns:
        RasterHeader: The populated header

    Raises:
        InvalidExtensionError: If the path carries another extension
        InvalidDirectoryError: If the directory does not exist
        RasterFileNotFoundError: If the file does not exist
        HeaderParseError: If a line or numeric field is malformed
    """
    header_path = check_file_path(path, HEADER_EXTENSION, must_exist=True, file_type="Raster header")

    if header is None:
        header = RasterHeader()
    header.blank()

    scalars: Dict[str, str] = {}
    with open(header_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.rstrip('\r\n')
            record = parse_header_line(line, header_path)
            if record is None:
                continue
            key, value = record

            if key in LIST_KEYS:
                getattr(header, LIST_KEYS[key]).append(value)
            elif key.startswith(LEGEND_CODE_KEY):
                code = _parse_legend_code(key, line, header_path)
                if code in header.legend:
                    logger.debug("Legend code %d repeated in %s, keeping last label", code, header_path)
                header.legend[code] = value
            elif key in scalars:
                raise HeaderParseError(line, f"Duplicate key '{key}'", header_path)
            else:
                scalars[key] = value

    for disk_key, attr, value_type in SCALAR_FIELDS:
        raw = scalars.pop(disk_key.lower(), None)
        if raw is None:
            continue
        setattr(header, attr, _convert_value(raw, value_type, disk_key, header_path))

    for key in scalars:
        logger.debug("Ignoring unrecognized header key '%s' in %s", key, header_path)

    header.data_kind = _normalize_kind(header.data_kind)
    header.cell_resolution = _derive_resolution(header)

    logger.debug(
        "Read header %s: %d rows x %d cols, %s",
        header_path, header.num_rows, header.num_cols, header.data_kind
    )
    return header

# ============================================================================
# Writing
# ============================================================================

def write_header(path: Union[str, Path], header: RasterHeader) -> Path:
    """
    Write a header file.

    Scalar fields are written in a fixed order, then legend codes ascending,
    then lineage, completeness, consistency and comment lines. The header
    itself is not modified.

    Args:
        path: Header file path (the .rdc extension is appended when missing)
        header: Header to persist

    Returns:
        Path: The written file
    """
    header_path = check_file_path(path, HEADER_EXTENSION, must_exist=False, file_type="Raster header")

    lines = []
    for disk_key, attr, _ in SCALAR_FIELDS:
        value = getattr(header, attr)
        if attr == "data_kind":
            value = KIND_DISK_NAMES.get(value, value)
        lines.append(format_header_line(disk_key, value))

    # Keep at least one space after "code" so wide codes still parse
    for code, label in sorted(header.legend.items()):
        key = f"{LEGEND_CODE_KEY} {code:>{LEGEND_CODE_WIDTH - 1}}"
        lines.append(format_header_line(key, label))

    for key, attr in (
        ("lineage", "lineage"),
        ("completeness", "completeness"),
        ("consistency", "consistency"),
        ("comment", "comments"),
    ):
        for item in getattr(header, attr):
            lines.append(format_header_line(key, item))

    with open(header_path, 'w', encoding='utf-8') as f:
        f.write("\n".join(lines) + "\n")

    logger.debug("Wrote header %s", header_path)
    return header_path

def copy_header(source_path: Union[str, Path], target_path: Union[str, Path]) -> Path:
    """Copy a header file by reading and re-writing it."""
    return write_header(target_path, read_header(source_path))
