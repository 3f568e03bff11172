"""
rasterkit File Operation Utilities

This module handles file path discipline for the paired raster files
(extension checks, directory validation) and the line layout shared by the
text header format.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

from ..core.config import (
    HEADER_DELIMITER, HEADER_KEY_WIDTH, RASTER_EXTENSIONS, STR_UNSPECIFIED
)
from ..core.exceptions import (
    HeaderParseError, InvalidExtensionError, validate_directory, validate_required_file
)

# ============================================================================
# Path Discipline
# ============================================================================

def check_file_path(
    path: Union[str, Path],
    extension: str,
    must_exist: bool,
    file_type: str = "Raster"
) -> Path:
    """
    Validate a file path against its required extension.

    A path without an extension gets the default one appended. Extensions are
    compared case-insensitively.

    Examples:
        dem -> dem.rst
        dem.RST -> dem.RST
        dem.tif -> InvalidExtensionError

    Args:
        path: File path, with or without extension
        extension: Required extension including the dot (e.g. ".rst")
        must_exist: Whether the file must already exist
        file_type: Type description used in error messages

    Returns:
        Path: The validated path, extension included

    Raises:
        InvalidExtensionError: If the path carries a different extension
        InvalidDirectoryError: If the parent directory does not exist
        RasterFileNotFoundError: If must_exist and the file is missing
    """
    file_path = Path(str(path).strip())

    if file_path.suffix == "":
        file_path = file_path.with_name(file_path.name + extension)
    elif file_path.suffix.lower() != extension.lower():
        raise InvalidExtensionError(file_path, extension)

    validate_directory(file_path.parent, file_path.name)

    if must_exist:
        validate_required_file(file_path, file_type)

    return file_path

def split_raster_path(path: Union[str, Path]) -> Path:
    """
    Return the base path shared by a raster's data and header files.

    Examples:
        /data/dem.rst -> /data/dem
        /data/dem.rdc -> /data/dem
        /data/dem -> /data/dem

    Raises:
        InvalidExtensionError: If the path carries any other extension
    """
    file_path = Path(str(path).strip())
    if file_path.suffix == "":
        return file_path
    if file_path.suffix.lower() in RASTER_EXTENSIONS:
        return file_path.with_suffix("")
    raise InvalidExtensionError(file_path, " or ".join(RASTER_EXTENSIONS))

# ============================================================================
# Header Line Layout
# ============================================================================

def format_header_value(value) -> str:
    """Render a header value; floats use their shortest round-trip form."""
    if isinstance(value, float):
        return repr(value)
    return str(value)

def format_header_line(key: str, value) -> str:
    """Left-justify the key in the fixed-width key field, then the value."""
    return f"{key:<{HEADER_KEY_WIDTH}}{HEADER_DELIMITER} {format_header_value(value)}"

def parse_header_line(line: str, path: Optional[Path] = None) -> Optional[Tuple[str, str]]:
    """
    Split a header record into a lowercase key and a trimmed value.

    Examples:
        "columns     : 512" -> ("columns", "512")
        "flag def'n  : " -> ("flag def'n", "Unspecified")

    Args:
        line: One line of the header file
        path: Header file, for error messages

    Returns:
        Optional[Tuple[str, str]]: (key, value), or None for a blank line

    Raises:
        HeaderParseError: If the line has no delimiter or an empty key
    """
    if not line.strip():
        return None

    key, delimiter, value = line.partition(HEADER_DELIMITER)
    if not delimiter:
        raise HeaderParseError(line, f"Missing '{HEADER_DELIMITER}' delimiter", path)

    key = key.strip().lower()
    if not key:
        raise HeaderParseError(line, "Empty key", path)

    value = value.strip()
    if not value:
        value = STR_UNSPECIFIED
    return key, value
