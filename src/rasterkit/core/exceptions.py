"""
rasterkit Custom Exception Classes

This module defines all custom exception classes for better error handling
and more informative error messages. Each class also derives from the closest
built-in exception so callers can catch either.
"""

from typing import Optional, Sequence
from pathlib import Path

# ============================================================================
# Base Exception
# ============================================================================

class RasterKitError(Exception):
    """Base exception class for all rasterkit related errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        full_message = f"{message}\nDetails: {details}" if details else message
        super().__init__(full_message)

# ============================================================================
# Cell Access Errors
# ============================================================================

class CellIndexError(RasterKitError, IndexError):
    """Linear cell index outside the store."""

    def __init__(self, index: int, length: int):
        super().__init__(
            f"Cell index {index} is out of range",
            f"Valid indices: [0, {length})"
        )
        self.index = index
        self.length = length

class ValueRangeError(RasterKitError, ValueError):
    """Value outside a kind's representable range, or row/column outside a grid."""

    def __init__(self, item: str, value, valid_range: str):
        super().__init__(f"{item} is out of range: {value}", f"Valid range: {valid_range}")
        self.item = item
        self.value = value

# ============================================================================
# Type and Shape Errors
# ============================================================================

class UnsupportedTypeError(RasterKitError, ValueError):
    """Unknown storage-kind name."""

    def __init__(self, kind_name: str, supported: Optional[Sequence[str]] = None):
        super().__init__(
            f"Unsupported cell data type: {kind_name!r}",
            f"Supported types: {', '.join(supported)}" if supported else None
        )
        self.kind_name = kind_name

class TypeMismatchError(RasterKitError, TypeError):
    """Operation requires matching storage kinds across two rasters."""

    def __init__(self, operation: str, first: str, second: str):
        super().__init__(
            f"{operation} requires rasters of the same data type",
            f"Got {first} and {second}"
        )
        self.operation = operation

class ShapeMismatchError(RasterKitError, ValueError):
    """Mismatched cell counts or array shapes."""

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Shape mismatch during {operation}", reason)
        self.operation = operation

# ============================================================================
# File and Format Errors
# ============================================================================

class HeaderParseError(RasterKitError, ValueError):
    """Malformed header line or field."""

    def __init__(self, line: str, reason: str, path: Optional[Path] = None):
        message = f"Could not parse header line: {line!r}"
        if path is not None:
            message = f"{message} (file: {path})"
        super().__init__(message, reason)
        self.line = line
        self.path = path

class RasterFileNotFoundError(RasterKitError, FileNotFoundError):
    """Required file not found."""

    def __init__(self, file_path: Path, file_type: str):
        super().__init__(f"{file_type} file not found: {file_path}")
        self.file_path = file_path
        self.file_type = file_type

class InvalidExtensionError(RasterKitError, ValueError):
    """File path carries the wrong extension."""

    def __init__(self, file_path: Path, expected: str):
        super().__init__(
            f"Invalid file extension: {file_path}",
            f"Expected extension: {expected}"
        )
        self.file_path = file_path
        self.expected = expected

class InvalidDirectoryError(RasterKitError, NotADirectoryError):
    """Target directory does not exist."""

    def __init__(self, directory: Path, file_name: str):
        super().__init__(f"Directory {directory} for file {file_name} does not exist")
        self.directory = directory

class DataFileError(RasterKitError):
    """Binary data file does not match the grid it is read into."""

    def __init__(self, file_path: Path, reason: str):
        super().__init__(f"Invalid raster data file: {file_path}", reason)
        self.file_path = file_path

# ============================================================================
# Processing Errors
# ============================================================================

class DataProcessingError(RasterKitError):
    """Data processing related errors."""

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Data processing failed during {operation}", reason)
        self.operation = operation

# ============================================================================
# Utility Functions
# ============================================================================

def validate_directory(directory: Path, file_name: str) -> Path:
    """
    Validate that the directory holding a file exists.

    Args:
        directory: Directory path
        file_name: Name of the file the directory should hold

    Returns:
        Path: The validated directory

    Raises:
        InvalidDirectoryError: If the directory doesn't exist
    """
    if not directory.is_dir():
        raise InvalidDirectoryError(directory, file_name)
    return directory

def validate_required_file(file_path: Path, file_type: str) -> Path:
    """
    Validate that a required file exists.

    Args:
        file_path: Path to the file
        file_type: Type description of the file

    Returns:
        Path: The validated file path

    Raises:
        RasterFileNotFoundError: If file doesn't exist
    """
    if not file_path.is_file():
        raise RasterFileNotFoundError(file_path, file_type)
    return file_path

def check_same_kind(first, second, operation: str) -> None:
    """Check that two grids share a storage kind."""
    if first.kind is not second.kind:
        raise TypeMismatchError(operation, first.kind.label, second.kind.label)

def check_same_length(first, second, operation: str) -> None:
    """Check that two grids hold the same number of cells."""
    if first.num_cells != second.num_cells:
        raise ShapeMismatchError(
            operation,
            f"{first.num_cells} cells vs {second.num_cells} cells"
        )
