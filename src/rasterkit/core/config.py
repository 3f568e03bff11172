"""
rasterkit Configuration and Constants

This module centralizes all configuration parameters, constants, and default values
for better maintainability and consistency across the codebase.
"""

# ============================================================================
# Logging
# ============================================================================

PACKAGE_LOGGER = "rasterkit"
LOG_LEVEL_ENV_VAR = "RASTERKIT_LOG_LEVEL"

# ============================================================================
# File Extensions
# ============================================================================

GRID_EXTENSION = ".rst"
HEADER_EXTENSION = ".rdc"
ENVI_HEADER_EXTENSION = ".hdr"
RASTER_EXTENSIONS = (GRID_EXTENSION, HEADER_EXTENSION)

# ============================================================================
# Header Layout
# ============================================================================

HEADER_KEY_WIDTH = 12
HEADER_DELIMITER = ":"
LEGEND_CODE_WIDTH = 7
LEGEND_CODE_KEY = "code"

# Keys whose values accumulate instead of overwriting
LIST_KEYS = {
    "lineage": "lineage",
    "comment": "comments",
    "completeness": "completeness",
    "consistency": "consistency",
}

# ============================================================================
# Unspecified Sentinels
# ============================================================================

STR_UNSPECIFIED = "Unspecified"
INT_UNSPECIFIED = -9999
FLOAT_UNSPECIFIED = -9999.0

# ============================================================================
# Header Defaults
# ============================================================================

DEFAULT_FILE_FORMAT = "IDRISI Raster A.1"
DEFAULT_FILE_TYPE = "binary"
DEFAULT_DATA_KIND = "float"
DEFAULT_REF_UNITS = "m"
DEFAULT_UNIT_DISTANCE = 1.0
DEFAULT_NODATA = -9999.0

# ============================================================================
# Storage Kinds
# ============================================================================

# Accepted kind names and their synonyms
KIND_SYNONYMS = {
    "byte": "byte",
    "integer": "integer",
    "float": "float",
    "real": "float",
}

# On-disk spelling of each kind in the header's data type field
KIND_DISK_NAMES = {
    "byte": "byte",
    "integer": "integer",
    "float": "real",
}

# Binary files are written least significant byte first
BYTE_ORDER = "<"

# ============================================================================
# Geotransform
# ============================================================================

# Fractional row/column positions this close to an integer are snapped to it
# before flooring in the inverse geotransform.
COORD_SNAP_TOLERANCE = 1e-9

# ============================================================================
# ENVI Header Dialect
# ============================================================================

ENVI_MAGIC = "ENVI"

ENVI_DATA_TYPES = {
    1: "uint8",
    2: "int16",
    3: "int32",
    4: "float32",
    5: "float64",
    6: "complex64",
    9: "complex128",
    12: "uint16",
    13: "uint32",
    14: "int64",
    15: "uint64",
}

ENVI_INTERLEAVES = ("bsq", "bil", "bip")

ENVI_BYTE_ORDERS = {
    0: "little",
    1: "big",
}
