"""
rasterkit Type Definitions and Data Classes

This module defines all data structures and type aliases used throughout the codebase
for better type safety and code clarity.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, NamedTuple, Tuple, Union
import numpy as np

from .config import BYTE_ORDER, KIND_DISK_NAMES, KIND_SYNONYMS
from .exceptions import UnsupportedTypeError

# ============================================================================
# Type Aliases
# ============================================================================

RowCol = Tuple[int, int]
Coordinate = Tuple[float, float]
LegendMapping = Dict[int, str]
UnaryFormula = Callable[[float], float]
BinaryFormula = Callable[[float, float], float]
FormulaSpec = Union[str, UnaryFormula, BinaryFormula]

# ============================================================================
# Storage Kinds
# ============================================================================

@dataclass(frozen=True)
class KindInfo:
    """
    Metadata describing one cell storage encoding.

    Attributes:
        label: Internal kind name ("byte", "integer", "float")
        dtype: numpy dtype string including byte order
        width: Encoded width of one element in bytes
        min_value: Smallest representable value
        max_value: Largest representable value
        is_integer: Whether values are truncated toward zero on assignment
    """
    label: str
    dtype: str
    width: int
    min_value: float
    max_value: float
    is_integer: bool


class CellKind(Enum):
    """Supported cell storage kinds."""

    BYTE = KindInfo("byte", "u1", 1, 0.0, 255.0, True)
    INTEGER = KindInfo(
        "integer", f"{BYTE_ORDER}i2", 2,
        float(np.iinfo(np.int16).min), float(np.iinfo(np.int16).max), True
    )
    FLOAT = KindInfo(
        "float", f"{BYTE_ORDER}f4", 4,
        float(np.finfo(np.float32).min), float(np.finfo(np.float32).max), False
    )

    @property
    def label(self) -> str:
        return self.value.label

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.value.dtype)

    @property
    def width(self) -> int:
        return self.value.width

    @property
    def min_value(self) -> float:
        return self.value.min_value

    @property
    def max_value(self) -> float:
        return self.value.max_value

    @property
    def is_integer(self) -> bool:
        return self.value.is_integer

    @property
    def disk_name(self) -> str:
        """Spelling of this kind in a header's data type field."""
        return KIND_DISK_NAMES[self.label]

    @classmethod
    def from_name(cls, name: Union[str, CellKind]) -> CellKind:
        """
        Resolve a kind from its name.

        Args:
            name: Kind name ("byte", "integer", "float" or "real"), or a CellKind

        Returns:
            CellKind: The matching kind

        Raises:
            UnsupportedTypeError: If the name is not a supported kind
        """
        if isinstance(name, CellKind):
            return name
        label = KIND_SYNONYMS.get(str(name).strip().lower())
        if label is None:
            raise UnsupportedTypeError(str(name), sorted(KIND_SYNONYMS))
        return _KINDS_BY_LABEL[label]

    def __str__(self) -> str:
        return self.label


_KINDS_BY_LABEL = {kind.label: kind for kind in CellKind}


def is_legal_kind(name: str) -> bool:
    """Check whether a name is a legal internal kind representation."""
    return str(name).strip().lower() in _KINDS_BY_LABEL

# ============================================================================
# Geometry
# ============================================================================

@dataclass(frozen=True)
class Extent:
    """
    Rectangular extent of a georeferenced grid.

    Attributes:
        min_x: West edge
        max_x: East edge
        min_y: South edge
        max_y: North edge
    """
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, easting: float, northing: float) -> bool:
        """Check if a coordinate falls inside the extent (west/north edges inclusive)."""
        return self.min_x <= easting < self.max_x and self.min_y < northing <= self.max_y

# ============================================================================
# Statistics Results
# ============================================================================

class RegressionResult(NamedTuple):
    """Ordinary least-squares fit of Y on X."""
    slope: float
    intercept: float
    r_squared: float


@dataclass
class Descriptives:
    """Descriptive statistics over the valid cells of a raster."""
    count: int
    minimum: float
    maximum: float
    mean: float
    std: float
    total: float
