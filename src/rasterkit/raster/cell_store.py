"""
rasterkit Typed Cell Storage

This module provides the fixed-length, homogeneous cell buffer that backs every
raster grid, together with its fixed-width binary codec.
"""

import logging
import math
from pathlib import Path
from typing import BinaryIO, Union
import numpy as np

from ..core.core_types import CellKind
from ..core.exceptions import (
    CellIndexError, DataFileError, ShapeMismatchError, ValueRangeError,
    validate_required_file
)

logger = logging.getLogger('rasterkit.raster.cell_store')

# ============================================================================
# Typed Cell Store
# ============================================================================

class TypedCellStore:
    """
    Fixed-length buffer of cells sharing one storage kind.

    Every stored value lies inside the kind's representable range and every
    accepted index lies in [0, length). The buffer is allocated once and never
    resized.

    Attributes:
        kind: Storage kind of every cell
        length: Number of cells
    """

    def __init__(self, kind: Union[str, CellKind], length: int):
        """
        Allocate a zero-filled store.

        Args:
            kind: Storage kind or kind name
            length: Number of elements

        Raises:
            UnsupportedTypeError: If the kind name is unknown
            ValueRangeError: If length is negative
        """
        self.kind = CellKind.from_name(kind)
        if length < 0:
            raise ValueRangeError("Store length", length, "[0, inf)")
        self.length = int(length)
        self._cells = np.zeros(self.length, dtype=self.kind.dtype)

    @property
    def min_value(self) -> float:
        return self.kind.min_value

    @property
    def max_value(self) -> float:
        return self.kind.max_value

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return f"TypedCellStore(kind={self.kind.label!r}, length={self.length})"

    # ------------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------------

    def check_index(self, index: int) -> None:
        """Raise CellIndexError if index is outside [0, length)."""
        if index < 0 or index >= self.length:
            raise CellIndexError(index, self.length)

    def check_value(self, value: float) -> None:
        """Raise ValueRangeError if value cannot be represented by the kind."""
        if math.isnan(value):
            if self.kind.is_integer:
                raise ValueRangeError(
                    f"Value assigned to a {self.kind.label} grid", value, self._range_text()
                )
            return
        if value < self.min_value or value > self.max_value:
            raise ValueRangeError(
                f"Value assigned to a {self.kind.label} grid", value, self._range_text()
            )

    def _range_text(self) -> str:
        return f"[{self.min_value:g}, {self.max_value:g}]"

    # ------------------------------------------------------------------------
    # Element Access
    # ------------------------------------------------------------------------

    def get(self, index: int) -> float:
        """Return the value stored at a linear index."""
        self.check_index(index)
        return float(self._cells[index])

    def set(self, index: int, value: float) -> None:
        """
        Store a value at a linear index.

        Integer kinds truncate toward zero; the float kind narrows to single
        precision.

        Raises:
            CellIndexError: If index is outside the store
            ValueRangeError: If value is outside the kind's range
        """
        self.check_index(index)
        value = float(value)
        self.check_value(value)
        self._cells[index] = int(value) if self.kind.is_integer else value

    # ------------------------------------------------------------------------
    # Bulk Access
    # ------------------------------------------------------------------------

    def values(self) -> np.ndarray:
        """Return a float64 copy of every cell in index order."""
        return self._cells.astype(np.float64)

    def assign(self, values) -> None:
        """
        Replace every cell from a sequence of length `length`.

        The whole sequence is range-checked before any cell changes.

        Raises:
            ShapeMismatchError: If the sequence length differs from the store
            ValueRangeError: If any value is outside the kind's range
        """
        data = np.asarray(values, dtype=np.float64).ravel()
        if data.size != self.length:
            raise ShapeMismatchError(
                "cell assignment", f"{data.size} values for {self.length} cells"
            )

        with np.errstate(invalid='ignore'):
            bad = (data < self.min_value) | (data > self.max_value)
        if self.kind.is_integer:
            bad |= np.isnan(data)
        if bad.any():
            first = int(np.flatnonzero(bad)[0])
            raise ValueRangeError(
                f"Value for cell {first} of a {self.kind.label} grid",
                float(data[first]), self._range_text()
            )

        if self.kind.is_integer:
            data = np.trunc(data)
        self._cells[:] = data.astype(self.kind.dtype)

    def fill(self, value: float) -> None:
        """Set every cell to the same value."""
        value = float(value)
        self.check_value(value)
        self._cells[:] = int(value) if self.kind.is_integer else value

    # ------------------------------------------------------------------------
    # Binary Codec
    # ------------------------------------------------------------------------

    def read_element(self, index: int, source: BinaryIO) -> None:
        """
        Decode one element from the current position of a binary stream.

        Raises:
            CellIndexError: If index is outside the store
            DataFileError: If the stream ends before a full element is read
        """
        self.check_index(index)
        data = source.read(self.kind.width)
        if len(data) != self.kind.width:
            raise DataFileError(
                Path(getattr(source, 'name', '<stream>')),
                f"Unexpected end of data at element {index}"
            )
        self._cells[index] = np.frombuffer(data, dtype=self.kind.dtype)[0]

    def write_element(self, index: int, sink: BinaryIO) -> None:
        """Encode one element at the current position of a binary stream."""
        self.check_index(index)
        sink.write(self._cells[index:index + 1].tobytes())

    def read_all(self, path: Union[str, Path]) -> None:
        """
        Read every element, in index order, from a flat binary file.

        Args:
            path: Binary data file

        Raises:
            RasterFileNotFoundError: If the file does not exist
            DataFileError: If the file size does not match the store
        """
        path = validate_required_file(Path(path), "Raster data")

        expected = self.length * self.kind.width
        actual = path.stat().st_size
        if actual != expected:
            raise DataFileError(
                path,
                f"Expected {expected} bytes for {self.length} {self.kind.label} cells, found {actual}"
            )

        with open(path, 'rb') as source:
            for index in range(self.length):
                self.read_element(index, source)

        logger.debug("Read %d %s cells from %s", self.length, self.kind.label, path)

    def write_all(self, path: Union[str, Path]) -> None:
        """Write every element, in index order, to a flat binary file."""
        path = Path(path)
        with open(path, 'wb') as sink:
            for index in range(self.length):
                self.write_element(index, sink)

        logger.debug("Wrote %d %s cells to %s", self.length, self.kind.label, path)
