"""
Raster Algebra

This module provides the pointwise and resampling operations of the raster
algebra. Every operation builds the full result first and writes it through a
single range-checked bulk assignment, so a failing value leaves the raster
untouched.
"""

import logging
from typing import Optional, Tuple
import numpy as np

from ..core.config import DEFAULT_NODATA
from ..core.core_types import FormulaSpec
from ..core.exceptions import DataProcessingError, ValueRangeError, check_same_kind
from ..raster.image import RasterImage
from .formulas import resolve_formula
from .statistics import ignore_mask

logger = logging.getLogger(__name__)

# ============================================================================
# Pointwise Formulas
# ============================================================================

def _apply(image: RasterImage, func, no_data: float, fill: float) -> None:
    values = image.grid.values()
    skipped = ignore_mask(values, no_data)
    result = np.full(values.shape, float(fill), dtype=np.float64)
    active = values[~skipped]
    result[~skipped] = np.fromiter(
        (func(value) for value in active.tolist()), dtype=np.float64, count=active.size
    )
    image.grid.assign(result)


def apply_unary(
    image: RasterImage,
    formula: FormulaSpec,
    no_data: float = DEFAULT_NODATA,
    fill: float = DEFAULT_NODATA
) -> None:
    """
    Replace every cell by formula(value).

    Cells equal to no_data are set to fill instead.

    Args:
        image: Raster modified in place
        formula: Callable f(value) or the name of a registered unary formula
        no_data: No-data value of the input
        fill: Value written to no-data cells

    Raises:
        KeyError: If formula names an unregistered formula
        ValueRangeError: If any result does not fit the storage kind
    """
    _apply(image, resolve_formula(formula, 1), no_data, fill)


def apply_binary(
    image: RasterImage,
    formula: FormulaSpec,
    operand: float,
    no_data: float = DEFAULT_NODATA,
    fill: float = DEFAULT_NODATA
) -> None:
    """
    Replace every cell by formula(value, operand).

    Cells equal to no_data are set to fill instead.

    Args:
        image: Raster modified in place
        formula: Callable f(value, operand) or the name of a registered binary formula
        operand: Second argument passed to every call
        no_data: No-data value of the input
        fill: Value written to no-data cells
    """
    func = resolve_formula(formula, 2)
    _apply(image, lambda value: func(value, operand), no_data, fill)


def set_constant(image: RasterImage, value: float) -> None:
    """Set every cell of the raster to one value."""
    image.grid.fill(value)

# ============================================================================
# Resampling
# ============================================================================

def resample(source: RasterImage, target: RasterImage, missing_value: float) -> None:
    """
    Fill the target grid by nearest-cell lookup in the source.

    Each target cell takes the value of the source cell containing the target
    cell's upper-left corner; target cells whose corner falls outside the
    source get missing_value. The target's geometry is unchanged.

    Raises:
        TypeMismatchError: If the rasters have different storage kinds
        ValueRangeError: If missing_value does not fit the storage kind
    """
    src = source.grid
    dst = target.grid
    check_same_kind(src, dst, "resample")

    eastings, northings = dst.cell_coordinates()
    rows, cols = src.coords_to_rows_cols(eastings, northings)
    inside = (rows >= 0) & (rows < src.num_rows) & (cols >= 0) & (cols < src.num_cols)

    result = np.full(dst.num_cells, float(missing_value), dtype=np.float64)
    result[inside] = src.values()[rows[inside] * src.num_cols + cols[inside]]
    dst.assign(result)

    logger.debug(
        "Resampled %d of %d target cells from source, %d set to %s",
        int(inside.sum()), dst.num_cells, int((~inside).sum()), missing_value
    )

# ============================================================================
# Sampling
# ============================================================================

def random_valid_cells(
    image: RasterImage,
    count: int,
    missing_value: float,
    seed: Optional[int] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Draw cells uniformly, with replacement, from the cells not equal to missing_value.

    Args:
        image: Raster to sample
        count: Number of cells to draw
        missing_value: No-data value
        seed: Seed for a reproducible draw

    Returns:
        Tuple of row and column index arrays, each of length count

    Raises:
        ValueRangeError: If count is negative
        DataProcessingError: If the raster has no valid cell
    """
    if count < 0:
        raise ValueRangeError("Sample count", count, "[0, inf)")

    grid = image.grid
    valid = np.flatnonzero(~ignore_mask(grid.values(), missing_value))
    if valid.size == 0:
        raise DataProcessingError("random sampling", "Raster has no valid cells")

    rng = np.random.default_rng(seed)
    picks = rng.choice(valid, size=count, replace=True)
    rows, cols = np.divmod(picks, grid.num_cols)
    return rows, cols
