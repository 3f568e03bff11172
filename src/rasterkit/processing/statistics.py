"""
Raster Statistics

This module provides the statistical half of the raster algebra: valid-cell
counting and extraction, means, least-squares regression, correlation,
rectangle means and the value-range refresh used before persistence.

Cells equal to the caller's ignore value are excluded. The comparison is
exact, except that a NaN ignore value matches NaN cells.
"""

import logging
import math
from typing import Tuple
import numpy as np

from ..core.core_types import Descriptives, RegressionResult
from ..core.exceptions import DataProcessingError, check_same_length
from ..raster.image import RasterImage

logger = logging.getLogger(__name__)

# ============================================================================
# Valid-Cell Masks
# ============================================================================

def ignore_mask(values: np.ndarray, ignore: float) -> np.ndarray:
    """Boolean mask of cells equal to the ignore value."""
    values = np.asarray(values, dtype=np.float64)
    if math.isnan(ignore):
        return np.isnan(values)
    return values == ignore


def count_valid(image: RasterImage, ignore: float) -> int:
    """Count the cells not equal to the ignore value."""
    return int(np.count_nonzero(~ignore_mask(image.grid.values(), ignore)))


def extract_valid(image: RasterImage, ignore: float) -> np.ndarray:
    """Return the values of every valid cell in row-major order."""
    values = image.grid.values()
    return values[~ignore_mask(values, ignore)]


def _paired_mask(
    first: RasterImage, first_ignore: float,
    second: RasterImage, second_ignore: float,
    operation: str
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    check_same_length(first.grid, second.grid, operation)
    first_values = first.grid.values()
    second_values = second.grid.values()
    valid = ~ignore_mask(first_values, first_ignore) & ~ignore_mask(second_values, second_ignore)
    return first_values, second_values, valid


def count_valid_paired(
    first: RasterImage, first_ignore: float,
    second: RasterImage, second_ignore: float
) -> int:
    """
    Count the cell indices valid in both rasters.

    Raises:
        ShapeMismatchError: If the rasters hold different numbers of cells
    """
    _, _, valid = _paired_mask(first, first_ignore, second, second_ignore, "paired count")
    return int(np.count_nonzero(valid))


def extract_valid_paired(
    first: RasterImage, first_ignore: float,
    second: RasterImage, second_ignore: float
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Return aligned value arrays over the cell indices valid in both rasters.

    Element i of each array comes from the same cell index.

    Raises:
        ShapeMismatchError: If the rasters hold different numbers of cells
    """
    first_values, second_values, valid = _paired_mask(
        first, first_ignore, second, second_ignore, "paired extraction"
    )
    return first_values[valid], second_values[valid]

# ============================================================================
# Summary Statistics
# ============================================================================

def mean(image: RasterImage, ignore: float) -> float:
    """Mean of the valid cells; NaN when there are none."""
    valid = extract_valid(image, ignore)
    if valid.size == 0:
        logger.warning("Mean requested over a raster with no valid cells")
        return math.nan
    return float(valid.sum() / valid.size)


def describe(image: RasterImage, ignore: float) -> Descriptives:
    """Count, extremes, mean, population standard deviation and sum of the valid cells."""
    valid = extract_valid(image, ignore)
    if valid.size == 0:
        logger.warning("Statistics requested over a raster with no valid cells")
        return Descriptives(0, math.nan, math.nan, math.nan, math.nan, 0.0)
    return Descriptives(
        count=int(valid.size),
        minimum=float(valid.min()),
        maximum=float(valid.max()),
        mean=float(valid.mean()),
        std=float(valid.std()),
        total=float(valid.sum()),
    )


def regress(
    x_image: RasterImage, x_ignore: float,
    y_image: RasterImage, y_ignore: float
) -> RegressionResult:
    """
    Ordinary least-squares fit of Y on X over the cells valid in both rasters.

    Args:
        x_image: Predictor raster
        x_ignore: No-data value of the predictor
        y_image: Response raster
        y_ignore: No-data value of the response

    Returns:
        RegressionResult: slope, intercept and coefficient of determination.
        r_squared is 0.0 when Y has no variance.

    Raises:
        ShapeMismatchError: If the rasters hold different numbers of cells
        DataProcessingError: If fewer than two pairs remain or X has no variance
    """
    xs, ys = extract_valid_paired(x_image, x_ignore, y_image, y_ignore)
    n = xs.size
    if n < 2:
        raise DataProcessingError("regression", f"Need at least 2 paired cells, found {n}")

    x_mean = xs.mean()
    y_mean = ys.mean()
    dx = xs - x_mean
    dy = ys - y_mean
    sxx = float(dx @ dx)
    syy = float(dy @ dy)
    sxy = float(dx @ dy)

    if sxx == 0.0:
        raise DataProcessingError("regression", "X values have zero variance")

    slope = sxy / sxx
    intercept = float(y_mean - slope * x_mean)
    r_squared = (sxy * sxy) / (sxx * syy) if syy > 0.0 else 0.0

    logger.debug("Regression over %d pairs: slope=%g intercept=%g r2=%g", n, slope, intercept, r_squared)
    return RegressionResult(slope, intercept, r_squared)


def pearson(
    x_image: RasterImage, x_ignore: float,
    y_image: RasterImage, y_ignore: float,
    signed: bool = False
) -> float:
    """
    Correlation coefficient of the paired valid cells.

    By default this is sqrt(r_squared) and therefore never negative; with
    signed=True it carries the sign of the regression slope.
    """
    result = regress(x_image, x_ignore, y_image, y_ignore)
    r = math.sqrt(result.r_squared)
    if signed and result.slope < 0:
        return -r
    return r


def rect_mean(
    image: RasterImage,
    ul_x: float, ul_y: float,
    lr_x: float, lr_y: float,
    ignore: float
) -> float:
    """
    Mean of the valid cells inside an axis-aligned rectangle.

    Both corners are mapped to the cells containing them and every cell of the
    inclusive row/column block between them is considered.

    Args:
        image: Source raster
        ul_x, ul_y: Upper-left corner coordinates
        lr_x, lr_y: Lower-right corner coordinates
        ignore: No-data value

    Returns:
        float: Mean of the valid cells, or ignore when the block has none

    Raises:
        ValueRangeError: If either corner lies outside the grid
    """
    grid = image.grid
    ul_row, ul_col = grid.coord_to_row_col(ul_x, ul_y)
    lr_row, lr_col = grid.coord_to_row_col(lr_x, lr_y)
    grid.check_row_col(ul_row, ul_col)
    grid.check_row_col(lr_row, lr_col)

    block = grid.as_array()[ul_row:lr_row + 1, ul_col:lr_col + 1]
    valid = block[~ignore_mask(block, ignore)]
    if valid.size == 0:
        return float(ignore)
    return float(valid.sum() / valid.size)


def update_min_max(image: RasterImage) -> None:
    """
    Refresh the header's value and display ranges from the grid.

    NaN cells are skipped. A grid with no finite cells leaves the header
    unchanged.
    """
    valid = extract_valid(image, math.nan)
    if valid.size == 0:
        logger.warning("No valid cells, value range left unchanged")
        return

    low = float(valid.min())
    high = float(valid.max())
    header = image.header
    header.min_value = low
    header.max_value = high
    header.display_min = low
    header.display_max = high
