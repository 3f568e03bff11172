"""
rasterkit Data Processing

This package provides the raster algebra: pointwise formulas, nearest-cell
resampling, valid-cell statistics, regression and the named formula registry.
"""

# Pointwise and resampling operations
from .algebra import (
    apply_unary,
    apply_binary,
    set_constant,
    resample,
    random_valid_cells,
)

# Statistics
from .statistics import (
    ignore_mask,
    count_valid,
    count_valid_paired,
    extract_valid,
    extract_valid_paired,
    mean,
    describe,
    regress,
    pearson,
    rect_mean,
    update_min_max,
)

# Formula registry
from .formulas import (
    CellFormula,
    FormulaRegistry,
    get_registry,
    register_formula,
    get_formula,
    list_formulas,
)

__all__ = [
    # Pointwise and resampling
    "apply_unary",
    "apply_binary",
    "set_constant",
    "resample",
    "random_valid_cells",
    # Statistics
    "ignore_mask",
    "count_valid",
    "count_valid_paired",
    "extract_valid",
    "extract_valid_paired",
    "mean",
    "describe",
    "regress",
    "pearson",
    "rect_mean",
    "update_min_max",
    # Formula registry
    "CellFormula",
    "FormulaRegistry",
    "get_registry",
    "register_formula",
    "get_formula",
    "list_formulas",
]
