"""
Example: Raster Algebra with rasterkit

This example demonstrates how to create, persist and process single-band
rasters with the rasterkit package.
"""

import tempfile
from pathlib import Path

import rasterkit as rk

workdir = Path(tempfile.mkdtemp())

# ============================================================================
# Example 1: Create and Save a Raster
# ============================================================================

print("="*70)
print("Example 1: Create and Save a Raster")
print("="*70)

kelvin = rk.create_raster("surface temperature", 3, 4, "float", 30.0, 500000.0, 4000000.0)
kelvin.grid.assign([
    290.0, 291.5, 293.0, -9999.0,
    288.0, 289.0, 295.5, 296.0,
    285.0, -9999.0, 292.0, 294.0,
])
kelvin.header.value_units = "K"
kelvin.header.lineage.append("synthetic example grid")

base = rk.save_raster(workdir / "kelvin", kelvin)
print(f"\nSaved {base}.rst and {base}.rdc")
print(f"Header summary: {rk.get_raster_info(base)}")

# ============================================================================
# Example 2: Coordinates and Cells
# ============================================================================

print("\n" + "="*70)
print("Example 2: Coordinates and Cells")
print("="*70)

grid = kelvin.grid
row, col = grid.coord_to_row_col(500045.0, 3999985.0)
print(f"\nPoint (500045, 3999985) lies in cell ({row}, {col})")
print(f"Upper-left corner of that cell: {grid.row_col_to_coord(row, col)}")
print(f"Value there: {grid.get_at(500045.0, 3999985.0)}")

# ============================================================================
# Example 3: Pointwise Formulas
# ============================================================================

print("\n" + "="*70)
print("Example 3: Pointwise Formulas")
print("="*70)

print(f"\nRegistered unary formulas: {rk.list_formulas(1)}")
print(f"Registered binary formulas: {rk.list_formulas(2)}")

celsius = rk.open_raster(base)
rk.apply_unary(celsius, "kelvin_to_celsius", no_data=-9999.0, fill=-9999.0)
celsius.header.value_units = "degC"
print(f"\nCelsius values:\n{celsius.grid.as_array()}")


@rk.register_formula("anomaly", arity=2, description="Departure from a reference value")
def anomaly(value, reference):
    return value - reference


rk.apply_binary(celsius, "anomaly", 18.0, no_data=-9999.0, fill=-9999.0)
print(f"\nAnomaly from 18 degC:\n{celsius.grid.as_array()}")

# ============================================================================
# Example 4: Statistics
# ============================================================================

print("\n" + "="*70)
print("Example 4: Statistics")
print("="*70)

stats = rk.describe(kelvin, -9999.0)
print(f"\nValid cells: {stats.count}, mean {stats.mean:.2f} K, range [{stats.minimum}, {stats.maximum}]")

window = rk.rect_mean(kelvin, 500000.0, 4000000.0, 500059.0, 3999941.0, -9999.0)
print(f"Mean of the upper-left 2 x 2 block: {window:.2f} K")

fit = rk.regress(kelvin, -9999.0, celsius, -9999.0)
print(f"Regression of anomaly on kelvin: slope {fit.slope:.3f}, r2 {fit.r_squared:.3f}")

# ============================================================================
# Example 5: Resampling and xarray
# ============================================================================

print("\n" + "="*70)
print("Example 5: Resampling and xarray")
print("="*70)

fine = rk.create_raster("fine", 6, 8, "float", 15.0, 500000.0, 4000000.0)
rk.resample(kelvin, fine, missing_value=-9999.0)
print(f"\nResampled to 15 m cells:\n{fine.grid.as_array()}")

da = rk.to_dataarray(kelvin)
print(f"\n{da}")
