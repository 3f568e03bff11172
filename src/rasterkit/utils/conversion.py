"""
rasterkit Conversion Utilities

This module converts rasters to and from xarray DataArrays labelled with
cell-center coordinates (y: northings, x: eastings).
"""

from typing import Optional, Union
import numpy as np
import xarray as xr

from ..core.config import STR_UNSPECIFIED
from ..core.core_types import CellKind
from ..core.exceptions import ShapeMismatchError
from ..raster.image import RasterImage

# Header fields carried as DataArray attributes
HEADER_ATTRS = (
    "file_title", "ref_system", "ref_units", "unit_distance",
    "value_units", "flag_value", "flag_definition",
)

# ============================================================================
# Raster -> DataArray
# ============================================================================

def to_dataarray(image: RasterImage) -> xr.DataArray:
    """
    Convert a raster to a DataArray of float64 cell values.

    Args:
        image: Raster to convert

    Returns:
        xr.DataArray: dims ("y", "x") with cell-center coordinates; attrs hold
        the storage kind, cell resolution and descriptive header fields

    Examples:
        >>> da = to_dataarray(image)
        >>> da.sel(x=15.0, y=5.0).item()
    """
    grid = image.grid
    res = grid.cell_resolution
    x = grid.origin_x + (np.arange(grid.num_cols) + 0.5) * res
    y = grid.origin_y - (np.arange(grid.num_rows) + 0.5) * res

    attrs = {name: getattr(image.header, name) for name in HEADER_ATTRS}
    attrs["data_kind"] = grid.kind.label
    attrs["cell_resolution"] = res

    return xr.DataArray(
        grid.as_array(),
        dims=("y", "x"),
        coords={"y": y, "x": x},
        name=image.header.file_title,
        attrs=attrs,
    )

# ============================================================================
# DataArray -> Raster
# ============================================================================

def _spacing(coord: np.ndarray, axis: str) -> Optional[float]:
    """Uniform step of a coordinate, or None for a single value."""
    if coord.size < 2:
        return None
    steps = np.diff(coord)
    if not np.allclose(steps, steps[0]) or steps[0] <= 0:
        raise ShapeMismatchError("DataArray conversion", f"{axis} coordinates are not regularly spaced")
    return float(steps[0])


def from_dataarray(
    da: xr.DataArray,
    kind: Union[str, CellKind] = "float",
    title: Optional[str] = None
) -> RasterImage:
    """
    Build a raster from a regularly spaced two-dimensional DataArray.

    The first dimension is taken as rows (northings) and the second as
    columns (eastings); coordinates are read as cell centers. Rows ordered
    south to north are flipped so that row 0 is the northernmost.

    Args:
        da: Two-dimensional array with coordinates on both dimensions
        kind: Storage kind of the new raster
        title: Raster title; defaults to the DataArray's name

    Returns:
        RasterImage: New raster holding the array's values

    Raises:
        ShapeMismatchError: If the array is not 2-D, lacks coordinates, is
            irregularly spaced or has non-square cells
        ValueRangeError: If a value does not fit the storage kind
    """
    if da.ndim != 2:
        raise ShapeMismatchError("DataArray conversion", f"Expected 2 dimensions, got {da.ndim}")

    y_dim, x_dim = da.dims
    for dim in (y_dim, x_dim):
        if dim not in da.coords:
            raise ShapeMismatchError("DataArray conversion", f"Dimension '{dim}' has no coordinate")

    y = np.asarray(da[y_dim].values, dtype=np.float64)
    if y.size > 1 and y[1] > y[0]:
        da = da.isel({y_dim: slice(None, None, -1)})
        y = y[::-1]
    x = np.asarray(da[x_dim].values, dtype=np.float64)

    res_x = _spacing(x, "x")
    res_y = _spacing(-y, "y")
    if res_x is not None and res_y is not None and not np.isclose(res_x, res_y):
        raise ShapeMismatchError(
            "DataArray conversion", f"Cells are not square ({res_x} x {res_y})"
        )
    resolution = res_x if res_x is not None else res_y
    if resolution is None:
        resolution = da.attrs.get("cell_resolution")
        if resolution is None:
            raise ShapeMismatchError(
                "DataArray conversion", "Cannot infer cell resolution from a single cell"
            )

    rows, cols = da.shape
    origin_x = float(x[0]) - resolution / 2
    origin_y = float(y[0]) + resolution / 2

    if title is None:
        title = str(da.name) if da.name is not None else STR_UNSPECIFIED

    image = RasterImage()
    image.init(title, rows, cols, kind, resolution, origin_x, origin_y)
    image.grid.assign(np.asarray(da.values, dtype=np.float64).ravel())

    for name in HEADER_ATTRS:
        if name != "file_title" and name in da.attrs:
            setattr(image.header, name, da.attrs[name])

    return image
