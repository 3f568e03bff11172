import numpy as np
import pytest
import xarray as xr

from rasterkit.core.core_types import CellKind
from rasterkit.core.exceptions import ShapeMismatchError, ValueRangeError
from rasterkit.utils.conversion import from_dataarray, to_dataarray


def test_to_dataarray_uses_cell_centers(square_image):
    square_image.header.value_units = "K"
    da = to_dataarray(square_image)

    assert da.dims == ("y", "x")
    assert da["x"].values.tolist() == [5.0, 15.0]
    assert da["y"].values.tolist() == [15.0, 5.0]
    assert da.sel(x=15.0, y=5.0).item() == 4.0
    assert da.attrs["data_kind"] == "float"
    assert da.attrs["cell_resolution"] == 10.0
    assert da.attrs["value_units"] == "K"
    assert da.name == "test"


def test_dataarray_round_trip(make_image):
    image = make_image([[1, 2, 3], [4, 5, 6]], kind="integer", resolution=30.0,
                       origin_x=500000.0, origin_y=4000000.0)
    restored = from_dataarray(to_dataarray(image), kind="integer")

    assert restored.kind is CellKind.INTEGER
    assert restored.grid.same_geometry(image.grid)
    assert restored.header.file_title == "test"
    np.testing.assert_array_equal(restored.grid.values(), image.grid.values())


def test_from_dataarray_flips_south_up_rows():
    da = xr.DataArray(
        [[1.0, 2.0], [3.0, 4.0]],
        dims=("lat", "lon"),
        coords={"lat": [0.5, 1.5], "lon": [0.5, 1.5]},
        name="flipped",
    )
    image = from_dataarray(da)
    assert image.grid.as_array().tolist() == [[3.0, 4.0], [1.0, 2.0]]
    assert (image.grid.origin_x, image.grid.origin_y) == (0.0, 2.0)
    assert image.grid.cell_resolution == 1.0


def test_from_dataarray_single_row_uses_resolution_attr():
    da = xr.DataArray(
        [[7.0, 8.0]], dims=("y", "x"), coords={"y": [5.0], "x": [5.0, 15.0]}
    )
    assert from_dataarray(da).grid.cell_resolution == 10.0

    single = xr.DataArray(
        [[7.0]], dims=("y", "x"), coords={"y": [5.0], "x": [5.0]},
        attrs={"cell_resolution": 10.0},
    )
    image = from_dataarray(single, title="one")
    assert (image.grid.origin_x, image.grid.origin_y) == (0.0, 10.0)
    assert image.header.file_title == "one"


@pytest.mark.parametrize("da", [
    xr.DataArray(np.zeros((2, 2, 2)), dims=("z", "y", "x")),
    xr.DataArray(np.zeros((2, 2)), dims=("y", "x")),
    xr.DataArray(np.zeros((2, 3)), dims=("y", "x"), coords={"y": [1.5, 0.5], "x": [0.5, 1.5, 4.0]}),
    xr.DataArray(np.zeros((2, 2)), dims=("y", "x"), coords={"y": [3.0, 1.0], "x": [0.5, 1.5]}),
    xr.DataArray(np.zeros((1, 1)), dims=("y", "x"), coords={"y": [0.5], "x": [0.5]}),
])
def test_from_dataarray_rejects_irregular_input(da):
    with pytest.raises(ShapeMismatchError):
        from_dataarray(da)


def test_from_dataarray_checks_value_range():
    da = xr.DataArray(
        [[1.0, 300.0]], dims=("y", "x"), coords={"y": [0.5], "x": [0.5, 1.5]}
    )
    with pytest.raises(ValueRangeError):
        from_dataarray(da, kind="byte")
