import math

import numpy as np
import pytest

from rasterkit.core.exceptions import (
    DataProcessingError, TypeMismatchError, ValueRangeError,
)
from rasterkit.processing.algebra import (
    apply_binary, apply_unary, random_valid_cells, resample, set_constant,
)


def test_apply_unary_with_no_data(make_image):
    image = make_image([-9999.0, 300.0, 280.0])
    apply_unary(image, lambda x: x - 273.0, no_data=-9999.0, fill=0.0)
    assert image.grid.values().tolist() == [0.0, 27.0, 7.0]


def test_apply_unary_by_registered_name(make_image):
    image = make_image([-9999.0, 300.0, 280.0])
    apply_unary(image, "kelvin_to_celsius", no_data=-9999.0, fill=-9999.0)
    assert image.grid.values().tolist() == [-9999.0, 27.0, 7.0]


def test_apply_unary_failure_leaves_raster_unchanged(make_image):
    image = make_image([10, 200], kind="byte")
    with pytest.raises(ValueRangeError):
        apply_unary(image, lambda x: x * 2, no_data=0, fill=0)
    assert image.grid.values().tolist() == [10.0, 200.0]


def test_apply_unary_truncates_integer_results(make_image):
    image = make_image([3, 4], kind="integer")
    apply_unary(image, lambda x: x / 2, no_data=-1, fill=-1)
    assert image.grid.values().tolist() == [1.0, 2.0]


def test_apply_unary_nan_no_data_matches_nan_cells(make_image):
    image = make_image([math.nan, 2.0])
    apply_unary(image, lambda x: x + 1, no_data=math.nan, fill=-1.0)
    assert image.grid.values().tolist() == [-1.0, 3.0]


def test_apply_binary(make_image):
    image = make_image([8.0, -9999.0, 3.0])
    apply_binary(image, "divide_by", 2.0, no_data=-9999.0, fill=-9999.0)
    assert image.grid.values().tolist() == [4.0, -9999.0, 1.5]

    apply_binary(image, lambda x, k: x * k, 10.0, no_data=-9999.0, fill=0.0)
    assert image.grid.values().tolist() == [40.0, 0.0, 15.0]


def test_apply_binary_set_constant_skips_no_data(make_image):
    image = make_image([1.0, 0.0, 2.0])
    apply_binary(image, "set_constant", 7.0, no_data=0.0, fill=0.0)
    assert image.grid.values().tolist() == [7.0, 0.0, 7.0]


def test_formula_arity_checked(make_image):
    image = make_image([1.0])
    with pytest.raises(DataProcessingError):
        apply_unary(image, "divide_by", no_data=0.0, fill=0.0)
    with pytest.raises(KeyError):
        apply_unary(image, "no_such_formula", no_data=0.0, fill=0.0)


def test_set_constant(make_image):
    image = make_image([[1, 2], [3, 4]], kind="byte")
    set_constant(image, 9)
    assert image.grid.values().tolist() == [9.0] * 4


def test_resample_to_finer_grid(make_image):
    source = make_image([[1.0, 2.0], [3.0, 4.0]], resolution=10.0)
    target = make_image(np.zeros((4, 4)), resolution=5.0)
    resample(source, target, missing_value=-1.0)
    expected = np.kron([[1.0, 2.0], [3.0, 4.0]], np.ones((2, 2)))
    np.testing.assert_array_equal(target.grid.as_array(), expected)
    assert target.grid.cell_resolution == 5.0


def test_resample_outside_source_gets_missing(make_image):
    source = make_image([[1.0, 2.0], [3.0, 4.0]], resolution=10.0)
    target = make_image(np.zeros((3, 3)), resolution=10.0)
    resample(source, target, missing_value=-9999.0)
    np.testing.assert_array_equal(
        target.grid.as_array(),
        [[1.0, 2.0, -9999.0], [3.0, 4.0, -9999.0], [-9999.0, -9999.0, -9999.0]],
    )


def test_resample_shifted_target(make_image):
    source = make_image([[1.0, 2.0], [3.0, 4.0]], resolution=10.0)
    target = make_image(np.zeros((1, 2)), resolution=10.0, origin_x=-10.0, origin_y=10.0)
    resample(source, target, missing_value=0.0)
    assert target.grid.values().tolist() == [0.0, 3.0]


def test_resample_requires_same_kind(make_image):
    source = make_image([[1, 2]], kind="byte")
    target = make_image([[0.0, 0.0]])
    with pytest.raises(TypeMismatchError):
        resample(source, target, missing_value=0)


def test_random_valid_cells(make_image):
    image = make_image([[-1.0, 5.0, -1.0], [6.0, -1.0, 7.0]])
    rows, cols = random_valid_cells(image, 50, missing_value=-1.0, seed=3)
    assert len(rows) == len(cols) == 50
    for row, col in zip(rows, cols):
        assert image.grid.get(int(row), int(col)) != -1.0

    again = random_valid_cells(image, 50, missing_value=-1.0, seed=3)
    np.testing.assert_array_equal(again[0], rows)
    np.testing.assert_array_equal(again[1], cols)


def test_random_valid_cells_needs_a_valid_cell(make_image):
    image = make_image([[-1.0, -1.0]])
    with pytest.raises(DataProcessingError):
        random_valid_cells(image, 1, missing_value=-1.0)
