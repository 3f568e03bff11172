import math

import pytest

from rasterkit.core.exceptions import (
    DataProcessingError, ShapeMismatchError, ValueRangeError,
)
from rasterkit.processing.statistics import (
    count_valid, count_valid_paired, describe, extract_valid, extract_valid_paired,
    mean, pearson, rect_mean, regress, update_min_max,
)


def test_count_and_extract_valid(make_image):
    image = make_image([[5.0, -9999.0], [2.0, 7.0]])
    assert count_valid(image, -9999.0) == 3
    assert extract_valid(image, -9999.0).tolist() == [5.0, 2.0, 7.0]


def test_ignore_comparison_is_exact(make_image):
    image = make_image([[-9999.0, -9998.5]])
    assert count_valid(image, -9999.0) == 1


def test_nan_ignore_value(make_image):
    image = make_image([[math.nan, 1.0, math.nan]])
    assert count_valid(image, math.nan) == 1


def test_paired_extraction_is_aligned(make_image):
    first = make_image([1.0, -9999.0, 3.0, 4.0])
    second = make_image([10.0, 20.0, -1.0, 40.0])
    assert count_valid_paired(first, -9999.0, second, -1.0) == 2
    xs, ys = extract_valid_paired(first, -9999.0, second, -1.0)
    assert xs.tolist() == [1.0, 4.0]
    assert ys.tolist() == [10.0, 40.0]


def test_paired_size_mismatch(make_image):
    first = make_image([1.0, 2.0])
    second = make_image([1.0, 2.0, 3.0])
    with pytest.raises(ShapeMismatchError):
        count_valid_paired(first, 0.0, second, 0.0)
    with pytest.raises(ShapeMismatchError):
        regress(first, 0.0, second, 0.0)


def test_mean(make_image):
    image = make_image([[2.0, -9999.0], [4.0, 6.0]])
    assert mean(image, -9999.0) == 4.0


def test_mean_without_valid_cells(make_image):
    image = make_image([[-9999.0, -9999.0]])
    assert math.isnan(mean(image, -9999.0))


def test_describe(make_image):
    image = make_image([[1.0, 3.0], [-9999.0, 5.0]])
    stats = describe(image, -9999.0)
    assert stats.count == 3
    assert (stats.minimum, stats.maximum) == (1.0, 5.0)
    assert stats.mean == 3.0
    assert stats.total == 9.0
    assert stats.std == pytest.approx(math.sqrt(8.0 / 3.0))


def test_regress_exact_line(make_image):
    x = make_image([1.0, 2.0, 3.0, -9999.0, 5.0])
    y = make_image([3.0, 5.0, 7.0, 100.0, 11.0])
    result = regress(x, -9999.0, y, -9999.0)
    assert result.slope == pytest.approx(2.0)
    assert result.intercept == pytest.approx(1.0)
    assert result.r_squared == pytest.approx(1.0)


def test_regress_degenerate_inputs(make_image):
    with pytest.raises(DataProcessingError):
        regress(make_image([1.0, 0.0]), 0.0, make_image([2.0, 3.0]), 0.0)
    with pytest.raises(DataProcessingError):
        regress(make_image([2.0, 2.0, 2.0]), 0.0, make_image([1.0, 2.0, 3.0]), 0.0)


def test_regress_flat_response(make_image):
    result = regress(make_image([1.0, 2.0, 3.0]), 0.0, make_image([4.0, 4.0, 4.0]), 0.0)
    assert result.slope == 0.0
    assert result.intercept == 4.0
    assert result.r_squared == 0.0


def test_pearson_sign(make_image):
    x = make_image([1.0, 2.0, 3.0, 4.0])
    y = make_image([8.0, 6.0, 4.0, 2.0])
    assert pearson(x, -9999.0, y, -9999.0) == pytest.approx(1.0)
    assert pearson(x, -9999.0, y, -9999.0, signed=True) == pytest.approx(-1.0)


def test_pearson_partial_correlation(make_image):
    x = make_image([1.0, 2.0, 3.0, 4.0])
    y = make_image([1.0, 3.0, 2.0, 4.0])
    r_squared = regress(x, -9999.0, y, -9999.0).r_squared
    assert 0.0 < r_squared < 1.0
    assert pearson(x, -9999.0, y, -9999.0) == pytest.approx(math.sqrt(r_squared))


def test_rect_mean_over_whole_grid(make_image):
    image = make_image([[1.0] * 3] * 3, resolution=1.0, origin_x=0.0, origin_y=3.0)
    assert rect_mean(image, 0.0, 3.0, 2.5, 0.5, -9999.0) == 1.0


def test_rect_mean_sub_block(make_image):
    image = make_image(
        [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, -9999.0, 9.0]],
        resolution=1.0, origin_x=0.0, origin_y=3.0,
    )
    assert rect_mean(image, 1.5, 1.5, 2.5, 0.5, -9999.0) == pytest.approx(20.0 / 3.0)
    assert rect_mean(image, 1.5, 0.5, 1.5, 0.5, -9999.0) == -9999.0


def test_rect_mean_rejects_outside_corners(make_image):
    image = make_image([[1.0] * 3] * 3, resolution=1.0, origin_x=0.0, origin_y=3.0)
    with pytest.raises(ValueRangeError):
        rect_mean(image, 0.0, 3.0, 3.5, 0.5, -9999.0)
    with pytest.raises(ValueRangeError):
        rect_mean(image, -0.5, 3.0, 2.5, 0.5, -9999.0)


def test_update_min_max(make_image):
    image = make_image([[4.0, math.nan], [-2.0, 9.0]])
    update_min_max(image)
    header = image.header
    assert (header.min_value, header.max_value) == (-2.0, 9.0)
    assert (header.display_min, header.display_max) == (-2.0, 9.0)


def test_update_min_max_all_nan_leaves_header(make_image):
    image = make_image([[math.nan]])
    image.header.min_value = 1.0
    image.header.max_value = 2.0
    update_min_max(image)
    assert (image.header.min_value, image.header.max_value) == (1.0, 2.0)
