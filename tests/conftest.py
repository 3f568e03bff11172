import numpy as np
import pytest

from rasterkit.raster.image import RasterImage


@pytest.fixture
def make_image():
    """Factory for small rasters: make_image(values, kind, resolution, origin_x, origin_y)."""

    def _make(values, kind="float", resolution=10.0, origin_x=0.0, origin_y=20.0, title="test"):
        data = np.atleast_2d(np.asarray(values, dtype=np.float64))
        rows, cols = data.shape
        image = RasterImage()
        image.init(title, rows, cols, kind, resolution, origin_x, origin_y)
        image.grid.assign(data.ravel())
        return image

    return _make


@pytest.fixture
def square_image(make_image):
    """2 x 2 float raster, resolution 10, origin (0, 20)."""
    return make_image([[1.0, 2.0], [3.0, 4.0]])


@pytest.fixture
def header_text():
    return "\n".join([
        "file format : IDRISI Raster A.1",
        "file title  : elevation",
        "data type   : real",
        "file type   : binary",
        "columns     : 4",
        "rows        : 2",
        "ref. system : plane",
        "ref. units  : m",
        "unit dist.  : 1.0",
        "min. X      : 100.0",
        "max. X      : 140.0",
        "min. Y      : 0.0",
        "max. Y      : 20.0",
        "pos'n error : ",
        "resolution  : 10.0",
        "min. value  : 1.5",
        "max. value  : 9.0",
        "display min : 1.5",
        "display max : 9.0",
        "value units : m",
        "value error : Unspecified",
        "flag value  : -9999",
        "flag def'n  : missing",
        "legend cats : 2",
        "code      1 : low",
        "code      2 : high",
        "lineage     : surveyed 1998",
        "lineage     : resampled 2004",
        "comment     : test file",
    ]) + "\n"
