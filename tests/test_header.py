import pytest

from rasterkit.core.config import FLOAT_UNSPECIFIED, INT_UNSPECIFIED, STR_UNSPECIFIED
from rasterkit.core.exceptions import HeaderParseError, RasterFileNotFoundError
from rasterkit.io.header_file import copy_header, read_header, write_header
from rasterkit.raster.header import RasterHeader


def test_init_derives_extent():
    header = RasterHeader()
    header.init("dem", 3, 4, "real", 10.0, 100.0, 50.0)
    assert header.data_kind == "float"
    assert (header.num_rows, header.num_cols) == (3, 4)
    assert header.max_x == 140.0
    assert header.min_y == 20.0
    assert header.cell_resolution == 10.0


def test_read_header_fields(tmp_path, header_text):
    path = tmp_path / "dem.rdc"
    path.write_text(header_text)

    header = read_header(path)
    assert header.file_title == "elevation"
    assert header.data_kind == "float"
    assert (header.num_rows, header.num_cols) == (2, 4)
    assert (header.min_x, header.max_x, header.min_y, header.max_y) == (100.0, 140.0, 0.0, 20.0)
    assert header.cell_resolution == 10.0
    assert header.position_error == STR_UNSPECIFIED
    assert header.flag_definition == "missing"
    assert header.legend == {1: "low", 2: "high"}
    assert header.lineage == ["surveyed 1998", "resampled 2004"]
    assert header.comments == ["test file"]
    assert header.legend_cats == 2


def test_read_appends_extension(tmp_path, header_text):
    (tmp_path / "dem.rdc").write_text(header_text)
    assert read_header(tmp_path / "dem").file_title == "elevation"


def test_write_layout(tmp_path):
    header = RasterHeader()
    header.init("dem", 2, 3, "float", 1.0, 0.0, 2.0)
    header.legend = {12: "water", 3: "forest"}
    header.lineage = ["digitized"]

    path = write_header(tmp_path / "dem.rdc", header)
    lines = path.read_text().splitlines()

    assert lines[0] == "file format : IDRISI Raster A.1"
    assert lines[1] == "file title  : dem"
    assert lines[2] == "data type   : real"
    assert lines[4] == "columns     : 3"
    assert lines[5] == "rows        : 2"
    assert "code      3 : forest" in lines
    assert lines.index("code      3 : forest") < lines.index("code     12 : water")
    assert lines[-1] == "lineage     : digitized"


def test_wide_legend_codes_round_trip(tmp_path):
    header = RasterHeader()
    header.init("classes", 1, 1, "integer", 1.0, 0.0, 1.0)
    header.legend = {12345678: "big", -1000000: "negative", 7: "small"}

    path = write_header(tmp_path / "classes.rdc", header)
    lines = path.read_text().splitlines()
    assert "code 12345678: big" in lines
    assert "code -1000000: negative" in lines
    assert "code      7 : small" in lines

    assert read_header(path).legend == header.legend


def test_write_does_not_mutate_header(tmp_path):
    header = RasterHeader()
    header.init("dem", 1, 1, "float", 1.0, 0.0, 1.0)
    write_header(tmp_path / "dem", header)
    assert header.data_kind == "float"


def test_write_read_round_trip(tmp_path):
    header = RasterHeader()
    header.init("land cover", 5, 6, "byte", 30.0, 500000.0, 4000000.0)
    header.legend = {1: "urban", 2: "forest"}
    header.lineage = ["a", "b"]
    header.completeness = ["complete"]
    header.consistency = ["checked"]
    header.comments = ["one", "two"]
    header.value_units = "class"

    write_header(tmp_path / "lc.rdc", header)
    restored = read_header(tmp_path / "lc.rdc")
    assert restored == header


def test_unspecified_numeric_fields(tmp_path):
    path = tmp_path / "blank.rdc"
    path.write_text("columns     : Unspecified\nmin. value  :\n")
    header = read_header(path)
    assert header.num_cols == INT_UNSPECIFIED
    assert header.min_value == FLOAT_UNSPECIFIED
    assert header.cell_resolution == FLOAT_UNSPECIFIED


def test_unknown_keys_are_ignored(tmp_path):
    path = tmp_path / "extra.rdc"
    path.write_text("file title  : x\nsome key    : whatever\n")
    assert read_header(path).file_title == "x"


@pytest.mark.parametrize("text", [
    "no delimiter here\n",
    "code abc    : label\n",
    "columns     : many\n",
    "columns     : 4\ncolumns     : 5\n",
    "   : orphan value\n",
])
def test_malformed_headers(tmp_path, text):
    path = tmp_path / "bad.rdc"
    path.write_text(text)
    with pytest.raises(HeaderParseError):
        read_header(path)


def test_read_reblanks_existing_header(tmp_path):
    path = tmp_path / "small.rdc"
    path.write_text("file title  : small\n")
    header = RasterHeader()
    header.lineage = ["stale"]
    header.legend = {9: "stale"}
    read_header(path, header)
    assert header.lineage == []
    assert header.legend == {}


def test_missing_header(tmp_path):
    with pytest.raises(RasterFileNotFoundError):
        read_header(tmp_path / "absent.rdc")


def test_clone_from_copies_lists_deeply():
    source = RasterHeader()
    source.lineage = ["origin"]
    source.legend = {1: "one"}
    copy = RasterHeader()
    copy.clone_from(source)
    copy.lineage.append("edit")
    copy.legend[2] = "two"
    assert source.lineage == ["origin"]
    assert source.legend == {1: "one"}


def test_header_methods_delegate_to_files(tmp_path, header_text):
    (tmp_path / "dem.rdc").write_text(header_text)
    header = RasterHeader()
    header.read(tmp_path / "dem.rdc")
    header.write(tmp_path / "copy.rdc")
    assert read_header(tmp_path / "copy.rdc") == header


def test_copy_header(tmp_path, header_text):
    (tmp_path / "dem.rdc").write_text(header_text)
    target = copy_header(tmp_path / "dem", tmp_path / "dem2")
    assert target.name == "dem2.rdc"
    assert read_header(target).legend == {1: "low", 2: "high"}
