from __future__ import annotations
import pytest
from pathlib import Path
from tabconsolidate.engine.errors import IrregularShapeError
from tabconsolidate.engine.sheet import Sheet
from tabconsolidate.tabular.reader import (
    InputReadError,
    parse_delimiter,
    read_delimited,
    write_delimited,
)


def test_read_keeps_cells_as_text(temp_workdir: Path, write_tsv):
    p = write_tsv(temp_workdir / "data" / "a.tsv", [
        ["007", "NA", "null"],
        ["1.50", "", "TRUE"],
    ])
    rows = read_delimited(p, "\t")
    # 数値化・NA 変換はしない
    assert rows == [["007", "NA", "null"], ["1.50", "", "TRUE"]]


def test_read_first_line_is_data(temp_workdir: Path, write_tsv):
    p = write_tsv(temp_workdir / "data" / "a.csv", [["id", "name"], ["1", "Alice"]], ",")
    assert read_delimited(p, ",") == [["id", "name"], ["1", "Alice"]]


def test_read_quoted_fields(temp_workdir: Path):
    p = temp_workdir / "data" / "q.csv"
    p.write_text('1,"Smith, John"\n2,"say ""hi"""\n', encoding="utf-8")
    assert read_delimited(p, ",") == [["1", "Smith, John"], ["2", 'say "hi"']]


def test_read_skips_blank_lines(temp_workdir: Path):
    p = temp_workdir / "data" / "blank.tsv"
    p.write_text("a\tb\n\nc\td\n", encoding="utf-8")
    assert read_delimited(p, "\t") == [["a", "b"], ["c", "d"]]


def test_read_empty_file(temp_workdir: Path):
    p = temp_workdir / "data" / "empty.tsv"
    p.write_text("", encoding="utf-8")
    assert read_delimited(p, "\t") == []


def test_read_longer_row_is_irregular(temp_workdir: Path):
    p = temp_workdir / "data" / "ragged.tsv"
    p.write_text("a\tb\nc\td\ne\tf\tg\n", encoding="utf-8")
    with pytest.raises(IrregularShapeError) as e:
        read_delimited(p, "\t")
    assert e.value.row_number == 3
    assert e.value.expected == 2
    assert e.value.actual == 3


def test_read_missing_file(temp_workdir: Path):
    with pytest.raises(InputReadError):
        read_delimited(temp_workdir / "data" / "nope.tsv", "\t")


def test_write_then_read_back(temp_workdir: Path):
    out = temp_workdir / "out" / "merged.tsv"
    rows = [["x", "1", "a\tb"], ["y", "", "-"]]
    write_delimited(out, rows, "\t")
    assert read_delimited(out, "\t") == rows


def test_write_empty_result(temp_workdir: Path):
    out = temp_workdir / "out" / "empty.tsv"
    write_delimited(out, [], "\t")
    assert out.read_text(encoding="utf-8") == ""


@pytest.mark.parametrize(
    "text, expected",
    [("\t", "\t"), (",", ","), ("\\t", "\t"), ("tab", "\t"), ("comma", ","), ("|", "|")],
)
def test_parse_delimiter(text, expected):
    assert parse_delimiter(text) == expected


@pytest.mark.parametrize("text", ["", ";;", "é", '"'])
def test_parse_delimiter_rejects(text):
    with pytest.raises(ValueError):
        parse_delimiter(text)


def test_read_shorter_row_keeps_its_width(temp_workdir: Path):
    p = temp_workdir / "data" / "short.tsv"
    p.write_text("a\tb\tc\nd\te\n", encoding="utf-8")
    # パディングされた NaN は落とす (行の長さは書かれたまま)
    assert read_delimited(p, "\t") == [["a", "b", "c"], ["d", "e"]]


def test_read_trailing_empty_cell_is_kept(temp_workdir: Path):
    p = temp_workdir / "data" / "trailing.tsv"
    p.write_text("a\tb\tc\nd\te\t\n", encoding="utf-8")
    assert read_delimited(p, "\t") == [["a", "b", "c"], ["d", "e", ""]]


def test_read_shorter_row_fails_sheet_shape_check(temp_workdir: Path):
    p = temp_workdir / "data" / "short.tsv"
    p.write_text("a\tb\tc\nd\te\n", encoding="utf-8")
    with pytest.raises(IrregularShapeError) as e:
        Sheet(read_delimited(p, "\t"), [1], 0)
    assert (e.value.row_number, e.value.expected, e.value.actual) == (2, 3, 2)
