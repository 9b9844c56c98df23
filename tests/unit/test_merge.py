from __future__ import annotations

from tabconsolidate.engine.grouping import group_rows
from tabconsolidate.engine.merge import merge_group, merge_row
from tabconsolidate.engine.sheet import Sheet


def _merge_all(sheets, filler="-"):
    rows = []
    for group in group_rows(sheets).values():
        rows.extend(merge_group(group, sheets, filler))
    return rows


def test_key_written_once_and_non_keys_concatenated():
    a = Sheet([["x", "1"]], [1], 0)
    b = Sheet([["x", "2"]], [1], 1)
    assert _merge_all([a, b]) == [["x", "1", "2"]]


def test_missing_source_filled():
    a = Sheet([["x", "1"]], [1], 0)
    b = Sheet([["y", "2"]], [1], 1)
    assert _merge_all([a, b]) == [["x", "1", "-"], ["y", "-", "2"]]


def test_key_taken_from_first_real_source():
    a = Sheet([["k", "a"]], [1], 0)
    b = Sheet([["j", "b"]], [1], 1)
    c = Sheet([["j", "c"]], [1], 2)
    assert _merge_all([a, b, c]) == [["k", "a", "-", "-"], ["j", "-", "b", "c"]]


def test_key_in_middle_and_right_anchored():
    # key: 2nd column of A (3 wide) and last column of B (2 wide)
    a = Sheet([["a1", "K", "a3"]], [2], 0)
    b = Sheet([["b1", "K"]], [-1], 1)
    assert _merge_all([a, b]) == [["a1", "b1", "K", "a3"]]


def test_sources_of_different_widths_line_up():
    a = Sheet([["K", "a"]], [1], 0)
    b = Sheet([["K", "b", "c", "d"]], [1], 1)
    assert _merge_all([a, b]) == [["K", "a", "b", "c", "d"]]


def test_positional_pairing_by_index():
    a = Sheet([["x", "1"], ["x", "2"]], [1], 0)
    b = Sheet([["x", "3"], ["x", "4"]], [1], 1)
    assert _merge_all([a, b]) == [["x", "1", "3"], ["x", "2", "4"]]


def test_uneven_multiples_padded_with_filler():
    a = Sheet([["x", "1"], ["x", "2"], ["x", "3"]], [1], 0)
    b = Sheet([["x", "4"]], [1], 1)
    assert _merge_all([a, b]) == [["x", "1", "4"], ["x", "2", "-"], ["x", "3", "-"]]


def test_synthetic_key_rows_never_merge():
    a = Sheet([["x", "1"]], [0], 0)
    b = Sheet([["x", "1"]], [0], 1)
    assert _merge_all([a, b], filler="") == [["x", "1", "", ""], ["", "", "x", "1"]]


def test_merge_row_without_sources():
    assert merge_row([], "-") == []
