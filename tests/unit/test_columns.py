from __future__ import annotations

import pytest

from tabconsolidate.engine.columns import normalize_column, resolve_columns
from tabconsolidate.engine.errors import ColumnOrderingError, ColumnOutOfBoundsError


@pytest.mark.parametrize(
    "column, expected",
    [(1, 0), (5, 4), (-1, 4), (-5, 0), (0, None)],
)
def test_normalize_column_count_five(column, expected):
    assert normalize_column(column, 5) == expected


@pytest.mark.parametrize("column", [6, -6, 100])
def test_normalize_column_out_of_bounds(column):
    with pytest.raises(ColumnOutOfBoundsError) as e:
        normalize_column(column, 5)
    assert e.value.column == column
    assert e.value.count == 5
    assert f"Column {column} is out of bounds (total columns: 5)" in str(e.value)


def test_normalize_column_zero_width_sheet():
    # 空の入力 (0 列) では 0 以外の指定はすべて範囲外
    assert normalize_column(0, 0) is None
    with pytest.raises(ColumnOutOfBoundsError):
        normalize_column(1, 0)


def test_resolve_columns_keeps_user_order():
    assert resolve_columns([3, 1, 0, -1], 5) == [2, 0, None, 4]


def test_resolve_columns_positive_before_negative_ok():
    # 4 -> offset 3, -1 -> offset 4: adjacent but not overlapping
    assert resolve_columns([4, -1], 5) == [3, 4]


def test_resolve_columns_overlap_rejected():
    # 5 -> offset 4 and -1 -> offset 4 would be the same column
    with pytest.raises(ColumnOrderingError) as e:
        resolve_columns([5, -1], 5)
    assert e.value.largest_positive == 5
    assert e.value.smallest_negative == -1
    assert "must precede" in str(e.value)


def test_resolve_columns_crossing_rejected():
    with pytest.raises(ColumnOrderingError):
        resolve_columns([1, 4, -3], 5)


def test_resolve_columns_same_specs_differ_per_width():
    assert resolve_columns([1, -1], 3) == [0, 2]
    assert resolve_columns([1, -1], 6) == [0, 5]


def test_resolve_columns_out_of_bounds_reported_before_ordering():
    with pytest.raises(ColumnOutOfBoundsError):
        resolve_columns([9, -1], 5)
