from __future__ import annotations

from collections.abc import Sequence

from .errors import ColumnOrderingError, ColumnOutOfBoundsError

"""Key column resolution.

User column specs are 1-based and signed: positive counts from the left,
negative from the right, 0 means "no real column, every row is unique".
Resolution depends on the sheet width, so it runs once per sheet.
"""

__all__ = [
    "normalize_column",
    "resolve_columns",
]


def normalize_column(column: int, count: int) -> int | None:
    """Resolve one signed spec to a 0-based offset (None for spec 0).

    Raises
    ------
    ColumnOutOfBoundsError: resolved offset outside [0, count)
    """
    if column == 0:
        return None
    normalized = column - 1 if column > 0 else count + column
    if not 0 <= normalized < count:
        raise ColumnOutOfBoundsError(column, count)
    return normalized


def resolve_columns(columns: Sequence[int], count: int) -> list[int | None]:
    """Resolve all specs for a sheet with ``count`` columns, keeping user order.

    Every positive-derived offset must lie strictly left of every
    negative-derived one, i.e. ``largest_positive - smallest_negative <= count``.
    """
    result = [normalize_column(column, count) for column in columns]
    positives = [c for c in columns if c > 0]
    negatives = [c for c in columns if c < 0]
    if positives and negatives:
        largest, smallest = max(positives), min(negatives)
        if largest - smallest > count:
            raise ColumnOrderingError(largest, smallest, count)
    return result
