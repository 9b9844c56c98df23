from __future__ import annotations

"""Engine error hierarchy.

Every error is terminal for the run: the engine never retries or returns a
partial table. Messages carry enough context (column spec, row number, key)
for the user to find the offending input.
"""

__all__ = [
    "ConsolidationError",
    "ColumnOutOfBoundsError",
    "ColumnOrderingError",
    "IrregularShapeError",
    "AmbiguousMergeError",
    "DegenerateInputError",
    "count_with",
]


def count_with(count: int, noun: str) -> str:
    """'1 column', '3 columns'."""
    return f"{count} {noun}{'' if count == 1 else 's'}"


class ConsolidationError(Exception):
    """Base exception for consolidation failures."""

    source: str | None = None

    def add_source(self, source: str) -> ConsolidationError:
        """Prefix the message with the input it came from; returns self."""
        self.source = source
        self.args = (f"Could not process {source}: {self}",)
        return self


class ColumnOutOfBoundsError(ConsolidationError):
    def __init__(self, column: int, count: int) -> None:
        self.column = column
        self.count = count
        super().__init__(f"Column {column} is out of bounds (total columns: {count}).")


class ColumnOrderingError(ConsolidationError):
    """Positive and negative key columns overlap or cross for this width."""

    def __init__(self, largest_positive: int, smallest_negative: int, count: int) -> None:
        self.largest_positive = largest_positive
        self.smallest_negative = smallest_negative
        self.count = count
        resolved = count + smallest_negative + 1
        super().__init__(
            "Positively indexed columns must precede negatively indexed columns; "
            f"column {smallest_negative} resolves to column {resolved}, which does not "
            f"come after column {largest_positive} (total columns: {count})."
        )


class IrregularShapeError(ConsolidationError):
    def __init__(self, row_number: int, expected: int, actual: int) -> None:
        self.row_number = row_number  # 1-based
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"The first row has {count_with(expected, 'column')}, "
            f"but row #{row_number} has {count_with(actual, 'column')}."
        )


class AmbiguousMergeError(ConsolidationError):
    def __init__(self, key: object, flag: str) -> None:
        self.key = key
        self.flag = flag
        super().__init__(
            "There are multiple ways to merge records. If this is intended, "
            f"consider passing the {flag} flag. The ambiguous record is:\n{key}"
        )


class DegenerateInputError(ConsolidationError):
    def __init__(self, flag: str) -> None:
        self.flag = flag
        super().__init__(
            "Your data seems not to contain any records with more than one column. "
            "Did you specify the delimiter correctly? "
            f"If so, consider passing the {flag} flag."
        )
