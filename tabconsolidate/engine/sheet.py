from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from ..models.keys import DataItem, IdItem, Key, RecordId
from ..models.sections import KeySection, NonKeySection, RowSection
from .columns import resolve_columns
from .errors import IrregularShapeError

"""Source table model.

A Sheet owns the rows of one input and its resolved key layout. Keys and
sections built from it reference the sheet's strings; nothing is copied.
"""

__all__ = [
    "KeyColumnLayout",
    "Sheet",
    "SheetRow",
    "check_rectangular",
]


@dataclass(frozen=True)
class KeyColumnLayout:
    """Resolved key columns: user order (for keys) and ascending (for splits)."""
    original: tuple[int | None, ...]
    sorted: tuple[int, ...]

    @classmethod
    def from_resolved(cls, resolved: Sequence[int | None]) -> KeyColumnLayout:
        positions = sorted(index for index in resolved if index is not None)
        return cls(original=tuple(resolved), sorted=tuple(positions))

    def split(self, cells: Sequence[str]) -> list[RowSection]:
        """Split a row into NonKey, Key, NonKey, ..., NonKey sections."""
        sections: list[RowSection] = []
        start = 0
        for index in self.sorted:
            sections.append(NonKeySection(tuple(cells[start:index])))
            sections.append(KeySection(cells[index]))
            # 同じ列が二度指定された場合でも start は後退させない
            start = max(start, index + 1)
        sections.append(NonKeySection(tuple(cells[start:])))
        return sections


def check_rectangular(rows: Sequence[Sequence[str]]) -> int:
    """Return the shared column count, or raise naming the first odd row."""
    if not rows:
        return 0
    expected = len(rows[0])
    for index, row in enumerate(rows):
        if len(row) != expected:
            raise IrregularShapeError(index + 1, expected, len(row))
    return expected


class Sheet:
    """One input source: rows, column count, source index and key layout."""

    def __init__(
        self,
        rows: Sequence[Sequence[str]],
        key_columns: Sequence[int],
        source_index: int,
        name: str | None = None,
    ) -> None:
        self.rows = rows
        self.column_count = check_rectangular(rows)
        self.source_index = source_index
        self.name = name or f"input #{source_index + 1}"
        self.layout = KeyColumnLayout.from_resolved(
            resolve_columns(key_columns, self.column_count)
        )

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[SheetRow]:
        for row_index in range(len(self.rows)):
            yield SheetRow(self, RecordId(self.source_index, row_index))

    def split_filler(self, filler: str) -> list[RowSection]:
        """Split an all-filler row shaped like this sheet's rows."""
        return self.layout.split([filler] * self.column_count)

    def has_multi_column_rows(self) -> bool:
        return any(len(row) > 1 for row in self.rows)

    def __repr__(self) -> str:  # pragma: no cover
        return f"Sheet(name={self.name!r}, rows={len(self.rows)}, columns={self.column_count})"


@dataclass(frozen=True)
class SheetRow:
    """A view of one row of a sheet."""
    sheet: Sheet
    id: RecordId

    @property
    def cells(self) -> Sequence[str]:
        return self.sheet.rows[self.id.row_index]

    def __len__(self) -> int:
        return len(self.cells)

    def key(self) -> Key:
        cells = self.cells
        return Key(tuple(
            DataItem(cells[index]) if index is not None else IdItem(self.id)
            for index in self.sheet.layout.original
        ))

    def split(self) -> list[RowSection]:
        return self.sheet.layout.split(self.cells)
