from __future__ import annotations

from dataclasses import dataclass
from typing import Union

"""Record identity model.

A Key is the ordered tuple of key items a row is identified by. Data items
share the cell text owned by the sheet; Id items stand in for the synthetic
"unique" column (spec 0) and only ever equal the same physical row.
"""

__all__ = [
    "RecordId",
    "DataItem",
    "IdItem",
    "KeyItem",
    "Key",
]


def literally(text: str) -> str:
    """Mark text that is a description rather than cell data."""
    return f"<{text}>"


@dataclass(frozen=True)
class RecordId:
    """One physical row: (source index, row index), both 0-based."""
    source_index: int
    row_index: int

    def __str__(self) -> str:
        return literally(f"row #{self.row_index + 1} of the input #{self.source_index + 1}")


@dataclass(frozen=True)
class DataItem:
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class IdItem:
    record: RecordId

    def __str__(self) -> str:
        return str(self.record)


KeyItem = Union[DataItem, IdItem]


@dataclass(frozen=True)
class Key:
    """Ordered key items in the order the key columns were given."""
    items: tuple[KeyItem, ...]

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        if not self.items:
            return literally("empty set of columns")
        return ", ".join(str(item) for item in self.items)
