from __future__ import annotations

from dataclasses import dataclass
from typing import Union

"""Row sections produced by splitting a row along its key columns.

A split row always alternates NonKey, Key, NonKey, ..., NonKey so rows of
different sources line up section by section even when their non-key widths
differ.
"""

__all__ = [
    "KeySection",
    "NonKeySection",
    "RowSection",
]


@dataclass(frozen=True)
class KeySection:
    cell: str


@dataclass(frozen=True)
class NonKeySection:
    cells: tuple[str, ...]


RowSection = Union[KeySection, NonKeySection]
