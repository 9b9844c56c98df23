from __future__ import annotations

from collections.abc import Sequence

from ..models.sections import KeySection, RowSection
from .grouping import Group
from .sheet import Sheet, SheetRow

"""Row merge projection.

For a group with per-source row lists L_1..L_n the merge emits max(len(L_i))
rows. Row j pairs L_i[j] across sources; a source without a j-th row
contributes an all-filler row of its own shape. Key cells are written once
(first source with a real row wins), non-key cells of every source are
concatenated in source order.
"""

__all__ = [
    "merge_row",
    "merge_group",
]


def merge_row(
    parts: Sequence[tuple[SheetRow | None, Sheet]], filler: str
) -> list[str]:
    """Merge one aligned set of rows (None = source has no row here)."""
    split: list[tuple[list[RowSection], bool]] = [
        (row.split(), True) if row is not None else (sheet.split_filler(filler), False)
        for row, sheet in parts
    ]
    if not split:
        return []
    section_count = len(split[0][0])
    if any(len(sections) != section_count for sections, _ in split):
        raise ValueError("sources disagree on the number of key columns")

    result: list[str] = []
    for section_index in range(section_count):
        key_written = False
        for sections, is_real in split:
            section = sections[section_index]
            if isinstance(section, KeySection):
                if is_real and not key_written:
                    key_written = True
                    result.append(section.cell)
            else:
                result.extend(section.cells)
    return result


def merge_group(group: Group, sheets: Sequence[Sheet], filler: str) -> list[list[str]]:
    depth = max(group.counts, default=0)
    return [
        merge_row(
            [
                (source_rows[index] if index < len(source_rows) else None, sheet)
                for source_rows, sheet in zip(group.rows, sheets)
            ],
            filler,
        )
        for index in range(depth)
    ]
