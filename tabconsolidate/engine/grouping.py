from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..models.keys import Key
from .sheet import Sheet, SheetRow

"""Cross-source grouping by key.

One pass over every row of every sheet (sheets in input order, rows top to
bottom). The returned dict keeps first-encountered-key order, which fixes
the order of the merged output.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "Group",
    "group_rows",
]


@dataclass
class Group:
    """A key and, per source, the rows of that source carrying the key."""
    key: Key
    rows: list[list[SheetRow]]

    @property
    def counts(self) -> list[int]:
        return [len(source_rows) for source_rows in self.rows]


def group_rows(sheets: Sequence[Sheet]) -> dict[Key, Group]:
    groups: dict[Key, Group] = {}
    for sheet in sheets:
        for row in sheet:
            key = row.key()
            group = groups.get(key)
            if group is None:
                group = Group(key=key, rows=[[] for _ in sheets])
                groups[key] = group
            group.rows[sheet.source_index].append(row)
    logger.debug(f"grouped {sum(len(s) for s in sheets)} rows into {len(groups)} keys")
    return groups
