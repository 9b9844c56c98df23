from __future__ import annotations

from collections.abc import Sequence

from ..models.config_models import Params
from .errors import AmbiguousMergeError, DegenerateInputError
from .grouping import Group
from .sheet import Sheet

"""Pre-merge checks: degenerate input and ambiguous groups."""

__all__ = [
    "is_unambiguous",
    "ensure_unambiguous",
    "ensure_multi_column",
]


def is_unambiguous(group: Group) -> bool:
    """True if the group pairs up in exactly one way.

    That holds when no source has more than one row, or when only one source
    has rows at all.
    """
    counts = group.counts
    return all(count <= 1 for count in counts) or sum(1 for count in counts if count > 0) <= 1


def ensure_unambiguous(group: Group, params: Params) -> None:
    if params.allow_multi_merge or is_unambiguous(group):
        return
    raise AmbiguousMergeError(group.key, params.flag_names.allow_multi_merge)


def ensure_multi_column(sheets: Sequence[Sheet], params: Params) -> None:
    """Reject runs where every record is a single cell (likely a wrong delimiter)."""
    if params.allow_single_column:
        return
    if not any(sheet.has_multi_column_rows() for sheet in sheets):
        raise DegenerateInputError(params.flag_names.allow_single_column)
