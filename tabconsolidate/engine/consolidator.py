from __future__ import annotations

import logging
from collections.abc import Sequence

from ..logging.sink import CollectingSink, DiagnosticSink, TeeSink
from ..models.config_models import Params
from ..models.diagnostic_record import KIND_SIMILAR, KIND_UNMATCHED
from .checks import ensure_multi_column, ensure_unambiguous
from .errors import ConsolidationError
from .grouping import group_rows
from .merge import merge_group
from .sheet import Sheet
from .similarity import similar_notices, unmatched_notice

"""Record consolidation engine.

Flow: build one Sheet per source (shape + key column checks), reject
single-column data unless allowed, group all rows by key, then consume the
groups in first-seen order. Each consumed group is checked for ambiguity,
merged, and finally compared against the groups still pending; a group is
removed from the pending set before the comparison, so every pair is
reported once.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "Consolidator",
    "consolidate",
    "build_sheets",
]

Source = Sequence[Sequence[str]]


def build_sheets(
    sources: Sequence[Source | tuple[str, Source]], key_columns: Sequence[int]
) -> list[Sheet]:
    """Wrap raw row grids (optionally ``(name, rows)`` pairs) into Sheets."""
    sheets = []
    for index, source in enumerate(sources):
        if isinstance(source, tuple) and len(source) == 2 and isinstance(source[0], str):
            name, rows = source
        else:
            name, rows = None, source
        try:
            sheets.append(Sheet(rows, key_columns, index, name=name))
        except ConsolidationError as e:
            raise e.add_source(name or f"input #{index + 1}")
    return sheets


class Consolidator:
    """Runs one consolidation and keeps its statistics."""

    def __init__(self, params: Params, sink: DiagnosticSink | None = None) -> None:
        self.params = params
        self._counter = CollectingSink()
        self.sink: DiagnosticSink = TeeSink(sink, self._counter) if sink is not None else self._counter
        self.group_count = 0

    @property
    def unmatched_count(self) -> int:
        return self._counter.count(KIND_UNMATCHED)

    @property
    def similar_count(self) -> int:
        return self._counter.count(KIND_SIMILAR)

    def run(self, sources: Sequence[Source | tuple[str, Source]]) -> list[list[str]]:
        params = self.params
        sheets = build_sheets(sources, params.key_columns)
        ensure_multi_column(sheets, params)

        pending = group_rows(sheets)
        self.group_count = len(pending)

        merged: list[list[str]] = []
        while pending:
            key = next(iter(pending))
            group = pending.pop(key)
            ensure_unambiguous(group, params)
            merged.extend(merge_group(group, sheets, params.filler))

            if params.warn_unmatched:
                lines = unmatched_notice(group)
                if lines is not None:
                    self.sink.emit(lines, kind=KIND_UNMATCHED)
            if params.similarity is not None:
                for lines in similar_notices(key, pending.keys(), params.similarity):
                    self.sink.emit(lines, kind=KIND_SIMILAR)

        logger.debug(f"merged {self.group_count} keys into {len(merged)} rows")
        return merged


def consolidate(
    sources: Sequence[Source | tuple[str, Source]],
    params: Params,
    sink: DiagnosticSink | None = None,
) -> list[list[str]]:
    """Consolidate row grids into one table.

    Parameters
    ----------
    sources: one row grid per input (or ``(name, rows)`` pairs), in input order
    params: validated run parameters
    sink: receives unmatched / similar notices (dropped when None)

    Returns
    -------
    list[list[str]]: merged rows, groups in first-seen key order

    Raises
    ------
    ConsolidationError: shape, column, ambiguity or degenerate-input failures
    """
    return Consolidator(params, sink).run(sources)
