from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from ..models.diagnostic_record import KIND_NOTICE, DiagnosticRecord
from .diagnostic_log import DiagnosticLogBuffer
from .init import get_logger

"""Diagnostic sinks.

The engine hands every notice to an injected sink instead of printing. A sink
accepts an ordered list of text lines and never fails.
"""

__all__ = [
    "DIVIDER",
    "DiagnosticSink",
    "LoggingSink",
    "CollectingSink",
    "ReportSink",
    "TeeSink",
]

DIVIDER = "----------"


class DiagnosticSink(Protocol):
    def emit(self, lines: Sequence[str], kind: str = KIND_NOTICE) -> None: ...


class LoggingSink:
    """Writes a divider then each line through the application logger (WARN)."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger

    def emit(self, lines: Sequence[str], kind: str = KIND_NOTICE) -> None:
        logger = self._logger or get_logger()
        logger.warning(DIVIDER)
        for line in lines:
            logger.warning(line)


class CollectingSink:
    """Keeps notices in memory; used by tests and for counting."""

    def __init__(self) -> None:
        self.notices: list[tuple[str, list[str]]] = []

    def emit(self, lines: Sequence[str], kind: str = KIND_NOTICE) -> None:
        self.notices.append((kind, list(lines)))

    def count(self, kind: str) -> int:
        return sum(1 for k, _ in self.notices if k == kind)

    def __len__(self) -> int:
        return len(self.notices)


class ReportSink:
    """Feeds notices into a DiagnosticLogBuffer for the JSON Lines report."""

    def __init__(self, buffer: DiagnosticLogBuffer) -> None:
        self.buffer = buffer

    def emit(self, lines: Sequence[str], kind: str = KIND_NOTICE) -> None:
        self.buffer.append(DiagnosticRecord.create(kind, list(lines)))


class TeeSink:
    def __init__(self, *sinks: DiagnosticSink) -> None:
        self.sinks = sinks

    def emit(self, lines: Sequence[str], kind: str = KIND_NOTICE) -> None:
        for sink in self.sinks:
            sink.emit(lines, kind=kind)
