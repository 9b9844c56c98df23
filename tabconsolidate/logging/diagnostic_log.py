from __future__ import annotations

from pathlib import Path

from ..models.diagnostic_record import DiagnosticRecord

"""Diagnostics report buffering.

Notices are buffered in memory and appended to the report file as JSON Lines
on flush(). The run is serial, so no locking.
"""

__all__ = [
    "DiagnosticRecord",
    "DiagnosticLogBuffer",
]


class DiagnosticLogBuffer:
    """In-memory buffer of diagnostic records. Flush appends JSON Lines."""

    def __init__(self, file_path: Path) -> None:
        self._records: list[DiagnosticRecord] = []
        self.file_path = file_path

    def append(self, record: DiagnosticRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path:
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        # 空でもファイルは作る (レポートが無い = 通知なし と区別できるように)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
