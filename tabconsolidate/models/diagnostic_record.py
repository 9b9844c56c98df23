from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""DiagnosticRecord model for the JSON Lines diagnostics report.

Each notice the engine emits (unmatched records, similar records) becomes one
record with a fixed key set so the report can be consumed by other tools.
"""

__all__ = [
    "DiagnosticRecord",
    "KIND_UNMATCHED",
    "KIND_SIMILAR",
    "KIND_NOTICE",
]

KIND_UNMATCHED = "unmatched"
KIND_SIMILAR = "similar"
KIND_NOTICE = "notice"


@dataclass(frozen=True)
class DiagnosticRecord:
    """Structured diagnostic for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        kind: Notice classification (unmatched / similar / notice)
        lines: The notice text, one entry per displayed line
    """
    timestamp: str  # ISO8601 UTC
    kind: str
    lines: list[str]

    @staticmethod
    def create(kind: str, lines: list[str]) -> DiagnosticRecord:
        """Create a new DiagnosticRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return DiagnosticRecord(timestamp=ts, kind=kind, lines=list(lines))

    def to_json_line(self) -> str:
        # dataclass -> dict なので余計なキーは入らない
        return json.dumps(asdict(self), ensure_ascii=False)
