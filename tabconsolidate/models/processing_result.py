from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Result models for a consolidation run.

ConsolidationResult carries the counts shown on the SUMMARY line; InputStat
keeps per-input details for debug output.
"""


@dataclass(frozen=True)
class InputStat:
    """Per-input statistics collected while reading."""
    name: str  # path or display name
    rows: int
    columns: int
    elapsed_seconds: float


@dataclass(frozen=True)
class ConsolidationResult:
    """Aggregated results of one run, rendered as the SUMMARY line."""
    inputs: int
    input_rows: int
    groups: int  # distinct keys
    output_rows: int
    unmatched_notices: int
    similar_notices: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    input_stats: list[InputStat] | None = None
