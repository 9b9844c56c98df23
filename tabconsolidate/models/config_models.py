from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""Run parameter dataclasses for the consolidator.

These are the validated values the engine works with. The YAML loader in
tabconsolidate/config/loader.py and the CLI both produce them; the engine never
reads files or arguments itself.
"""

__all__ = [
    "SimilarityMetric",
    "SimilaritySettings",
    "FlagNames",
    "Params",
]


class SimilarityMetric(Enum):
    """Key comparison metric used for near-duplicate notices.

    - LCS: normalized longest-common-subsequence ratio per key item, summed.
      A similarity: warn when the sum is >= threshold.
    - EDIT: Levenshtein edit distance per key item, summed.
      A distance: warn when the sum is <= threshold.
    """
    LCS = "lcs"
    EDIT = "edit"

    @property
    def is_distance(self) -> bool:
        return self is SimilarityMetric.EDIT

    @property
    def label(self) -> str:
        return "edit distance" if self.is_distance else "similarity"


@dataclass(frozen=True)
class SimilaritySettings:
    threshold: float
    metric: SimilarityMetric = SimilarityMetric.LCS

    def crosses(self, score: float) -> bool:
        if self.metric.is_distance:
            return score <= self.threshold
        return score >= self.threshold


@dataclass(frozen=True)
class FlagNames:
    """Spelling of the override flags, quoted back in error messages."""
    allow_single_column: str = "--single"
    allow_multi_merge: str = "--multi"


@dataclass(frozen=True)
class Params:
    """Everything the consolidation engine needs besides the source rows."""
    key_columns: tuple[int, ...] = ()  # signed, 1-based; 0 = unique per row
    allow_single_column: bool = False
    allow_multi_merge: bool = False
    filler: str = ""
    similarity: SimilaritySettings | None = None
    warn_unmatched: bool = False
    flag_names: FlagNames = field(default_factory=FlagNames)
