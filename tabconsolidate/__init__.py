"""Consolidate several delimited tables into one, matching records by key columns."""

from .engine import Consolidator, ConsolidationError, consolidate
from .models import Params, SimilarityMetric, SimilaritySettings

__version__ = "0.3.0"

__all__ = [
    "Consolidator",
    "ConsolidationError",
    "Params",
    "SimilarityMetric",
    "SimilaritySettings",
    "consolidate",
]
