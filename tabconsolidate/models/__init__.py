"""Domain models for the tabular record consolidator.

Key and section types describe how rows are identified and split; the config
models hold validated run parameters; the result models feed the SUMMARY line.
"""

from .config_models import FlagNames, Params, SimilarityMetric, SimilaritySettings
from .diagnostic_record import DiagnosticRecord
from .keys import DataItem, IdItem, Key, KeyItem, RecordId
from .processing_result import ConsolidationResult, InputStat
from .sections import KeySection, NonKeySection, RowSection

__all__ = [
    # Parameters
    "FlagNames",
    "Params",
    "SimilarityMetric",
    "SimilaritySettings",
    # Identity
    "DataItem",
    "IdItem",
    "Key",
    "KeyItem",
    "RecordId",
    # Sections
    "KeySection",
    "NonKeySection",
    "RowSection",
    # Results
    "ConsolidationResult",
    "DiagnosticRecord",
    "InputStat",
]
