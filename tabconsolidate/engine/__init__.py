"""Record consolidation engine: column resolution, grouping, merge, diagnostics."""

from .consolidator import Consolidator, build_sheets, consolidate
from .errors import (
    AmbiguousMergeError,
    ColumnOrderingError,
    ColumnOutOfBoundsError,
    ConsolidationError,
    DegenerateInputError,
    IrregularShapeError,
)

__all__ = [
    "Consolidator",
    "build_sheets",
    "consolidate",
    # Errors
    "ConsolidationError",
    "ColumnOutOfBoundsError",
    "ColumnOrderingError",
    "IrregularShapeError",
    "AmbiguousMergeError",
    "DegenerateInputError",
]
