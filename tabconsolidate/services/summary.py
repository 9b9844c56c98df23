from __future__ import annotations

from ..models.processing_result import ConsolidationResult

"""SUMMARY line rendering.

Format:
SUMMARY inputs={n} input_rows={r} groups={g} output_rows={o}
unmatched={u} similar={s} elapsed_sec={e}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for tiny values
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ConsolidationResult) -> str:
    """Render the SUMMARY line for a finished run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = ConsolidationResult(
        ...     inputs=2, input_rows=10, groups=6, output_rows=6,
        ...     unmatched_notices=1, similar_notices=0,
        ...     start_time=t, end_time=t, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY inputs=2 input_rows=10 groups=6 output_rows=6 unmatched=1 similar=0 elapsed_sec=2'
    """
    return (
        f"SUMMARY inputs={result.inputs} "
        f"input_rows={result.input_rows} "
        f"groups={result.groups} "
        f"output_rows={result.output_rows} "
        f"unmatched={result.unmatched_notices} "
        f"similar={result.similar_notices} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
