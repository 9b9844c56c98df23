from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from ..engine.consolidator import Consolidator
from ..engine.errors import ConsolidationError
from ..logging.diagnostic_log import DiagnosticLogBuffer
from ..logging.sink import DiagnosticSink, ReportSink, TeeSink
from ..models.config_models import Params
from ..models.processing_result import ConsolidationResult, InputStat
from ..tabular.reader import InputReadError, OutputWriteError, read_delimited, write_delimited
from .progress import ProgressTracker

"""Run orchestration: read inputs, consolidate, write output, flush report."""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal run failure; the cause is chained."""


@dataclass(frozen=True)
class ConsolidationRequest:
    inputs: list[Path]
    output: Path
    params: Params
    delimiter: str = "\t"
    encoding: str = "utf-8"
    report_path: Path | None = None


def load_inputs(
    paths: list[Path], delimiter: str, encoding: str = "utf-8"
) -> tuple[list[tuple[str, list[list[str]]]], list[InputStat]]:
    """Read every input fully into memory, in order.

    Raises:
        ProcessingError: an input cannot be read or is not rectangular
    """
    sources: list[tuple[str, list[list[str]]]] = []
    stats: list[InputStat] = []
    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_file(path)
            started = time.perf_counter()
            try:
                rows = read_delimited(path, delimiter, encoding=encoding)
            except InputReadError as e:
                raise ProcessingError(str(e)) from e
            except ConsolidationError as e:
                raise ProcessingError(str(e.add_source(str(path)))) from e
            elapsed = time.perf_counter() - started
            columns = len(rows[0]) if rows else 0
            logger.debug(f"read {path}: rows={len(rows)} columns={columns} elapsed={elapsed:.3f}s")
            sources.append((str(path), rows))
            stats.append(InputStat(name=str(path), rows=len(rows), columns=columns, elapsed_seconds=elapsed))
            progress.finish_file(rows=len(rows))
    return sources, stats


def run_consolidation(
    request: ConsolidationRequest, sink: DiagnosticSink | None = None
) -> ConsolidationResult:
    """Consolidate the request's inputs into its output file.

    Steps:
    1. Read every input (fully, in order)
    2. Run the engine; notices go to ``sink`` and the report buffer if any
    3. Write the merged table
    4. Flush the report

    Raises:
        ProcessingError: read, engine or write failure (nothing is written
            to the output when the engine fails)
    """
    start_time = datetime.now(UTC)
    sources, stats = load_inputs(request.inputs, request.delimiter, request.encoding)

    report = DiagnosticLogBuffer(request.report_path) if request.report_path else None
    sinks = [s for s in (sink, ReportSink(report) if report is not None else None) if s is not None]
    engine_sink: DiagnosticSink | None = TeeSink(*sinks) if sinks else None

    consolidator = Consolidator(request.params, engine_sink)
    try:
        merged = consolidator.run(sources)
    except ConsolidationError as e:
        raise ProcessingError(str(e)) from e
    finally:
        # 失敗時も途中までの通知はレポートに残す
        if report is not None:
            report.flush()

    try:
        write_delimited(request.output, merged, request.delimiter, encoding=request.encoding)
    except OutputWriteError as e:
        raise ProcessingError(str(e)) from e

    end_time = datetime.now(UTC)
    return ConsolidationResult(
        inputs=len(sources),
        input_rows=sum(stat.rows for stat in stats),
        groups=consolidator.group_count,
        output_rows=len(merged),
        unmatched_notices=consolidator.unmatched_count,
        similar_notices=consolidator.similar_count,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        input_stats=stats,
    )
