from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, ConsolidateConfig, load_config, resolve_config_path
from ..logging.init import log_summary, setup_logging
from ..logging.sink import LoggingSink
from ..models.config_models import FlagNames, Params, SimilarityMetric, SimilaritySettings
from ..services.orchestrator import ConsolidationRequest, ProcessingError, run_consolidation
from ..services.summary import render_summary_line
from ..tabular.reader import parse_delimiter

"""CLI entrypoint.

Flow:
- Load .env, then the optional YAML config
- Merge command line options over the config and validate them
- Run the consolidation, log the SUMMARY line, map failures to exit codes
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

FLAG_NAMES = FlagNames(allow_single_column="--single", allow_multi_merge="--multi")


class UsageError(Exception):
    """Invalid option combination detected after parsing."""


def _load_env_file(path: Path) -> None:
    """Load .env (existing environment variables take precedence)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="tabconsolidate",
        description="Consolidate CSV/TSV files describing overlapping records into one table",
    )
    p.add_argument(
        "-i", "--inputs", action="extend", nargs="+", type=Path, default=[],
        help="CSV/TSV files to consolidate (at least two)",
    )
    p.add_argument(
        "-o", "--output", type=Path, required=True,
        help="Consolidated output file (must differ from every input; overwritten if it exists)",
    )
    p.add_argument("-d", "--delimiter", help="Delimiter character (default: tab; 'comma', 'tab' accepted)")
    p.add_argument(
        "-c", "--common", action="append", type=int, default=None,
        help=(
            "Key column index, repeatable (1-based; negative counts from the right; "
            "0 = a column whose values are unique for each record)"
        ),
    )
    p.add_argument("--single", action="store_true", help="Allow consolidation when all inputs have a single column")
    p.add_argument("--multi", action="store_true", help="Allow merging when records can be paired in several ways")
    p.add_argument("--filler", help="Filler for cells of records missing from some inputs (default: empty)")
    p.add_argument(
        "--warn-similar", type=float, default=None, metavar="LEVEL",
        help="Warn about keys this close to each other (summed over key columns)",
    )
    p.add_argument(
        "--similarity-metric", choices=[m.value for m in SimilarityMetric], default=None,
        help="lcs: similarity, warn if >= LEVEL (default); edit: edit distance, warn if <= LEVEL",
    )
    p.add_argument("--warn-unmatched", action="store_true", help="Warn about unmatched records")
    p.add_argument("--config", type=Path, default=None, help="YAML config file")
    p.add_argument("--report", type=Path, default=None, help="Write notices as JSON Lines to this file")
    p.add_argument("--encoding", default=None, help="Text encoding of inputs and output (default: utf-8)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _check_inputs(inputs: list[Path], output: Path) -> None:
    if len(inputs) < 2:
        raise UsageError(f"at least two inputs are required, got {len(inputs)}")
    resolved_output = output.resolve()
    for path in inputs:
        if not path.exists():
            raise UsageError(f"{path} does not exist.")
        if not path.is_file():
            raise UsageError(f"{path} is not a file.")
        if path.resolve() == resolved_output:
            raise UsageError(f"{path} is used both as an input and as the output.")


def _similarity_settings(
    args: argparse.Namespace, cfg: ConsolidateConfig, key_columns: tuple[int, ...]
) -> SimilaritySettings | None:
    base = cfg.similarity
    metric = SimilarityMetric(args.similarity_metric) if args.similarity_metric else None
    if args.warn_similar is not None:
        settings = SimilaritySettings(
            threshold=args.warn_similar,
            metric=metric or (base.metric if base else SimilarityMetric.LCS),
        )
    elif base is not None:
        settings = SimilaritySettings(threshold=base.threshold, metric=metric or base.metric)
    else:
        return None

    level = settings.threshold
    if level <= 0:
        raise UsageError(f"Similarity warn level must be positive, got {level}.")
    if settings.metric is SimilarityMetric.LCS and level >= len(key_columns):
        raise UsageError(
            "Similarity warn level must be less than the number of key columns, "
            f"got {level} >= {len(key_columns)}."
        )
    return settings


def build_request(args: argparse.Namespace, cfg: ConsolidateConfig) -> ConsolidationRequest:
    """Merge CLI options over config values into a validated request."""
    _check_inputs(args.inputs, args.output)
    try:
        delimiter = parse_delimiter(args.delimiter if args.delimiter is not None else cfg.delimiter)
    except ValueError as e:
        raise UsageError(str(e)) from e

    key_columns = tuple(args.common if args.common is not None else cfg.key_columns)
    params = Params(
        key_columns=key_columns,
        allow_single_column=args.single or cfg.allow_single_column,
        allow_multi_merge=args.multi or cfg.allow_multi_merge,
        filler=args.filler if args.filler is not None else cfg.filler,
        similarity=_similarity_settings(args, cfg, key_columns),
        warn_unmatched=args.warn_unmatched or cfg.warn_unmatched,
        flag_names=FLAG_NAMES,
    )
    report = args.report or (Path(cfg.report_path) if cfg.report_path else None)
    return ConsolidationRequest(
        inputs=list(args.inputs),
        output=args.output,
        params=params,
        delimiter=delimiter,
        encoding=args.encoding or cfg.encoding,
        report_path=report,
    )


def main(argv: list[str] | None = None) -> int:
    # None のときのみ sys.argv を読む (テストで main([]) を渡せるように)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))
    try:
        cfg = load_config(resolve_config_path(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        request = build_request(args, cfg)
    except UsageError as e:
        logger.error(f"usage: {e}")
        return EXIT_FATAL

    logger.info(f"Consolidating {len(request.inputs)} inputs into {request.output}")
    try:
        result = run_consolidation(request, sink=LoggingSink(logger))
    except ProcessingError as e:
        logger.error(str(e))
        return EXIT_FATAL

    for stat in result.input_stats or []:
        logger.debug(f"input {stat.name}: rows={stat.rows} columns={stat.columns}")
    # render_summary_line の "SUMMARY " は log_summary 側のラベルと重複するので外す
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))
    return EXIT_SUCCESS
