#!/usr/bin/env python3
"""Dataset generation script for performance testing.

Generates N delimited input files describing overlapping record sets:
- Column 1: record key (shared across inputs for overlapping records)
- Column 2+: per-input payload columns

Each input holds a shifted window of the key space so that some keys appear
in every input, some in a few and some in one only. A fraction of the keys
get a one-character typo in each input to exercise similarity warnings.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd


def generate_input_frame(
    index: int, rows: int, cols: int, overlap: float = 0.8, typo_rate: float = 0.0, seed: int = 42
) -> pd.DataFrame:
    """Generate one input as a DataFrame of strings.

    Args:
        index: 0-based input number; shifts the key window
        rows: number of records
        cols: total number of columns (key included)
        overlap: fraction of keys shared with the previous input
        typo_rate: fraction of keys altered by one character
        seed: random seed for reproducible data

    Returns:
        DataFrame whose first column is the key
    """
    rng = np.random.default_rng(seed + index)
    shift = round(rows * (1 - overlap)) * index
    keys = [f"K{n:08d}" for n in range(shift, shift + rows)]
    if typo_rate > 0:
        for pos in rng.choice(rows, size=int(rows * typo_rate), replace=False):
            key = keys[pos]
            keys[pos] = key[:-1] + ("x" if key[-1] != "x" else "y")

    data: dict[str, list[str]] = {"key": keys}
    for c in range(1, cols):
        if c % 2:
            data[f"amount_{c}"] = [f"{v:.2f}" for v in rng.uniform(0.01, 9999.99, rows)]
        else:
            categories = ["Electronics", "Clothing", "Books", "Food", "Sports", "Home"]
            data[f"category_{c}"] = rng.choice(categories, rows).tolist()
    return pd.DataFrame(data)


def write_inputs(
    output_dir: Path,
    inputs: int,
    rows: int,
    cols: int,
    delimiter: str = "\t",
    overlap: float = 0.8,
    typo_rate: float = 0.0,
    seed: int = 42,
) -> list[Path]:
    """Write ``inputs`` files (input_1.tsv, ...) without header rows."""
    output_dir.mkdir(parents=True, exist_ok=True)
    suffix = ".csv" if delimiter == "," else ".tsv"
    paths = []
    for i in range(inputs):
        path = output_dir / f"input_{i + 1}{suffix}"
        generate_input_frame(i, rows, cols, overlap, typo_rate, seed).to_csv(
            path, sep=delimiter, header=False, index=False, lineterminator="\n"
        )
        paths.append(path)
    return paths


def main() -> int:
    """Main CLI interface for dataset generation."""
    parser = argparse.ArgumentParser(
        description="Generate synthetic overlapping delimited inputs for performance testing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Two inputs, 50k rows, 10 columns each
  %(prog)s data/perf

  # Three inputs with 5%% near-duplicate keys
  %(prog)s data/perf --inputs 3 --rows 20000 --typo-rate 0.05
        """
    )
    parser.add_argument("output_dir", type=Path, help="Directory for the generated files")
    parser.add_argument("--inputs", type=int, default=2, help="Number of input files (default: 2)")
    parser.add_argument("--rows", type=int, default=50_000, help="Rows per input (default: 50,000)")
    parser.add_argument("--cols", type=int, default=10, help="Columns per input (default: 10)")
    parser.add_argument("--delimiter", default="\t", help="Field delimiter (default: tab)")
    parser.add_argument("--overlap", type=float, default=0.8, help="Shared key fraction (default: 0.8)")
    parser.add_argument("--typo-rate", type=float, default=0.0, help="Near-duplicate key fraction")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--dry-run", action="store_true", help="Show the plan without writing files")
    args = parser.parse_args()

    if args.inputs < 2:
        print("Error: --inputs must be at least 2", file=sys.stderr)
        return 1
    if args.rows <= 0 or args.cols < 2:
        print("Error: --rows must be positive and --cols at least 2", file=sys.stderr)
        return 1
    if not 0 <= args.overlap <= 1 or not 0 <= args.typo_rate <= 1:
        print("Error: --overlap and --typo-rate must be within [0, 1]", file=sys.stderr)
        return 1

    print("Dataset generation plan:")
    print(f"  Output dir: {args.output_dir}")
    print(f"  Inputs: {args.inputs}")
    print(f"  Rows per input: {args.rows:,}")
    print(f"  Columns per input: {args.cols}")
    print(f"  Random seed: {args.seed}")
    if args.dry_run:
        print("\n[DRY RUN] Would generate files but not creating them.")
        return 0

    try:
        paths = write_inputs(
            args.output_dir, args.inputs, args.rows, args.cols,
            args.delimiter, args.overlap, args.typo_rate, args.seed,
        )
    except OSError as e:
        print(f"\nError generating dataset: {e}", file=sys.stderr)
        return 1
    for path in paths:
        print(f"Created {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
