from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..engine.errors import IrregularShapeError

"""Delimited text reader / writer.

Cells are opaque text: pandas reads with dtype=str and no NA conversion, so
"NA", "null" or "" come back exactly as written. Header rows are not treated
specially; the first line is a record like any other.

Rows of uneven width are rejected. pandas pads a row shorter than the first
row with NaN; that padding is stripped again so the Sheet shape check names
the row. Rows longer than the first row are a parse error and surface as
IrregularShapeError directly.
"""

__all__ = [
    "InputReadError",
    "OutputWriteError",
    "parse_delimiter",
    "read_delimited",
    "write_delimited",
]

_DELIMITER_ALIASES = {
    "\\t": "\t",
    "tab": "\t",
    "comma": ",",
    "semicolon": ";",
    "pipe": "|",
}


class InputReadError(Exception):
    """Raised when an input file cannot be opened or parsed."""


class OutputWriteError(Exception):
    """Raised when the consolidated table cannot be written."""


def parse_delimiter(text: str) -> str:
    """Accept a single ASCII character or a named alias (tab, comma, ...)."""
    delimiter = _DELIMITER_ALIASES.get(text.lower(), text) if len(text) > 1 else text
    if len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {text!r}")
    if not delimiter.isascii():
        raise ValueError(
            f"{delimiter!r} is not an ASCII character; only ASCII delimiters are supported"
        )
    if delimiter in ('"', "\n", "\r"):
        raise ValueError(f"{delimiter!r} cannot be used as a delimiter")
    return delimiter


def read_delimited(path: Path, delimiter: str = "\t", encoding: str = "utf-8") -> list[list[str]]:
    """Read every record of a delimited file as a list of string cells.

    Parameters
    ----------
    path: input file
    delimiter: single-character field separator
    encoding: text encoding of the file

    Raises
    ------
    InputReadError: file missing / unreadable / undecodable
    IrregularShapeError: a record has more fields than the first one
    """
    try:
        df = pd.read_csv(
            path,
            sep=delimiter,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding=encoding,
        )
    except pd.errors.EmptyDataError:
        return []
    except pd.errors.ParserError as e:
        # "Expected N fields in line M, saw K" から行番号を拾う
        shape = _shape_from_parser_error(str(e))
        if shape is not None:
            raise IrregularShapeError(*shape) from e
        raise InputReadError(f"could not parse {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(f"could not open {path}: {e}") from e
    # keep_default_na=False なので NaN は行末のパディングだけ
    return [[cell for cell in row if not pd.isna(cell)] for row in df.values.tolist()]


def _shape_from_parser_error(message: str) -> tuple[int, int, int] | None:
    match = re.search(r"Expected (\d+) fields in line (\d+), saw (\d+)", message)
    if match is None:
        return None
    expected, line, actual = (int(g) for g in match.groups())
    return line, expected, actual


def write_delimited(
    path: Path, rows: Sequence[Sequence[str]], delimiter: str = "\t", encoding: str = "utf-8"
) -> Path:
    """Write rows as delimited text (no header, no index column)."""
    try:
        if not rows:
            path.write_text("", encoding=encoding)
            return path
        pd.DataFrame([list(row) for row in rows]).to_csv(
            path,
            sep=delimiter,
            header=False,
            index=False,
            encoding=encoding,
            lineterminator="\n",
        )
    except OSError as e:
        raise OutputWriteError(f"could not write {path}: {e}") from e
    return path
