# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from tabconsolidate.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "out").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("TABCONSOLIDATE_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


def _write_tsv(path: Path, rows: list[list[str]], delimiter: str = "\t") -> Path:
    path.write_text("".join(delimiter.join(r) + "\n" for r in rows), encoding="utf-8")
    return path


@pytest.fixture()
def write_tsv():
    return _write_tsv


@pytest.fixture()
def people_inputs(temp_workdir: Path) -> list[Path]:
    """Two inputs keyed by the first column, with one record missing from each."""
    a = _write_tsv(temp_workdir / "data" / "names.tsv", [
        ["1", "Alice"],
        ["2", "Bob"],
        ["3", "Carol"],
    ])
    b = _write_tsv(temp_workdir / "data" / "cities.tsv", [
        ["2", "Berlin"],
        ["1", "Amsterdam"],
        ["4", "Dublin"],
    ])
    return [a, b]


@pytest.fixture()
def sample_config_yaml() -> str:
    return """delimiter: "\\t"
filler: "-"
key_columns: [1]
warn_unmatched: true
similarity:
  threshold: 0.5
  metric: lcs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "consolidate.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
