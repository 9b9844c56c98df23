from __future__ import annotations
import json
from pathlib import Path
from tabconsolidate.logging.diagnostic_log import DiagnosticLogBuffer
from tabconsolidate.models.diagnostic_record import KIND_SIMILAR, KIND_UNMATCHED, DiagnosticRecord


def test_diagnostic_record_creation_and_json_line():
    rec = DiagnosticRecord.create(KIND_UNMATCHED, ["1 unmatched record encountered", "x"])
    data = json.loads(rec.to_json_line())
    assert data["kind"] == "unmatched"
    assert data["lines"] == ["1 unmatched record encountered", "x"]
    assert "timestamp" in data and data["timestamp"].endswith("Z")
    assert set(data.keys()) == {"timestamp", "kind", "lines"}


def test_diagnostic_record_keeps_non_ascii():
    rec = DiagnosticRecord.create(KIND_SIMILAR, ["東京", "東京都"])
    assert "東京都" in rec.to_json_line()


def test_diagnostic_log_buffer_flush(temp_workdir: Path):
    buf = DiagnosticLogBuffer(temp_workdir / "out" / "reports" / "notices.jsonl")
    buf.append(DiagnosticRecord.create(KIND_UNMATCHED, ["a"]))
    buf.append(DiagnosticRecord.create(KIND_SIMILAR, ["b", "c"]))
    assert len(buf) == 2
    path = buf.flush()
    assert path.exists()
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert [json.loads(raw)["kind"] for raw in lines] == ["unmatched", "similar"]
    # flush 後バッファクリア
    assert len(buf) == 0


def test_diagnostic_log_buffer_empty_flush_creates_file(temp_workdir: Path):
    buf = DiagnosticLogBuffer(temp_workdir / "out" / "empty.jsonl")
    path = buf.flush()
    assert path.exists()
    assert path.read_text(encoding="utf-8") == ""


def test_diagnostic_log_buffer_multiple_flushes_append(temp_workdir: Path):
    buf = DiagnosticLogBuffer(temp_workdir / "out" / "n.jsonl")
    buf.append(DiagnosticRecord.create(KIND_UNMATCHED, ["first"]))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.append(DiagnosticRecord.create(KIND_UNMATCHED, ["second"]))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1
    assert len(path2.read_text(encoding="utf-8").splitlines()) == 2
