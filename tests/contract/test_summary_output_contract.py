from __future__ import annotations

import re

from tabconsolidate.cli.main import main as cli_main

"""SUMMARY line format contract."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+inputs=([0-9]+)\s+input_rows=([0-9]+)\s+groups=([0-9]+)\s+"
    r"output_rows=([0-9]+)\s+unmatched=([0-9]+)\s+similar=([0-9]+)\s+"
    r"elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_line():
    line = (
        "SUMMARY inputs=2 input_rows=6 groups=4 output_rows=4 "
        "unmatched=2 similar=0 elapsed_sec=0.012"
    )
    assert SUMMARY_PATTERN.match(line), "SUMMARY line should match contract regex"


def test_summary_line_emitted_last(people_inputs, capsys):
    code = cli_main([
        "-i", *(str(p) for p in people_inputs), "-o", "out/m.tsv", "-c", "1", "--warn-unmatched",
    ])
    assert code == 0
    lines = capsys.readouterr().err.strip().splitlines()
    m = SUMMARY_PATTERN.match(lines[-1])
    assert m, f"last line is not a SUMMARY line: {lines[-1]!r}"
    assert m.groups()[:6] == ("2", "6", "4", "4", "2", "0")
