from __future__ import annotations

import re
from pathlib import Path

from localizekit.cli.__main__ import main as cli_main

"""SUMMARY line format contract for the batch command."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)/(\1)\s+success=([0-9]+)\s+failed=([0-9]+)\s+"
    r"rows=([0-9]+)\s+languages=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_line():
    line = "SUMMARY files=2/2 success=2 failed=0 rows=40 languages=3 elapsed_sec=0.84"
    assert SUMMARY_PATTERN.match(line)


def test_summary_pattern_rejects_mismatched_totals():
    line = "SUMMARY files=2/3 success=2 failed=0 rows=40 languages=3 elapsed_sec=0.84"
    assert SUMMARY_PATTERN.match(line) is None


def test_batch_prints_contract_summary(write_config: Path, temp_workdir: Path, sample_csv: str, capsys):
    (temp_workdir / "data" / "one.csv").write_text(sample_csv, encoding="utf-8")
    (temp_workdir / "data" / "two.csv").write_text("key,en,ja\nx,X,エックス\n", encoding="utf-8")
    assert cli_main(["batch"]) == 0

    lines = [l for l in capsys.readouterr().out.splitlines() if l.startswith("SUMMARY")]
    assert len(lines) == 1
    m = SUMMARY_PATTERN.match(lines[0])
    assert m
    assert m.group(1) == "2"
    assert (m.group(3), m.group(4), m.group(5), m.group(6)) == ("2", "0", "4", "3")
