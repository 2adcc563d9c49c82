from __future__ import annotations

import re
from datetime import datetime, timezone

import pytest

from localizekit.models.processing_result import BatchResult
from localizekit.services.summary import render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)/(\1)\s+success=([0-9]+)\s+failed=([0-9]+)\s+"
    r"rows=([0-9]+)\s+languages=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)$"
)

START = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


def _result(elapsed: float, success: int = 1, failed: int = 0, rows: int = 10, languages: int = 2) -> BatchResult:
    return BatchResult(
        success_files=success,
        failed_files=failed,
        total_rows=rows,
        languages=languages,
        start_time=START,
        end_time=START,
        elapsed_seconds=elapsed,
    )


def test_render_summary_line_all_success():
    line = render_summary_line(1, _result(2.0))
    assert line == "SUMMARY files=1/1 success=1 failed=0 rows=10 languages=2 elapsed_sec=2"
    assert SUMMARY_PATTERN.match(line)


def test_render_summary_line_partial_failure():
    line = render_summary_line(3, _result(1.25, success=2, failed=1, rows=7, languages=3))
    assert line == "SUMMARY files=3/3 success=2 failed=1 rows=7 languages=3 elapsed_sec=1.25"


@pytest.mark.parametrize(
    "elapsed, rendered",
    [(0.0, "0"), (0.001234, "0.001234"), (0.5, "0.5"), (12.34567, "12.346")],
)
def test_elapsed_formatting(elapsed, rendered):
    line = render_summary_line(0, _result(elapsed, success=0, rows=0, languages=0))
    assert line.endswith(f"elapsed_sec={rendered}")
    assert SUMMARY_PATTERN.match(line)
