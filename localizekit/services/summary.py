from __future__ import annotations

from ..models.processing_result import BatchResult

"""SUMMARY line rendering for batch conversion.

Format:
SUMMARY files={total}/{total} success={s} failed={f} rows={rows} languages={l} elapsed_sec={e}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for tiny values
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(total_files: int, result: BatchResult) -> str:
    """Render the SUMMARY line of a batch run.

    >>> from datetime import datetime, timezone
    >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
    >>> r = BatchResult(success_files=1, failed_files=0, total_rows=10, languages=2,
    ...                 start_time=t, end_time=t, elapsed_seconds=2.0)
    >>> render_summary_line(1, r)
    'SUMMARY files=1/1 success=1 failed=0 rows=10 languages=2 elapsed_sec=2'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"rows={result.total_rows} "
        f"languages={result.languages} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
