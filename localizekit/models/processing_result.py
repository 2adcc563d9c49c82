from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Batch conversion result models.

FileStat records one converted (or failed) source file; BatchResult aggregates a
whole run and feeds the SUMMARY line.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file conversion statistics."""
    file_name: str
    status: str  # success/failed
    row_count: int
    languages: int
    elapsed_seconds: float
    error_kind: str | None = None  # ErrorKind value when failed


@dataclass(frozen=True)
class BatchResult:
    """Aggregated results of a batch conversion run."""
    success_files: int
    failed_files: int
    total_rows: int  # sum of row_count over successful files
    languages: int  # distinct language codes over successful files
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None
