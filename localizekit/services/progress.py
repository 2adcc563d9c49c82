from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm

from ..models.source_file import FileStatus, SourceFile

"""Batch progress bar (tqdm).

The bar only exists on an interactive terminal; in CI or when stdout is piped the
tracker still counts outcomes but draws nothing.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """Counts converted / failed files and rows, mirrored on a tqdm bar."""

    def __init__(self, total_files: int, *, description: str = "Converting files") -> None:
        self.description = description
        self.started = 0
        self.converted = 0
        self.failed = 0
        self.rows = 0
        self.bar: Any = None
        if is_tty_enabled():
            self.bar = tqdm(total=total_files, desc=description, unit="file", leave=False, dynamic_ncols=True)

    @property
    def enabled(self) -> bool:
        return self.bar is not None

    def start_file(self, file_path: Path) -> None:
        self.started += 1
        if self.bar is not None:
            self.bar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, source_file: SourceFile) -> None:
        if source_file.status == FileStatus.SUCCESS:
            self.converted += 1
            self.rows += source_file.row_count
        else:
            self.failed += 1
        if self.bar is not None:
            self.bar.update(1)
            self.bar.set_description(self.description)
            self.bar.set_postfix(ok=self.converted, failed=self.failed, rows=self.rows)

    def close(self) -> None:
        if self.bar is not None:
            self.bar.close()
            self.bar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
