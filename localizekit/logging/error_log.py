from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from localizekit.models.diagnostic import DiagnosticRecord

"""Per-run error log for batch conversion.

Failures are kept in memory while files are converted and written once at the
end of the run as JSON Lines (schema: DiagnosticRecord). The file name carries
the UTC time the buffer was created: ``<logs_dir>/errors-YYYYMMDD-HHMMSS.log``.
A run without failures leaves no file behind.
"""

__all__ = [
    "DiagnosticRecord",
    "ErrorLogBuffer",
]

DEFAULT_LOGS_DIR = Path("logs")
RUN_STAMP_FORMAT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    def __init__(self, logs_dir: Path | None = None) -> None:
        run_stamp = datetime.now(UTC).strftime(RUN_STAMP_FORMAT)
        self.file_path = (logs_dir or DEFAULT_LOGS_DIR) / f"errors-{run_stamp}.log"
        self._pending: list[DiagnosticRecord] = []

    def append(self, record: DiagnosticRecord) -> None:
        self._pending.append(record)

    def extend(self, records: Iterable[DiagnosticRecord]) -> None:
        self._pending.extend(records)

    @property
    def records(self) -> tuple[DiagnosticRecord, ...]:
        return tuple(self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Append pending records to the log file; None when there was nothing to write."""
        if not self._pending:
            return None
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        lines = "".join(f"{record.to_json_line()}\n" for record in self._pending)
        with self.file_path.open("a", encoding="utf-8") as fh:
            fh.write(lines)
        self._pending.clear()
        return self.file_path
