from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""DiagnosticRecord model for the JSON Lines error log.

Fixed schema: timestamp, file, row, error_type, message. ``row`` is the 1-based
spreadsheet line; -1 marks file-level failures where no row is known.
"""

__all__ = [
    "DiagnosticRecord",
]


@dataclass(frozen=True)
class DiagnosticRecord:
    timestamp: str  # ISO8601 UTC
    file: str
    row: int  # -1 when unknown
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, row: int, error_type: str, message: str) -> DiagnosticRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return DiagnosticRecord(
            timestamp=ts,
            file=file,
            row=row,
            error_type=error_type,
            message=message,
        )

    @staticmethod
    def from_error(file: str, error) -> DiagnosticRecord:
        """Build from a ParseError, rendering its row 1-based."""
        row = -1
        if error.location is not None and error.location.row is not None:
            row = error.location.row + 1
        return DiagnosticRecord.create(file, row, str(error.kind), error.full_message)

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
