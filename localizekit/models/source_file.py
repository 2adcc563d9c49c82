from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

"""SourceFile domain model and FileStatus enum for batch conversion.

A SourceFile tracks one table file from discovery through conversion.
State transitions: pending -> (success | failed)
"""


class FileStatus(Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class SourceFile:
    path: Path
    name: str
    kind: str  # "csv" | "excel"
    status: FileStatus = FileStatus.PENDING
    row_count: int = 0
    languages: list[str] = field(default_factory=list)
    outputs: list[Path] = field(default_factory=list)  # written documents
    error: str | None = None  # full error message when failed
    error_kind: str | None = None
