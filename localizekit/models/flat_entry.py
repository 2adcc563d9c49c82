from __future__ import annotations

from dataclasses import dataclass

"""FlatEntry model: one (key, language, value) triple read from a table row."""

__all__ = [
    "FlatEntry",
]


@dataclass(frozen=True)
class FlatEntry:
    key: str  # trimmed, separators still embedded
    language: str  # normalized language code
    value: str  # trimmed, escapes decoded when enabled; never empty
    row: int  # data row number (header = 0)
