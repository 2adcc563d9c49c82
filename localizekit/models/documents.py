from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import ParseError

"""Document-level models for both conversion directions.

Forward:  table -> ParseResult (languages, per-language document, raw row count)
Inverse:  LangJsonInput[] -> TableData (header + rows)
"""

__all__ = [
    "LocaleDocument",
    "ParseResult",
    "TableData",
    "LangJsonInput",
]

# language code -> flat ({key: str}) or nested ({segment: str | dict}) document
LocaleDocument = dict[str, dict[str, Any]]


@dataclass(frozen=True)
class ParseResult:
    languages: list[str]  # header order
    data: LocaleDocument  # languages and keys byte-order sorted
    row_count: int  # every data row read, empty-keyed rows included

    def to_dict(self) -> dict[str, Any]:
        return {
            "languages": list(self.languages),
            "data": self.data,
            "row_count": self.row_count,
        }


@dataclass(frozen=True)
class TableData:
    header: list[str]  # "key" + languages
    rows: list[list[str]]  # one row per key, sorted by key

    def to_dict(self) -> dict[str, Any]:
        return {"header": list(self.header), "rows": [list(r) for r in self.rows]}


@dataclass(frozen=True)
class LangJsonInput:
    language: str
    content: str  # JSON text of one language document

    @classmethod
    def from_dict(cls, raw: Any) -> LangJsonInput:
        """Build from ``{"language"|"lang": ..., "content"|"data": ...}``."""
        if not isinstance(raw, dict):
            raise ParseError.json_parse_error("inputs", "each input must be an object")
        language = raw.get("language", raw.get("lang"))
        content = raw.get("content", raw.get("data"))
        if not isinstance(language, str):
            raise ParseError.json_parse_error("inputs", "missing field `language`")
        if not isinstance(content, str):
            raise ParseError.json_parse_error("inputs", "missing field `content`")
        return cls(language=language, content=content)
