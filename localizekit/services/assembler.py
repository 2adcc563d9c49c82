from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..models.documents import LocaleDocument
from ..models.errors import ParseError
from ..models.flat_entry import FlatEntry
from ..models.header_info import HeaderInfo
from ..models.options import SEPARATORS, ParseOptions
from ..readers.base import cell_text
from .text import process_escape_sequences

"""Key/value assembly: rows -> flat triples -> flat or nested per-language documents.

Steps:
1. collect_entries: trim keys/values, skip empty keys and empty values, decode
   escapes, record which separator-like characters every key uses
2. SeparatorScan.check: any of '.', '/', '-' other than the configured separator
   fails with MIXED_SEPARATORS (first offending row + every unexpected character)
3. build_document: flat (keys verbatim) or nested (split on the separator), then
   recursively sorted by key so output never depends on row order
"""

__all__ = [
    "SeparatorScan",
    "collect_entries",
    "build_flat_document",
    "build_nested_document",
    "build_document",
    "insert_nested",
    "sort_value",
    "sort_document",
]

SEPARATOR_CHARS = frozenset(SEPARATORS)


@dataclass
class SeparatorScan:
    expected: str
    found: set[str] = field(default_factory=set)
    first_offending_row: int | None = None

    def observe(self, key: str, row: int) -> None:
        for ch in key:
            if ch in SEPARATOR_CHARS:
                self.found.add(ch)
                if ch != self.expected and self.first_offending_row is None:
                    self.first_offending_row = row

    @property
    def unexpected(self) -> list[str]:
        return sorted(self.found - {self.expected})

    def check(self) -> None:
        if self.unexpected:
            raise ParseError.mixed_separators(self.unexpected, self.expected, self.first_offending_row)


def collect_entries(
    header: HeaderInfo,
    rows: Iterable[Sequence[Any]],
    options: ParseOptions,
) -> tuple[list[FlatEntry], int, SeparatorScan]:
    """Read every row into FlatEntry triples.

    Returns ``(entries, row_count, scan)``; ``row_count`` counts every row
    produced by the source, including rows whose key is empty.
    """
    entries: list[FlatEntry] = []
    scan = SeparatorScan(expected=options.separator)
    row_count = 0

    for row in rows:
        row_count += 1
        if not row:
            continue
        key = cell_text(row[0]).strip()
        if not key:
            continue
        scan.observe(key, row_count)

        for lang in header.languages:
            idx = header.language_index[lang]
            raw = cell_text(row[idx]).strip() if idx < len(row) else ""
            if not raw:
                continue
            value = process_escape_sequences(raw) if options.process_escapes else raw
            entries.append(FlatEntry(key=key, language=lang, value=value, row=row_count))

    return entries, row_count, scan


def sort_value(value: Any) -> Any:
    """Recursively sort object keys (code point order == UTF-8 byte order)."""
    if isinstance(value, dict):
        return {k: sort_value(value[k]) for k in sorted(value)}
    return value


def sort_document(document: LocaleDocument) -> LocaleDocument:
    return {lang: sort_value(document[lang]) for lang in sorted(document)}


def _first_leaf_key(node: dict[str, Any], prefix: str, separator: str) -> str:
    path = prefix
    while isinstance(node, dict) and node:
        first = min(node)
        path = f"{path}{separator}{first}"
        node = node[first]
    return path


def insert_nested(
    root: dict[str, Any],
    key: str,
    value: Any,
    separator: str,
    row: int | None = None,
) -> None:
    """Insert ``value`` at the path ``key.split(separator)``.

    A path may not run through an existing leaf, and a leaf may not replace an
    existing object; both raise NESTED_KEY_CONFLICT. Re-setting an existing leaf
    overwrites it.
    """
    parts = key.split(separator)
    current = root
    for depth, part in enumerate(parts[:-1]):
        child = current.get(part)
        if child is None:
            child = current[part] = {}
        elif not isinstance(child, dict):
            raise ParseError.nested_key_conflict(separator.join(parts[: depth + 1]), key, row)
        current = child

    leaf = parts[-1]
    existing = current.get(leaf)
    if isinstance(existing, dict):
        raise ParseError.nested_key_conflict(key, _first_leaf_key(existing, key, separator), row)
    current[leaf] = value


def _group_by_language(entries: Iterable[FlatEntry], languages: Sequence[str]) -> dict[str, list[FlatEntry]]:
    grouped: dict[str, list[FlatEntry]] = {lang: [] for lang in languages}
    for entry in entries:
        grouped.setdefault(entry.language, []).append(entry)
    return grouped


def build_flat_document(entries: Iterable[FlatEntry], languages: Sequence[str]) -> LocaleDocument:
    document: LocaleDocument = {}
    for lang, items in _group_by_language(entries, languages).items():
        flat: dict[str, Any] = {}
        for entry in items:
            flat[entry.key] = entry.value  # later rows win
        document[lang] = flat
    return sort_document(document)


def build_nested_document(
    entries: Iterable[FlatEntry], languages: Sequence[str], separator: str
) -> LocaleDocument:
    document: LocaleDocument = {}
    for lang, items in _group_by_language(entries, languages).items():
        root: dict[str, Any] = {}
        for entry in items:
            insert_nested(root, entry.key, entry.value, separator, row=entry.row)
        document[lang] = root
    return sort_document(document)


def build_document(
    entries: Iterable[FlatEntry], languages: Sequence[str], options: ParseOptions
) -> LocaleDocument:
    if options.nested:
        return build_nested_document(entries, languages, options.separator)
    return build_flat_document(entries, languages)
