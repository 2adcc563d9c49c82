from __future__ import annotations

import logging
from collections.abc import Mapping

from ..logging.sink import DiagnosticSink
from ..models.errors import ParseError
from ..models.header_info import HeaderInfo
from ..models.options import ParseOptions
from ..readers.base import RowSource, cell_text
from .assembler import SEPARATOR_CHARS
from .header import validate_header
from .text import extract_variables

"""Strict table validation (lint).

Unlike parse_table, data problems are collected instead of raised so that one run
reports everything: duplicate keys, missing translations, ragged rows, malformed
keys, mixed separators, leaf/branch conflicts and placeholder drift between
languages. Header problems still raise.
"""

__all__ = [
    "lint_table",
]

logger = logging.getLogger(__name__)


def _key_format_findings(key: str, row: int, separator: str) -> list[ParseError]:
    findings: list[ParseError] = []
    unexpected = sorted({ch for ch in key if ch in SEPARATOR_CHARS and ch != separator})
    if unexpected:
        findings.append(ParseError.mixed_separators(unexpected, separator, row).with_key(key))
    if "" in key.split(separator):
        findings.append(ParseError.invalid_key_format(key, row, "empty path segment"))
    return findings


def _placeholder_findings(
    key: str, row: int, values: Mapping[str, str], header: HeaderInfo
) -> list[ParseError]:
    reference_lang: str | None = None
    reference: list[str] = []
    findings: list[ParseError] = []
    for lang in header.languages:
        if lang not in values:
            continue
        found = sorted(v.full_match for v in extract_variables(values[lang]))
        if reference_lang is None:
            reference_lang, reference = lang, found
        elif found != reference:
            findings.append(ParseError.placeholder_mismatch(key, lang, row, reference, found))
    return findings


def _conflict_findings(first_rows: Mapping[str, int], separator: str) -> list[ParseError]:
    findings: list[ParseError] = []
    for key in sorted(first_rows):
        parts = key.split(separator)
        for depth in range(1, len(parts)):
            prefix = separator.join(parts[:depth])
            if prefix in first_rows:
                findings.append(ParseError.nested_key_conflict(prefix, key, first_rows[key]))
    return findings


def lint_table(
    source: RowSource,
    options: ParseOptions | None = None,
    sink: DiagnosticSink | None = None,
) -> list[ParseError]:
    """Return every data finding of a table, in row order (conflicts last)."""
    options = options or ParseOptions()
    header_row = source.header()
    header = validate_header(header_row, sink)
    width = len(header_row)

    findings: list[ParseError] = []
    first_rows: dict[str, int] = {}
    row_index = 0

    for row in source.rows():
        row_index += 1
        if len(row) != width:
            findings.append(ParseError.column_count_mismatch(row_index, width, len(row)))
        key = cell_text(row[0]).strip() if row else ""
        if not key:
            continue

        if key in first_rows:
            findings.append(ParseError.duplicate_key(key, first_rows[key], row_index))
        else:
            first_rows[key] = row_index
        findings.extend(_key_format_findings(key, row_index, options.separator))

        values: dict[str, str] = {}
        for lang in header.languages:
            idx = header.language_index[lang]
            raw = cell_text(row[idx]).strip() if idx < len(row) else ""
            if raw:
                values[lang] = raw
            else:
                findings.append(ParseError.missing_translation(key, lang, row_index, idx + 1))
        findings.extend(_placeholder_findings(key, row_index, values, header))

    if options.nested:
        findings.extend(_conflict_findings(first_rows, options.separator))

    logger.debug(f"lint rows={row_index} findings={len(findings)}")
    return findings
