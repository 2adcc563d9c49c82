from __future__ import annotations

import logging

from ..logging.sink import DiagnosticSink
from ..models.documents import ParseResult
from ..models.options import ParseOptions, validate_separator
from ..readers.base import RowSource, cell_text
from ..readers.csv_reader import CsvRowSource, rows_to_csv
from ..readers.excel_reader import ExcelRowSource
from .assembler import SEPARATOR_CHARS, build_document, collect_entries
from .header import validate_header

"""Table parsing entry points.

Control flow: RowSource -> validate_header -> collect_entries (+ escape decoding)
-> separator check -> build_document -> ParseResult. CSV and Excel differ only in
the RowSource they hand to parse_table.
"""

__all__ = [
    "parse_table",
    "parse_csv",
    "parse_excel",
    "get_csv_languages",
    "get_excel_languages",
    "excel_to_csv",
    "rewrite_key_separator_in_csv",
]

logger = logging.getLogger(__name__)


def parse_table(
    source: RowSource,
    options: ParseOptions | None = None,
    sink: DiagnosticSink | None = None,
) -> ParseResult:
    """Convert a table source into per-language documents.

    Raises:
        ParseError: header, source, separator or nested-structure failures
    """
    options = options or ParseOptions()
    header = validate_header(source.header(), sink)
    logger.debug(f"header languages={header.languages}")

    entries, row_count, scan = collect_entries(header, source.rows(), options)
    scan.check()

    data = build_document(entries, header.languages, options)
    logger.debug(f"parsed rows={row_count} entries={len(entries)} nested={options.nested}")
    return ParseResult(languages=list(header.languages), data=data, row_count=row_count)


def parse_csv(
    data: bytes | str,
    options: ParseOptions | None = None,
    sink: DiagnosticSink | None = None,
) -> ParseResult:
    return parse_table(CsvRowSource(data), options, sink)


def parse_excel(
    data: bytes,
    options: ParseOptions | None = None,
    sink: DiagnosticSink | None = None,
) -> ParseResult:
    return parse_table(ExcelRowSource(data), options, sink)


def get_csv_languages(data: bytes | str, sink: DiagnosticSink | None = None) -> list[str]:
    """Validate only the header and return its normalized languages."""
    return validate_header(CsvRowSource(data).header(), sink).languages


def get_excel_languages(data: bytes, sink: DiagnosticSink | None = None) -> list[str]:
    return validate_header(ExcelRowSource(data).header(), sink).languages


def excel_to_csv(data: bytes) -> str:
    """Render the first sheet of a workbook as CSV text, header included."""
    source = ExcelRowSource(data)
    records = [source.header()]
    records.extend(source.rows())
    return rows_to_csv(records)


def rewrite_key_separator_in_csv(csv_text: str, target_sep: str) -> str:
    """Replace every '.', '/', '-' of the key column with ``target_sep``.

    The header row is kept verbatim; only column 0 of data rows changes.
    """
    validate_separator(target_sep)
    source = CsvRowSource(csv_text)
    records = [source.header()]
    for row in source.rows():
        key = "".join(target_sep if ch in SEPARATOR_CHARS else ch for ch in cell_text(row[0]))
        records.append([key, *row[1:]])
    return rows_to_csv(records)
