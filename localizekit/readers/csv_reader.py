from __future__ import annotations

import codecs
import csv
import io
from collections.abc import Iterator

from ..models.errors import ParseError

"""CSV row source.

Bytes are decoded as strict UTF-8 (a leading BOM is dropped), then tokenized with
the stdlib csv reader: quoted fields, embedded newlines and records of any length
are accepted. Lines without any field are skipped.
"""

__all__ = [
    "CsvRowSource",
    "decode_utf8",
    "rows_to_csv",
]


def decode_utf8(data: bytes) -> str:
    """Decode UTF-8 bytes, mapping failures to UTF8_ERROR with the byte offset."""
    offset = 0
    if data.startswith(codecs.BOM_UTF8):
        offset = len(codecs.BOM_UTF8)
    try:
        return data[offset:].decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError.utf8_error(offset + e.start) from e


class CsvRowSource:
    def __init__(self, data: bytes | str, *, delimiter: str = ",") -> None:
        self.text = data if isinstance(data, str) else decode_utf8(data)
        self._reader = csv.reader(io.StringIO(self.text, newline=""), delimiter=delimiter, strict=True)
        self._header: list[str] | None = None

    def _next_record(self) -> list[str] | None:
        while True:
            try:
                record = next(self._reader)
            except StopIteration:
                return None
            except csv.Error as e:
                # line_num counts physical lines; header line = row 0
                raise ParseError.csv_parse_error(str(e), max(self._reader.line_num - 1, 0)) from e
            if record:
                return record

    def header(self) -> list[str]:
        if self._header is None:
            record = self._next_record()
            if record is None:
                raise ParseError.empty_data()
            self._header = record
        return self._header

    def rows(self) -> Iterator[list[str]]:
        self.header()
        while True:
            record = self._next_record()
            if record is None:
                return
            yield record


def rows_to_csv(rows: Iterator[list[str]] | list[list[str]]) -> str:
    """Render records as CSV text (minimal quoting, '\\n' line endings)."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    for record in rows:
        writer.writerow(record)
    return buf.getvalue()
