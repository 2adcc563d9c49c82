from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..logging.sink import DiagnosticSink
from ..models.errors import ParseError
from ..models.header_info import HeaderInfo
from .lang_codes import is_known_lang_code, normalize_lang_code, warn_unknown_lang_code

"""Header validation: column 0 must be 'key', the rest are distinct language codes."""

__all__ = [
    "KEY_COLUMN",
    "validate_header",
]

KEY_COLUMN = "key"


def _label(cell: Any) -> str:
    return "" if cell is None else str(cell).strip()


def validate_header(headers: Sequence[Any], sink: DiagnosticSink | None = None) -> HeaderInfo:
    """Validate a header row and build the language -> column index map.

    Raises:
        ParseError: EMPTY_DATA for an empty row, INVALID_KEY_COLUMN when column 0
            is not 'key' (case-insensitive), DUPLICATE_LANGUAGE when two columns
            normalize to the same code, NO_LANGUAGE_COLUMNS when every remaining
            column is blank.
    """
    if not headers:
        raise ParseError.empty_data()

    first = _label(headers[0])
    if first.lower() != KEY_COLUMN:
        raise ParseError.invalid_key_column(first)

    info = HeaderInfo(valid_key_column=True)

    for idx in range(1, len(headers)):
        raw = _label(headers[idx])
        if not raw:
            continue
        code = normalize_lang_code(raw)
        if code in info.language_index:
            raise ParseError.duplicate_language(
                code, column=idx + 1, label=raw, first_column=info.language_index[code] + 1
            )
        if not is_known_lang_code(code):
            warn_unknown_lang_code(code, sink)
        info.language_index[code] = idx
        info.languages.append(code)

    if not info.languages:
        raise ParseError.no_language_columns()

    return info
