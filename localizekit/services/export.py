from __future__ import annotations

import io
import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

import pandas as pd

from ..models.documents import LangJsonInput, TableData
from ..models.errors import ParseError
from ..models.options import validate_separator
from ..readers.csv_reader import rows_to_csv
from .assembler import insert_nested, sort_value
from .lang_codes import normalize_lang_code

"""Inverse path: per-language JSON documents -> flat keys -> one merged table.

Missing translations become empty cells; rows follow the byte-order-sorted union
of keys over all languages; columns follow the input language order.
"""

__all__ = [
    "EXCEL_SHEET_NAME",
    "flatten_document",
    "unflatten",
    "value_to_cell",
    "parse_lang_json_inputs",
    "merge_jsons_to_table",
    "merge_jsons_to_csv",
    "table_to_csv",
    "table_to_excel",
]

logger = logging.getLogger(__name__)

EXCEL_SHEET_NAME = "translations"


def _flatten_into(prefix: str, value: Any, separator: str, out: dict[str, Any]) -> None:
    if isinstance(value, Mapping):
        for k, v in value.items():
            next_prefix = str(k) if not prefix else f"{prefix}{separator}{k}"
            _flatten_into(next_prefix, v, separator, out)
    else:
        out[prefix] = value


def flatten_document(document: Mapping[str, Any], separator: str = ".") -> dict[str, Any]:
    """Flatten a nested document into ``{flat_key: leaf}`` sorted by key.

    Empty objects contribute no key. Leaves are returned as-is; use
    ``value_to_cell`` for their text form.
    """
    out: dict[str, Any] = {}
    _flatten_into("", document, separator, out)
    return {k: out[k] for k in sorted(out)}


def unflatten(flat: Mapping[str, Any], separator: str = ".") -> dict[str, Any]:
    """Rebuild a nested document from flat keys (inverse of ``flatten_document``)."""
    root: dict[str, Any] = {}
    for key in sorted(flat):
        insert_nested(root, key, flat[key], separator)
    return sort_value(root)


def value_to_cell(value: Any) -> str:
    """Text form of a JSON leaf: null -> "", strings verbatim, others as JSON text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def parse_lang_json_inputs(text: str) -> list[LangJsonInput]:
    """Parse ``[{"language": ..., "content": ...}, ...]`` (aliases: lang, data)."""
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError.json_parse_error("inputs", str(e)) from e
    if not isinstance(raw, list):
        raise ParseError.json_parse_error("inputs", "expected a JSON array of inputs")
    return [LangJsonInput.from_dict(item) for item in raw]


def merge_jsons_to_table(inputs: Sequence[LangJsonInput], separator: str = ".") -> TableData:
    """Merge per-language JSON documents into one key/language table.

    Raises:
        ParseError: EMPTY_DATA (no inputs), UNKNOWN (language supplied twice),
            JSON_PARSE_ERROR (malformed JSON or non-object root)
    """
    validate_separator(separator)
    if not inputs:
        raise ParseError.empty_data().with_suggestion(
            "Provide at least one JSON input with language and content"
        )

    languages: list[str] = []
    lang_data: dict[str, dict[str, Any]] = {}

    for item in inputs:
        lang = normalize_lang_code(item.language.strip())
        if lang in lang_data:
            raise ParseError.unknown(f"Duplicate language provided: '{lang}'").with_suggestion(
                "Provide each language only once"
            )
        try:
            value = json.loads(item.content)
        except json.JSONDecodeError as e:
            raise ParseError.json_parse_error(item.language, str(e)) from e
        if not isinstance(value, dict):
            raise ParseError.invalid_json_root(item.language)

        languages.append(lang)
        lang_data[lang] = flatten_document(value, separator)

    all_keys = sorted({key for flat in lang_data.values() for key in flat})
    rows: list[list[str]] = []
    for key in all_keys:
        row = [key]
        for lang in languages:
            flat = lang_data[lang]
            row.append(value_to_cell(flat[key]) if key in flat else "")
        rows.append(row)

    logger.debug(f"merged languages={languages} keys={len(all_keys)}")
    return TableData(header=["key", *languages], rows=rows)


def table_to_csv(table: TableData) -> str:
    return rows_to_csv([table.header, *table.rows])


def merge_jsons_to_csv(inputs: Sequence[LangJsonInput], separator: str = ".") -> str:
    return table_to_csv(merge_jsons_to_table(inputs, separator))


def table_to_excel(table: TableData, sheet_name: str = EXCEL_SHEET_NAME) -> bytes:
    """Render a table as .xlsx bytes (header in row 1)."""
    df = pd.DataFrame(table.rows, columns=table.header, dtype=object)
    buf = io.BytesIO()
    try:
        with pd.ExcelWriter(buf, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    except (OSError, ValueError) as e:
        raise ParseError.io_error(f"failed to write Excel workbook: {e}") from e
    return buf.getvalue()
