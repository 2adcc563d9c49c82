"""Localization table normalization toolkit.

Converts key/language tables (CSV or Excel) into per-language nested documents and
merges per-language JSON documents back into a flat table.
"""

from .models.documents import LangJsonInput, ParseResult, TableData
from .models.errors import ErrorKind, ErrorLocation, ParseError
from .models.options import OutputFormat, ParseOptions
from .services.export import (
    flatten_document,
    merge_jsons_to_csv,
    merge_jsons_to_table,
    parse_lang_json_inputs,
    table_to_excel,
    unflatten,
)
from .services.lint import lint_table
from .services.parser import (
    excel_to_csv,
    get_csv_languages,
    get_excel_languages,
    parse_csv,
    parse_excel,
    parse_table,
    rewrite_key_separator_in_csv,
)
from .services.serialize import serialize_result
from .services.text import StringAnalysis, analyze_string

__version__ = "0.1.0"

__all__ = [
    "ErrorKind",
    "ErrorLocation",
    "LangJsonInput",
    "OutputFormat",
    "ParseError",
    "ParseOptions",
    "ParseResult",
    "StringAnalysis",
    "TableData",
    "analyze_string",
    "excel_to_csv",
    "flatten_document",
    "get_csv_languages",
    "get_excel_languages",
    "lint_table",
    "merge_jsons_to_csv",
    "merge_jsons_to_table",
    "parse_csv",
    "parse_excel",
    "parse_lang_json_inputs",
    "parse_table",
    "rewrite_key_separator_in_csv",
    "serialize_result",
    "table_to_excel",
    "unflatten",
]
