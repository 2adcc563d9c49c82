from __future__ import annotations

import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

"""Structured error model shared by every parsing component.

Every failure carries a kind (rendered UPPER_SNAKE), a human message, an optional
location (row / column / column name / key) and an optional suggestion. Errors are
raised as exceptions but behave as immutable values: the builder methods return a
new ParseError instead of mutating the receiver.

Location numbering:
    row    - stored 0-based with the header as row 0; rendered +1 (spreadsheet line)
    column - stored 1-based (key column = 1); rendered unchanged
"""

__all__ = [
    "ErrorKind",
    "ErrorLocation",
    "ParseError",
]


class ErrorKind(Enum):
    """Error classification. Values are the external UPPER_SNAKE names."""

    # Header errors
    EMPTY_DATA = "EMPTY_DATA"
    INVALID_KEY_COLUMN = "INVALID_KEY_COLUMN"
    NO_LANGUAGE_COLUMNS = "NO_LANGUAGE_COLUMNS"
    DUPLICATE_LANGUAGE = "DUPLICATE_LANGUAGE"
    MIXED_SEPARATORS = "MIXED_SEPARATORS"

    # CSV source
    CSV_PARSE_ERROR = "CSV_PARSE_ERROR"
    UTF8_ERROR = "UTF8_ERROR"

    # Excel source
    EXCEL_OPEN_ERROR = "EXCEL_OPEN_ERROR"
    EMPTY_WORKBOOK = "EMPTY_WORKBOOK"
    EMPTY_SHEET = "EMPTY_SHEET"
    WORKSHEET_READ_ERROR = "WORKSHEET_READ_ERROR"

    # Data validation (lint)
    DUPLICATE_KEY = "DUPLICATE_KEY"
    INVALID_KEY_FORMAT = "INVALID_KEY_FORMAT"
    MISSING_TRANSLATION = "MISSING_TRANSLATION"
    COLUMN_COUNT_MISMATCH = "COLUMN_COUNT_MISMATCH"
    PLACEHOLDER_MISMATCH = "PLACEHOLDER_MISMATCH"

    # Conversion / format boundary
    NESTED_KEY_CONFLICT = "NESTED_KEY_CONFLICT"
    JSON_PARSE_ERROR = "JSON_PARSE_ERROR"
    JSON_SERIALIZE_ERROR = "JSON_SERIALIZE_ERROR"
    YAML_SERIALIZE_ERROR = "YAML_SERIALIZE_ERROR"

    IO_ERROR = "IO_ERROR"
    UNKNOWN = "UNKNOWN_ERROR"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ErrorLocation:
    row: int | None = None  # 0-based, header = 0
    column: int | None = None  # 1-based
    column_name: str | None = None
    key: str | None = None

    def describe(self) -> str:
        parts: list[str] = []
        if self.row is not None:
            parts.append(f"row {self.row + 1}")
        if self.column is not None:
            if self.column_name is not None:
                parts.append(f"column {self.column} ('{self.column_name}')")
            else:
                parts.append(f"column {self.column}")
        if self.key is not None:
            parts.append(f"key '{self.key}'")
        return ", ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "row": self.row + 1 if self.row is not None else None,
            "column": self.column,
            "columnName": self.column_name,
            "key": self.key,
        }


class ParseError(Exception):
    """Single structured failure value for all parsing / conversion operations."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        location: ErrorLocation | None = None,
        suggestion: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.location = location
        self.suggestion = suggestion

    # ------------------------------------------------------------------
    # builder-style updates (always return a new instance)
    # ------------------------------------------------------------------
    def _replace(self, **changes: Any) -> ParseError:
        fields: dict[str, Any] = {
            "kind": self.kind,
            "message": self.message,
            "location": self.location,
            "suggestion": self.suggestion,
        }
        fields.update(changes)
        return ParseError(**fields)

    def _location(self) -> ErrorLocation:
        return self.location if self.location is not None else ErrorLocation()

    def with_location(self, location: ErrorLocation) -> ParseError:
        return self._replace(location=location)

    def with_suggestion(self, suggestion: str) -> ParseError:
        return self._replace(suggestion=suggestion)

    def at_row(self, row: int) -> ParseError:
        return self._replace(location=replace(self._location(), row=row))

    def at_column(self, column: int, name: str | None = None) -> ParseError:
        return self._replace(location=replace(self._location(), column=column, column_name=name))

    def with_key(self, key: str) -> ParseError:
        return self._replace(location=replace(self._location(), key=key))

    # ------------------------------------------------------------------
    # rendering
    # ------------------------------------------------------------------
    @property
    def full_message(self) -> str:
        text = f"[{self.kind}] {self.message}"
        if self.location is not None:
            where = self.location.describe()
            if where:
                text += f" at {where}"
        if self.suggestion is not None:
            text += f". Suggestion: {self.suggestion}"
        return text

    def __str__(self) -> str:
        return self.full_message

    def __repr__(self) -> str:
        return f"ParseError(kind={self.kind.name}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """External error shape (row rendered 1-based)."""
        return {
            "error": True,
            "kind": str(self.kind),
            "message": self.message,
            "location": self.location.to_dict() if self.location is not None else None,
            "suggestion": self.suggestion,
            "fullMessage": self.full_message,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    # ------------------------------------------------------------------
    # constructors for common failures
    # ------------------------------------------------------------------
    @classmethod
    def empty_data(cls) -> ParseError:
        return cls(ErrorKind.EMPTY_DATA, "The input data is empty").with_suggestion(
            "Provide a CSV or Excel file with at least a header row and one data row"
        )

    @classmethod
    def invalid_key_column(cls, found: str) -> ParseError:
        return cls(
            ErrorKind.INVALID_KEY_COLUMN,
            f"Invalid header: first column must be 'key', but found '{found}'",
            location=ErrorLocation(row=0, column=1, column_name=found),
            suggestion="Rename the first column to 'key' (case-insensitive)",
        )

    @classmethod
    def no_language_columns(cls) -> ParseError:
        return cls(
            ErrorKind.NO_LANGUAGE_COLUMNS,
            "No language columns found in header",
            location=ErrorLocation(row=0),
            suggestion="Add language columns after 'key' column (e.g., 'en', 'ko', 'ja')",
        )

    @classmethod
    def duplicate_language(cls, code: str, column: int, label: str, first_column: int) -> ParseError:
        return cls(
            ErrorKind.DUPLICATE_LANGUAGE,
            f"Duplicate language column '{code}' (first defined in column {first_column})",
            location=ErrorLocation(row=0, column=column, column_name=label),
            suggestion="Keep a single column per language code",
        )

    @classmethod
    def mixed_separators(cls, found: list[str], expected: str, row: int | None) -> ParseError:
        separators = sorted(set(found))
        msg = f"Mixed key separators found: expected '{expected}', but found: {', '.join(separators)}"
        if row is not None:
            msg = f"{msg} (row {row})"
        return cls(
            ErrorKind.MIXED_SEPARATORS,
            msg,
            location=ErrorLocation(row=row, column=1, column_name="key"),
            suggestion="Use a single separator consistently ('.', '/', or '-')",
        )

    @classmethod
    def column_count_mismatch(cls, row: int, expected: int, found: int) -> ParseError:
        return cls(
            ErrorKind.COLUMN_COUNT_MISMATCH,
            f"Column count mismatch: expected {expected} columns (from header), "
            f"but found {found} (row {row})",
            location=ErrorLocation(row=row),
            suggestion="Ensure each row has the same number of columns as the header",
        )

    @classmethod
    def csv_parse_error(cls, details: str, row: int | None = None) -> ParseError:
        msg = f"CSV parsing error: {details}"
        if row is not None:
            msg = f"{msg} (row {row})"
        return cls(
            ErrorKind.CSV_PARSE_ERROR,
            msg,
            location=ErrorLocation(row=row) if row is not None else None,
            suggestion="Check for unescaped quotes, mismatched columns, or invalid CSV format",
        )

    @classmethod
    def utf8_error(cls, position: int) -> ParseError:
        return cls(
            ErrorKind.UTF8_ERROR,
            f"Invalid UTF-8 encoding at byte {position}",
            suggestion="Ensure the file is saved with UTF-8 encoding",
        )

    @classmethod
    def excel_open_error(cls, details: str) -> ParseError:
        return cls(
            ErrorKind.EXCEL_OPEN_ERROR,
            f"Failed to open Excel file: {details}",
            suggestion="Ensure the file is a valid .xlsx or .xls file and is not corrupted",
        )

    @classmethod
    def empty_workbook(cls) -> ParseError:
        return cls(ErrorKind.EMPTY_WORKBOOK, "Excel workbook has no sheets").with_suggestion(
            "Add at least one sheet with translation data"
        )

    @classmethod
    def empty_sheet(cls) -> ParseError:
        return cls(ErrorKind.EMPTY_SHEET, "Excel sheet is empty").with_suggestion(
            "Add header row and data rows to the sheet"
        )

    @classmethod
    def worksheet_read_error(cls, sheet_name: str, details: str) -> ParseError:
        return cls(
            ErrorKind.WORKSHEET_READ_ERROR,
            f"Failed to read worksheet '{sheet_name}': {details}",
        )

    @classmethod
    def duplicate_key(cls, key: str, first_row: int, duplicate_row: int) -> ParseError:
        return cls(
            ErrorKind.DUPLICATE_KEY,
            f"Duplicate key '{key}' found at row {duplicate_row} "
            f"(first occurrence at row {first_row})",
            location=ErrorLocation(row=duplicate_row, key=key),
            suggestion="Remove or rename the duplicate key",
        )

    @classmethod
    def invalid_key_format(cls, key: str, row: int, reason: str) -> ParseError:
        return cls(
            ErrorKind.INVALID_KEY_FORMAT,
            f"Invalid key '{key}' at row {row}: {reason}",
            location=ErrorLocation(row=row, key=key),
        )

    @classmethod
    def missing_translation(cls, key: str, language: str, row: int, column: int) -> ParseError:
        return cls(
            ErrorKind.MISSING_TRANSLATION,
            f"Missing translation for key '{key}' in language '{language}' at row {row}",
            location=ErrorLocation(row=row, column=column, column_name=language, key=key),
        )

    @classmethod
    def placeholder_mismatch(
        cls, key: str, language: str, row: int, expected: list[str], found: list[str]
    ) -> ParseError:
        return cls(
            ErrorKind.PLACEHOLDER_MISMATCH,
            f"Placeholders of '{language}' for key '{key}' differ: "
            f"expected [{', '.join(expected)}], found [{', '.join(found)}]",
            location=ErrorLocation(row=row, column_name=language, key=key),
            suggestion="Keep the same variables in every translation of a key",
        )

    @classmethod
    def nested_key_conflict(cls, key1: str, key2: str, row: int | None = None) -> ParseError:
        return cls(
            ErrorKind.NESTED_KEY_CONFLICT,
            f"Nested key conflict: '{key1}' and '{key2}' cannot coexist "
            "(one is a prefix of the other)",
            location=ErrorLocation(row=row, key=key2),
            suggestion="Rename one of the keys to avoid the conflict",
        )

    @classmethod
    def json_parse_error(cls, language: str, details: str) -> ParseError:
        return cls(
            ErrorKind.JSON_PARSE_ERROR,
            f"Failed to parse JSON for '{language}': {details}",
            suggestion="Check that the content is valid JSON",
        )

    @classmethod
    def invalid_json_root(cls, language: str) -> ParseError:
        return cls(
            ErrorKind.JSON_PARSE_ERROR,
            f"JSON root for '{language}' must be an object",
            suggestion="Wrap translations in a top-level JSON object",
        )

    @classmethod
    def json_serialize_error(cls, details: str) -> ParseError:
        return cls(ErrorKind.JSON_SERIALIZE_ERROR, f"Failed to serialize to JSON: {details}")

    @classmethod
    def yaml_serialize_error(cls, details: str) -> ParseError:
        return cls(ErrorKind.YAML_SERIALIZE_ERROR, f"Failed to serialize to YAML: {details}")

    @classmethod
    def io_error(cls, details: str) -> ParseError:
        return cls(ErrorKind.IO_ERROR, f"IO error: {details}")

    @classmethod
    def unknown(cls, message: str) -> ParseError:
        return cls(ErrorKind.UNKNOWN, message)
