from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import ParseError

"""Parse option dataclasses.

ParseOptions is immutable and validated on construction: the separator is the only
character used both for separator-consistency detection and for nested splitting.
"""

__all__ = [
    "SEPARATORS",
    "OutputFormat",
    "ParseOptions",
    "validate_separator",
]

SEPARATORS: tuple[str, ...] = (".", "/", "-")


class OutputFormat(Enum):
    """Final serialization format. I18N is declared but not implemented."""
    JSON = "json"
    YAML = "yaml"
    I18N = "i18n"

    @classmethod
    def parse(cls, value: str | OutputFormat) -> OutputFormat:
        if isinstance(value, OutputFormat):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            raise ParseError.unknown(f"Unsupported output format '{value}'").with_suggestion(
                "Use one of: json, yaml"
            ) from e

    @property
    def extension(self) -> str:
        return {"json": "json", "yaml": "yaml", "i18n": "json"}[self.value]


def validate_separator(separator: str) -> str:
    if separator not in SEPARATORS:
        raise ParseError.unknown(f"Unsupported key separator '{separator}'").with_suggestion(
            "Use one of '.', '/', '-'"
        )
    return separator


@dataclass(frozen=True)
class ParseOptions:
    separator: str = "."
    nested: bool = True  # False -> flat key/value document per language
    output_format: OutputFormat = OutputFormat.JSON
    process_escapes: bool = True  # decode \n, \t, ... into real characters

    def __post_init__(self) -> None:
        validate_separator(self.separator)
