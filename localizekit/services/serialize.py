from __future__ import annotations

import json
from typing import Any

import yaml

from ..models.documents import ParseResult
from ..models.errors import ParseError
from ..models.options import OutputFormat

"""Structured-value serialization (JSON / YAML) for results and documents."""

__all__ = [
    "serialize",
    "serialize_result",
]


def serialize(value: Any, output_format: OutputFormat | str = OutputFormat.JSON, indent: int | None = None) -> str:
    """Serialize a JSON-compatible value.

    Non-ASCII text is written as-is and key order is preserved (documents are
    already sorted). ``indent`` only affects JSON.

    Raises:
        ParseError: JSON_SERIALIZE_ERROR / YAML_SERIALIZE_ERROR, or UNKNOWN for
            the unimplemented i18n format
    """
    fmt = OutputFormat.parse(output_format)
    if fmt is OutputFormat.JSON:
        try:
            return json.dumps(value, ensure_ascii=False, indent=indent)
        except (TypeError, ValueError) as e:
            raise ParseError.json_serialize_error(str(e)) from e
    if fmt is OutputFormat.YAML:
        try:
            return yaml.safe_dump(value, allow_unicode=True, sort_keys=False, default_flow_style=False)
        except yaml.YAMLError as e:
            raise ParseError.yaml_serialize_error(str(e)) from e
    raise ParseError.unknown("i18n format is not implemented yet")


def serialize_result(result: ParseResult, output_format: OutputFormat | str = OutputFormat.JSON, indent: int | None = None) -> str:
    return serialize(result.to_dict(), output_format, indent=indent)
