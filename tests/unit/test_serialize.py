from __future__ import annotations

import json

import pytest
import yaml

from localizekit.models.documents import ParseResult
from localizekit.models.errors import ErrorKind, ParseError
from localizekit.models.options import OutputFormat
from localizekit.services.serialize import serialize, serialize_result


def test_json_keeps_non_ascii():
    assert serialize({"a": "안녕"}) == '{"a": "안녕"}'


def test_json_indent():
    assert serialize({"a": "b"}, OutputFormat.JSON, indent=2) == '{\n  "a": "b"\n}'


def test_yaml_preserves_key_order():
    assert serialize({"b": "x", "a": "안녕"}, "yaml") == "b: x\na: 안녕\n"


def test_format_accepts_strings():
    assert serialize({"a": 1}, "JSON") == '{"a": 1}'


def test_i18n_not_implemented():
    with pytest.raises(ParseError) as e:
        serialize({}, OutputFormat.I18N)
    assert e.value.kind is ErrorKind.UNKNOWN
    assert "not implemented" in e.value.message


def test_unknown_format_rejected():
    with pytest.raises(ParseError) as e:
        serialize({}, "toml")
    assert e.value.kind is ErrorKind.UNKNOWN


def test_json_serialize_error():
    with pytest.raises(ParseError) as e:
        serialize({"a": {1, 2}})
    assert e.value.kind is ErrorKind.JSON_SERIALIZE_ERROR


def test_yaml_serialize_error():
    with pytest.raises(ParseError) as e:
        serialize({"a": object()}, OutputFormat.YAML)
    assert e.value.kind is ErrorKind.YAML_SERIALIZE_ERROR


def test_serialize_result_shape():
    result = ParseResult(languages=["en"], data={"en": {"a": "A"}}, row_count=1)
    assert json.loads(serialize_result(result)) == {
        "languages": ["en"],
        "data": {"en": {"a": "A"}},
        "row_count": 1,
    }
    assert yaml.safe_load(serialize_result(result, "yaml"))["row_count"] == 1


def test_output_format_extension():
    assert OutputFormat.JSON.extension == "json"
    assert OutputFormat.YAML.extension == "yaml"
    assert OutputFormat.parse(" Yaml ") is OutputFormat.YAML
