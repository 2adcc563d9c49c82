from __future__ import annotations

import pytest

from localizekit.models.errors import ErrorKind, ParseError
from localizekit.models.options import ParseOptions
from localizekit.readers import CsvRowSource
from localizekit.services.lint import lint_table


def _lint(text: str, options: ParseOptions | None = None) -> list[ParseError]:
    return lint_table(CsvRowSource(text), options)


def _kinds(findings: list[ParseError]) -> list[ErrorKind]:
    return [f.kind for f in findings]


def test_clean_table_has_no_findings(sample_csv):
    assert _lint(sample_csv) == []


def test_duplicate_key():
    findings = _lint("key,en\na,1\nb,2\na,3\n")
    assert _kinds(findings) == [ErrorKind.DUPLICATE_KEY]
    assert findings[0].location.row == 3
    assert "first occurrence at row 1" in findings[0].message


def test_missing_translation():
    findings = _lint("key,en,ko\na,Hello,\n")
    assert _kinds(findings) == [ErrorKind.MISSING_TRANSLATION]
    loc = findings[0].location
    assert (loc.row, loc.column, loc.column_name, loc.key) == (1, 3, "ko", "a")


def test_column_count_mismatch():
    findings = _lint("key,en,ko\na,x\nb,y,z,extra\n")
    assert _kinds(findings) == [
        ErrorKind.COLUMN_COUNT_MISMATCH,
        ErrorKind.MISSING_TRANSLATION,
        ErrorKind.COLUMN_COUNT_MISMATCH,
    ]
    assert "expected 3" in findings[0].message and "found 2" in findings[0].message


@pytest.mark.parametrize("key", [".a", "a.", "a..b"])
def test_invalid_key_format(key):
    findings = _lint(f"key,en\n{key},x\n")
    assert ErrorKind.INVALID_KEY_FORMAT in _kinds(findings)


def test_mixed_separators_per_row():
    findings = _lint("key,en\na.b,x\nc/d,y\ne-f,z\n")
    assert _kinds(findings) == [ErrorKind.MIXED_SEPARATORS, ErrorKind.MIXED_SEPARATORS]
    assert [f.location.row for f in findings] == [2, 3]
    assert findings[0].location.key == "c/d"


def test_nested_conflict_only_in_nested_mode():
    text = "key,en\na.b,y\na,x\n"
    nested = _lint(text)
    assert _kinds(nested) == [ErrorKind.NESTED_KEY_CONFLICT]
    assert nested[0].location.key == "a.b"
    assert _lint(text, ParseOptions(nested=False)) == []


def test_placeholder_mismatch():
    findings = _lint("key,en,ko\ngreet,Hello {name},안녕 {user}\n")
    assert _kinds(findings) == [ErrorKind.PLACEHOLDER_MISMATCH]
    assert findings[0].location.column_name == "ko"
    assert "{name}" in findings[0].message and "{user}" in findings[0].message


def test_placeholder_order_does_not_matter():
    assert _lint("key,en,ko\nm,{a} and {b},{b} 그리고 {a}\n") == []


def test_placeholder_reference_is_first_language_with_value():
    findings = _lint("key,en,ko,ja\nm,,{{n}} 개,{{n}} 個\n")
    assert _kinds(findings) == [ErrorKind.MISSING_TRANSLATION]


def test_empty_keyed_rows_are_ignored():
    assert _lint("key,en\n,orphan\n") == []


def test_findings_are_ordered_by_row_then_conflicts():
    findings = _lint("key,en\na,x\na.b,\na,y\n")
    assert _kinds(findings) == [
        ErrorKind.MISSING_TRANSLATION,
        ErrorKind.DUPLICATE_KEY,
        ErrorKind.NESTED_KEY_CONFLICT,
    ]


def test_header_problems_still_raise():
    with pytest.raises(ParseError) as e:
        _lint("id,en\na,x\n")
    assert e.value.kind is ErrorKind.INVALID_KEY_COLUMN
