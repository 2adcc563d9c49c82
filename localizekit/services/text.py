from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

"""Cell text normalization and read-only i18n string analysis.

Transform (applied to stored values):
    process_escape_sequences - decode \\n, \\t, \\r, \\\\, \\", \\' in one left-to-right pass

Analysis (advisory only, never affects parsing):
    variables  - {{name}}, {name}, printf (%s, %d, %1$s ...)
    html tags  - <b>, </b>, <a href="...">, <br/>, <1>
    nesting    - $t(key), $t(key, {...})
    key suffix - plural (_one, _other, ...) and context (_male, ...) keys
"""

__all__ = [
    "VariableType",
    "Variable",
    "StringAnalysis",
    "PLURAL_SUFFIXES",
    "CONTEXT_SUFFIXES",
    "process_escape_sequences",
    "has_escape_sequences",
    "extract_escape_sequences",
    "extract_variables",
    "extract_variable_names",
    "has_variables",
    "extract_html_tags",
    "has_html_tags",
    "extract_nesting_references",
    "has_nesting_references",
    "is_plural_key",
    "get_plural_base_key",
    "get_plural_suffix",
    "is_context_key",
    "get_context_base_key",
    "analyze_string",
]

RE_DOUBLE_BRACE = re.compile(r"\{\{([^}]+)\}\}")
RE_SINGLE_BRACE = re.compile(r"\{([^}]+)\}")
RE_PRINTF = re.compile(r"%(\d+\$)?[sdifFeEgGxXoubcpn%]")
RE_HTML_TAG = re.compile(r"</?[a-zA-Z0-9]+(?:\s+[^>]*)?/?>")
RE_NESTING = re.compile(r"\$t\([^)]+\)")
RE_ESCAPE = re.compile(r"\\[ntr\\'\"]")

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

PLURAL_SUFFIXES: tuple[str, ...] = (
    "_zero",
    "_one",
    "_two",
    "_few",
    "_many",
    "_other",
    "_plural",
    "_0",
    "_1",
    "_2",
)

CONTEXT_SUFFIXES: tuple[str, ...] = ("_male", "_female", "_neutral")


# ----------------------------------------------------------------------------
# Escape sequences
# ----------------------------------------------------------------------------

def process_escape_sequences(text: str) -> str:
    """Decode backslash escapes into the characters they stand for.

    Unknown escapes keep their backslash; a decoded character is never looked at
    again, so ``\\\\n`` yields a backslash followed by ``n``.

    >>> process_escape_sequences(r"Hello\\nWorld")
    'Hello\\nWorld'
    """
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\" and i + 1 < n and text[i + 1] in _ESCAPES:
            out.append(_ESCAPES[text[i + 1]])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def has_escape_sequences(text: str) -> bool:
    return RE_ESCAPE.search(text) is not None


def extract_escape_sequences(text: str) -> list[str]:
    return [m.group(0) for m in RE_ESCAPE.finditer(text)]


# ----------------------------------------------------------------------------
# Variables / placeholders
# ----------------------------------------------------------------------------

class VariableType(Enum):
    DOUBLE_BRACE = "double_brace"  # {{name}} - react-i18next
    SINGLE_BRACE = "single_brace"  # {name} - vue-i18n / ICU
    PRINTF = "printf"  # %s, %d


@dataclass(frozen=True)
class Variable:
    var_type: VariableType
    full_match: str
    name: str | None  # None for printf specifiers


def extract_variables(text: str) -> list[Variable]:
    """Return double-brace, then single-brace, then printf variables."""
    variables: list[Variable] = []
    double_spans: list[tuple[int, int]] = []

    for m in RE_DOUBLE_BRACE.finditer(text):
        double_spans.append(m.span())
        variables.append(Variable(VariableType.DOUBLE_BRACE, m.group(0), m.group(1)))

    for m in RE_SINGLE_BRACE.finditer(text):
        start, end = m.span()
        # skip pieces of a {{...}} match
        if any(start < d_end and d_start < end for d_start, d_end in double_spans):
            continue
        variables.append(Variable(VariableType.SINGLE_BRACE, m.group(0), m.group(1)))

    for m in RE_PRINTF.finditer(text):
        variables.append(Variable(VariableType.PRINTF, m.group(0), None))

    return variables


def extract_variable_names(text: str) -> list[str]:
    return [v.name for v in extract_variables(text) if v.name is not None]


def has_variables(text: str) -> bool:
    return bool(
        RE_DOUBLE_BRACE.search(text)
        or RE_SINGLE_BRACE.search(text)
        or RE_PRINTF.search(text)
    )


# ----------------------------------------------------------------------------
# HTML tags and nesting references
# ----------------------------------------------------------------------------

def extract_html_tags(text: str) -> list[str]:
    return RE_HTML_TAG.findall(text)


def has_html_tags(text: str) -> bool:
    return RE_HTML_TAG.search(text) is not None


def extract_nesting_references(text: str) -> list[str]:
    return RE_NESTING.findall(text)


def has_nesting_references(text: str) -> bool:
    return RE_NESTING.search(text) is not None


# ----------------------------------------------------------------------------
# Plural / context keys
# ----------------------------------------------------------------------------

def _matching_suffix(key: str, suffixes: tuple[str, ...]) -> str | None:
    for suffix in suffixes:
        if key.endswith(suffix):
            return suffix
    return None


def is_plural_key(key: str) -> bool:
    return _matching_suffix(key, PLURAL_SUFFIXES) is not None


def get_plural_base_key(key: str) -> str | None:
    """"items_one" -> "items"."""
    suffix = _matching_suffix(key, PLURAL_SUFFIXES)
    return key[: -len(suffix)] if suffix else None


def get_plural_suffix(key: str) -> str | None:
    """"items_one" -> "one"."""
    suffix = _matching_suffix(key, PLURAL_SUFFIXES)
    return suffix[1:] if suffix else None


def is_context_key(key: str) -> bool:
    return _matching_suffix(key, CONTEXT_SUFFIXES) is not None


def get_context_base_key(key: str) -> str | None:
    suffix = _matching_suffix(key, CONTEXT_SUFFIXES)
    return key[: -len(suffix)] if suffix else None


# ----------------------------------------------------------------------------
# Combined analysis
# ----------------------------------------------------------------------------

@dataclass(frozen=True)
class StringAnalysis:
    escape_sequences: list[str] = field(default_factory=list)
    variables: list[Variable] = field(default_factory=list)
    html_tags: list[str] = field(default_factory=list)
    nesting_refs: list[str] = field(default_factory=list)
    plural_base_key: str | None = None
    context_base_key: str | None = None

    @property
    def has_escape_sequences(self) -> bool:
        return bool(self.escape_sequences)

    @property
    def has_variables(self) -> bool:
        return bool(self.variables)

    @property
    def has_html_tags(self) -> bool:
        return bool(self.html_tags)

    @property
    def has_nesting(self) -> bool:
        return bool(self.nesting_refs)

    @property
    def is_plural_key(self) -> bool:
        return self.plural_base_key is not None

    @property
    def is_context_key(self) -> bool:
        return self.context_base_key is not None


def analyze_string(key: str, value: str) -> StringAnalysis:
    return StringAnalysis(
        escape_sequences=extract_escape_sequences(value),
        variables=extract_variables(value),
        html_tags=extract_html_tags(value),
        nesting_refs=extract_nesting_references(value),
        plural_base_key=get_plural_base_key(key),
        context_base_key=get_context_base_key(key),
    )
