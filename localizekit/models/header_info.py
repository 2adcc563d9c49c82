from __future__ import annotations

from dataclasses import dataclass, field

__all__ = [
    "HeaderInfo",
]


@dataclass
class HeaderInfo:
    """Validated header of a localization table.

    Column 0 is always the key column; ``language_index`` maps each normalized
    language code to its 0-based position in a row record.
    """
    languages: list[str] = field(default_factory=list)  # header order, normalized
    language_index: dict[str, int] = field(default_factory=dict)
    valid_key_column: bool = False
