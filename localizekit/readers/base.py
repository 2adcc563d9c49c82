from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable

"""Shared row-source contract for per-format table readers."""


@runtime_checkable
class RowSource(Protocol):
    """First sheet / stream of a table as a header plus lazily produced rows."""

    def header(self) -> list[str]:
        """Return the header record (column 0 is the key column)."""

    def rows(self) -> Iterator[list[str]]:
        """Yield data records after the header, in source order."""


def cell_text(cell: Any) -> str:
    """Coerce a cell to text; missing cells become the empty string."""
    if cell is None:
        return ""
    if isinstance(cell, str):
        return cell
    return str(cell)
