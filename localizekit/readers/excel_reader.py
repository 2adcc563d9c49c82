from __future__ import annotations

import io
from collections.abc import Iterator
from datetime import date, datetime
from typing import Any

import pandas as pd

from ..models.errors import ParseError

"""Excel row source (first sheet only).

The workbook is read with pandas without a header so that row 0 is the table
header. Cells are coerced to the text a spreadsheet displays:
    blank / NaN      -> ""
    1.0 (integral)   -> "1"
    True / False     -> "true" / "false"
    dates            -> ISO 8601
pandas' default NA-string conversion is disabled so translations such as "NA"
or "None" survive.
"""

__all__ = [
    "ExcelRowSource",
    "read_first_sheet",
    "excel_cell_text",
]


def read_first_sheet(data: bytes) -> tuple[str, pd.DataFrame]:
    """Return ``(sheet_name, raw frame)`` for the first sheet of a workbook."""
    try:
        xls = pd.ExcelFile(io.BytesIO(data))
    except Exception as e:  # zip / format / engine failures surface with varied types
        raise ParseError.excel_open_error(str(e)) from e

    if not xls.sheet_names:
        raise ParseError.empty_workbook()

    first = xls.sheet_names[0]
    try:
        df = xls.parse(first, header=None, dtype=object, keep_default_na=False)
    except Exception as e:
        raise ParseError.worksheet_read_error(str(first), str(e)) from e
    return str(first), df


def excel_cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if pd.api.types.is_bool(value):
        return "true" if value else "false"
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if pd.api.types.is_float(value) and float(value).is_integer():
        return str(int(value))
    return str(value)


class ExcelRowSource:
    def __init__(self, data: bytes) -> None:
        self.sheet_name, self.frame = read_first_sheet(data)

    def header(self) -> list[str]:
        if self.frame.shape[0] == 0:
            raise ParseError.empty_sheet()
        return [excel_cell_text(v).strip() for v in self.frame.iloc[0].tolist()]

    def rows(self) -> Iterator[list[str]]:
        self.header()
        for values in self.frame.iloc[1:].itertuples(index=False, name=None):
            yield [excel_cell_text(v) for v in values]
