from .base import RowSource, cell_text
from .csv_reader import CsvRowSource, decode_utf8
from .excel_reader import ExcelRowSource

"""Tabular row sources (CSV / Excel) feeding the header validator and assembler."""

__all__ = [
    "RowSource",
    "CsvRowSource",
    "ExcelRowSource",
    "cell_text",
    "decode_utf8",
]
