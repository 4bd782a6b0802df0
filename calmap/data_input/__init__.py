"""Data input modules for calmap."""

from .cell_parser import (
    CellValue,
    count_decimal_places,
    is_blank,
    parse_cell,
    parse_numeric_value,
    strip_markup,
)
from .grid import Grid, Mask, ParsedGrid
from .parameters import coerce_sigma, coerce_window_size
from .table_io import load_table, read_csv_table, read_excel_table, save_table

__all__ = [
    "CellValue",
    "count_decimal_places",
    "is_blank",
    "parse_cell",
    "parse_numeric_value",
    "strip_markup",
    "Grid",
    "Mask",
    "ParsedGrid",
    "coerce_sigma",
    "coerce_window_size",
    "load_table",
    "read_csv_table",
    "read_excel_table",
    "save_table",
]
