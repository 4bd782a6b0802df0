"""
Table file handling for calibration maps.

Loads tables from CSV and Excel files into grids of cell text and writes
grids back. No header row or index column is inferred: headings stay in
the grid as ordinary cells, and every cell is kept as text so the
precision of the file is preserved.
"""

import logging
from io import BytesIO, StringIO
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from ..exceptions import TableFormatError
from .grid import Grid

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = (".csv",)
EXCEL_EXTENSIONS = (".xlsx", ".xls")
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS + EXCEL_EXTENSIONS

TextGrid = List[List[str]]


def _frame_to_grid(df: pd.DataFrame) -> TextGrid:
    """Convert a string DataFrame to rows of cell text."""
    return df.fillna("").astype(str).values.tolist()


def _file_type(path: Path) -> str:
    """Return 'csv' or 'excel' for a table path."""
    suffix = path.suffix.lower()
    if suffix in CSV_EXTENSIONS:
        return "csv"
    if suffix in EXCEL_EXTENSIONS:
        return "excel"
    raise TableFormatError(
        f"Unsupported table file type '{suffix}'. "
        f"Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
    )


def read_csv_table(file_content: Union[bytes, str, BytesIO, StringIO, Path]) -> TextGrid:
    """
    Read a CSV table into a grid of cell text.

    Args:
        file_content: CSV content as bytes, text, a buffer or a path

    Returns:
        Rows of cell text; empty fields become empty strings
    """
    if isinstance(file_content, bytes):
        file_content = BytesIO(file_content)
    elif isinstance(file_content, str):
        file_content = StringIO(file_content)

    df = pd.read_csv(
        file_content,
        header=None,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=False,
    )
    return _frame_to_grid(df)


def read_excel_table(
    file_content: Union[bytes, BytesIO, Path],
    sheet_name: Union[str, int] = 0,
) -> TextGrid:
    """
    Read an Excel sheet into a grid of cell text.

    Args:
        file_content: Workbook content as bytes, a buffer or a path
        sheet_name: Sheet name or index

    Returns:
        Rows of cell text; empty cells become empty strings
    """
    if isinstance(file_content, bytes):
        file_content = BytesIO(file_content)

    df = pd.read_excel(
        file_content,
        sheet_name=sheet_name,
        header=None,
        dtype=str,
        keep_default_na=False,
    )
    return _frame_to_grid(df)


def load_table(path: Union[str, Path], sheet_name: Union[str, int] = 0) -> TextGrid:
    """
    Load a table file into a grid of cell text.

    Args:
        path: Path to a .csv, .xlsx or .xls file
        sheet_name: Sheet name or index for Excel files

    Returns:
        Rows of cell text

    Raises:
        TableFormatError: If the file extension is not supported
    """
    path = Path(path)
    file_type = _file_type(path)

    if file_type == "csv":
        grid = read_csv_table(path)
    else:
        grid = read_excel_table(path, sheet_name=sheet_name)

    logger.debug(f"Loaded {len(grid)} rows from {path}")
    return grid


def save_table(
    grid: Grid,
    path: Union[str, Path],
    sheet_name: Optional[str] = "Calibration Map",
) -> None:
    """
    Write a grid of cell text to a CSV or Excel file.

    Short rows are padded with empty cells.

    Args:
        grid: Rows of cell text
        path: Destination .csv or .xlsx path
        sheet_name: Sheet name for Excel output

    Raises:
        TableFormatError: If the file extension is not supported
    """
    path = Path(path)
    file_type = _file_type(path)
    if path.suffix.lower() == ".xls":
        raise TableFormatError("Writing legacy .xls workbooks is not supported, use .xlsx")

    df = pd.DataFrame([list(row) for row in grid]).fillna("")

    if file_type == "csv":
        df.to_csv(path, header=False, index=False)
    else:
        df.to_excel(path, sheet_name=sheet_name, header=False, index=False)

    logger.debug(f"Saved {len(df)} rows to {path}")
