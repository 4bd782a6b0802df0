"""
Grid and mask model for calibration tables.

A table arrives as rows of cell text. ``ParsedGrid`` parses every cell
once into typed arrays (value, display precision, blank flag) so the
algorithms never re-parse text. Rows may differ in length: the arrays
are padded to the widest row and the padding is marked as not present,
which every algorithm treats as out of bounds.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .cell_parser import parse_cell

# Raw table text as supplied by the host
Grid = Sequence[Sequence[Optional[str]]]

_ROW_HEADINGS = ("row", "both")
_COLUMN_HEADINGS = ("column", "both")


@dataclass(frozen=True)
class Mask:
    """
    Region of a grid the algorithms may read from and write to.

    Attributes:
        skip_first_row: Exclude the first row (column headings)
        skip_first_column: Exclude the first column (row headings)
    """

    skip_first_row: bool = False
    skip_first_column: bool = False

    @property
    def start_row(self) -> int:
        """First row index inside the mask."""
        return 1 if self.skip_first_row else 0

    @property
    def start_column(self) -> int:
        """First column index inside the mask."""
        return 1 if self.skip_first_column else 0

    @classmethod
    def from_headings(
        cls,
        with_headings: Optional[str],
        skip_headings: bool,
    ) -> "Mask":
        """
        Derive the mask from a table's heading mode.

        Args:
            with_headings: None, "row", "column" or "both"
            skip_headings: Whether heading cells are excluded from processing

        Returns:
            Mask instance
        """
        mode = (with_headings or "").lower()
        return cls(
            skip_first_row=skip_headings and mode in _ROW_HEADINGS,
            skip_first_column=skip_headings and mode in _COLUMN_HEADINGS,
        )

    def contains(self, row: int, column: int) -> bool:
        """Check whether a (row, column) index lies inside the mask."""
        return row >= self.start_row and column >= self.start_column

    def region(self, shape: Tuple[int, int]) -> NDArray[np.bool_]:
        """
        Boolean array that is True inside the mask.

        Args:
            shape: (rows, columns) of the padded grid

        Returns:
            Boolean array of the given shape
        """
        inside = np.zeros(shape, dtype=bool)
        inside[self.start_row:, self.start_column:] = True
        return inside


class ParsedGrid:
    """
    Typed, parsed view of a text grid.

    Attributes:
        values: Float array, NaN where a cell holds no number
        decimal_places: Digits after '.' per cell (0 where absent)
        blank: True where the cell is blank
        present: False for padding beyond the end of a short row

    Example:
        >>> parsed = ParsedGrid.from_rows([["RPM", "1000"], ["10", ""]])
        >>> parsed.shape
        (2, 2)
        >>> bool(parsed.numeric[1, 0]), bool(parsed.blank[1, 1])
        (True, True)
    """

    def __init__(self, rows: Grid) -> None:
        """
        Parse a grid of cell text.

        Args:
            rows: Sequence of rows of cell text
        """
        self._rows = rows
        n_rows = len(rows)
        n_cols = max((len(row) for row in rows), default=0)
        shape = (n_rows, n_cols)

        self.values = np.full(shape, np.nan, dtype=np.float64)
        self.decimal_places = np.zeros(shape, dtype=np.int64)
        self.blank = np.zeros(shape, dtype=bool)
        self.present = np.zeros(shape, dtype=bool)

        for i, row in enumerate(rows):
            for j, raw in enumerate(row):
                cell = parse_cell(raw)
                self.present[i, j] = True
                self.blank[i, j] = cell.is_blank
                self.decimal_places[i, j] = cell.decimal_places
                if cell.value is not None:
                    self.values[i, j] = cell.value

    @classmethod
    def from_rows(cls, rows: Grid) -> "ParsedGrid":
        """Create a ParsedGrid from rows of cell text."""
        return cls(rows)

    @property
    def shape(self) -> Tuple[int, int]:
        """Return (rows, columns) of the padded grid."""
        return self.values.shape

    @property
    def numeric(self) -> NDArray[np.bool_]:
        """True where a cell holds a parsed number."""
        return ~np.isnan(self.values)

    def valid(self, mask: Mask) -> NDArray[np.bool_]:
        """
        Cells usable as data: numeric and inside the mask.

        Args:
            mask: Region to restrict to

        Returns:
            Boolean array
        """
        return self.numeric & mask.region(self.shape)

    def in_bounds(self, row: int, column: int, mask: Mask) -> bool:
        """Check that (row, column) is an existing cell inside the mask."""
        n_rows, n_cols = self.shape
        return (
            0 <= row < n_rows
            and 0 <= column < n_cols
            and mask.contains(row, column)
            and bool(self.present[row, column])
        )

    def copy_rows(self) -> List[List[Optional[str]]]:
        """
        Copy the original text grid, keeping each row's own length.

        Returns:
            New list of new row lists holding the original cell objects
        """
        return [list(row) for row in self._rows]
