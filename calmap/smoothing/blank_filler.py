"""
Filling of blank cells in calibration maps.

Each blank cell inside the mask is estimated from the nearest non-blank
cell straight up, down, left and right of it, weighted by inverse
distance. A label (non-blank, non-numeric) ends the search in its
direction. Searches run against the input grid only, so a filled cell
never serves as a source for another blank cell in the same pass.

Example:
    >>> auto_fill_blanks([["10", "", "30"]])
    [['10', '20.0', '30']]
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..data_input.grid import Grid, Mask, ParsedGrid
from ..utils.constants import FILLED_MIN_DECIMALS
from ..utils.helpers import format_fixed

logger = logging.getLogger(__name__)

TextGrid = List[List[Optional[str]]]

# (row step, column step): up, down, left, right
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(frozen=True)
class NeighborValue:
    """
    Nearest numeric cell found in one direction.

    Attributes:
        value: Numeric value of the source cell
        distance: Steps from the blank cell
        decimal_places: Display precision of the source cell
    """

    value: float
    distance: int
    decimal_places: int


def find_nearest_value(
    parsed: ParsedGrid,
    row: int,
    column: int,
    step: Tuple[int, int],
    mask: Mask,
) -> Optional[NeighborValue]:
    """
    Walk from a cell in one direction to the first non-blank cell.

    The walk stays inside the mask and stops at the edge of the grid or
    at the end of a short row.

    Args:
        parsed: Parsed input grid
        row: Row of the blank cell
        column: Column of the blank cell
        step: (row step, column step) of the direction
        mask: Region the walk may visit

    Returns:
        NeighborValue if the first non-blank cell is numeric, else None
    """
    d_row, d_col = step
    r, c = row + d_row, column + d_col
    distance = 1

    while parsed.in_bounds(r, c, mask):
        if not parsed.blank[r, c]:
            if np.isnan(parsed.values[r, c]):
                return None
            return NeighborValue(
                value=float(parsed.values[r, c]),
                distance=distance,
                decimal_places=int(parsed.decimal_places[r, c]),
            )
        r += d_row
        c += d_col
        distance += 1

    return None


def estimate_blank(
    parsed: ParsedGrid,
    row: int,
    column: int,
    mask: Mask,
) -> Optional[str]:
    """
    Estimate the text for one blank cell.

    Args:
        parsed: Parsed input grid
        row: Row of the blank cell
        column: Column of the blank cell
        mask: Region to search

    Returns:
        Formatted inverse-distance-weighted mean, or None when no
        direction reaches a numeric cell or the estimate overflows
    """
    neighbors = [
        neighbor
        for neighbor in (
            find_nearest_value(parsed, row, column, step, mask) for step in DIRECTIONS
        )
        if neighbor is not None
    ]
    if not neighbors:
        return None

    weights = [1.0 / neighbor.distance for neighbor in neighbors]
    total_weight = sum(weights)
    estimate = sum(n.value * w for n, w in zip(neighbors, weights)) / total_weight

    if not math.isfinite(estimate):
        logger.warning(f"Blank cell ({row}, {column}) left empty: estimate out of range")
        return None

    decimals = max([n.decimal_places for n in neighbors] + [FILLED_MIN_DECIMALS])
    return format_fixed(estimate, decimals)


def auto_fill_blanks(grid: Grid, mask: Optional[Mask] = None) -> TextGrid:
    """
    Fill blank cells from their nearest numeric neighbors.

    Only blank cells inside the mask are written; numbers, labels and
    heading cells are returned unchanged. Blanks that no direction can
    reach stay blank.

    Args:
        grid: Rows of cell text
        mask: Region to read from and write to (whole grid by default)

    Returns:
        New text grid
    """
    mask = mask or Mask()
    parsed = ParsedGrid.from_rows(grid)
    result = parsed.copy_rows()

    blanks = parsed.blank & parsed.present & mask.region(parsed.shape)
    filled = 0
    for i, j in zip(*np.nonzero(blanks)):
        estimate = estimate_blank(parsed, int(i), int(j), mask)
        if estimate is not None:
            result[i][j] = estimate
            filled += 1

    logger.debug(f"Filled {filled} of {int(blanks.sum())} blank cells")
    return result
