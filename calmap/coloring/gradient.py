"""
Gradient coloring of calibration map cells.

Each numeric cell is colored by its position between the smallest and
largest value of its own table, so the mapping calibrates itself per
table: the same raw value can get different colors in different tables.
Text color is picked from the background's perceived brightness.

Example:
    >>> table = [["RPM", "1000", "2000"], ["20", "10.5", "12.0"], ["40", "14.2", "16.8"]]
    >>> mask = Mask(skip_first_row=True, skip_first_column=True)
    >>> value_range = get_min_max_values(table, mask)
    >>> colors = get_cell_colors(12.0, value_range.min, value_range.max, "THERMAL")
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

import numpy as np

from ..data_input.grid import Grid, Mask, ParsedGrid
from ..utils.constants import (
    BRIGHTNESS_THRESHOLD,
    FLAT_RANGE_POSITION,
    LUMA_WEIGHTS,
    TEXT_COLOR_DARK,
    TEXT_COLOR_LIGHT,
)
from ..utils.helpers import round_half_up
from .color_schemes import RGB, BuiltinColorScheme, ColorScheme, get_color_scheme

logger = logging.getLogger(__name__)

SchemeLike = Union[str, BuiltinColorScheme, ColorScheme]


@dataclass(frozen=True)
class ValueRange:
    """
    Range of the numeric values in a table.

    Attributes:
        min: Smallest value (0 when the table has no numbers)
        max: Largest value (1 when the table has no numbers)
        has_values: False when no cell inside the mask parsed as a number
    """

    min: float
    max: float
    has_values: bool


@dataclass(frozen=True)
class CellColors:
    """
    Render colors for one cell.

    Attributes:
        background: Background (R, G, B)
        text: Text color, "#000000" or "#ffffff"
    """

    background: RGB
    text: str

    @property
    def background_css(self) -> str:
        """Background as a CSS ``rgb(r, g, b)`` string."""
        r, g, b = self.background
        return f"rgb({r}, {g}, {b})"

    @property
    def background_hex(self) -> str:
        """Background as a ``#rrggbb`` string."""
        return "#{:02x}{:02x}{:02x}".format(*self.background)


def get_min_max_values(grid: Grid, mask: Optional[Mask] = None) -> ValueRange:
    """
    Find the smallest and largest numeric value inside the mask.

    Labels and blanks are ignored. A table without any number yields
    ``ValueRange(0, 1, has_values=False)`` so normalization stays defined.

    Args:
        grid: Rows of cell text
        mask: Region to scan (whole grid by default)

    Returns:
        ValueRange
    """
    mask = mask or Mask()
    parsed = ParsedGrid.from_rows(grid)
    values = parsed.values[parsed.valid(mask)]

    if values.size == 0:
        return ValueRange(min=0.0, max=1.0, has_values=False)

    return ValueRange(min=float(values.min()), max=float(values.max()), has_values=True)


def get_color_for_value(normalized_value: float, scheme: SchemeLike) -> RGB:
    """
    Resolve a normalized value to a gradient color.

    The value is clamped to [0, 1], the pair of adjacent stops around it
    is located, and each channel is interpolated linearly and rounded.

    Args:
        normalized_value: Position in [0, 1] (clamped if outside)
        scheme: Color scheme or built-in scheme name

    Returns:
        (R, G, B) with channels in 0..255

    Raises:
        UnknownColorSchemeError: If a scheme name is not recognized
    """
    stops = get_color_scheme(scheme).stops
    value = max(0.0, min(1.0, normalized_value))

    lower, upper = stops[0], stops[-1]
    for candidate_lower, candidate_upper in zip(stops, stops[1:]):
        if candidate_lower.position <= value <= candidate_upper.position:
            lower, upper = candidate_lower, candidate_upper
            break

    span = upper.position - lower.position
    factor = 0.0 if span == 0 else (value - lower.position) / span

    return tuple(
        min(255, max(0, round_half_up(low + (high - low) * factor)))
        for low, high in zip(lower.color, upper.color)
    )


def get_text_color(background: RGB) -> str:
    """
    Pick a legible text color for a background.

    Args:
        background: Background (R, G, B)

    Returns:
        "#000000" on bright backgrounds, "#ffffff" otherwise
    """
    brightness = sum(w * c for w, c in zip(LUMA_WEIGHTS, background)) / 1000
    return TEXT_COLOR_DARK if brightness > BRIGHTNESS_THRESHOLD else TEXT_COLOR_LIGHT


def get_cell_colors(
    value: float,
    min_value: float,
    max_value: float,
    scheme: SchemeLike,
) -> CellColors:
    """
    Calculate background and text color for a cell value.

    Args:
        value: Numeric cell value
        min_value: Smallest value in the table
        max_value: Largest value in the table
        scheme: Color scheme or built-in scheme name

    Returns:
        CellColors; a flat table (min == max) maps to the scheme midpoint

    Raises:
        UnknownColorSchemeError: If a scheme name is not recognized
    """
    value_span = max_value - min_value
    if value_span == 0:
        normalized = FLAT_RANGE_POSITION
    else:
        normalized = (value - min_value) / value_span

    background = get_color_for_value(normalized, scheme)
    return CellColors(background=background, text=get_text_color(background))


def compute_grid_colors(
    grid: Grid,
    mask: Optional[Mask] = None,
    scheme: SchemeLike = BuiltinColorScheme.THERMAL,
) -> List[List[Optional[CellColors]]]:
    """
    Calculate colors for every cell of a table.

    Args:
        grid: Rows of cell text
        mask: Region holding data (whole grid by default)
        scheme: Color scheme or built-in scheme name

    Returns:
        Rows shaped like ``grid``; None for non-numeric or out-of-mask cells

    Raises:
        UnknownColorSchemeError: If a scheme name is not recognized
    """
    mask = mask or Mask()
    color_scheme = get_color_scheme(scheme)
    parsed = ParsedGrid.from_rows(grid)
    valid = parsed.valid(mask)

    colors: List[List[Optional[CellColors]]] = [[None] * len(row) for row in grid]
    if not valid.any():
        return colors

    values = parsed.values[valid]
    min_value, max_value = float(values.min()), float(values.max())

    for i, j in zip(*np.nonzero(valid)):
        colors[i][j] = get_cell_colors(
            float(parsed.values[i, j]), min_value, max_value, color_scheme
        )

    logger.debug(
        f"Colored {int(valid.sum())} cells with scheme '{color_scheme.name}' "
        f"(range {min_value} to {max_value})"
    )
    return colors
