"""
Coloring module for calmap.

Maps numeric cells to background and text colors through gradient
color schemes.

Modules:
    color_schemes: Color stops and the built-in schemes
    gradient: Range detection and per-cell color calculation
"""

from .color_schemes import (
    BuiltinColorScheme,
    ColorScheme,
    ColorStop,
    get_color_scheme,
)
from .gradient import (
    CellColors,
    ValueRange,
    compute_grid_colors,
    get_cell_colors,
    get_color_for_value,
    get_min_max_values,
    get_text_color,
)

__all__ = [
    "BuiltinColorScheme",
    "ColorScheme",
    "ColorStop",
    "get_color_scheme",
    "CellColors",
    "ValueRange",
    "compute_grid_colors",
    "get_cell_colors",
    "get_color_for_value",
    "get_min_max_values",
    "get_text_color",
]
