"""
Smoothing module for calmap.

Spatial smoothing of numeric cells and inverse-distance filling of
blank cells, both confined to the masked region of a table.

Modules:
    smoother: Moving average, Gaussian and bilinear smoothing
    blank_filler: Blank-cell filling
"""

from .blank_filler import auto_fill_blanks
from .smoother import (
    SmoothingMethod,
    SmoothingRequest,
    apply_bilinear_interpolation,
    apply_gaussian_smoothing,
    apply_moving_average,
    gaussian_kernel,
    smooth_grid,
)

__all__ = [
    "auto_fill_blanks",
    "SmoothingMethod",
    "SmoothingRequest",
    "apply_bilinear_interpolation",
    "apply_gaussian_smoothing",
    "apply_moving_average",
    "gaussian_kernel",
    "smooth_grid",
]
