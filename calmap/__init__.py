"""
Calmap - Calibration Map Toolkit

Numeric tooling for calibration tables (fuel, ignition and similar
engine maps) held as grids of cell text.

Modules:
    data_input: Cell parsing, grid/mask model, table files
    coloring: Gradient color schemes and per-cell colors
    smoothing: Spatial smoothing and blank-cell filling
    utils: Configuration, logging and formatting helpers
"""

__version__ = "1.0.0"
__author__ = "Calmap Team"
__license__ = "MIT"
