"""
Calmap Test Suite

Tests for:
- Cell parsing and the grid/mask model
- Gradient color schemes and per-cell colors
- Moving average, Gaussian and bilinear smoothing
- Blank-cell filling
- Table files, configuration and the command-line tool
"""
