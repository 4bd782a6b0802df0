"""
Calmap Constants and Reference Values.

Fixed values shared by the parser, the gradient color mapper and the
smoothing algorithms. Changing the formatting or legibility values here
changes the text written back into tables.
"""

from typing import Tuple


# =============================================================================
# Cell Parsing
# =============================================================================

# Non-breaking-space marker editors leave in otherwise empty cells
NBSP_MARKER: str = "&nbsp;"

# Inline markup span, treated as zero-width
MARKUP_PATTERN: str = r"<[^>]*>"

# Leading numeric prefix: sign, ASCII digits, optional fraction and exponent
NUMERIC_PREFIX_PATTERN: str = r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"


# =============================================================================
# Output Formatting
# =============================================================================

# Minimum decimal places written back by the smoothing algorithms
SMOOTHED_MIN_DECIMALS: int = 2

# Minimum decimal places written into filled blank cells
FILLED_MIN_DECIMALS: int = 1


# =============================================================================
# Smoothing Defaults
# =============================================================================

DEFAULT_WINDOW_SIZE: int = 3
DEFAULT_SIGMA: float = 1.0

# Gaussian kernel radius in units of sigma
GAUSSIAN_RADIUS_SIGMAS: int = 3


# =============================================================================
# Text Legibility
# =============================================================================

# Luma weights (per mille) for perceived brightness of an RGB background
LUMA_WEIGHTS: Tuple[int, int, int] = (299, 587, 114)

# Backgrounds brighter than this get dark text
BRIGHTNESS_THRESHOLD: float = 128.0

TEXT_COLOR_DARK: str = "#000000"
TEXT_COLOR_LIGHT: str = "#ffffff"

# Normalized position used when every value in a table is equal
FLAT_RANGE_POSITION: float = 0.5
