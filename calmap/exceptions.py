"""
Exceptions raised by calmap.

Malformed table data never raises; these cover caller errors only.
"""


class CalmapError(Exception):
    """Base class for calmap caller errors."""
    pass


class UnknownColorSchemeError(CalmapError, ValueError):
    """Raised when a color scheme name does not match a built-in scheme."""
    pass


class InvalidColorSchemeError(CalmapError, ValueError):
    """Raised when color stops do not form a valid gradient."""
    pass


class SmoothingParameterError(CalmapError, ValueError):
    """Raised for an invalid smoothing method or parameter."""
    pass


class TableFormatError(CalmapError, ValueError):
    """Raised when a table file type is not supported."""
    pass
