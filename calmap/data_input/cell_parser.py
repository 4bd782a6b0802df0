"""
Cell value parsing for calibration tables.

Extracts a numeric value and a display-precision hint from raw cell
text. Cell text may carry inline markup (``<b>12.5</b>``), which is
treated as zero-width everywhere. Nothing here raises for bad data:
a cell without a number parses to ``value=None``.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional

from ..utils.constants import MARKUP_PATTERN, NBSP_MARKER, NUMERIC_PREFIX_PATTERN

_MARKUP_RE = re.compile(MARKUP_PATTERN)
_NUMERIC_PREFIX_RE = re.compile(NUMERIC_PREFIX_PATTERN)


@dataclass(frozen=True)
class CellValue:
    """
    Parsed view of one cell.

    Attributes:
        value: Numeric value, or None when the text holds no number
        decimal_places: Digits after the first '.' of the visible text
        is_blank: True for empty or non-breaking-space-only cells
    """

    value: Optional[float]
    decimal_places: int
    is_blank: bool

    @property
    def is_numeric(self) -> bool:
        """Return True if a numeric value was parsed."""
        return self.value is not None


def strip_markup(raw: Optional[str]) -> str:
    """
    Remove markup tags and surrounding whitespace from cell text.

    Args:
        raw: Raw cell text (None is treated as empty)

    Returns:
        Visible text
    """
    if not raw:
        return ""
    return _MARKUP_RE.sub("", raw).strip()


def parse_numeric_value(raw: Optional[str]) -> Optional[float]:
    """
    Parse the leading number of a cell.

    Parsing is permissive in the way ``parseFloat`` is: the longest
    numeric prefix is used and anything after it is ignored, so
    ``"12.5 ms"`` parses to 12.5 while ``"ms 12.5"`` has no value.

    Args:
        raw: Raw cell text

    Returns:
        Parsed float, or None if the text does not start with a number

    Example:
        >>> parse_numeric_value("<b>-3.25</b>")
        -3.25
        >>> parse_numeric_value("RPM") is None
        True
    """
    match = _NUMERIC_PREFIX_RE.match(strip_markup(raw))
    if match is None:
        return None

    value = float(match.group(0))
    # "1e999" overflows; an infinite value cannot be ranged or formatted
    if not math.isfinite(value):
        return None
    return value


def count_decimal_places(raw: Optional[str]) -> int:
    """
    Count the digits after the first '.' of the visible text.

    Independent of whether the text parses as a number; used only to
    decide how many decimals to write back.

    Args:
        raw: Raw cell text

    Returns:
        Number of characters after the first '.', or 0 if there is none
    """
    text = strip_markup(raw)
    if "." not in text:
        return 0
    return len(text.split(".", 1)[1])


def is_blank(raw: Optional[str]) -> bool:
    """
    Check whether a cell is blank.

    A label such as ``"RPM"`` is non-numeric but not blank.

    Args:
        raw: Raw cell text

    Returns:
        True if the visible text is empty or a non-breaking-space marker
    """
    text = strip_markup(raw)
    return text == "" or text == NBSP_MARKER


def parse_cell(raw: Optional[str]) -> CellValue:
    """
    Parse raw cell text into a CellValue.

    Args:
        raw: Raw cell text

    Returns:
        CellValue with value, decimal places and blank flag
    """
    return CellValue(
        value=parse_numeric_value(raw),
        decimal_places=count_decimal_places(raw),
        is_blank=is_blank(raw),
    )
