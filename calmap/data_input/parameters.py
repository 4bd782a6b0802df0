"""
Coercion of user-entered smoothing parameters.

Hosts collect the window size and sigma as free text. These helpers turn
that text into the validated numbers the smoothing functions require,
falling back to the defaults the way the table editor's prompts do.
The smoothing functions themselves never guess: they reject invalid
parameters.
"""

import logging
import math
import re
from typing import Optional, Union

from ..utils.constants import DEFAULT_SIGMA, DEFAULT_WINDOW_SIZE, NUMERIC_PREFIX_PATTERN

logger = logging.getLogger(__name__)

_INTEGER_PREFIX_RE = re.compile(r"[+-]?[0-9]+")
_NUMERIC_PREFIX_RE = re.compile(NUMERIC_PREFIX_PATTERN)

RawParameter = Optional[Union[str, int, float]]


def coerce_window_size(raw: RawParameter, default: int = DEFAULT_WINDOW_SIZE) -> int:
    """
    Convert user input to a moving-average window size.

    The leading integer of the text is used (``"5.7"`` gives 5,
    ``"7 cells"`` gives 7). Unparseable, zero or negative input yields
    ``default``. Even sizes are returned as entered; the moving average
    widens them to the next odd size.

    Args:
        raw: User input (text or number)
        default: Value used when the input is not a positive integer

    Returns:
        Positive integer window size
    """
    if isinstance(raw, bool) or raw is None:
        return default

    if isinstance(raw, (int, float)):
        candidate = int(raw) if math.isfinite(raw) else 0
    else:
        match = _INTEGER_PREFIX_RE.match(raw.strip())
        candidate = int(match.group(0)) if match else 0

    if candidate < 1:
        logger.debug(f"Window size {raw!r} is not a positive integer, using {default}")
        return default
    return candidate


def coerce_sigma(raw: RawParameter, default: float = DEFAULT_SIGMA) -> float:
    """
    Convert user input to a Gaussian sigma.

    The leading number of the text is used. Unparseable, zero, negative
    or non-finite input yields ``default``.

    Args:
        raw: User input (text or number)
        default: Value used when the input is not a positive number

    Returns:
        Positive finite sigma
    """
    if isinstance(raw, bool) or raw is None:
        return default

    if isinstance(raw, (int, float)):
        candidate = float(raw)
    else:
        match = _NUMERIC_PREFIX_RE.match(raw.strip())
        candidate = float(match.group(0)) if match else 0.0

    if not math.isfinite(candidate) or candidate <= 0:
        logger.debug(f"Sigma {raw!r} is not a positive number, using {default}")
        return default
    return candidate
