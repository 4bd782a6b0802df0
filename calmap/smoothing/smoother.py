"""
Spatial smoothing of calibration map values.

Three algorithms, all confined to the masked region of the table:

- Moving average over a square window of odd side length
- Gaussian smoothing with a kernel of radius ceil(3 * sigma)
- Bilinear (4-neighbor) averaging of each cell with its direct neighbors

Moving average and Gaussian are normalized convolutions: the windowed
sum of ``value * weight`` over usable neighbors divided by the windowed
sum of the weights actually used. Bilinear sums the usable up, down,
left and right neighbors in that order, then adds the cell. Usable neighbors
are in-mask cells holding a number, so labels, blanks and heading cells
never contribute and edge cells are not pulled toward zero. All reads
come from the input grid and all writes go to a new grid, so results do
not depend on cell order.

Only numeric in-mask cells are rewritten. The new text keeps the cell's
own precision with at least two decimals (``"5"`` becomes ``"5.00"``).

Example:
    >>> grid = [["1", "2", "3"], ["4", "5", "6"], ["7", "8", "9"]]
    >>> apply_bilinear_interpolation(grid)[1][1]
    '5.00'
"""

import logging
import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from ..data_input.grid import Grid, Mask, ParsedGrid
from ..exceptions import SmoothingParameterError
from ..utils.constants import (
    DEFAULT_SIGMA,
    DEFAULT_WINDOW_SIZE,
    GAUSSIAN_RADIUS_SIGMAS,
    SMOOTHED_MIN_DECIMALS,
)
from ..utils.helpers import format_fixed

logger = logging.getLogger(__name__)

TextGrid = List[List[Optional[str]]]

# Direct neighbors in summation order: up, down, left, right
_BILINEAR_NEIGHBORS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class SmoothingMethod(Enum):
    """Available smoothing algorithms."""

    MOVING_AVERAGE = "moving_average"
    GAUSSIAN = "gaussian"
    BILINEAR = "bilinear"


# =============================================================================
# Parameter validation
# =============================================================================

def validate_window_size(window_size: Union[int, float]) -> int:
    """
    Check a moving-average window size and make it odd.

    Even sizes are widened by one so the window stays centered.

    Args:
        window_size: Positive integer (integral floats are accepted)

    Returns:
        Odd window size >= 1

    Raises:
        SmoothingParameterError: If the size is not a positive integer
    """
    if isinstance(window_size, bool) or not isinstance(window_size, numbers.Real):
        raise SmoothingParameterError(
            f"Window size must be a positive integer, got {window_size!r}"
        )
    if not isinstance(window_size, numbers.Integral):
        if not (math.isfinite(window_size) and float(window_size).is_integer()):
            raise SmoothingParameterError(
                f"Window size must be a positive integer, got {window_size!r}"
            )

    size = int(window_size)
    if size < 1:
        raise SmoothingParameterError(f"Window size must be at least 1, got {size}")

    if size % 2 == 0:
        logger.debug(f"Window size {size} is even, using {size + 1}")
        size += 1
    return size


def validate_sigma(sigma: Union[int, float]) -> float:
    """
    Check a Gaussian sigma.

    Args:
        sigma: Standard deviation of the kernel, in cells

    Returns:
        Sigma as a float

    Raises:
        SmoothingParameterError: If sigma is not a positive finite number
    """
    if isinstance(sigma, bool) or not isinstance(sigma, numbers.Real):
        raise SmoothingParameterError(f"Sigma must be a positive number, got {sigma!r}")

    value = float(sigma)
    if not math.isfinite(value) or value <= 0:
        raise SmoothingParameterError(f"Sigma must be a positive number, got {sigma!r}")
    return value


def gaussian_kernel(sigma: float) -> NDArray[np.float64]:
    """
    Build a normalized 2D Gaussian kernel.

    The radius is ceil(3 * sigma), giving a square kernel of side
    2 * radius + 1 whose weights sum to 1.

    Args:
        sigma: Standard deviation in cells (> 0)

    Returns:
        Square kernel array
    """
    sigma = validate_sigma(sigma)
    radius = math.ceil(sigma * GAUSSIAN_RADIUS_SIGMAS)
    offsets = np.arange(-radius, radius + 1, dtype=np.float64)
    di, dj = np.meshgrid(offsets, offsets, indexing="ij")

    kernel = np.exp(-(di ** 2 + dj ** 2) / (2 * sigma ** 2))
    return kernel / kernel.sum()


# =============================================================================
# Shared convolution and output
# =============================================================================

def _normalized_convolution(
    parsed: ParsedGrid,
    mask: Mask,
    kernel: NDArray[np.float64],
) -> TextGrid:
    """
    Replace each usable cell by its kernel-weighted neighbor mean.

    Args:
        parsed: Parsed input grid
        mask: Region to read from and write to
        kernel: Odd-sized square kernel, centered on the cell

    Returns:
        New text grid
    """
    result = parsed.copy_rows()
    if parsed.values.size == 0:
        return result

    valid = parsed.valid(mask)
    data = np.where(valid, parsed.values, 0.0)

    weighted_sum = ndimage.correlate(data, kernel, mode="constant", cval=0.0)
    weight_sum = ndimage.correlate(valid.astype(np.float64), kernel, mode="constant", cval=0.0)

    targets = valid & (weight_sum > 0.0)
    means = np.divide(
        weighted_sum, weight_sum, out=np.zeros_like(weighted_sum), where=targets
    )
    _write_means(parsed, result, targets, means)
    return result


def _shift(array: NDArray, offset: Tuple[int, int]) -> NDArray:
    """
    Return the array of values found at ``(i + di, j + dj)`` for each cell.

    Positions outside the array read as zero (False for boolean arrays).
    """
    di, dj = offset
    rows, columns = array.shape
    shifted = np.zeros_like(array)
    shifted[max(-di, 0):rows - max(di, 0), max(-dj, 0):columns - max(dj, 0)] = (
        array[max(di, 0):rows + min(di, 0), max(dj, 0):columns + min(dj, 0)]
    )
    return shifted


def _write_means(
    parsed: ParsedGrid,
    result: TextGrid,
    targets: NDArray[np.bool_],
    means: NDArray[np.float64],
) -> None:
    """
    Write smoothed values for the target cells into ``result``.

    Each value keeps the cell's precision with at least two decimals.
    A mean that overflowed to infinity leaves the cell unchanged.
    """
    written = overflowed = 0
    for i, j in zip(*np.nonzero(targets)):
        mean = float(means[i, j])
        if not math.isfinite(mean):
            overflowed += 1
            continue
        decimals = max(int(parsed.decimal_places[i, j]), SMOOTHED_MIN_DECIMALS)
        result[i][j] = format_fixed(mean, decimals)
        written += 1

    if overflowed:
        logger.warning(f"Left {overflowed} cells unchanged: smoothed value out of range")
    logger.debug(
        f"Smoothed {written} numeric cells in a {parsed.shape[0]}x{parsed.shape[1]} grid"
    )


# =============================================================================
# Algorithms
# =============================================================================

def apply_moving_average(
    grid: Grid,
    window_size: int = DEFAULT_WINDOW_SIZE,
    mask: Optional[Mask] = None,
) -> TextGrid:
    """
    Apply moving-average smoothing over a square window.

    Every numeric neighbor within ``window_size // 2`` cells in both
    directions (the cell included) counts equally. The window is square,
    so diagonal neighbors at the corners are part of it.

    Args:
        grid: Rows of cell text
        window_size: Side of the window; even sizes are widened by one
        mask: Region to read from and write to (whole grid by default)

    Returns:
        New text grid

    Raises:
        SmoothingParameterError: If window_size is not a positive integer
    """
    size = validate_window_size(window_size)
    kernel = np.ones((size, size), dtype=np.float64)
    return _normalized_convolution(ParsedGrid.from_rows(grid), mask or Mask(), kernel)


def apply_gaussian_smoothing(
    grid: Grid,
    sigma: float = DEFAULT_SIGMA,
    mask: Optional[Mask] = None,
) -> TextGrid:
    """
    Apply Gaussian smoothing.

    The kernel is normalized over its full extent; at mask edges and
    around non-numeric cells the result is renormalized by the weights
    actually used.

    Args:
        grid: Rows of cell text
        sigma: Kernel standard deviation, in cells
        mask: Region to read from and write to (whole grid by default)

    Returns:
        New text grid

    Raises:
        SmoothingParameterError: If sigma is not a positive finite number
    """
    kernel = gaussian_kernel(sigma)
    return _normalized_convolution(ParsedGrid.from_rows(grid), mask or Mask(), kernel)


def apply_bilinear_interpolation(grid: Grid, mask: Optional[Mask] = None) -> TextGrid:
    """
    Average each numeric cell with its numeric up/down/left/right neighbors.

    The result is ``(cell + sum(neighbors)) / (1 + n_neighbors)``. A cell
    without any usable neighbor is left unchanged.

    Args:
        grid: Rows of cell text
        mask: Region to read from and write to (whole grid by default)

    Returns:
        New text grid
    """
    parsed = ParsedGrid.from_rows(grid)
    result = parsed.copy_rows()
    if parsed.values.size == 0:
        return result

    valid = parsed.valid(mask or Mask())
    data = np.where(valid, parsed.values, 0.0)

    # Neighbors are summed up, down, left, right, then added to the cell
    neighbor_sum = np.zeros_like(data)
    neighbor_count = np.zeros(data.shape, dtype=np.int64)
    with np.errstate(over="ignore", invalid="ignore"):
        for offset in _BILINEAR_NEIGHBORS:
            neighbor_sum = neighbor_sum + _shift(data, offset)
            neighbor_count += _shift(valid, offset)
        means = (data + neighbor_sum) / (neighbor_count + 1)

    targets = valid & (neighbor_count > 0)
    _write_means(parsed, result, targets, means)
    return result


# =============================================================================
# Request dispatch
# =============================================================================

@dataclass(frozen=True)
class SmoothingRequest:
    """
    Smoothing method with its parameter and mask.

    Attributes:
        method: Algorithm to apply (enum member or its value, e.g. "gaussian")
        parameter: Window size for MOVING_AVERAGE, sigma for GAUSSIAN,
            ignored for BILINEAR; None selects the default
        mask: Region to read from and write to
    """

    method: SmoothingMethod
    parameter: Optional[float] = None
    mask: Mask = field(default_factory=Mask)

    def __post_init__(self) -> None:
        """Normalize the method and validate the parameter."""
        method = self.method
        if not isinstance(method, SmoothingMethod):
            try:
                method = SmoothingMethod(str(method).strip().lower().replace("-", "_"))
            except ValueError:
                available = ", ".join(m.value for m in SmoothingMethod)
                raise SmoothingParameterError(
                    f"Unknown smoothing method '{self.method}'. Available: {available}"
                ) from None
            object.__setattr__(self, "method", method)

        if method is SmoothingMethod.MOVING_AVERAGE:
            parameter = DEFAULT_WINDOW_SIZE if self.parameter is None else self.parameter
            object.__setattr__(self, "parameter", validate_window_size(parameter))
        elif method is SmoothingMethod.GAUSSIAN:
            parameter = DEFAULT_SIGMA if self.parameter is None else self.parameter
            object.__setattr__(self, "parameter", validate_sigma(parameter))


def smooth_grid(grid: Grid, request: SmoothingRequest) -> TextGrid:
    """
    Apply the smoothing described by a request.

    Args:
        grid: Rows of cell text
        request: Method, parameter and mask

    Returns:
        New text grid
    """
    if request.method is SmoothingMethod.MOVING_AVERAGE:
        return apply_moving_average(grid, int(request.parameter), request.mask)
    if request.method is SmoothingMethod.GAUSSIAN:
        return apply_gaussian_smoothing(grid, float(request.parameter), request.mask)
    return apply_bilinear_interpolation(grid, request.mask)
