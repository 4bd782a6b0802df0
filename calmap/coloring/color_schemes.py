"""
Color schemes for calibration map gradients.

A scheme is a piecewise-linear gradient defined by color stops at
normalized positions 0..1. The four built-in schemes are immutable and
shared by every caller.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from ..exceptions import InvalidColorSchemeError, UnknownColorSchemeError

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class ColorStop:
    """
    Anchor point of a gradient.

    Attributes:
        position: Normalized position in [0, 1]
        color: (R, G, B) channels in 0..255
    """

    position: float
    color: RGB


@dataclass(frozen=True)
class ColorScheme:
    """
    Ordered gradient stops anchored at positions 0 and 1.

    Attributes:
        name: Display name
        stops: At least two stops with non-decreasing positions
    """

    name: str
    stops: Tuple[ColorStop, ...]

    def __post_init__(self) -> None:
        """Validate stop count, ordering, anchors and channel ranges."""
        stops = self.stops
        if len(stops) < 2:
            raise InvalidColorSchemeError(
                f"Color scheme '{self.name}' needs at least two stops, got {len(stops)}"
            )

        if stops[0].position != 0 or stops[-1].position != 1:
            raise InvalidColorSchemeError(
                f"Color scheme '{self.name}' must start at position 0 and end at 1"
            )

        for lower, upper in zip(stops, stops[1:]):
            if upper.position < lower.position:
                raise InvalidColorSchemeError(
                    f"Color scheme '{self.name}' stop positions must be non-decreasing"
                )

        for stop in stops:
            if len(stop.color) != 3 or any(not 0 <= c <= 255 for c in stop.color):
                raise InvalidColorSchemeError(
                    f"Color scheme '{self.name}' has an invalid color {stop.color}"
                )

    @property
    def swatch(self) -> RGB:
        """Representative color of the scheme (its middle stop)."""
        return self.stops[len(self.stops) // 2].color


def _scheme(name: str, *stops: Tuple[float, RGB]) -> ColorScheme:
    """Build a ColorScheme from (position, color) pairs."""
    return ColorScheme(
        name=name,
        stops=tuple(ColorStop(position, color) for position, color in stops),
    )


class BuiltinColorScheme(Enum):
    """Built-in gradient schemes, keyed by the names hosts store."""

    THERMAL = _scheme(
        "Thermal",
        (0.0, (0, 0, 255)),      # Blue
        (0.25, (0, 255, 255)),   # Cyan
        (0.5, (0, 255, 0)),      # Green
        (0.75, (255, 255, 0)),   # Yellow
        (1.0, (255, 0, 0)),      # Red
    )
    AUTOMOTIVE = _scheme(
        "Automotive",
        (0.0, (30, 30, 180)),    # Dark blue
        (0.2, (60, 120, 220)),   # Blue
        (0.4, (100, 200, 100)),  # Green
        (0.6, (255, 200, 60)),   # Yellow
        (0.8, (255, 120, 30)),   # Orange
        (1.0, (220, 20, 20)),    # Red
    )
    VIRIDIS = _scheme(
        "Viridis",
        (0.0, (68, 1, 84)),
        (0.25, (59, 82, 139)),
        (0.5, (33, 145, 140)),
        (0.75, (94, 201, 98)),
        (1.0, (253, 231, 37)),
    )
    GRAYSCALE = _scheme(
        "Grayscale",
        (0.0, (255, 255, 255)),  # White
        (1.0, (0, 0, 0)),        # Black
    )

    @property
    def scheme(self) -> ColorScheme:
        """Return the scheme data."""
        return self.value


def get_color_scheme(name: Union[str, BuiltinColorScheme, ColorScheme]) -> ColorScheme:
    """
    Resolve a scheme name to its ColorScheme.

    Args:
        name: Built-in scheme name (case-insensitive, e.g. "THERMAL"),
            a BuiltinColorScheme member, or a ColorScheme

    Returns:
        ColorScheme instance

    Raises:
        UnknownColorSchemeError: If the name is not a built-in scheme
    """
    if isinstance(name, ColorScheme):
        return name
    if isinstance(name, BuiltinColorScheme):
        return name.value

    try:
        return BuiltinColorScheme[str(name).strip().upper()].value
    except KeyError:
        available = ", ".join(member.name for member in BuiltinColorScheme)
        raise UnknownColorSchemeError(
            f"Unknown color scheme '{name}'. Available: {available}"
        ) from None
