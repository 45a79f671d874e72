"""Fill colors for raw pixel writes.

A :class:`ColorState` is an immutable RGB triple that every raw write takes
as an explicit argument. Operations that may color entities differently
accept a :data:`Color`, a tagged variant of either a :class:`Constant` color
or a :class:`ByEntity` function resolved once per entity.
"""

import colorsys
import random
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Tuple, Union

from lattice_canvas.types import RGB, EntityID

HEX_DIGITS = "0123456789abcdefABCDEF"


def parse_hex(hex_color: str) -> RGB:
    """Parse ``"RRGGBB"`` (optionally ``"#RRGGBB"``) into channel bytes."""
    digits = hex_color[1:] if hex_color.startswith("#") else hex_color
    if len(digits) != 6 or any(c not in HEX_DIGITS for c in digits):
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def _channel(value: float) -> int:
    # Same rounding and saturation a clamped byte array applies on store.
    return min(255, max(0, int(round(value))))


@dataclass(frozen=True)
class ColorState:
    """Active fill color for raw writes.

    Attributes:
        r: Red channel (0-255).
        g: Green channel (0-255).
        b: Blue channel (0-255).
    """

    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, hex_color: str) -> "ColorState":
        return cls(*parse_hex(hex_color))

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float) -> "ColorState":
        """Build from possibly fractional or out-of-range channel values."""
        return cls(_channel(r), _channel(g), _channel(b))

    @property
    def rgb(self) -> RGB:
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        return f"{self.r:02X}{self.g:02X}{self.b:02X}"

    @property
    def fill_style(self) -> str:
        """Pillow-compatible ``#RRGGBB`` fill string for vector drawing."""
        return "#" + self.hex

ColorLike = Union[str, RGB, ColorState]


def as_color_state(value: ColorLike) -> ColorState:
    """Coerce a hex string or RGB triple to a :class:`ColorState`."""
    if isinstance(value, ColorState):
        return value
    if isinstance(value, str):
        return ColorState.from_hex(value)
    r, g, b = value
    return ColorState.from_rgb(r, g, b)


@dataclass(frozen=True)
class Constant:
    """Same color for every entity."""

    state: ColorState

    @classmethod
    def hex(cls, hex_color: str) -> "Constant":
        return cls(ColorState.from_hex(hex_color))

    def resolve(self, eid: EntityID) -> ColorState:
        return self.state


@dataclass(frozen=True)
class ByEntity:
    """Color computed per entity id.

    Attributes:
        fn: Maps an entity id to an RGB triple or a hex string.
    """

    fn: Callable[[EntityID], Union[str, RGB]]

    def resolve(self, eid: EntityID) -> ColorState:
        return as_color_state(self.fn(eid))


Color = Union[Constant, ByEntity]


def as_color(value: Union[Color, ColorLike]) -> Color:
    """Wrap a plain hex string / RGB / ColorState into a :class:`Constant`."""
    if isinstance(value, (Constant, ByEntity)):
        return value
    return Constant(as_color_state(value))


@lru_cache(maxsize=2048)
def entity_color(eid: EntityID) -> Tuple[int, int, int]:
    """Stable fill color for an entity, usable as a :class:`ByEntity` function.

    The id seeds its own generator, so an entity keeps its color from frame
    to frame and across runs. Saturation and value stay in the upper range
    to keep neighboring entities distinguishable on a black background.
    """
    rng = random.Random(eid)
    hue, saturation, value = (
        rng.random(),
        0.6 + 0.3 * rng.random(),
        0.7 + 0.25 * rng.random(),
    )
    r, g, b = colorsys.hsv_to_rgb(hue, saturation, value)
    return int(r * 255), int(g * 255), int(b * 255)
