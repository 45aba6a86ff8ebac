"""Color-space conversions and circular hue arithmetic.

HSL components use the usual CSS ranges: hue in degrees [0, 360),
saturation and lightness in percent [0, 100].  RGB channels are ints in
[0, 255].  All functions are pure and never raise on malformed input.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Iterable

_HEX_RE = re.compile(r"^[0-9a-fA-F]{6}$")

BLACK = (0, 0, 0)


def clamp(value: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, value))


def round_half_up(value: float) -> int:
    """Round .5 toward +inf, unlike Python's banker's rounding."""
    return int(math.floor(value + 0.5))


# ------------------------------------------------------------------
# Circular hue arithmetic
# ------------------------------------------------------------------

def wrap_hue(value: float) -> float:
    """Normalize any angle in degrees into [0, 360)."""
    return math.fmod(math.fmod(value, 360.0) + 360.0, 360.0)


def shortest_hue_delta(start: float, end: float) -> float:
    """Signed delta from ``start`` to ``end`` along the shorter arc."""
    return math.fmod(end - start + 540.0, 360.0) - 180.0


def average_hue(hues: Iterable[float]) -> float:
    """Circular mean via unit-vector averaging.  0 for no hues or a null resultant."""
    hues = list(hues)
    if not hues:
        return 0.0
    sum_x = 0.0
    sum_y = 0.0
    for h in hues:
        sum_x += math.cos(h * math.pi / 180)
        sum_y += math.sin(h * math.pi / 180)
    avg_x = sum_x / len(hues)
    avg_y = sum_y / len(hues)
    if avg_x == 0 and avg_y == 0:
        return 0.0
    return wrap_hue(math.atan2(avg_y, avg_x) * 180 / math.pi)


@dataclass(frozen=True)
class Hue:
    """An angle on the color wheel.

    Plain float subtraction and averaging break near the 0/360 seam, so
    every hue operation in the generator goes through this wrapper.
    """

    degrees: float

    def __post_init__(self) -> None:
        # Already-normalized values are kept bit-for-bit.
        if not 0.0 <= self.degrees < 360.0:
            object.__setattr__(self, "degrees", wrap_hue(self.degrees))

    wrap = staticmethod(wrap_hue)

    def delta_to(self, other: Hue | float) -> float:
        target = other.degrees if isinstance(other, Hue) else other
        return shortest_hue_delta(self.degrees, target)

    def rotate(self, amount: float) -> Hue:
        return Hue(self.degrees + amount)

    @classmethod
    def mean(cls, hues: Iterable[Hue | float]) -> Hue:
        return cls(average_hue(h.degrees if isinstance(h, Hue) else h for h in hues))

    def __float__(self) -> float:
        return self.degrees


# ------------------------------------------------------------------
# Hex / RGB / HSL
# ------------------------------------------------------------------

def expand_hex(value: str) -> str | None:
    """Return the six hex digits of ``value`` (no '#'), or None if malformed."""
    if not isinstance(value, str):
        return None
    digits = value.strip().replace("#", "", 1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if not _HEX_RE.match(digits):
        return None
    return digits


def hex_to_rgb(value: str, default: tuple[int, int, int] = BLACK) -> tuple[int, int, int]:
    """Convert '#RGB' / '#RRGGBB' (any case) to an (r, g, b) tuple.

    Malformed strings map to ``default`` (black unless overridden).
    """
    digits = expand_hex(value)
    if digits is None:
        return default
    return tuple(int(digits[i : i + 2], 16) for i in (0, 2, 4))


def rgb_to_hex(rgb: Iterable[float]) -> str:
    channels = (int(clamp(c, 0, 255)) for c in rgb)
    return "#" + "".join(f"{c:02x}" for c in channels).upper()


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[int, int, int]:
    saturation = clamp(s, 0, 100) / 100
    lightness = clamp(l, 0, 100) / 100
    chroma = (1 - abs(2 * lightness - 1)) * saturation
    segment = wrap_hue(h) / 60
    x = chroma * (1 - abs(math.fmod(segment, 2) - 1))

    if 0 <= segment < 1:
        r, g, b = chroma, x, 0.0
    elif segment < 2:
        r, g, b = x, chroma, 0.0
    elif segment < 3:
        r, g, b = 0.0, chroma, x
    elif segment < 4:
        r, g, b = 0.0, x, chroma
    elif segment < 5:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x

    match = lightness - chroma / 2
    return (
        round_half_up((r + match) * 255),
        round_half_up((g + match) * 255),
        round_half_up((b + match) * 255),
    )


def rgb_to_hsl(rgb: Iterable[float]) -> tuple[float, float, float]:
    r, g, b = (clamp(c, 0, 255) / 255 for c in rgb)
    hi = max(r, g, b)
    lo = min(r, g, b)
    delta = hi - lo

    hue = 0.0
    if delta != 0:
        if hi == r:
            hue = math.fmod((g - b) / delta, 6)
        elif hi == g:
            hue = (b - r) / delta + 2
        else:
            hue = (r - g) / delta + 4
        hue *= 60

    lightness = (hi + lo) / 2
    saturation = 0.0 if delta == 0 else delta / (1 - abs(2 * lightness - 1))
    return wrap_hue(hue), saturation * 100, lightness * 100


def hex_to_hsl(value: str) -> tuple[float, float, float]:
    return rgb_to_hsl(hex_to_rgb(value))


def hsl_to_hex(h: float, s: float, l: float) -> str:
    return rgb_to_hex(hsl_to_rgb(h, s, l))
