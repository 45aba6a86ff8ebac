"""WCAG luminance / contrast helpers and hue-spread measurement."""

from __future__ import annotations

from typing import Sequence

from chromaseed.art.color import hex_to_rgb
from chromaseed.constants import MAX_CONTRAST_TARGET

DARK_INK = "#111317"
LIGHT_INK = "#F8FAFC"


def _srgb_to_linear(channel: int) -> float:
    srgb = channel / 255
    if srgb <= 0.03928:
        return srgb / 12.92
    return ((srgb + 0.055) / 1.055) ** 2.4


def relative_luminance(hex_color: str) -> float:
    r, g, b = (_srgb_to_linear(c) for c in hex_to_rgb(hex_color))
    return r * 0.2126 + g * 0.7152 + b * 0.0722


def contrast_ratio(hex_a: str, hex_b: str) -> float:
    """Symmetric WCAG contrast ratio, always >= 1."""
    la = relative_luminance(hex_a)
    lb = relative_luminance(hex_b)
    light = max(la, lb)
    dark = min(la, lb)
    return (light + 0.05) / (dark + 0.05)


def contrast_matrix(hexes: Sequence[str]) -> list[list[float]]:
    return [[contrast_ratio(a, b) for b in hexes] for a in hexes]


def contrast_heat(ratio: float) -> str:
    """CSS color running red (poor) to green (strong) across 1..7."""
    clamped = max(1.0, min(MAX_CONTRAST_TARGET, ratio))
    normalized = (clamped - 1) / (MAX_CONTRAST_TARGET - 1)
    hue = 6 + normalized * 114
    return f"hsl({hue:g} 72% 35%)"


def readable_text_color(hex_color: str) -> str:
    return DARK_INK if relative_luminance(hex_color) > 0.44 else LIGHT_INK


def hue_spread(hues: Sequence[float]) -> float:
    """Arc covered by ``hues``: 360 minus the largest gap between neighbours."""
    if len(hues) < 2:
        return 0.0
    ordered = sorted(hues)
    largest_gap = 0.0
    for i, current in enumerate(ordered):
        following = ordered[0] + 360 if i == len(ordered) - 1 else ordered[i + 1]
        largest_gap = max(largest_gap, following - current)
    return 360 - largest_gap
