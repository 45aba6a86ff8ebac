"""Evocative, deterministic names for palette colors ("Vivid Cobalt Glass")."""

from __future__ import annotations

from chromaseed.art.color import round_half_up
from chromaseed.palette.models import HslColor

TONE_MATERIALS = (
    "Lacquer", "Mineral", "Smoke", "Ink", "Pigment",
    "Velour", "Stone", "Alloy", "Glass", "Dust",
)

# (exclusive upper bound, family); Crimson also covers hue >= 346.
_HUE_FAMILIES = (
    (14, "Crimson"),
    (32, "Amber"),
    (52, "Ochre"),
    (76, "Lime"),
    (154, "Jade"),
    (196, "Aqua"),
    (244, "Cobalt"),
    (286, "Violet"),
    (326, "Magenta"),
    (346, "Rose"),
)


def hue_family(hue: float) -> str:
    for bound, family in _HUE_FAMILIES:
        if hue < bound:
            return family
    return "Crimson"


def value_tone(saturation: float, lightness: float) -> str:
    if lightness > 80:
        return "Porcelain"
    if lightness < 20:
        return "Nocturne"
    if saturation < 28:
        return "Muted"
    if saturation > 78:
        return "Vivid"
    if saturation > 60 and lightness > 62:
        return "Luminous"
    if lightness < 34:
        return "Deep"
    return "Balanced"


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply, as a signed int32."""
    product = (a * b) & 0xFFFFFFFF
    return product - 0x100000000 if product & 0x80000000 else product


def _material_index(color: HslColor, index: int, seed: int) -> int:
    h = _imul(round_half_up(color.h * 10) + index * 193, 2654435761)
    h ^= _imul(round_half_up(color.s * 10) + int(seed), 2246822519)
    h ^= _imul(round_half_up(color.l * 10) + 17, 3266489917)
    h ^= (h & 0xFFFFFFFF) >> 16
    # Back to int32 before taking the magnitude.
    h &= 0xFFFFFFFF
    if h & 0x80000000:
        h -= 0x100000000
    return abs(h) % len(TONE_MATERIALS)


def tone_name(color: HslColor, index: int, seed: int) -> str:
    material = TONE_MATERIALS[_material_index(color, index, seed)]
    return f"{value_tone(color.s, color.l)} {hue_family(color.h)} {material}"
