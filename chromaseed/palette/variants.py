"""Variant lab: a fixed grid of deterministic siblings of one palette."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from chromaseed.constants import VARIANT_COUNT, VARIANT_THEME_ID
from chromaseed.palette.generator import generate_palette
from chromaseed.palette.models import PaletteColor, PaletteTheme, build_locked_colors
from chromaseed.palette.random import MASK32, derive_iteration_seed

_VARIANT_STRIDE = 2654435761


@dataclass(frozen=True)
class Variant:
    seed: int
    theme_id: str
    theme_name: str
    colors: tuple[PaletteColor, ...]

    def to_dict(self) -> dict:
        return {
            "seed": self.seed,
            "themeId": self.theme_id,
            "themeName": self.theme_name,
            "colors": [c.to_dict() for c in self.colors],
        }


def variant_base_theme(base_palette: Sequence[PaletteColor]) -> PaletteTheme:
    return PaletteTheme(VARIANT_THEME_ID, "Variant Base", tuple(c.hex for c in base_palette))


def variant_seed(seed: int, index: int) -> int:
    mixed = (int(seed) + (index + 1) * _VARIANT_STRIDE) & MASK32
    return derive_iteration_seed(mixed or int(seed) + index + 1)


def generate_variants(seed: int,
                      base_palette: Sequence[PaletteColor],
                      locks: Sequence[bool] = (),
                      theme_id: str = VARIANT_THEME_ID,
                      theme_name: str = "Variant Base",
                      count: int = VARIANT_COUNT) -> list[Variant]:
    """Re-sample ``base_palette`` itself ``count`` times.

    Each variant samples only the base palette's own colors, so variants stay
    recognisably related; locked slots are carried over unchanged.  The
    returned variants keep the base palette's theme id / name.
    """
    base_theme = variant_base_theme(base_palette)
    locked = build_locked_colors(base_palette, locks)
    variants = []
    for index in range(count):
        seed_i = variant_seed(seed, index)
        generated = generate_palette(seed_i, locked, base_theme.id, [base_theme])
        variants.append(Variant(seed_i, theme_id, theme_name, generated.colors))
    return variants
