"""Seeded five-color palette generation.

Pipeline for one call:

1. A *selection* stream picks the theme (unless a known preferred id is given).
2. A *sampling* stream, seeded from ``seed ^ hash(theme.id)``, reduces or
   expands the theme to five base colors.  Switching themes for the same
   seed therefore never perturbs how a given theme is sampled.
3. The base colors are rotated toward the circular mean of any locked hues,
   drifted, given per-slot noise and an optional contrast push, then clamped.
4. Locked slots replace their computed color verbatim.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

from chromaseed.art.color import Hue, clamp, hex_to_hsl
from chromaseed.art.palettes import CURATED_THEMES
from chromaseed.constants import SWATCH_COUNT
from chromaseed.palette.models import GeneratedPalette, HslColor, PaletteColor, PaletteTheme
from chromaseed.palette.random import MASK32, Mulberry32, hash_string

logger = logging.getLogger(__name__)

SATURATION_BOUNDS = (14.0, 97.0)
LIGHTNESS_BOUNDS = (8.0, 92.0)

# Bounds for colors synthesized when a theme has fewer than five entries.
_BLEND_SATURATION_BOUNDS = (18.0, 96.0)
_BLEND_LIGHTNESS_BOUNDS = (10.0, 90.0)
_MAX_STRIDE_ATTEMPTS = 16


def merge_theme_pool(theme_pool: Iterable = ()) -> list[PaletteTheme]:
    """Curated catalog followed by ``theme_pool``, de-duplicated by id.

    The first occurrence of an id wins, so custom themes can never shadow a
    curated one.  Malformed entries are dropped.
    """
    merged: list[PaletteTheme] = []
    seen: set[str] = set()
    for entry in (*CURATED_THEMES, *theme_pool):
        theme = PaletteTheme.coerce(entry)
        if theme is None:
            logger.debug("Dropping malformed theme entry: %r", entry)
            continue
        if theme.id in seen:
            continue
        seen.add(theme.id)
        merged.append(theme)
    return merged


def _pick_theme(rand: Mulberry32, pool: Sequence[PaletteTheme],
                preferred_theme_id: str | None) -> PaletteTheme:
    if not pool:
        pool = CURATED_THEMES
    if preferred_theme_id:
        for theme in pool:
            if theme.id == preferred_theme_id:
                return theme
    return pool[rand.randint(len(pool))]


def _synthesize_colors(rand: Mulberry32) -> list[HslColor]:
    colors = []
    for index in range(SWATCH_COUNT):
        h = Hue.wrap(rand() * 360 + index * 37)
        s = 60 + rand() * 18
        l = 34 + rand() * 28
        colors.append(HslColor(h, s, l))
    return colors


def _stride_walk(base: list[HslColor], rand: Mulberry32) -> list[HslColor]:
    """Pick five distinct colors by a coprime stride around the list."""
    n = len(base)
    start = rand.randint(n)
    span = max(1, n - 1)
    step = 1 + rand.randint(span)
    attempts = 0
    while math.gcd(step, n) != 1 and attempts < _MAX_STRIDE_ATTEMPTS:
        step = (step % span) + 1
        attempts += 1

    picked = []
    cursor = start
    while len(picked) < SWATCH_COUNT:
        picked.append(base[cursor])
        cursor = (cursor + step) % n
    return picked


def _blend_expand(base: list[HslColor], rand: Mulberry32) -> list[HslColor]:
    """Grow a short theme to five colors by blending toward random members."""
    expanded = list(base)
    while len(expanded) < SWATCH_COUNT:
        source = expanded[len(expanded) % len(base)]
        target = base[rand.randint(len(base))]
        blend = 0.35 + rand() * 0.45
        hue_delta = Hue(source.h).delta_to(target.h)
        s_lo, s_hi = _BLEND_SATURATION_BOUNDS
        l_lo, l_hi = _BLEND_LIGHTNESS_BOUNDS
        expanded.append(HslColor(
            h=Hue.wrap(source.h + hue_delta * (1 - blend) + (rand() - 0.5) * 28),
            s=clamp(source.s * blend + target.s * (1 - blend) + (rand() - 0.5) * 16, s_lo, s_hi),
            l=clamp(source.l * blend + target.l * (1 - blend) + (rand() - 0.5) * 18, l_lo, l_hi),
        ))
    return expanded[:SWATCH_COUNT]


def pick_base_colors(theme: PaletteTheme, rand: Mulberry32) -> list[HslColor]:
    """Reduce or expand ``theme.colors`` to exactly five HSL colors."""
    base = [HslColor(*hex_to_hsl(c)) for c in theme.colors]
    if not base:
        return _synthesize_colors(rand)
    if len(base) == SWATCH_COUNT:
        return base
    if len(base) > SWATCH_COUNT:
        return _stride_walk(base, rand)
    return _blend_expand(base, rand)


def _contrast_boost(contrast_mode: float, index: int) -> float:
    if contrast_mode > 0.7:
        return 8.0 if index % 2 == 0 else -7.0
    if contrast_mode < 0.24:
        return 9.0 if index == 2 else -3.0
    return 0.0


def _locked_hsl(entry) -> HslColor | None:
    if entry is None:
        return None
    if isinstance(entry, PaletteColor):
        return entry.hsl
    return entry


def generate_palette(seed: int,
                     locked_colors: Sequence[HslColor | PaletteColor | None] = (),
                     preferred_theme_id: str | None = None,
                     theme_pool: Iterable = ()) -> GeneratedPalette:
    """Deterministically derive a five-color palette.

    Args:
        seed: 32-bit seed.  Same inputs always give the same palette.
        locked_colors: Up to five entries; a non-None entry pins that slot.
        preferred_theme_id: Theme to sample from.  Unknown ids silently
            fall back to a seeded random pick.
        theme_pool: Extra (custom) themes merged after the curated catalog.

    Returns:
        A :class:`GeneratedPalette` with exactly five colors plus the id and
        name of the theme actually used.
    """
    locks = [_locked_hsl(locked_colors[i]) if i < len(locked_colors) else None
             for i in range(SWATCH_COUNT)]

    rand = Mulberry32(seed)
    theme = _pick_theme(rand, merge_theme_pool(theme_pool), preferred_theme_id)

    local = Mulberry32((int(seed) ^ hash_string(theme.id)) & MASK32)
    base_colors = pick_base_colors(theme, local)

    pinned = [c for c in locks if c is not None]
    generated_mean = Hue.mean(c.h for c in base_colors)
    if pinned:
        hue_rotation = generated_mean.delta_to(Hue.mean(c.h for c in pinned))
    else:
        hue_rotation = (local() - 0.5) * 14
    saturation_drift = (local() - 0.5) * 10
    lightness_drift = (local() - 0.5) * 10
    contrast_mode = local()

    s_lo, s_hi = SATURATION_BOUNDS
    l_lo, l_hi = LIGHTNESS_BOUNDS
    colors = []
    for index, color in enumerate(base_colors):
        # Slots further from the middle get more variety.
        edge = abs(index - 2) / 2
        hue_noise = (local() - 0.5) * (7 + edge * 6)
        saturation_noise = (local() - 0.5) * (8 + edge * 4)
        lightness_noise = (local() - 0.5) * (10 + edge * 4)

        candidate = HslColor(
            h=Hue.wrap(color.h + hue_rotation + hue_noise),
            s=clamp(color.s + saturation_drift + saturation_noise, s_lo, s_hi),
            l=clamp(color.l + lightness_drift + lightness_noise
                    + _contrast_boost(contrast_mode, index), l_lo, l_hi),
        )
        colors.append(PaletteColor.from_hsl(locks[index] or candidate))

    return GeneratedPalette(colors=tuple(colors), theme_id=theme.id, theme_name=theme.name)
