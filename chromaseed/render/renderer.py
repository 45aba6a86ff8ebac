"""Render orchestration.

Sizes the working canvas, derives every PRNG stream and the noise field
from the seed, runs the painter and the post-processors in a fixed order,
then resamples the result to the requested size.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from PIL import Image

from chromaseed.art.color import hex_to_rgb
from chromaseed.constants import (
    DEFAULT_MIN_HEIGHT,
    DEFAULT_MIN_WIDTH,
    FALLBACK_PREVIEW_PALETTE,
    MAX_PREVIEW_DIM,
    MIN_RENDER_HEIGHT,
    MIN_RENDER_WIDTH,
)
from chromaseed.palette.random import hash_number, make_stream
from chromaseed.render.context import PaintContext
from chromaseed.render.effects import (
    apply_block_displacement,
    apply_fine_ink,
    apply_swirl,
    apply_thread_weave,
    apply_vignette,
)
from chromaseed.render.noise import NoiseField
from chromaseed.render.painter import Painter
from chromaseed.render.plan import (
    BACKGROUND_SALT,
    EFFECTS_SALT,
    NOISE_SALT,
    SWIRL_SALT,
    plan_composition,
)

logger = logging.getLogger(__name__)

MALFORMED_HEX_COLOR = (35, 35, 35)
_NOISE_MODULUS = 233280


@dataclass
class RenderOptions:
    min_width: int = DEFAULT_MIN_WIDTH
    min_height: int = DEFAULT_MIN_HEIGHT
    plain: bool = False  # skip fine ink, thread weave and vignette


def safe_size(width: float, height: float, options: RenderOptions) -> tuple[int, int]:
    return (max(options.min_width, int(math.floor(width))),
            max(options.min_height, int(math.floor(height))))


def working_size(safe_width: int, safe_height: int) -> tuple[int, int]:
    """Offscreen size: longest side capped at 760, floored at 220x180."""
    scale = min(1.0, MAX_PREVIEW_DIM / max(safe_width, safe_height))
    return (max(MIN_RENDER_WIDTH, int(math.floor(safe_width * scale))),
            max(MIN_RENDER_HEIGHT, int(math.floor(safe_height * scale))))


def noise_seed(seed: int) -> float:
    return (hash_number(seed, NOISE_SALT) % _NOISE_MODULUS) / _NOISE_MODULUS


def paint_artwork(width: int, height: int, palette_hex: Sequence[str], seed: int,
                  plain: bool = False) -> np.ndarray:
    """Render at exactly ``width`` x ``height``; returns an (H, W, 3) uint8 array."""
    palette = [hex_to_rgb(h, default=MALFORMED_HEX_COLOR)
               for h in (palette_hex or FALLBACK_PREVIEW_PALETTE)]
    plan = plan_composition(seed, width, height)
    noise = NoiseField(noise_seed(seed))
    background_rand = make_stream(seed, BACKGROUND_SALT)
    effects_rand = make_stream(seed, EFFECTS_SALT)
    swirl_rand = make_stream(seed, SWIRL_SALT)
    logger.debug("Plan for seed %d at %dx%d: %d blocks, %d flow passes, weave mode %d",
                 seed, width, height, len(plan.blocks), plan.background.flow_passes,
                 plan.weave_mode)

    context = PaintContext(width, height)
    Painter(context, palette, background_rand, noise, plan.background).paint()

    pixels = context.pixels()
    pixels = apply_block_displacement(pixels, plan.blocks, noise)
    pixels = apply_swirl(pixels, plan.swirl, swirl_rand, noise)
    if not plain:
        pixels = apply_fine_ink(pixels, effects_rand, noise)
        if plan.weave_mode == 2:
            pixels = apply_thread_weave(pixels, effects_rand, noise)
        pixels = apply_vignette(pixels)
    return pixels


def render_image(width: float, height: float, palette_hex: Sequence[str], seed: int,
                 options: RenderOptions | None = None) -> Image.Image:
    """Render an artwork as a new RGB image of the safe output size."""
    options = options or RenderOptions()
    out_w, out_h = safe_size(width, height, options)
    work_w, work_h = working_size(out_w, out_h)
    logger.debug("Rendering %dx%d via %dx%d working canvas", out_w, out_h, work_w, work_h)

    pixels = paint_artwork(work_w, work_h, palette_hex, seed, options.plain)
    img = Image.fromarray(pixels)
    if (work_w, work_h) != (out_w, out_h):
        img = img.resize((out_w, out_h), Image.LANCZOS)
    return img


def render_preview(dest: Image.Image, width: float, height: float,
                   palette_hex: Sequence[str], seed: int,
                   options: RenderOptions | None = None) -> Image.Image:
    """Render into ``dest``, replacing its top-left ``safe size`` region.

    ``dest`` is modified in place and returned.  Parts of the artwork that
    fall outside ``dest`` are clipped.
    """
    img = render_image(width, height, palette_hex, seed, options)
    if dest.mode != img.mode:
        img = img.convert(dest.mode)
    dest.paste(img, (0, 0))
    return dest


def render_grid(
    palettes: Sequence[Sequence[str]],
    seeds: Sequence[int],
    thumb_size: int = 220,
    cols: int = 4,
    padding: int = 4,
    options: RenderOptions | None = None,
) -> Image.Image:
    """Contact sheet of one artwork per (palette, seed) pair."""
    options = options or RenderOptions(min_width=thumb_size, min_height=thumb_size)
    n = min(len(palettes), len(seeds))
    rows = (n + cols - 1) // cols

    cell = thumb_size + padding
    grid_w = cols * cell + padding
    grid_h = rows * cell + padding

    grid = Image.new("RGB", (grid_w, grid_h), color=(40, 40, 40))

    for i in range(n):
        row, col = divmod(i, cols)
        img = render_image(thumb_size, thumb_size, palettes[i], seeds[i], options)
        if img.size != (thumb_size, thumb_size):
            img = img.resize((thumb_size, thumb_size), Image.LANCZOS)
        x = padding + col * cell
        y = padding + row * cell
        grid.paste(img, (x, y))

    return grid
