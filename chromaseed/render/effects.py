"""Pixel post-processors.

Each effect takes an (H, W, C) uint8 buffer (C is 3 or 4) and returns a new
buffer of the same shape.  Only the color channels are touched; a fourth
channel, when present, is passed through unchanged.  Effects that consume
randomness draw from the stream they are given in row-major pixel order.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from chromaseed.palette.random import Mulberry32
from chromaseed.render.noise import NoiseField
from chromaseed.render.plan import DisplacementBlock, SwirlParams

_MAX_BLOCK_OFFSET = 46

_INK_MAX_DARKNESS = 10
_INK_SCUFF_CHANCE = 0.002

_THREAD_SPACING_X = 22.5
_THREAD_SPACING_Y = 13.5
_WEAVE_MAX_DARKNESS = 25
_WEAVE_BASE_SIZE = 38

VIGNETTE_ALPHA = 0.24


def _to_byte(values: np.ndarray) -> np.ndarray:
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def _block_offsets(noise: NoiseField, x: int, y: int) -> tuple[int, int]:
    x_off = math.floor((noise.get01(x * 0.013 + y * 0.017, y * 0.011) - 0.5) * _MAX_BLOCK_OFFSET)
    y_off = math.floor((noise.get01(y * 0.019 + x * 0.023, x * 0.013) - 0.5) * _MAX_BLOCK_OFFSET)
    return x_off, y_off


def apply_block_displacement(pixels: np.ndarray, blocks: Sequence[DisplacementBlock],
                             noise: NoiseField) -> np.ndarray:
    """Copy each block from a noise-offset source position, in place order.

    Blocks are applied one after another and pixels within a block row by
    row, left to right; a later copy can therefore read a pixel an earlier
    copy already moved.  Sources are clamped to the canvas.
    """
    out = pixels.copy()
    height, width = out.shape[:2]
    if width < 2 or height < 2:
        return out

    for block in blocks:
        block_w = max(2, min(width, int(math.floor(block.w_px))))
        block_h = max(2, min(height, int(math.floor(block.h_px))))
        x = int(math.floor(block.nx * (width - block_w)))
        y = int(math.floor(block.ny * (height - block_h)))
        x_off, y_off = _block_offsets(noise, x, y)

        cols = np.arange(x, x + block_w)
        shifted = np.clip(cols + x_off, 0, width - 1)
        if x_off < 0:
            # Reading leftwards along the row being written repeats the
            # first |x_off| source pixels.
            period = -x_off
            repeated = np.clip(x + np.arange(block_w) % period - period, 0, width - 1)
        else:
            repeated = shifted

        for dest_y in range(y, y + block_h):
            src_y = min(max(dest_y + y_off, 0), height - 1)
            src_cols = repeated if src_y == dest_y else shifted
            out[dest_y, x:x + block_w, :3] = out[src_y, src_cols, :3]
    return out


def apply_swirl(pixels: np.ndarray, swirl: SwirlParams, random: Mulberry32,
                noise: NoiseField) -> np.ndarray:
    """Grid-quantized noise displacement, mostly along x, with row tears.

    Each pass samples from a snapshot of the buffer taken when the pass
    starts.  Per pass the stream yields one scan offset, then per row one
    tear draw followed by one axis draw per pixel.
    """
    out = pixels.copy()
    height, width = out.shape[:2]
    block = swirl.block_size
    grid_x = (np.arange(width) // block) * block
    grid_y = (np.arange(height) // block) * block

    for p in range(swirl.pass_count):
        source = out.copy()
        scan_offset = math.floor((random() - 0.5) * swirl.strength * 4)
        draws = random.take(height * (width + 1)).reshape(height, width + 1)
        row_shift = np.where(draws[:, 0] < swirl.tear_chance, scan_offset, 0)
        along_x = draws[:, 1:] < swirl.axis_bias

        n = noise.get01(grid_x[np.newaxis, :] * 0.02 + p * 13, grid_y[:, np.newaxis] * 0.02)
        amount = np.floor((n - 0.5) * swirl.strength * 2 + 0.5).astype(np.int64)
        dx = np.where(along_x, amount + row_shift[:, np.newaxis], 0)
        dy = np.where(along_x, 0, amount)

        src_x = np.clip(grid_x[np.newaxis, :] + dx, 0, width - 1)
        src_y = np.clip(grid_y[:, np.newaxis] + dy, 0, height - 1)
        out[..., :3] = source[src_y, src_x, :3]
    return out


def _scuff_marks(random: Mulberry32, count: int) -> tuple[np.ndarray, np.ndarray]:
    """Pixels that receive a scuff and the scuff's extra draw.

    Every pixel draws once; a draw under the scuff chance also consumes the
    next value for its depth, which shifts all later pixels by one.
    """
    values = random.peek(2 * count)
    hits = []
    extras = []
    offset = 0
    consumed_extra = -1
    for index in np.flatnonzero(values < _INK_SCUFF_CHANCE).tolist():
        if index == consumed_extra:
            continue
        pixel = index - offset
        if pixel >= count:
            break
        hits.append(pixel)
        extras.append(values[index + 1])
        consumed_extra = index + 1
        offset += 1
    random.skip(count + offset)
    return np.array(hits, dtype=np.int64), np.array(extras, dtype=np.float64)


def apply_fine_ink(pixels: np.ndarray, random: Mulberry32, noise: NoiseField) -> np.ndarray:
    """Darken toward the edges with noisy wear, plus rare ink scuffs."""
    out = pixels.copy()
    height, width = out.shape[:2]
    frame_depth = min(width, height) / 6

    ys, xs = np.mgrid[0:height, 0:width]
    to_edge = np.minimum(np.minimum(xs, ys), np.minimum(width - xs - 1, height - ys - 1))
    edge_factor = np.where(to_edge < frame_depth, 1 - to_edge / frame_depth, 0.0)
    wear = noise.get01(xs * 0.08, ys * 0.08) * _INK_MAX_DARKNESS * edge_factor

    hits, extras = _scuff_marks(random, width * height)
    flat = wear.reshape(-1)
    flat[hits] += extras * 28 + 16

    rgb = out[..., :3].astype(np.float64)
    rgb[..., 0] -= wear
    rgb[..., 1] -= wear * 0.82
    rgb[..., 2] -= wear * 0.63
    out[..., :3] = _to_byte(np.maximum(0.0, rgb))
    return out


def apply_thread_weave(pixels: np.ndarray, random: Mulberry32, noise: NoiseField) -> np.ndarray:
    """Superimpose a fine thread grid and a noise-sized coarse weave."""
    out = pixels.copy()
    height, width = out.shape[:2]
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)

    noise_factor = noise.get01((xs + width) * 0.5, (ys + height) * 0.5)
    weave_x = _WEAVE_BASE_SIZE + noise_factor * (_THREAD_SPACING_X / 2)
    weave_y = _WEAVE_BASE_SIZE + noise_factor * (_THREAD_SPACING_Y / 2)
    grid_x = np.fmod(xs, _THREAD_SPACING_X)
    grid_y = np.fmod(ys, _THREAD_SPACING_Y)
    cell_x = np.fmod(xs, weave_x)
    cell_y = np.fmod(ys, weave_y)

    darkness = np.where(
        np.fmod(grid_x + grid_y, 2) == 0,
        grid_x / _THREAD_SPACING_X * _WEAVE_MAX_DARKNESS * 0.5,
        grid_y / _THREAD_SPACING_Y * _WEAVE_MAX_DARKNESS * 0.5,
    )
    darkness = darkness + np.where(
        np.fmod(cell_x + cell_y, 2) == 0,
        cell_x / weave_x * _WEAVE_MAX_DARKNESS * noise_factor * 0.5,
        cell_y / weave_y * _WEAVE_MAX_DARKNESS * noise_factor * 0.5,
    )

    jitter = random.take(width * height).reshape(height, width)
    darkness = jitter * darkness * 0.4 + darkness * 0.8

    rgb = out[..., :3].astype(np.float64) - darkness[..., np.newaxis]
    out[..., :3] = _to_byte(np.maximum(0.0, rgb))
    return out


def apply_vignette(pixels: np.ndarray) -> np.ndarray:
    """Radial darkening from 0.28 * min side out to 0.8 * max side."""
    out = pixels.copy()
    height, width = out.shape[:2]
    inner = min(width, height) * 0.28
    outer = max(width, height) * 0.8

    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
    dist = np.hypot(xs + 0.5 - width * 0.5, ys + 0.5 - height * 0.5)
    t = np.clip((dist - inner) / (outer - inner), 0.0, 1.0)
    shade = 1.0 - VIGNETTE_ALPHA * t

    rgb = out[..., :3].astype(np.float64) * shade[..., np.newaxis]
    out[..., :3] = _to_byte(rgb)
    return out
