"""Layer blending.

Blends operate on float arrays in [0, 1]; ``composite`` applies a blend
mode and then mixes the result over the base with a (scalar or per-pixel)
alpha, like drawing a layer with a global alpha and composite operation.
"""

from __future__ import annotations

import numpy as np

BLEND_MODES = ("normal", "multiply", "overlay", "color-burn")


def composite(
    base: np.ndarray,
    top: np.ndarray,
    mode: str = "normal",
    alpha: float | np.ndarray = 1.0,
) -> np.ndarray:
    """Draw ``top`` over ``base``.

    Args:
        base: (H, W, 3) float array in [0, 1], the opaque backdrop.
        top: (H, W, 3) float array in [0, 1], or anything broadcastable to it.
        mode: One of :data:`BLEND_MODES`.
        alpha: Layer opacity; a scalar or an (H, W, 1) array.

    Returns:
        (H, W, 3) float array.
    """
    blended = _blend(base, top, mode)
    out = base * (1.0 - alpha) + blended * alpha
    return np.clip(out, 0.0, 1.0)


def _blend(base: np.ndarray, top: np.ndarray, mode: str) -> np.ndarray:
    """Apply a blend mode between base and top layers."""
    if mode == "normal":
        return top
    elif mode == "multiply":
        return base * top
    elif mode == "overlay":
        # Overlay: multiply where base < 0.5, screen where base >= 0.5
        return np.where(
            base < 0.5,
            2.0 * base * top,
            1.0 - 2.0 * (1.0 - base) * (1.0 - top),
        )
    elif mode == "color-burn":
        with np.errstate(divide="ignore", invalid="ignore"):
            burned = 1.0 - np.minimum(1.0, (1.0 - base) / top)
        return np.where(base >= 1.0, 1.0, np.where(top <= 0.0, 0.0, burned))
    raise ValueError(f"Unknown blend mode: {mode!r}")
