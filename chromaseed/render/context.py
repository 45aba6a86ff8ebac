"""Drawing surface for the painter.

Wraps a Pillow RGB image with alpha-blended primitive drawing, a
translate/rotate transform stack and whole-layer compositing.  Every render
owns its own context; nothing here is module-level state.
"""

from __future__ import annotations

import math
from contextlib import contextmanager
from typing import Iterator, Sequence

import numpy as np
from PIL import Image, ImageDraw

from chromaseed.art.color import clamp, round_half_up
from chromaseed.art.compositor import composite

Rgb = tuple[int, int, int]

_IDENTITY = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def perturb(color: Rgb, drift: float) -> Rgb:
    """Shift every channel by ``drift``, rounded and clamped to a byte."""
    return tuple(int(clamp(round_half_up(c + drift), 0, 255)) for c in color)


def _alpha_byte(alpha: float) -> int:
    return int(clamp(round_half_up(alpha * 255), 0, 255))


class PaintContext:
    """An opaque RGB canvas with a 2-D affine transform.

    The transform is stored as ``(a, b, c, d, e, f)`` mapping a user point
    ``(x, y)`` to ``(a*x + c*y + e, b*x + d*y + f)``.
    """

    def __init__(self, width: int, height: int, background: Rgb = (0, 0, 0)):
        self.width = width
        self.height = height
        self.image = Image.new("RGB", (width, height), background)
        self._draw = ImageDraw.Draw(self.image, "RGBA")
        self._matrix = _IDENTITY
        self._stack: list[tuple] = []

    # -- transform -----------------------------------------------------

    @contextmanager
    def saved(self) -> Iterator[PaintContext]:
        self._stack.append(self._matrix)
        try:
            yield self
        finally:
            self._matrix = self._stack.pop()

    def translate(self, tx: float, ty: float) -> None:
        a, b, c, d, e, f = self._matrix
        self._matrix = (a, b, c, d, a * tx + c * ty + e, b * tx + d * ty + f)

    def rotate(self, angle: float) -> None:
        a, b, c, d, e, f = self._matrix
        cos, sin = math.cos(angle), math.sin(angle)
        self._matrix = (a * cos + c * sin, b * cos + d * sin,
                        c * cos - a * sin, d * cos - b * sin, e, f)

    def to_device(self, x: float, y: float) -> tuple[float, float]:
        a, b, c, d, e, f = self._matrix
        return a * x + c * y + e, b * x + d * y + f

    # -- primitives ----------------------------------------------------

    def fill_rect(self, x: float, y: float, w: float, h: float,
                  color: Rgb, alpha: float = 1.0) -> None:
        if w == 0 or h == 0:
            return
        corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
        self.fill_polygon(corners, color, alpha)

    def fill_polygon(self, points: Sequence[tuple[float, float]],
                     color: Rgb, alpha: float = 1.0) -> None:
        device = [self.to_device(px, py) for px, py in points]
        self._draw.polygon(device, fill=(*color, _alpha_byte(alpha)))

    def fill_circle(self, x: float, y: float, radius: float,
                    color: Rgb, alpha: float = 1.0) -> None:
        if radius <= 0:
            return
        cx, cy = self.to_device(x, y)
        box = [cx - radius, cy - radius, cx + radius, cy + radius]
        self._draw.ellipse(box, fill=(*color, _alpha_byte(alpha)))

    def stroke_line(self, x0: float, y0: float, x1: float, y1: float,
                    color: Rgb, alpha: float = 1.0, width: float = 1.0) -> None:
        start = self.to_device(x0, y0)
        end = self.to_device(x1, y1)
        self._draw.line([start, end], fill=(*color, _alpha_byte(alpha)),
                        width=max(1, round_half_up(width)))

    # -- whole-surface access ------------------------------------------

    def pixels(self) -> np.ndarray:
        """(H, W, 3) uint8 copy of the canvas."""
        return np.array(self.image, dtype=np.uint8)

    def put_pixels(self, pixels: np.ndarray) -> None:
        self.image.paste(Image.fromarray(np.ascontiguousarray(pixels[..., :3])), (0, 0))

    def fill(self, color: Rgb) -> None:
        self.image.paste(color, (0, 0, self.width, self.height))

    def composite(self, layer: np.ndarray, alpha: float | np.ndarray = 1.0,
                  mode: str = "normal") -> None:
        """Draw an (H, W, 3) uint8 layer over the canvas with a blend mode."""
        base = self.pixels().astype(np.float64) / 255.0
        top = np.asarray(layer, dtype=np.float64) / 255.0
        out = composite(base, top, mode, alpha)
        self.put_pixels(np.rint(out * 255.0).astype(np.uint8))
