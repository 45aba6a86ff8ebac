"""Procedural painter.

Builds the base artwork on a :class:`PaintContext` in a fixed layer order:
background fill and strokes, canvas weave, pigment flow, then four tiers of
soft multi-pass shapes (large rectangles, an optional checkerboard, medium,
small and tiny shapes), a color-burn glaze, a second flow and a final weave.
Every random decision is drawn from the single ``random`` stream in that
order, so the painting is a pure function of its inputs.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from PIL import Image

from chromaseed.palette.random import Mulberry32
from chromaseed.render.context import PaintContext, Rgb, perturb
from chromaseed.render.noise import NoiseField
from chromaseed.render.plan import BackgroundPlan

_FALLBACK_COLOR = (160, 160, 160)
_STIPPLE_DEPTH = 88
_RESISTANCE_SCALE = 92
_MULTIPLY_EVERY = 24


def _luma(pixels: np.ndarray) -> np.ndarray:
    rgb = pixels.astype(np.float64)
    return 0.2126 * rgb[..., 0] + 0.7152 * rgb[..., 1] + 0.0722 * rgb[..., 2]


class Painter:
    """Paints one artwork.

    Args:
        context: Surface to paint on; its size is the working size.
        palette: RGB triples to pick colors from.
        random: The background stream.  Drawing order is fixed, so the
            stream's position fully determines every mark.
        noise: Shared noise field.
        background: Layer counts and pigment-flow parameters.
    """

    def __init__(self, context: PaintContext, palette: Sequence[Rgb],
                 random: Mulberry32, noise: NoiseField, background: BackgroundPlan):
        self.ctx = context
        self.width = context.width
        self.height = context.height
        self.palette = [tuple(c) for c in palette]
        self.random = random
        self.noise = noise
        self.background = background
        self.weave_texture: np.ndarray | None = None
        self.resistance = np.zeros((self.height, self.width), dtype=np.float64)

    def random_color(self) -> Rgb:
        index = int(self.random() * len(self.palette))
        return self.palette[index] if index < len(self.palette) else _FALLBACK_COLOR

    # ------------------------------------------------------------------
    # Textures and maps
    # ------------------------------------------------------------------

    def build_weave_texture(self) -> np.ndarray:
        """Grey canvas-grain layer used by the overlay weave passes."""
        ys, xs = np.mgrid[0:self.height, 0:self.width].astype(np.float64)
        n1 = self.noise.get(xs * 0.05, ys * 0.05) * 0.5
        n2 = self.noise.get(xs * 0.19, ys * 0.19) * 0.3
        grey = np.clip(np.floor(128 + (n1 + n2) * 20 + 0.5), 0, 255).astype(np.uint8)
        self.weave_texture = np.repeat(grey[:, :, np.newaxis], 3, axis=2)
        return self.weave_texture

    def apply_weave(self, opacity: float = 0.14) -> None:
        if self.weave_texture is None:
            return
        self.ctx.composite(self.weave_texture, opacity, "overlay")

    def build_resistance_map(self) -> np.ndarray:
        """Luma gradient magnitude per pixel, scaled into [0, 1].

        The outermost ring of pixels keeps a resistance of 0.
        """
        luma = _luma(self.ctx.pixels())
        resistance = np.zeros_like(luma)
        if self.height > 2 and self.width > 2:
            centre = luma[1:-1, 1:-1]
            right = luma[1:-1, 2:]
            below = luma[2:, 1:-1]
            grad = np.abs(centre - right) + np.abs(centre - below)
            resistance[1:-1, 1:-1] = np.minimum(1.0, grad / _RESISTANCE_SCALE)
        self.resistance = resistance
        return resistance

    # ------------------------------------------------------------------
    # Marks
    # ------------------------------------------------------------------

    def directional_strokes(self, x: float, y: float, width: float, height: float,
                            color: Rgb, direction: str = "horizontal") -> None:
        count = max(8, int(math.floor(width * height / 9000)))
        rand = self.random
        for _ in range(count):
            sx = x + rand() * width
            sy = y + rand() * height
            length = 8 + rand() * 38
            line_width = 0.7 + rand() * 2.7
            if direction == "horizontal":
                angle = 0.0
            elif direction == "vertical":
                angle = math.pi * 0.5
            else:
                angle = rand() * math.pi * 2
            drift = (rand() - 0.5) * 28
            alpha = 0.04 + rand() * 0.12
            self.ctx.stroke_line(sx, sy,
                                 sx + math.cos(angle) * length, sy + math.sin(angle) * length,
                                 perturb(color, drift), alpha, line_width)

    def edge_stipple(self, x: float, y: float, width: float, height: float,
                     color: Rgb, intensity: float = 1.0) -> None:
        """Dots clustered along the inside of the four edges of a box."""
        count = int(math.floor((width + height) * 1.8 * intensity))
        rand = self.random
        for _ in range(count):
            edge = rand()
            if edge < 0.25:
                px = x + rand() * width
                py = y + (rand() * rand()) * _STIPPLE_DEPTH
            elif edge < 0.5:
                px = x + rand() * width
                py = y + height - (rand() * rand()) * _STIPPLE_DEPTH
            elif edge < 0.75:
                px = x + (rand() * rand()) * _STIPPLE_DEPTH
                py = y + rand() * height
            else:
                px = x + width - (rand() * rand()) * _STIPPLE_DEPTH
                py = y + rand() * height

            size = 0.35 + rand() * 1.9
            alpha = 0.08 + rand() * 0.16
            jitter = perturb(color, (rand() - 0.5) * 20)
            self.ctx.fill_circle(px, py, size, jitter, alpha)

    def soft_circle(self, x: float, y: float, radius: float, color: Rgb) -> None:
        passes = 8
        for p in range(passes):
            t = p / passes
            self.ctx.fill_circle(x, y, radius * (1 - t * 0.05), color, 1 - t * 0.3)
        self.directional_strokes(x - radius, y - radius, radius * 2, radius * 2, color, "random")
        self.edge_stipple(x - radius, y - radius, radius * 2, radius * 2, color, 0.7)

    def soft_rect(self, x: float, y: float, width: float, height: float,
                  rotation: float, color: Rgb) -> None:
        with self.ctx.saved():
            self.ctx.translate(x + width / 2, y + height / 2)
            self.ctx.rotate(rotation)

            passes = 6
            for p in range(passes):
                t = p / passes
                shrink = t * 8
                self.ctx.fill_rect(-width / 2 + shrink, -height / 2 + shrink,
                                   width - shrink * 2, height - shrink * 2,
                                   color, 1 - t * 0.24)

            direction = "horizontal" if width > height else "vertical"
            self.directional_strokes(-width / 2, -height / 2, width, height, color, direction)
            self.edge_stipple(-width / 2, -height / 2, width, height, color, 0.6)

    def soft_blob(self, x: float, y: float, size: float, color: Rgb) -> None:
        points = 10 + self.random.randint(10)
        vertices = []
        for i in range(points + 1):
            angle = (i / points) * math.pi * 2
            radius = size * (0.6 + self.random() * 0.4)
            vertices.append((x + math.cos(angle) * radius, y + math.sin(angle) * radius))

        passes = 5
        for p in range(passes):
            t = p / passes
            self.ctx.fill_polygon(vertices, color, 1 - t * 0.2)

        self.directional_strokes(x - size, y - size, size * 2, size * 2, color, "random")
        self.edge_stipple(x - size, y - size, size * 2, size * 2, color, 0.95)

    def checker(self, x: float, y: float, width: float, height: float, grid: int) -> None:
        cols = max(1, int(math.floor(width / grid)))
        rows = max(1, int(math.floor(height / grid)))
        for row in range(rows):
            for col in range(cols):
                color = self.random_color()
                cx = x + col * grid
                cy = y + row * grid
                self.ctx.fill_rect(cx, cy, grid, grid, color, 1.0)
                self.directional_strokes(cx, cy, grid, grid, color, "horizontal")

    # ------------------------------------------------------------------
    # Pigment flow
    # ------------------------------------------------------------------

    def _flow_layer(self, feedback: Image.Image, drift_x: float, drift_y: float,
                    scale: float, rotation: float) -> np.ndarray:
        """``feedback`` scaled and rotated about the centre, then shifted.

        Returns an (H, W, 4) float array; alpha is 0 where nothing landed.
        """
        cx = self.width * 0.5
        cy = self.height * 0.5
        cos, sin = math.cos(rotation), math.sin(rotation)
        # Inverse mapping: output pixel -> feedback pixel.
        a, b = cos / scale, sin / scale
        d, e = -sin / scale, cos / scale
        c = cx - drift_x - (a * cx + b * cy)
        f = cy - drift_y - (d * cx + e * cy)
        moved = feedback.convert("RGBA").transform(
            (self.width, self.height), Image.AFFINE, (a, b, c, d, e, f),
            resample=Image.BILINEAR, fillcolor=(0, 0, 0, 0),
        )
        return np.asarray(moved, dtype=np.float64) / 255.0

    def pigment_flow(self) -> None:
        """Repeatedly re-draw the canvas onto itself with a small drift.

        Each pass reads a fresh snapshot of the canvas, so marks smear
        progressively; every 24th pass also darkens with a multiply glaze.
        """
        plan = self.background
        self.build_resistance_map()
        centre_resist = self.resistance[self.height // 2, self.width // 2] * plan.edge_resistance

        for p in range(plan.flow_passes):
            t = p * 0.013
            nx = self.noise.get(t * 10, 2.7) + self.noise.get(1.3, t * 9)
            ny = self.noise.get(4.1, t * 10) + self.noise.get(t * 9, 6.2)
            drift_x = nx * plan.flow_strength * (1 - centre_resist)
            drift_y = ny * plan.flow_strength * (1 - centre_resist) + plan.gravity
            scale = 1.0005 + math.sin(t * 1.7) * 0.0006
            rotation = math.sin(t * 0.9) * 0.0012

            feedback = self.ctx.pixels()
            moved = self._flow_layer(Image.fromarray(feedback),
                                     drift_x, drift_y, scale, rotation)
            self.ctx.composite(moved[..., :3] * 255.0,
                               moved[..., 3:] * plan.flow_alpha, "normal")
            if p % _MULTIPLY_EVERY == 0:
                self.ctx.composite(feedback, 0.055, "multiply")

        rand = self.random
        droplets = 240 + rand.randint(220)
        for _ in range(droplets):
            x = rand() * self.width
            y = rand() * self.height
            radius = 0.8 + rand() * 5.8
            color = self.random_color()
            self.ctx.fill_circle(x, y, radius, color, 0.05 + rand() * 0.12)

    # ------------------------------------------------------------------
    # Layers
    # ------------------------------------------------------------------

    def paint(self) -> PaintContext:
        plan = self.background
        rand = self.random
        w, h = self.width, self.height
        min_dim = min(w, h)

        self.build_weave_texture()

        background_color = self.random_color()
        self.ctx.fill(background_color)
        self.directional_strokes(0, 0, w, h, background_color, "random")
        self.apply_weave(0.12)
        self.pigment_flow()

        for _ in range(plan.large_shapes):
            rect_w = w * (0.46 + rand() * 0.5)
            rect_h = h * (0.35 + rand() * 0.56)
            x = w * rand() * 0.42
            y = h * rand() * 0.42
            rotation = (rand() - 0.5) * 0.32
            self.soft_rect(x, y, rect_w, rect_h, rotation, self.random_color())

        if plan.checker_enabled:
            x = w * rand() * 0.55
            y = h * rand() * 0.55
            box_w = w * (0.28 + rand() * 0.52)
            box_h = h * (0.26 + rand() * 0.46)
            grid = max(12, int(math.floor(min_dim * (0.04 + rand() * 0.08))))
            self.checker(x, y, box_w, box_h, grid)

        for _ in range(plan.medium_shapes):
            x = w * rand()
            y = h * rand()
            pick = rand()
            if pick < 0.34:
                radius = min_dim * (0.12 + rand() * 0.24)
                self.soft_circle(x, y, radius, self.random_color())
            elif pick < 0.68:
                size = min_dim * (0.14 + rand() * 0.28)
                self.soft_blob(x, y, size, self.random_color())
            else:
                rect_w = w * (0.1 + rand() * 0.34)
                rect_h = h * (0.1 + rand() * 0.3)
                rotation = rand() * math.pi * 2
                self.soft_rect(x, y, rect_w, rect_h, rotation, self.random_color())

        for _ in range(plan.small_shapes):
            x = w * rand()
            y = h * rand()
            if rand() > 0.52:
                radius = min_dim * (0.06 + rand() * 0.14)
                self.soft_circle(x, y, radius, self.random_color())
            else:
                rect_w = w * (0.06 + rand() * 0.2)
                rect_h = h * (0.06 + rand() * 0.18)
                rotation = rand() * math.pi * 2
                self.soft_rect(x, y, rect_w, rect_h, rotation, self.random_color())

        for _ in range(plan.tiny_shapes):
            x = w * rand()
            y = h * rand()
            size = min_dim * (0.02 + rand() * 0.06)
            if rand() > 0.5:
                self.soft_circle(x, y, size, self.random_color())
            else:
                rect_w = size * (1.1 + rand())
                rect_h = size * (0.7 + rand())
                rotation = rand() * math.pi
                self.soft_rect(x, y, rect_w, rect_h, rotation, self.random_color())

        glaze = self.ctx.pixels()
        self.ctx.composite(glaze, 0.08, "color-burn")

        self.pigment_flow()
        self.apply_weave(0.14)
        return self.ctx
