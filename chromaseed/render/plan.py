"""Composition planning: every structural parameter of an artwork, from the seed.

Planning is pure: no drawing, no I/O.  The same ``(seed, width, height)``
always gives an equal :class:`CompositionPlan`.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field

from chromaseed.constants import MAX_PREVIEW_DIM
from chromaseed.palette.random import make_stream

STRUCTURE_SALT = "bam-structure"
BACKGROUND_SALT = "bam-background"
EFFECTS_SALT = "bam-effects"
SWIRL_SALT = "bam-swirl"
NOISE_SALT = "bam-noise"

MIN_BLOCKS = 36


@dataclass(frozen=True)
class DisplacementBlock:
    """A rectangle of pixels to be shifted by a noise-derived offset.

    ``nx``/``ny`` place the block's top-left corner as a fraction of the
    free space left once the block itself is subtracted from the canvas.
    """

    w_px: float
    h_px: float
    nx: float
    ny: float


@dataclass(frozen=True)
class SwirlParams:
    pass_count: int
    strength: float
    block_size: int
    tear_chance: float
    axis_bias: float


@dataclass(frozen=True)
class BackgroundPlan:
    flow_passes: int
    flow_strength: float
    flow_alpha: float
    gravity: float
    edge_resistance: float
    large_shapes: int
    medium_shapes: int
    small_shapes: int
    tiny_shapes: int
    checker_enabled: bool


@dataclass(frozen=True)
class CompositionPlan:
    blocks: tuple[DisplacementBlock, ...]
    swirl: SwirlParams
    background: BackgroundPlan
    cantext_strength: float
    weave_mode: int = field(default=1)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> CompositionPlan:
        return cls(
            blocks=tuple(DisplacementBlock(**b) for b in d["blocks"]),
            swirl=SwirlParams(**d["swirl"]),
            background=BackgroundPlan(**d["background"]),
            cantext_strength=d["cantext_strength"],
            weave_mode=d["weave_mode"],
        )


def plan_composition(seed: int, width: int, height: int) -> CompositionPlan:
    """Derive the full composition for a ``width`` x ``height`` working canvas.

    The block count grows with canvas area relative to a 760x760 reference
    (never below 36).  Block sizes scale with the shorter canvas side.
    """
    rand = make_stream(seed, STRUCTURE_SALT)
    min_dim = min(width, height)
    area_scale = (width * height) / (MAX_PREVIEW_DIM * MAX_PREVIEW_DIM)

    block_count = max(
        MIN_BLOCKS,
        int(math.floor((60 + rand() * 64) * max(0.7, math.sqrt(area_scale)))),
    )
    blocks = []
    for _ in range(block_count):
        w_px = min_dim * (0.24 + rand() * 0.65)
        h_px = min_dim * (0.21 + rand() * 0.56)
        blocks.append(DisplacementBlock(w_px, h_px, rand(), rand()))

    swirl = SwirlParams(
        pass_count=1 + rand.randint(2),
        strength=5 + rand() * 12,
        block_size=8 + rand.randint(12),
        tear_chance=0.16 + rand() * 0.18,
        axis_bias=0.64 + rand() * 0.24,
    )

    background = BackgroundPlan(
        flow_passes=110 + rand.randint(110),
        flow_strength=1.2 + rand() * 2.6,
        flow_alpha=0.011 + rand() * 0.02,
        gravity=0.5 + rand() * 0.8,
        edge_resistance=1 + rand() * 1.3,
        large_shapes=2 + rand.randint(3),
        medium_shapes=5 + rand.randint(6),
        small_shapes=8 + rand.randint(12),
        tiny_shapes=14 + rand.randint(18),
        checker_enabled=rand() > 0.36,
    )

    cantext_strength = 10 + rand() * 12
    weave_mode = 2 if rand() > 0.44 else 1
    return CompositionPlan(tuple(blocks), swirl, background, cantext_strength, weave_mode)
