"""Shared fixtures and golden values for the default seed."""

from __future__ import annotations

import pytest

from chromaseed.constants import DEFAULT_SEED
from chromaseed.palette.generator import generate_palette
from chromaseed.palette.themes import MemoryStore

GOLDEN_SEED = DEFAULT_SEED
GOLDEN_HEXES = ["#E8DEBA", "#F6A66A", "#4A6C9E", "#F24F50", "#C16F87"]
GOLDEN_HSL = [
    (46.57797147482279, 49.993549311856675, 81.88526412443824),
    (25.923880677176328, 88.74115746043853, 68.94504140360354),
    (215.36699105566368, 36.35852453117834, 45.49072668256749),
    (359.87263477420095, 85.80770897865295, 62.94701752452838),
    (342.0970772084381, 39.61834656074643, 59.49516167836812),
]


@pytest.fixture
def golden_palette():
    return generate_palette(GOLDEN_SEED)


@pytest.fixture
def store():
    return MemoryStore()
