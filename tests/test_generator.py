"""Tests for seeded palette generation."""

from __future__ import annotations

import pytest

from chromaseed.art.palettes import CURATED_THEMES, CURATED_THEME_IDS
from chromaseed.palette.generator import (
    LIGHTNESS_BOUNDS,
    SATURATION_BOUNDS,
    generate_palette,
    merge_theme_pool,
    pick_base_colors,
)
from chromaseed.palette.models import HslColor, PaletteColor, PaletteTheme
from chromaseed.palette.random import Mulberry32

from conftest import GOLDEN_HEXES, GOLDEN_HSL, GOLDEN_SEED


class TestGolden:
    def test_default_seed_palette(self, golden_palette):
        assert golden_palette.hexes == GOLDEN_HEXES
        assert golden_palette.theme_id == "los-angeles"
        assert golden_palette.theme_name == "Los Angeles"

    def test_default_seed_hsl(self, golden_palette):
        for color, (h, s, l) in zip(golden_palette.colors, GOLDEN_HSL):
            assert color.hsl.h == pytest.approx(h, abs=1e-9)
            assert color.hsl.s == pytest.approx(s, abs=1e-9)
            assert color.hsl.l == pytest.approx(l, abs=1e-9)

    def test_preferred_theme(self):
        palette = generate_palette(GOLDEN_SEED, preferred_theme_id="edo")
        assert palette.theme_id == "edo"
        assert palette.hexes == ["#F2EFD5", "#EEBA32", "#E45763", "#562032", "#5F838C"]

    def test_preferred_theme_other_seed(self):
        palette = generate_palette(7, preferred_theme_id="hypernova")
        assert palette.hexes == ["#FD8780", "#08A08A", "#600DEF", "#7908B7", "#21FCE0"]

    def test_unknown_preferred_theme_falls_back(self):
        palette = generate_palette(GOLDEN_SEED, preferred_theme_id="nope")
        assert palette.hexes == GOLDEN_HEXES
        assert palette.theme_id == "los-angeles"

    def test_locks(self):
        locked = [None, HslColor(200, 50, 40), None, None, HslColor(10, 120, -5)]
        palette = generate_palette(GOLDEN_SEED, locked)
        assert palette.hexes == ["#E4A8C2", "#337799", "#297234", "#C764F9", "#000000"]
        assert palette.theme_id == "los-angeles"
        # Locked slots are carried verbatim, even out-of-range values.
        assert palette.colors[1].hsl == HslColor(200, 50, 40)
        assert palette.colors[4].hsl == HslColor(10, 120, -5)

    def test_locks_accept_palette_colors(self):
        pinned = PaletteColor.from_hsl(HslColor(200, 50, 40))
        a = generate_palette(GOLDEN_SEED, [None, pinned])
        b = generate_palette(GOLDEN_SEED, [None, HslColor(200, 50, 40)])
        assert a == b


class TestProperties:
    @pytest.mark.parametrize("seed", [0, 1, 7, 99, 2**31 - 2, 2**32 - 1])
    def test_five_colors_within_bounds(self, seed):
        palette = generate_palette(seed)
        assert len(palette.colors) == 5
        for color in palette.colors:
            assert 0 <= color.hsl.h < 360
            assert SATURATION_BOUNDS[0] <= color.hsl.s <= SATURATION_BOUNDS[1]
            assert LIGHTNESS_BOUNDS[0] <= color.hsl.l <= LIGHTNESS_BOUNDS[1]
            assert color.hex == color.hsl.to_hex()

    def test_deterministic(self):
        assert generate_palette(1234) == generate_palette(1234)

    def test_theme_is_curated(self):
        for seed in range(20):
            assert generate_palette(seed).theme_id in CURATED_THEME_IDS


class TestCustomThemes:
    def test_three_color_theme_is_expanded(self):
        theme = {"id": "custom-trio", "name": "Trio", "colors": ["#FF0000", "#00FF00", "#0000FF"]}
        palette = generate_palette(99, preferred_theme_id="custom-trio", theme_pool=[theme])
        assert palette.theme_id == "custom-trio"
        assert palette.hexes == ["#FB2F10", "#04F310", "#1304F1", "#FB3204", "#D1F713"]
        assert [c.hsl.s for c in palette.colors[:4]] == [97, 97, 97, 97]
        assert palette.colors[4].hsl.s == pytest.approx(93.63177151000127)

    def test_empty_theme_is_synthesized(self):
        theme = {"id": "custom-empty", "name": "Empty", "colors": []}
        palette = generate_palette(99, preferred_theme_id="custom-empty", theme_pool=[theme])
        assert palette.theme_name == "Empty"
        assert palette.hexes == ["#26B055", "#117C45", "#2CC258", "#32CDA6", "#9DA527"]

    def test_single_color_theme(self):
        theme = {"id": "custom-one", "name": "One", "colors": ["#336699"]}
        palette = generate_palette(5, preferred_theme_id="custom-one", theme_pool=[theme])
        assert palette.hexes == ["#3672A6", "#478AA4", "#6C86B9", "#538EAD", "#3AA0C1"]

    def test_custom_theme_cannot_shadow_curated(self):
        theme = {"id": "my-love", "name": "Shadow", "colors": ["#000000"]}
        palette = generate_palette(99, preferred_theme_id="my-love", theme_pool=[theme])
        assert palette.theme_name == "My Love"
        assert palette.hexes == ["#E0D39B", "#EDE8E8", "#B60572", "#08806E", "#042B6C"]


class TestThemePool:
    def test_curated_first_and_deduplicated(self):
        extra = PaletteTheme("custom-a", "A", ("#123456",))
        merged = merge_theme_pool([extra, extra])
        assert merged[:len(CURATED_THEMES)] == list(CURATED_THEMES)
        assert [t.id for t in merged].count("custom-a") == 1

    def test_malformed_entries_dropped(self):
        merged = merge_theme_pool([{"id": "", "name": "x", "colors": []},
                                   {"id": "ok", "name": 3, "colors": []},
                                   "not a theme",
                                   {"id": "fine", "name": "Fine", "colors": []}])
        assert merged[-1].id == "fine"
        assert len(merged) == len(CURATED_THEME_IDS) + 1


class TestPickBaseColors:
    def test_larger_theme_reduced_to_distinct_picks(self):
        colors = tuple(f"#{v:02X}{v:02X}{v:02X}" for v in range(10, 80, 10))
        base = pick_base_colors(PaletteTheme("seven", "Seven", colors), Mulberry32(3))
        assert len(base) == 5
        assert len(set(base)) == 5

    def test_exact_theme_kept_in_order(self):
        hexes = ("#112233", "#445566", "#778899", "#AABBCC", "#DDEEFF")
        base = pick_base_colors(PaletteTheme("five", "Five", hexes), Mulberry32(3))
        assert [HslColor.to_hex(c) for c in base] == list(hexes)
