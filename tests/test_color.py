"""Tests for color-space conversions and hue arithmetic."""

from __future__ import annotations

import pytest

from chromaseed.art.color import (
    Hue,
    average_hue,
    hex_to_hsl,
    hex_to_rgb,
    hsl_to_hex,
    hsl_to_rgb,
    rgb_to_hex,
    shortest_hue_delta,
    wrap_hue,
)


class TestHex:
    def test_six_digit(self):
        assert hex_to_rgb("#E8DCB4") == (232, 220, 180)

    def test_three_digit_and_case(self):
        assert hex_to_rgb("#fa0") == (255, 170, 0)
        assert hex_to_rgb("  ABC ") == (170, 187, 204)

    @pytest.mark.parametrize("value", ["", "#12", "#GGGGGG", "#1234567", None, 42])
    def test_malformed_is_black(self, value):
        assert hex_to_rgb(value) == (0, 0, 0)

    def test_malformed_custom_default(self):
        assert hex_to_rgb("nope", default=(35, 35, 35)) == (35, 35, 35)

    def test_rgb_to_hex_uppercase(self):
        assert rgb_to_hex((10, 171, 255)) == "#0AABFF"


class TestHsl:
    def test_hsl_to_hex(self):
        assert hsl_to_hex(359.9, 100, 50) == "#FF0000"
        assert hsl_to_hex(120, 50, 50) == "#40BF40"

    def test_out_of_range_components_clamp(self):
        assert hsl_to_rgb(10, 120, -5) == (0, 0, 0)
        assert hsl_to_rgb(200, 0, 150) == (255, 255, 255)

    def test_hex_to_hsl(self):
        h, s, l = hex_to_hsl("#E8DCB4")
        assert h == pytest.approx(46.15384615384619)
        assert s == pytest.approx(53.06122448979591)
        assert l == pytest.approx(80.7843137254902)

    def test_grey_has_zero_hue_and_saturation(self):
        assert hex_to_hsl("#808080")[:2] == (0.0, 0.0)

    @pytest.mark.parametrize("value", ["#336699", "#E8DCB4", "#000000", "#FFFFFF", "#C4006B"])
    def test_hex_round_trip(self, value):
        assert hsl_to_hex(*hex_to_hsl(value)) == value


class TestHueArithmetic:
    @pytest.mark.parametrize("value, expected", [
        (0, 0), (360, 0), (-10, 350), (725, 5), (359.5, 359.5),
    ])
    def test_wrap(self, value, expected):
        assert wrap_hue(value) == pytest.approx(expected)

    def test_shortest_delta_crosses_seam(self):
        assert shortest_hue_delta(350, 10) == pytest.approx(20)
        assert shortest_hue_delta(10, 350) == pytest.approx(-20)

    def test_shortest_delta_half_turn(self):
        assert shortest_hue_delta(0, 180) == pytest.approx(-180)

    def test_average_hue_empty(self):
        assert average_hue([]) == 0.0

    def test_average_hue_wraps(self):
        mean = average_hue([350, 10])
        assert abs(shortest_hue_delta(mean, 0)) < 1e-9

    def test_hue_keeps_in_range_value_exactly(self):
        assert Hue(0.1).degrees == 0.1

    def test_hue_wraps_out_of_range(self):
        assert Hue(-30).degrees == pytest.approx(330)
        assert Hue(370).degrees == pytest.approx(10)

    def test_hue_delta_and_mean(self):
        assert Hue(350).delta_to(Hue(20)) == pytest.approx(30)
        assert Hue.mean([Hue(80), 100]).degrees == pytest.approx(90)

    def test_hue_rotate(self):
        assert float(Hue(350).rotate(20)) == pytest.approx(10)


@pytest.mark.parametrize("seed", [1, 42, 421337420, 2**31 - 2])
def test_palette_hex_round_trip(seed):
    from chromaseed.palette.generator import generate_palette

    for color in generate_palette(seed).colors:
        h, s, l = hex_to_hsl(color.hex)
        assert abs(color.hsl.l - l) <= 1
        assert hsl_to_hex(h, s, l) == color.hex
