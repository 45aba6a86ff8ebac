"""Tests for master seed encoding and validation."""

from __future__ import annotations

import copy

import pytest

from chromaseed.palette.master_seed import (
    base64url_decode,
    base64url_encode,
    build_master_seed,
    build_payload,
    parse_master_seed,
)
from chromaseed.palette.models import PaletteColor

from conftest import GOLDEN_SEED

GOLDEN_MASTER_SEED = (
    "PLT1.eyJ2IjoxLCJzZWVkIjo3LCJ0aGVtZUlkIjoiZWRvIiwic2VsZWN0ZWRUaGVtZUlkIjoiYXV0byIsImxvY2tz"
    "IjpbdHJ1ZSxmYWxzZSxmYWxzZSxmYWxzZSxmYWxzZV0sInBhbGV0dGUiOlt7ImhzbCI6eyJoIjoxMCwicyI6MjAs"
    "ImwiOjMwfSwiaGV4IjoiIzVDNEEzRCJ9LHsiaHNsIjp7ImgiOjEwLCJzIjoyMCwibCI6MzB9LCJoZXgiOiIjNUM0"
    "QTNEIn0seyJoc2wiOnsiaCI6MTAsInMiOjIwLCJsIjozMH0sImhleCI6IiM1QzRBM0QifSx7ImhzbCI6eyJoIjox"
    "MCwicyI6MjAsImwiOjMwfSwiaGV4IjoiIzVDNEEzRCJ9LHsiaHNsIjp7ImgiOjEwLCJzIjoyMCwibCI6MzB9LCJo"
    "ZXgiOiIjNUM0QTNEIn1dfQ"
)


def golden_payload() -> dict:
    return {
        "v": 1,
        "seed": 7,
        "themeId": "edo",
        "selectedThemeId": "auto",
        "locks": [True, False, False, False, False],
        "palette": [{"hsl": {"h": 10, "s": 20, "l": 30}, "hex": "#5C4A3D"} for _ in range(5)],
    }


def encode_variant(**changes) -> str:
    payload = copy.deepcopy(golden_payload())
    payload.update(changes)
    return build_master_seed(payload)


class TestBase64Url:
    def test_no_padding_and_url_alphabet(self):
        encoded = base64url_encode("ÿþ?>")
        assert "=" not in encoded
        assert "+" not in encoded and "/" not in encoded

    def test_decode_inverse(self):
        text = 'Ünïcödé {"a": 1} ~~~'
        assert base64url_decode(base64url_encode(text)) == text

    def test_decode_rejects_invalid_utf8(self):
        assert base64url_decode("__4") is None

    def test_decode_rejects_non_ascii_body(self):
        assert base64url_decode("\u00e9abc") is None


class TestGolden:
    def test_encode(self):
        assert build_master_seed(golden_payload()) == GOLDEN_MASTER_SEED

    def test_encode_model(self):
        payload = parse_master_seed(GOLDEN_MASTER_SEED)
        assert build_master_seed(payload) == GOLDEN_MASTER_SEED

    def test_decode(self):
        payload = parse_master_seed(GOLDEN_MASTER_SEED)
        assert payload is not None
        assert payload.v == 1
        assert payload.seed == 7
        assert payload.theme_id == "edo"
        assert payload.selected_theme_id == "auto"
        assert payload.locks == [True, False, False, False, False]
        assert [c.hex for c in payload.colors] == ["#5C4A3D"] * 5
        assert payload.to_wire() == golden_payload()

    def test_surrounding_whitespace_ignored(self):
        assert parse_master_seed(f"  {GOLDEN_MASTER_SEED}\n") is not None

    def test_extra_segments_ignored(self):
        assert parse_master_seed(GOLDEN_MASTER_SEED + ".trailing.parts") is not None


def test_round_trip_from_palette(golden_palette):
    payload = build_payload(GOLDEN_SEED, golden_palette.colors, [False, True, False, False, True],
                            golden_palette.theme_id, "los-angeles")
    parsed = parse_master_seed(build_master_seed(payload))
    assert parsed.to_wire() == payload.to_wire()
    assert parsed.colors == list(golden_palette.colors)


def test_fractional_seed_accepted():
    assert parse_master_seed(encode_variant(seed=12.5)).seed == 12.5


@pytest.mark.parametrize("text", [
    "",
    "PLT1",
    "PLT1.",
    "PLT2." + GOLDEN_MASTER_SEED[5:],
    "plt1." + GOLDEN_MASTER_SEED[5:],
    "PLT1.abc$def",
    "PLT1.__4",
    "PLT1.\u00e9abc",
    "PLT1." + base64url_encode("{not json"),
    "PLT1." + base64url_encode("[1, 2, 3]"),
])
def test_rejects_malformed_envelope(text):
    assert parse_master_seed(text) is None


def test_rejects_non_string():
    assert parse_master_seed(None) is None


def _with_palette(**color_changes):
    palette = golden_payload()["palette"]
    palette[0] = {**palette[0], **color_changes}
    return palette


@pytest.mark.parametrize("changes", [
    {"seed": float("nan")},
    {"seed": float("inf")},
    {"v": 2},
    {"v": True},
    {"v": "1"},
    {"seed": 0},
    {"seed": -1},
    {"seed": "7"},
    {"seed": True},
    {"themeId": 5},
    {"selectedThemeId": None},
    {"locks": [True, False, False, False]},
    {"locks": [1, 0, 0, 0, 0]},
    {"palette": golden_payload()["palette"][:4]},
    {"palette": _with_palette(hex="5C4A3D")},
    {"palette": _with_palette(hsl={"h": "10", "s": 20, "l": 30})},
    {"palette": _with_palette(hsl={"h": 10, "s": 20})},
])
def test_rejects_invalid_payload(changes):
    assert parse_master_seed(encode_variant(**changes)) is None


def test_rejects_deeply_nested_json():
    assert parse_master_seed("PLT1." + base64url_encode("[" * 100_000)) is None


def test_rejects_huge_seed():
    body = build_master_seed(golden_payload())
    text = base64url_decode(body[5:]).replace('"seed":7', '"seed":1e400')
    assert parse_master_seed("PLT1." + base64url_encode(text)) is None


@pytest.mark.parametrize("key", ["v", "locks", "themeId"])
def test_rejects_missing_field(key):
    payload = golden_payload()
    del payload[key]
    assert parse_master_seed(build_master_seed(payload)) is None


def test_palette_colors_are_palette_colors():
    payload = parse_master_seed(GOLDEN_MASTER_SEED)
    assert all(isinstance(c, PaletteColor) for c in payload.colors)
