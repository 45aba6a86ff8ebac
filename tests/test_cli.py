"""Tests for the command-line interface."""

from __future__ import annotations

import pytest
from PIL import Image

from chromaseed.main import main
from chromaseed.render import renderer

from conftest import GOLDEN_HEXES, GOLDEN_SEED
from test_master_seed import GOLDEN_MASTER_SEED


@pytest.fixture
def run(tmp_path, capsys):
    store = tmp_path / "store.json"

    def _run(*argv):
        code = main(["--store", str(store), *argv])
        return code, capsys.readouterr().out

    return _run


@pytest.fixture
def stub_painter(monkeypatch):
    class StubPainter:
        def __init__(self, context, palette, random, noise, background):
            self.ctx = context

        def paint(self):
            return self.ctx

    monkeypatch.setattr(renderer, "Painter", StubPainter)


def test_generate(run):
    code, out = run("generate", "--seed", str(GOLDEN_SEED))
    assert code == 0
    assert "Theme: Los Angeles (los-angeles)" in out
    for hex_color in GOLDEN_HEXES:
        assert hex_color in out
    assert "Porcelain Ochre Alloy" in out
    assert "Master seed: PLT1." in out


def test_generate_css_and_analytics(run):
    code, out = run("generate", "--seed", str(GOLDEN_SEED), "--css", "--analytics")
    assert code == 0
    assert "--color-1: #E8DEBA;" in out
    assert "AA pass rate:     0% (0/10 pairs)" in out
    assert "Low Coverage" in out


def test_generate_master_seed_round_trips(run):
    _, out = run("generate", "--seed", "99", "--theme", "edo")
    master = next(line for line in out.splitlines() if line.startswith("Master seed:")).split()[-1]
    code, decoded = run("decode", master)
    assert code == 0
    assert "Seed: 99" in decoded
    assert "(edo), selected: edo" in decoded


def test_favorites(run):
    code, out = run("favorites")
    assert code == 0
    assert "No favorites." in out

    run("generate", "--seed", str(GOLDEN_SEED), "--favorite")
    _, out = run("favorites")
    assert " ".join(GOLDEN_HEXES) in out


def test_iterate(run):
    code, out = run("iterate", "--seed", str(GOLDEN_SEED), "--steps", "2")
    assert code == 0
    lines = out.splitlines()
    assert len(lines) == 3
    assert "421337420" in lines[0]
    assert "1948548560" in lines[1]
    assert "560530100" in lines[2]


def test_variants(run):
    code, out = run("variants", "--seed", str(GOLDEN_SEED), "--lock", "2", "--count", "3")
    assert code == 0
    lines = out.splitlines()
    assert lines[0].startswith(f"Base {GOLDEN_SEED}:")
    assert len(lines) == 4
    assert "534969811" in lines[1]
    assert all("#4A6C9E" in line for line in lines[1:])


def test_decode(run):
    code, out = run("decode", GOLDEN_MASTER_SEED)
    assert code == 0
    assert "Seed: 7" in out
    assert "Theme: Edo (edo), selected: auto" in out
    assert out.count("locked") == 1


def test_decode_invalid(run):
    code, out = run("decode", "PLT1.nope!")
    assert code == 1
    assert "Invalid master seed format." in out


def test_themes_add_list_remove(run):
    code, out = run("themes")
    assert "No custom themes." in out

    colors = ["#112233", "#445566", "#778899", "#AABBCC", "#DDEEFF"]
    code, out = run("themes", "--add", "Dusk Light", "--colors", *colors)
    assert code == 0
    assert "custom-dusk-light" in out

    code, out = run("generate", "--seed", "5", "--theme", "custom-dusk-light")
    assert "Theme: Dusk Light (custom-dusk-light)" in out

    code, out = run("themes", "--remove", "custom-dusk-light")
    assert code == 0
    assert "No custom themes." in out


def test_themes_add_invalid(run):
    code, out = run("themes", "--add", "Bad", "--colors", "#112233")
    assert code == 1
    assert "Error" in out


def test_themes_remove_missing(run):
    code, _ = run("themes", "--remove", "custom-nothing")
    assert code == 1


def test_render(run, tmp_path, monkeypatch, stub_painter):
    monkeypatch.chdir(tmp_path)
    out_path = tmp_path / "art.png"
    code, out = run("render", "--seed", "3", "--width", "64", "--height", "64",
                    "--plain", "--out", str(out_path))
    assert code == 0
    assert "Saved 280x220 artwork" in out
    with Image.open(out_path) as img:
        assert img.size == (280, 220)


def test_render_explicit_palette_default_path(run, tmp_path, monkeypatch, stub_painter):
    monkeypatch.chdir(tmp_path)
    code, _ = run("render", "--seed", "3", "--palette", "#FF0000", "#00FF00", "--plain")
    assert code == 0
    assert (tmp_path / "output" / "artwork_3.png").exists()


def test_render_grid(run, tmp_path, monkeypatch, stub_painter):
    monkeypatch.chdir(tmp_path)
    code, out = run("render", "--seed", "3", "--grid", "3")
    assert code == 0
    path = tmp_path / "output" / "grid_3.png"
    with Image.open(path) as img:
        # Four columns of 220px thumbnails with 4px padding, one row.
        assert img.size == (4 * 224 + 4, 224 + 4)


def test_commands_survive_corrupt_store(tmp_path, capsys):
    store = tmp_path / "store.json"
    store.write_text("[" * 100_000, encoding="utf-8")
    assert main(["--store", str(store), "themes"]) == 0
    assert "No custom themes." in capsys.readouterr().out
