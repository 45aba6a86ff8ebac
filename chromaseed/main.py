#!/usr/bin/env python3
"""chromaseed -- CLI Interface.

Seeded palettes and procedural artwork from the terminal:

    python -m chromaseed.main generate --seed 421337420 --theme edo --css
    python -m chromaseed.main iterate --seed 421337420 --steps 4
    python -m chromaseed.main variants --seed 421337420 --lock 0 3
    python -m chromaseed.main render --seed 421337420 --width 760 --height 520
    python -m chromaseed.main decode PLT1.eyJ2IjoxLC...

Custom themes and favorites live in a JSON store file (``--store``).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from chromaseed.art.analytics import analyze_palette
from chromaseed.art.contrast import readable_text_color
from chromaseed.art.names import tone_name
from chromaseed.art.palettes import get_theme, theme_options
from chromaseed.constants import AUTO_THEME_ID, DEFAULT_SEED, SWATCH_COUNT
from chromaseed.palette.generator import generate_palette
from chromaseed.palette.master_seed import build_master_seed, build_payload, parse_master_seed
from chromaseed.palette.models import build_locked_colors, export_css
from chromaseed.palette.random import derive_iteration_seed, make_random_seed
from chromaseed.palette.themes import FavoritesShelf, FileStore, ThemeLibrary
from chromaseed.palette.variants import generate_variants

OUTPUT_DIR = Path("output")
DEFAULT_STORE = Path.home() / ".chromaseed.json"


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="chromaseed", description="Seeded palettes and procedural artwork")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--store", type=Path, default=DEFAULT_STORE,
                   help=f"Custom theme / favorites store (default: {DEFAULT_STORE})")
    sub = p.add_subparsers(dest="command", required=True)

    def seeded(cmd):
        cmd.add_argument("--seed", type=int, default=None,
                         help=f"Palette seed (default: random; {DEFAULT_SEED} is the showcase seed)")
        cmd.add_argument("--theme", default=AUTO_THEME_ID, help="Theme id, or 'auto' (default)")
        return cmd

    gen = seeded(sub.add_parser("generate", help="Generate one palette"))
    gen.add_argument("--css", action="store_true", help="Also print CSS custom properties")
    gen.add_argument("--analytics", action="store_true", help="Also print palette analytics")
    gen.add_argument("--favorite", action="store_true", help="Save the result to favorites")

    it = seeded(sub.add_parser("iterate", help="Follow the iterate chain from a seed"))
    it.add_argument("--steps", type=int, default=4, help="Number of iterations (default: 4)")

    var = seeded(sub.add_parser("variants", help="Variant lab for one palette"))
    var.add_argument("--lock", type=int, nargs="*", default=[], metavar="SLOT",
                     help="Slots (0-4) to keep fixed across variants")
    var.add_argument("--count", type=int, default=12, help="Number of variants (default: 12)")

    ren = seeded(sub.add_parser("render", help="Render artwork for a palette"))
    ren.add_argument("--palette", nargs="*", default=None, metavar="HEX",
                     help="Explicit colors (default: the seed's generated palette)")
    ren.add_argument("--width", type=int, default=760, help="Output width (default: 760)")
    ren.add_argument("--height", type=int, default=520, help="Output height (default: 520)")
    ren.add_argument("--plain", action="store_true", help="Skip ink, weave and vignette finishing")
    ren.add_argument("--grid", type=int, default=0, metavar="N",
                     help="Render a contact sheet of N iterated seeds instead")
    ren.add_argument("--out", type=Path, default=None, help="Output PNG path")

    dec = sub.add_parser("decode", help="Decode a master seed")
    dec.add_argument("master_seed")

    th = sub.add_parser("themes", help="List, add or remove custom themes")
    th.add_argument("--add", metavar="NAME", default=None, help="Name for a new custom theme")
    th.add_argument("--colors", nargs="*", default=[], metavar="HEX", help="Five colors for --add")
    th.add_argument("--remove", metavar="ID", default=None, help="Custom theme id to delete")

    sub.add_parser("favorites", help="List saved favorite palettes")
    return p.parse_args(argv)


def _seed(args) -> int:
    return args.seed if args.seed is not None else make_random_seed()


def _preferred(args) -> str | None:
    return None if args.theme == AUTO_THEME_ID else args.theme


def _print_palette(palette, seed: int) -> None:
    print(f"Theme: {palette.theme_name} ({palette.theme_id})")
    for i, color in enumerate(palette.colors):
        hsl = color.hsl
        print(f"  [{i}] {color.hex}  hsl({hsl.h:6.1f}, {hsl.s:5.1f}%, {hsl.l:5.1f}%)  "
              f"{tone_name(hsl, i, seed)}  text {readable_text_color(color.hex)}")


def _run_generate(args, library: ThemeLibrary) -> int:
    seed = _seed(args)
    palette = generate_palette(seed, [], _preferred(args), library.themes)
    print(f"Seed: {seed}")
    _print_palette(palette, seed)
    payload = build_payload(seed, palette.colors, [False] * SWATCH_COUNT,
                            palette.theme_id, args.theme)
    print(f"Master seed: {build_master_seed(payload)}")

    if args.css:
        print()
        print(export_css(palette.colors), end="")
    if args.analytics:
        stats = analyze_palette(palette.colors)
        print()
        print(f"Hue spread:       {stats.hue_spread:.1f} deg")
        print(f"Saturation range: {stats.saturation_range:.1f}")
        print(f"Lightness range:  {stats.lightness_range:.1f}")
        print(f"Avg contrast:     {stats.average_contrast:.2f}:1")
        print(f"AA pass rate:     {stats.aa_pass_rate:.0f}% "
              f"({stats.aa_passing_pairs}/{stats.total_pairs} pairs)")
        for key, descriptor in stats.descriptors().items():
            print(f"  {key:<13} {descriptor.label}: {descriptor.detail}")
    if args.favorite:
        shelf = FavoritesShelf(FileStore(args.store))
        shelf.add(palette.colors)
        print(f"Saved to favorites ({len(shelf)} stored)")
    return 0


def _run_iterate(args, library: ThemeLibrary) -> int:
    seed = _seed(args)
    for step in range(args.steps + 1):
        palette = generate_palette(seed, [], _preferred(args), library.themes)
        print(f"[{step}] {seed:>10}  {' '.join(palette.hexes)}  {palette.theme_name}")
        seed = derive_iteration_seed(seed)
    return 0


def _run_variants(args, library: ThemeLibrary) -> int:
    seed = _seed(args)
    base = generate_palette(seed, [], _preferred(args), library.themes)
    locks = [i in args.lock for i in range(SWATCH_COUNT)]
    print(f"Base {seed}: {' '.join(base.hexes)}  ({base.theme_name})")
    for i, variant in enumerate(generate_variants(seed, base.colors, locks, base.theme_id,
                                                  base.theme_name, count=args.count)):
        hexes = " ".join(c.hex for c in variant.colors)
        print(f"  [{i:2d}] {variant.seed:>10}  {hexes}")
    return 0


def _run_render(args, library: ThemeLibrary) -> int:
    from chromaseed.render.renderer import RenderOptions, render_grid, render_image

    seed = _seed(args)
    options = RenderOptions(plain=args.plain)
    OUTPUT_DIR.mkdir(exist_ok=True)

    if args.grid:
        seeds = [seed]
        while len(seeds) < args.grid:
            seeds.append(derive_iteration_seed(seeds[-1]))
        palettes = [generate_palette(s, [], _preferred(args), library.themes).hexes for s in seeds]
        img = render_grid(palettes, seeds, options=options)
        out = args.out or OUTPUT_DIR / f"grid_{seed}.png"
    else:
        hexes = args.palette
        if not hexes:
            hexes = generate_palette(seed, [], _preferred(args), library.themes).hexes
        img = render_image(args.width, args.height, hexes, seed, options)
        out = args.out or OUTPUT_DIR / f"artwork_{seed}.png"

    img.save(out)
    print(f"Saved {img.size[0]}x{img.size[1]} artwork to: {out}")
    return 0


def _run_decode(args, library: ThemeLibrary) -> int:
    payload = parse_master_seed(args.master_seed)
    if payload is None:
        print("Invalid master seed format.")
        return 1

    known = {o["id"] for o in theme_options(library.themes)}
    theme = get_theme(payload.theme_id, library.themes)
    selected = payload.selected_theme_id if payload.selected_theme_id in known else AUTO_THEME_ID
    print(f"Seed: {payload.seed}")
    print(f"Theme: {theme.name if theme else 'Custom'} ({payload.theme_id}), selected: {selected}")
    locks = build_locked_colors(payload.colors, payload.locks)
    for i, color in enumerate(payload.colors):
        marker = "locked" if locks[i] is not None else ""
        print(f"  [{i}] {color.hex}  {marker}")
    return 0


def _run_themes(args, library: ThemeLibrary) -> int:
    if args.add:
        theme = library.add(args.add, args.colors)
        if theme is None:
            print("  Error: a name and 5 valid hex colors are required.")
            return 1
        print(f"Saved \"{theme.name}\" as {theme.id}")
    if args.remove:
        if not library.remove(args.remove):
            print(f"  Error: no custom theme {args.remove!r}")
            return 1
        print(f"Removed {args.remove}")
    for theme in library.themes:
        print(f"  {theme.id:<28} {theme.name:<24} {' '.join(theme.colors)}")
    if not library.themes:
        print("No custom themes.")
    return 0


def _run_favorites(args, library: ThemeLibrary) -> int:
    shelf = FavoritesShelf(FileStore(args.store))
    if not len(shelf):
        print("No favorites.")
    for i, entry in enumerate(shelf.favorites):
        print(f"  [{i}] {' '.join(c.hex for c in entry)}")
    return 0


_COMMANDS = {
    "generate": _run_generate,
    "iterate": _run_iterate,
    "variants": _run_variants,
    "render": _run_render,
    "decode": _run_decode,
    "themes": _run_themes,
    "favorites": _run_favorites,
}


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    library = ThemeLibrary(FileStore(args.store))
    return _COMMANDS[args.command](args, library)


if __name__ == "__main__":
    sys.exit(main())
