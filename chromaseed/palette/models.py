"""Palette data model.

``PaletteColor.hex`` is a cached projection of its HSL value and is always
derived through :meth:`PaletteColor.from_hsl`; it is never edited on its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from chromaseed.art.color import hex_to_hsl, hsl_to_hex


@dataclass(frozen=True)
class HslColor:
    h: float
    s: float
    l: float

    def to_hex(self) -> str:
        return hsl_to_hex(self.h, self.s, self.l)

    def to_dict(self) -> dict:
        return {"h": self.h, "s": self.s, "l": self.l}

    @classmethod
    def from_dict(cls, d: dict) -> HslColor:
        return cls(h=d["h"], s=d["s"], l=d["l"])

    @classmethod
    def from_hex(cls, value: str) -> HslColor:
        return cls(*hex_to_hsl(value))


@dataclass(frozen=True)
class PaletteColor:
    hsl: HslColor
    hex: str

    @classmethod
    def from_hsl(cls, hsl: HslColor) -> PaletteColor:
        return cls(hsl=hsl, hex=hsl.to_hex())

    @classmethod
    def from_hex(cls, value: str) -> PaletteColor:
        return cls.from_hsl(HslColor.from_hex(value))

    def to_dict(self) -> dict:
        return {"hsl": self.hsl.to_dict(), "hex": self.hex}

    @classmethod
    def from_dict(cls, d: dict) -> PaletteColor:
        return cls(hsl=HslColor.from_dict(d["hsl"]), hex=d["hex"])


@dataclass(frozen=True)
class PaletteTheme:
    id: str
    name: str
    colors: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "colors", tuple(self.colors))

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "colors": list(self.colors)}

    @classmethod
    def from_dict(cls, d: dict) -> PaletteTheme:
        return cls(id=d["id"], name=d["name"], colors=tuple(d["colors"]))

    @classmethod
    def coerce(cls, value: Any) -> PaletteTheme | None:
        """Accept a theme or a theme-shaped mapping; None when malformed."""
        if isinstance(value, PaletteTheme):
            candidate = value.to_dict()
        elif isinstance(value, dict):
            candidate = value
        else:
            return None
        theme_id = candidate.get("id")
        name = candidate.get("name")
        colors = candidate.get("colors")
        if not isinstance(theme_id, str) or not theme_id:
            return None
        if not isinstance(name, str):
            return None
        if not isinstance(colors, (list, tuple)):
            return None
        return cls(id=theme_id, name=name, colors=tuple(colors))


@dataclass(frozen=True)
class GeneratedPalette:
    colors: tuple[PaletteColor, ...]
    theme_id: str
    theme_name: str

    @property
    def hexes(self) -> list[str]:
        return [c.hex for c in self.colors]

    def to_dict(self) -> dict:
        return {
            "colors": [c.to_dict() for c in self.colors],
            "themeId": self.theme_id,
            "themeName": self.theme_name,
        }


def serialize_palette(colors: Sequence[PaletteColor]) -> str:
    """Comma-joined hex key, used to de-duplicate saved palettes."""
    return ",".join(c.hex for c in colors)


def build_locked_colors(colors: Sequence[PaletteColor],
                        locks: Sequence[bool]) -> list[HslColor | None]:
    return [c.hsl if i < len(locks) and locks[i] else None for i, c in enumerate(colors)]


def swap_colors(items: Sequence, index_a: int, index_b: int) -> list:
    swapped = list(items)
    swapped[index_a], swapped[index_b] = swapped[index_b], swapped[index_a]
    return swapped


def export_css(colors: Sequence[PaletteColor]) -> str:
    lines = "\n".join(f"  --color-{i + 1}: {c.hex};" for i, c in enumerate(colors))
    return f":root {{\n{lines}\n}}\n"
