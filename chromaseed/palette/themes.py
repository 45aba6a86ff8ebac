"""Custom themes, favorites and the key-value store they persist through.

Both collections are stored as JSON blobs under fixed keys.  A blob that no
longer parses is discarded and its key cleared; a blob that parses but has
the wrong shape is ignored and left alone.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Annotated, Any, Iterable, Protocol, Sequence

from pydantic import Field, TypeAdapter, ValidationError

from chromaseed.art.color import expand_hex
from chromaseed.art.palettes import CURATED_THEME_IDS
from chromaseed.constants import (
    CUSTOM_THEME_PREFIX,
    CUSTOM_THEMES_KEY,
    FAVORITES_KEY,
    MAX_CUSTOM_THEMES,
    MAX_FAVORITES,
    MAX_THEME_NAME,
    SWATCH_COUNT,
)
from chromaseed.palette.models import PaletteColor, PaletteTheme, serialize_palette
from chromaseed.palette.schemas import ColorRecord, CustomThemeRecord

logger = logging.getLogger(__name__)

DEFAULT_CUSTOM_NAME = "Custom Palette"

_FAVORITES_ADAPTER = TypeAdapter(
    list[Annotated[list[ColorRecord], Field(min_length=SWATCH_COUNT, max_length=SWATCH_COUNT)]]
)


# ---------------------------------------------------------------------------
# Key-value storage
# ---------------------------------------------------------------------------

class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self._data = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileStore:
    """String values kept in a single JSON object on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (ValueError, RecursionError):
            logger.warning("Ignoring unreadable store file %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: not a JSON object", self.path)
            return {}
        return data

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


def _load_json(store: KeyValueStore, key: str) -> Any:
    """Parsed blob under ``key``; None when absent.  Corrupt blobs are cleared."""
    blob = store.get(key)
    if not blob:
        return None
    try:
        return json.loads(blob)
    except (ValueError, RecursionError):
        logger.warning("Discarding corrupt %s blob", key)
        store.delete(key)
        return None


# ---------------------------------------------------------------------------
# Custom theme validation
# ---------------------------------------------------------------------------

def normalize_hex(value: Any) -> str | None:
    """Canonical '#RRGGBB' for a 3- or 6-digit hex string, else None."""
    digits = expand_hex(value)
    return None if digits is None else f"#{digits.upper()}"


def sanitize_custom_theme_id(value: str) -> str:
    """Lowercase slug under the custom prefix, e.g. 'My Theme!' -> 'custom-my-theme'.

    Ids that already carry the prefix are returned unchanged.
    """
    slug = re.sub(r"[^a-z0-9-]", "-", value.lower())
    slug = re.sub(r"-+", "-", slug)
    slug = re.sub(r"^-|-$", "", slug)
    if slug.startswith(f"{CUSTOM_THEME_PREFIX}-") and len(slug) > len(CUSTOM_THEME_PREFIX) + 1:
        return slug
    return f"{CUSTOM_THEME_PREFIX}-{slug or 'palette'}"


def build_custom_theme_id(name: str, existing_ids: Iterable[str]) -> str:
    existing = set(existing_ids)
    base = sanitize_custom_theme_id(name)
    candidate = base
    suffix = 2
    while candidate in existing:
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


def _normalized_colors(colors: Iterable[Any]) -> list[str]:
    normalized = [normalize_hex(c) for c in colors if isinstance(c, str)]
    return [c for c in normalized if c is not None][:SWATCH_COUNT]


def normalize_custom_theme(value: Any) -> PaletteTheme | None:
    """Validate a stored custom theme record.

    Needs a string id and name and at least five colors of which five are
    valid hex strings.  The id is re-sanitized and the name trimmed.
    """
    if isinstance(value, PaletteTheme):
        value = value.to_dict()
    try:
        record = CustomThemeRecord.model_validate(value)
    except ValidationError:
        return None

    colors = _normalized_colors(record.colors)
    if len(colors) != SWATCH_COUNT:
        return None
    name = record.name.strip()[:MAX_THEME_NAME] or DEFAULT_CUSTOM_NAME
    return PaletteTheme(sanitize_custom_theme_id(record.id), name, tuple(colors))


def parse_custom_themes(value: Any) -> list[PaletteTheme]:
    if not isinstance(value, list):
        return []
    used = set(CURATED_THEME_IDS)
    parsed = []
    for item in value:
        theme = normalize_custom_theme(item)
        if theme is None or theme.id in used:
            logger.debug("Skipping custom theme record %r", item)
            continue
        used.add(theme.id)
        parsed.append(theme)
    return parsed


# ---------------------------------------------------------------------------
# Persistent collections
# ---------------------------------------------------------------------------

class ThemeLibrary:
    """User-defined themes, most recent first, capped at 24."""

    def __init__(self, store: KeyValueStore, key: str = CUSTOM_THEMES_KEY):
        self.store = store
        self.key = key
        self.themes: list[PaletteTheme] = self.load()

    def load(self) -> list[PaletteTheme]:
        return parse_custom_themes(_load_json(self.store, self.key))

    def save(self) -> None:
        self.store.set(self.key, json.dumps([t.to_dict() for t in self.themes]))

    def get(self, theme_id: str) -> PaletteTheme | None:
        for theme in self.themes:
            if theme.id == theme_id:
                return theme
        return None

    def add(self, name: str, colors: Sequence[str]) -> PaletteTheme | None:
        """Save a new theme; None when the name is blank or a color is invalid."""
        trimmed = name.strip()
        if not trimmed:
            return None
        normalized = _normalized_colors(colors)
        if len(normalized) != SWATCH_COUNT:
            return None

        used = set(CURATED_THEME_IDS) | {t.id for t in self.themes}
        theme = PaletteTheme(build_custom_theme_id(trimmed, used),
                             trimmed[:MAX_THEME_NAME], tuple(normalized))
        self.themes = [theme, *self.themes][:MAX_CUSTOM_THEMES]
        self.save()
        logger.info("Saved custom theme %s", theme.id)
        return theme

    def remove(self, theme_id: str) -> bool:
        remaining = [t for t in self.themes if t.id != theme_id]
        removed = len(remaining) != len(self.themes)
        self.themes = remaining
        self.save()
        return removed


class FavoritesShelf:
    """Saved palettes, most recent first, unique by their hex key."""

    def __init__(self, store: KeyValueStore, key: str = FAVORITES_KEY):
        self.store = store
        self.key = key
        self.favorites: list[list[PaletteColor]] = self.load()

    def load(self) -> list[list[PaletteColor]]:
        parsed = _load_json(self.store, self.key)
        if parsed is None:
            return []
        try:
            records = _FAVORITES_ADAPTER.validate_python(parsed)
        except ValidationError:
            logger.warning("Ignoring malformed %s blob", self.key)
            return []
        return [[r.to_color() for r in entry] for entry in records][:MAX_FAVORITES]

    def save(self) -> None:
        blob = [[c.to_dict() for c in entry] for entry in self.favorites]
        self.store.set(self.key, json.dumps(blob))

    def keys(self) -> set[str]:
        return {serialize_palette(entry) for entry in self.favorites}

    def __contains__(self, palette: Sequence[PaletteColor]) -> bool:
        return serialize_palette(palette) in self.keys()

    def __len__(self) -> int:
        return len(self.favorites)

    def add(self, palette: Sequence[PaletteColor]) -> None:
        key = serialize_palette(palette)
        deduped = [entry for entry in self.favorites if serialize_palette(entry) != key]
        self.favorites = [list(palette), *deduped][:MAX_FAVORITES]
        self.save()

    def remove(self, index: int) -> None:
        self.favorites = [entry for i, entry in enumerate(self.favorites) if i != index]
        self.save()
