"""Shared constants for palette generation and preview rendering."""

SWATCH_COUNT = 5
MAX_FAVORITES = 10
MAX_CUSTOM_THEMES = 24
MAX_THEME_NAME = 40
VARIANT_COUNT = 12

DEFAULT_SEED = 421_337_420
SEED_MODULUS = 2_147_483_647
ITERATION_FALLBACK_SEED = 1_337_421

AUTO_THEME_ID = "auto"
CUSTOM_THEME_PREFIX = "custom"
VARIANT_THEME_ID = "__variant-base"

MASTER_SEED_PREFIX = "PLT1"
MASTER_SEED_VERSION = 1

FAVORITES_KEY = "palette-favorites-v1"
CUSTOM_THEMES_KEY = "palette-custom-themes-v1"

AA_TEXT_TARGET = 4.5
MAX_CONTRAST_TARGET = 7.0

# Preview rendering
MAX_PREVIEW_DIM = 760
MIN_RENDER_WIDTH = 220
MIN_RENDER_HEIGHT = 180
DEFAULT_MIN_WIDTH = 280
DEFAULT_MIN_HEIGHT = 220

FALLBACK_PREVIEW_PALETTE = ("#2F3542", "#6B7280", "#C9D1D9", "#F4EDE3", "#19232F")
