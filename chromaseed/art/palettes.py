"""Curated theme catalog.

Each theme is an ordered list of 5-7 reference colors stored as '#RRGGBB'.
The catalog is read-only: the generator samples from it, custom themes are
merged in after it, and ids here always win over custom ids.
"""

from chromaseed.palette.models import PaletteTheme

CURATED_THEMES: tuple[PaletteTheme, ...] = (
    PaletteTheme("my-love", "My Love",
                 ("#E8DCB4", "#FFFFFF", "#C4006B", "#038A86", "#012057")),
    PaletteTheme("punch", "Punch",
                 ("#E8DCB4", "#006064", "#FFC400", "#D50000", "#2962FF")),
    PaletteTheme("hypernova", "HyperNova",
                 ("#FF004D", "#FFB800", "#00F5D4", "#7209B7", "#3A0CA3", "#06D6A0", "#FF6F61")),
    PaletteTheme("j", "J",
                 ("#FFBE0B", "#FB5607", "#FF006E", "#8338EC", "#3A86FF")),
    PaletteTheme("90s-festival", "90s Festival",
                 ("#E8DCB4", "#6200EA", "#CDDC39", "#FF3D00", "#00BFA5")),
    PaletteTheme("horizon", "Horizon",
                 ("#E8DCB4", "#004D40", "#FFEA00", "#1DE9B6", "#6200EA")),
    PaletteTheme("edo", "Edo",
                 ("#E8DCB4", "#EAA221", "#C02942", "#542437", "#53777A")),
    PaletteTheme("atelier", "Atelier",
                 ("#E8DCB4", "#223A5E", "#9C9A40", "#D9593D", "#CE7B91", "#025669")),
    PaletteTheme("goat", "gOat",
                 ("#FBDAA6", "#F37022", "#B11016", "#2ABA9E", "#007096")),
    PaletteTheme("rouge-a-levres", "Rouge a Levres",
                 ("#E8DCB4", "#D00000", "#9D0208", "#6A040F", "#370617")),
    PaletteTheme("kk", "KK",
                 ("#F0F3BD", "#1282A2", "#034078", "#001F54", "#0A1128")),
    PaletteTheme("osaka-nights", "Osaka Nights",
                 ("#E8DCB4", "#E8DCB4", "#4FC1E9", "#E23E57", "#F9C846", "#5F76C8", "#202A44")),
    PaletteTheme("rickj", "RickJ",
                 ("#E8DCB4", "#F4D58D", "#2A9D8F", "#264653", "#002244", "#A6192E")),
    PaletteTheme("winter-night", "Winter Night",
                 ("#4E4E4E", "#F511C0", "#33312B", "#4760E9", "#410FF0")),
    PaletteTheme("neonzilla", "NEONZILLA",
                 ("#00FFB0", "#F90093", "#6C00FF", "#151515", "#FDF6EF")),
    PaletteTheme("blue-sunset", "Blue Sunset",
                 ("#FF9B85", "#FCCB7E", "#499DAF", "#247BA0", "#70C1B3")),
    PaletteTheme("belmont", "Belmont",
                 ("#F4F7D9", "#0091AD", "#EABE7C", "#A1E3D8", "#E58B88")),
    PaletteTheme("los-angeles", "Los Angeles",
                 ("#E8DCB4", "#F8B195", "#355C7D", "#F67280", "#C06C84")),
    PaletteTheme("q", "Q",
                 ("#0A9396", "#94D2BD", "#E9D8A6", "#EE9B00", "#CA6702")),
    PaletteTheme("ocean", "Ocean",
                 ("#E8DCB4", "#566466", "#235A56", "#05668D", "#00A896")),
    PaletteTheme("coral", "Coral",
                 ("#DAC89A", "#4C1E20", "#7F8B69", "#4F7674", "#CB6661")),
    PaletteTheme("mamie", "Mamie",
                 ("#EAE0D5", "#422040", "#73628A", "#D09683", "#F2D492")),
    PaletteTheme("aurora-drive", "AURORA DRIVE",
                 ("#00FFC6", "#FF3E7F", "#FFE156", "#3A0CA3", "#1A1A1A", "#7CFF01")),
    PaletteTheme("solstice", "SOLSTICE",
                 ("#FF5C8D", "#FFB84D", "#06D6A0", "#2E2E3A", "#4A4E69", "#7B2CBF")),
    PaletteTheme("electric-saints", "ELECTRIC SAINTS",
                 ("#FF006E", "#00F5FF", "#FFD23F", "#7209B7", "#1A1A1A", "#F6F7F8", "#06D6A0")),
    PaletteTheme("chrysalis", "CHRYSALIS",
                 ("#31FFD7", "#FF0099", "#FFE36E", "#1A1D2E", "#6F00FF", "#00D4FF", "#FFEEE5")),
    PaletteTheme("lunarcyte", "LUNARCYTE",
                 ("#00F2FF", "#FF2E63", "#F7FF00", "#6E00FF", "#161616", "#80FFB4", "#EDE6FF")),
)

CURATED_THEME_IDS = frozenset(t.id for t in CURATED_THEMES)


def theme_options(custom_themes=()) -> list[dict]:
    """(id, display name) pairs for a picker: curated first, then custom."""
    options = [{"id": t.id, "name": t.name} for t in CURATED_THEMES]
    options += [{"id": t.id, "name": f"{t.name} (Custom)"} for t in custom_themes]
    return options


def get_theme(theme_id: str, custom_themes=()) -> PaletteTheme | None:
    for theme in (*CURATED_THEMES, *custom_themes):
        if theme.id == theme_id:
            return theme
    return None
