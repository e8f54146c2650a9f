"""Theme module consolidating the bundled table, palette models and blending helpers."""

from .models import (
    PALETTE_RULES,
    RULES,
    ColorTuple,
    Palette,
    ThemeRecord,
    ThemeRow,
    normalize_color,
    normalize_hex,
    to_hex,
)
from .table import ThemeTable, bundled_table, load_table
from .manager import ThemeManager, get_palette, list_themes, theme_manager
from .blend import PaletteSource, blend_background, blend_foreground, mix, resolve_palette

__all__ = [
    "ColorTuple",
    "PALETTE_RULES",
    "Palette",
    "PaletteSource",
    "RULES",
    "ThemeManager",
    "ThemeRecord",
    "ThemeRow",
    "ThemeTable",
    "blend_background",
    "blend_foreground",
    "bundled_table",
    "get_palette",
    "list_themes",
    "load_table",
    "mix",
    "normalize_color",
    "normalize_hex",
    "resolve_palette",
    "theme_manager",
    "to_hex",
]
