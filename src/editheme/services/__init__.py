"""Service layer helpers (settings, active theme detection)."""

from .active_theme import (
    ActiveThemeSource,
    ChainedThemeSource,
    RStudioThemeSource,
    SettingsThemeSource,
    StaticThemeSource,
    default_theme_source,
)
from .settings import Settings, SettingsStore

__all__ = [
    "ActiveThemeSource",
    "ChainedThemeSource",
    "RStudioThemeSource",
    "Settings",
    "SettingsStore",
    "SettingsThemeSource",
    "StaticThemeSource",
    "default_theme_source",
]
