"""Sources that report the editor theme currently active on this machine."""

from __future__ import annotations

import json
import logging
import os
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Sequence

from .settings import SettingsStore

__all__ = [
    "ActiveThemeSource",
    "ChainedThemeSource",
    "RStudioThemeSource",
    "SettingsThemeSource",
    "StaticThemeSource",
    "default_theme_source",
    "rstudio_prefs_candidates",
]

LOGGER = logging.getLogger(__name__)
_RSTUDIO_PREFS_FILE = "rstudio-prefs.json"
_RSTUDIO_THEME_KEY = "editor_theme"


class ActiveThemeSource(ABC):
    """Interface for collaborators that know the active editor theme."""

    name: str = "unknown"

    @abstractmethod
    def active_theme(self) -> str | None:
        """Return the active theme name, or ``None`` when it cannot be determined."""


class StaticThemeSource(ActiveThemeSource):
    """Source that always answers with a fixed theme name."""

    name = "static"

    def __init__(self, theme: str | None) -> None:
        self._theme = theme

    def active_theme(self) -> str | None:
        return self._theme


class SettingsThemeSource(ActiveThemeSource):
    """Reads ``Settings.theme`` (settings file or ``EDITHEME_THEME``)."""

    name = "settings"

    def __init__(self, store: SettingsStore | None = None) -> None:
        self._store = store

    def active_theme(self) -> str | None:
        store = self._store or SettingsStore()
        theme = store.load().theme
        if not isinstance(theme, str) or not theme.strip():
            return None
        return theme.strip()


def rstudio_prefs_candidates() -> List[Path]:
    """Return the locations RStudio uses for its user preferences file."""

    candidates: List[Path] = []
    config_home = os.environ.get("RSTUDIO_CONFIG_HOME")
    if config_home:
        candidates.append(Path(config_home).expanduser() / _RSTUDIO_PREFS_FILE)
    if sys.platform.startswith("win"):
        appdata = os.environ.get("APPDATA")
        if appdata:
            candidates.append(Path(appdata) / "RStudio" / _RSTUDIO_PREFS_FILE)
    else:
        xdg_home = os.environ.get("XDG_CONFIG_HOME")
        base = Path(xdg_home).expanduser() if xdg_home else Path.home() / ".config"
        candidates.append(base / "rstudio" / _RSTUDIO_PREFS_FILE)
    return candidates


class RStudioThemeSource(ActiveThemeSource):
    """Reads the ``editor_theme`` preference written by RStudio."""

    name = "rstudio"

    def __init__(self, paths: Sequence[Path] | None = None) -> None:
        self._paths = list(paths) if paths is not None else None

    def active_theme(self) -> str | None:
        paths = self._paths if self._paths is not None else rstudio_prefs_candidates()
        for path in paths:
            if not path.is_file():
                continue
            try:
                payload = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                LOGGER.warning("Could not read RStudio preferences %s: %s", path, exc)
                continue
            theme = payload.get(_RSTUDIO_THEME_KEY) if isinstance(payload, dict) else None
            if isinstance(theme, str) and theme.strip():
                LOGGER.debug("Active RStudio theme '%s' read from %s", theme, path)
                return theme.strip()
        return None


class ChainedThemeSource(ActiveThemeSource):
    """Asks each source in turn and returns the first answer."""

    name = "chain"

    def __init__(self, sources: Iterable[ActiveThemeSource]) -> None:
        self._sources = list(sources)

    @property
    def sources(self) -> List[ActiveThemeSource]:
        return list(self._sources)

    def active_theme(self) -> str | None:
        for source in self._sources:
            theme = source.active_theme()
            if theme:
                LOGGER.debug("Active theme '%s' resolved by %s source", theme, source.name)
                return theme
        return None


def default_theme_source(store: SettingsStore | None = None) -> ChainedThemeSource:
    """Settings first, then RStudio's own preferences."""

    return ChainedThemeSource([SettingsThemeSource(store), RStudioThemeSource()])
