"""Theme registry: catalog lookups and palette construction."""

from __future__ import annotations

import logging
import operator
from typing import Any, List

from ..errors import (
    InvalidCountError,
    NoThemeSpecifiedError,
    PaletteTooSmallError,
    UnknownThemeError,
)
from ..services.active_theme import ActiveThemeSource, default_theme_source
from .models import Palette, ThemeRecord
from .table import ThemeTable, bundled_table

LOGGER = logging.getLogger(__name__)


class ThemeManager:
    """Registry that resolves theme names and builds palettes from a theme table."""

    def __init__(
        self,
        table: ThemeTable | None = None,
        *,
        active_source: ActiveThemeSource | None = None,
    ) -> None:
        self._table = table if table is not None else bundled_table()
        self._active_source = active_source

    @property
    def table(self) -> ThemeTable:
        return self._table

    @property
    def active_source(self) -> ActiveThemeSource:
        if self._active_source is None:
            self._active_source = default_theme_source()
        return self._active_source

    def set_active_source(self, source: ActiveThemeSource | None) -> None:
        """Replace the active-theme collaborator; ``None`` restores the default chain."""

        self._active_source = source

    def list_themes(self) -> List[str]:
        return self._table.theme_names()

    def match_theme(self, theme: str) -> str:
        """Return the canonical name for ``theme``.

        Exact names win; otherwise a case-insensitive match or a unique
        case-insensitive prefix is accepted.
        """

        if not isinstance(theme, str):
            raise UnknownThemeError(repr(theme))
        if theme in self._table:
            return theme
        key = theme.strip().lower()
        if not key:
            raise UnknownThemeError(theme)
        names = self.list_themes()
        for name in names:
            if name.lower() == key:
                return name
        candidates = [name for name in names if name.lower().startswith(key)]
        if len(candidates) == 1:
            LOGGER.debug("Theme '%s' matched by prefix to '%s'", theme, candidates[0])
            return candidates[0]
        raise UnknownThemeError(theme, candidates)

    def resolve(self, theme: str | None = None) -> ThemeRecord:
        """Return the record for ``theme``, consulting the active source when omitted."""

        if theme is None:
            detected = self.active_source.active_theme()
            if not detected:
                raise NoThemeSpecifiedError()
            LOGGER.debug("Using active theme '%s'", detected)
            theme = detected
        return self._table.record(self.match_theme(theme))

    def get_palette(self, theme: str | None = None, count: int | None = None) -> Palette:
        record = self.resolve(theme)
        defined = [(rule, value) for rule, value in record.palette_values() if value is not None]
        maximum = len(defined)

        size = maximum if count is None else _coerce_count(count)
        if size > maximum:
            raise PaletteTooSmallError(record.name, maximum, size)

        selected = defined[:size]
        return Palette(
            colors=tuple(value for _, value in selected),
            theme=record.name,
            rules=tuple(rule for rule, _ in selected),
            background=record.background,
            base_text=record.base_text,
        )


def _coerce_count(count: Any) -> int:
    if isinstance(count, bool):
        raise InvalidCountError(count)
    try:
        size = operator.index(count)
    except TypeError:
        raise InvalidCountError(count) from None
    if size < 0:
        raise InvalidCountError(count)
    return size


theme_manager = ThemeManager()


def list_themes() -> List[str]:
    """Return bundled theme names in table order."""

    return theme_manager.list_themes()


def get_palette(theme: str | None = None, count: int | None = None) -> Palette:
    """Build the palette for ``theme`` (the active editor theme when omitted).

    ``count`` limits the palette to its first colors in rule order
    (keyword, operator, const_lang, string, comment) and may not exceed the
    number of colors the theme defines.
    """

    return theme_manager.get_palette(theme, count)


__all__ = ["ThemeManager", "get_palette", "list_themes", "theme_manager"]
