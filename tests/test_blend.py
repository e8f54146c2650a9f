"""Tests for background/foreground blending."""

from __future__ import annotations

import math

import pytest

from editheme import blend_background, blend_foreground, get_palette, list_themes
from editheme.errors import InvalidFadeError, NoThemeSpecifiedError, UnknownThemeError
from editheme.services import StaticThemeSource
from editheme.theme import ThemeManager, mix, resolve_palette


@pytest.mark.parametrize("theme", list_themes())
def test_fade_endpoints_return_table_colors(theme: str) -> None:
    palette = get_palette(theme)

    assert blend_background(theme, 0) == palette.background
    assert blend_background(theme, 1) == palette.base_text
    assert blend_foreground(theme, 0) == palette.base_text
    assert blend_foreground(theme, 1) == palette.background


def test_twilight_midpoint() -> None:
    # (0x14 + 0xE0) / 2 == 0x7A on every channel
    assert blend_background("Twilight", 0.5) == "#7A7A7A"
    assert blend_foreground("Twilight", 0.5) == "#7A7A7A"


def test_blend_accepts_built_palettes() -> None:
    palette = get_palette("Solarized Dark", 2)

    assert blend_background(palette, 0.25) == blend_background("Solarized Dark", 0.25)
    assert resolve_palette(palette) is palette


def test_blend_defaults_to_no_fade() -> None:
    assert blend_background("Cobalt") == "#002240"
    assert blend_foreground("Cobalt") == "#FFFFFF"


def test_rounding_is_half_away_from_zero() -> None:
    # 0 * 0.5 + 1 * 0.5 == 0.5 rounds up, not to even
    assert mix("#000000", "#010101", 0.5) == "#010101"
    assert mix("#000000", "#030303", 0.5) == "#020202"
    assert mix("#000000", "#FFFFFF", 0.5) == "#808080"


def test_mix_interpolates_each_channel_independently() -> None:
    assert mix("#FF0000", "#0000FF", 0.5) == "#800080"
    assert mix((10, 20, 30), (20, 40, 60), 0.5) == "#0F1E2D"


@pytest.mark.parametrize("fade", [-0.01, 1.01, math.nan, "0.5", None, True])
def test_out_of_range_or_non_numeric_fade_is_rejected(fade: object) -> None:
    with pytest.raises(InvalidFadeError):
        blend_background("Twilight", fade)  # type: ignore[arg-type]


def test_blend_with_unknown_theme_propagates() -> None:
    with pytest.raises(UnknownThemeError):
        blend_foreground("NotAThemeName", 0.5)


def test_blend_without_theme_uses_manager_active_source() -> None:
    manager = ThemeManager(active_source=StaticThemeSource("Dracula"))

    assert blend_background(None, 0, manager=manager) == "#282A36"


def test_blend_without_theme_or_active_source_raises() -> None:
    manager = ThemeManager(active_source=StaticThemeSource(None))

    with pytest.raises(NoThemeSpecifiedError):
        blend_foreground(None, 0.5, manager=manager)


def test_resolve_palette_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        resolve_palette(42)  # type: ignore[arg-type]
