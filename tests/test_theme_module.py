"""Unit tests for theme lookup and palette construction."""

from __future__ import annotations

import pytest

from editheme import get_palette, list_themes
from editheme.errors import (
    InvalidCountError,
    NoThemeSpecifiedError,
    PaletteTooSmallError,
    UnknownThemeError,
)
from editheme.services import StaticThemeSource
from editheme.theme import PALETTE_RULES, Palette, ThemeManager, ThemeTable, bundled_table


def test_list_themes_preserves_table_order() -> None:
    names = list_themes()

    assert names[0] == "Ambiance"
    assert names[-1] == "Xcode"
    assert len(names) == len(set(names)) == 31


def test_every_listed_theme_builds_a_full_palette() -> None:
    table = bundled_table()
    for name in list_themes():
        palette = get_palette(name)
        record = table.record(name)

        assert len(palette) == len(PALETTE_RULES)
        assert palette.theme == name
        assert palette.rules == PALETTE_RULES
        assert palette.background == record.background
        assert palette.base_text == record.base_text
        assert list(palette) == [record.color(rule) for rule in PALETTE_RULES]


def test_twilight_palette_values() -> None:
    palette = get_palette("Twilight")

    assert list(palette) == ["#CDA869", "#CDA869", "#CF6A4C", "#8F9D6A", "#5F5A60"]
    assert palette.background == "#141414"
    assert palette.base_text == "#E0E0E0"
    assert palette.is_dark


@pytest.mark.parametrize("count", [0, 1, 2, 3, 4, 5])
def test_count_returns_prefix_of_full_palette(count: int) -> None:
    full = get_palette("Monokai")
    partial = get_palette("Monokai", count)

    assert list(partial) == list(full)[:count]
    assert partial.rules == PALETTE_RULES[:count]
    assert partial.background == full.background
    assert partial.base_text == full.base_text


def test_count_above_available_raises_palette_too_small() -> None:
    with pytest.raises(PaletteTooSmallError) as excinfo:
        get_palette("Dracula", 6)

    error = excinfo.value
    assert error.theme == "Dracula"
    assert error.maximum == 5
    assert "Dracula" in error.message and "5" in error.message
    assert error.to_dict()["details"] == {"theme": "Dracula", "maximum": 5, "requested": 6}


@pytest.mark.parametrize("count", [-1, 2.5, "3", True])
def test_invalid_counts_are_rejected(count: object) -> None:
    with pytest.raises(InvalidCountError):
        get_palette("Dracula", count)  # type: ignore[arg-type]


def test_unknown_theme_raises() -> None:
    with pytest.raises(UnknownThemeError) as excinfo:
        get_palette("NotAThemeName")

    assert excinfo.value.theme == "NotAThemeName"
    assert excinfo.value.error_code == "unknown_theme"


def test_theme_names_match_case_insensitively_and_by_unique_prefix() -> None:
    assert get_palette("twilight").theme == "Twilight"
    assert get_palette("  SOLARIZED light ").theme == "Solarized Light"
    assert get_palette("Drac").theme == "Dracula"


def test_exact_name_wins_over_longer_names_sharing_the_prefix() -> None:
    assert get_palette("Tomorrow Night").theme == "Tomorrow Night"


def test_ambiguous_prefix_lists_candidates() -> None:
    with pytest.raises(UnknownThemeError) as excinfo:
        get_palette("Tomorrow Night B")

    assert excinfo.value.candidates == ("Tomorrow Night Blue", "Tomorrow Night Bright")


def test_empty_theme_name_is_unknown() -> None:
    with pytest.raises(UnknownThemeError):
        get_palette("   ")


def test_missing_theme_uses_active_source() -> None:
    manager = ThemeManager(active_source=StaticThemeSource("Cobalt"))

    assert manager.get_palette().theme == "Cobalt"


def test_missing_theme_without_active_source_raises() -> None:
    manager = ThemeManager(active_source=StaticThemeSource(None))

    with pytest.raises(NoThemeSpecifiedError):
        manager.get_palette()


def test_module_level_palette_reads_theme_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EDITHEME_THEME", "Material")

    assert get_palette().theme == "Material"


def test_module_level_palette_without_any_theme_source_raises() -> None:
    with pytest.raises(NoThemeSpecifiedError):
        get_palette()


def test_missing_rules_are_skipped_and_shrink_the_maximum(sample_table: ThemeTable) -> None:
    manager = ThemeManager(sample_table)

    palette = manager.get_palette("Sparse")

    assert list(palette) == ["#FF0000", "#00FF00"]
    assert palette.rules == ("keyword", "string")
    with pytest.raises(PaletteTooSmallError, match="allowed maximum for Sparse is 2"):
        manager.get_palette("Sparse", 3)


def test_custom_table_lists_only_its_themes(sample_table: ThemeTable) -> None:
    manager = ThemeManager(sample_table)

    assert manager.list_themes() == ["Night", "Sparse"]
    with pytest.raises(UnknownThemeError):
        manager.get_palette("Twilight")


def test_palette_behaves_like_a_read_only_sequence() -> None:
    palette = get_palette("Xcode", 3)

    assert palette[0] == "#C800A4"
    assert palette[-1] == "#C800A4"
    assert palette[:2] == ("#C800A4", "#000000")
    assert "#000000" in palette
    assert palette == get_palette("Xcode", 3)
    assert palette.by_rule() == {"keyword": "#C800A4", "operator": "#000000", "const_lang": "#C800A4"}
    assert palette.rgb()[0] == (200, 0, 164)
    assert not palette.is_dark


def test_palette_text_summary() -> None:
    text = str(get_palette("Dawn", 2))

    assert text.splitlines() == [
        '["#794938", "#794938"]',
        "",
        "Palette for the theme: Dawn",
        "Foreground: #080808",
        "Background: #F9F9F9",
    ]


def test_palette_to_dict() -> None:
    payload = get_palette("Cobalt", 1).to_dict()

    assert payload == {
        "theme": "Cobalt",
        "colors": ["#FF9D00"],
        "rules": ["keyword"],
        "background": "#002240",
        "base_text": "#FFFFFF",
    }


def test_palette_rejects_mismatched_rules() -> None:
    with pytest.raises(ValueError):
        Palette(colors=("#000000",), theme="x", rules=(), background="#000000", base_text="#FFFFFF")
