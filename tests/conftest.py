"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from editheme.theme import ThemeTable


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Keep settings, logs and RStudio preferences inside the test's temp dir."""

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("EDITHEME_SETTINGS_PATH", str(home / "settings.json"))
    monkeypatch.setenv("EDITHEME_LOG_DIR", str(home / "logs"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("QT_QPA_PLATFORM", "offscreen")
    for name in (
        "EDITHEME_THEME",
        "EDITHEME_DEBUG",
        "EDITHEME_DEBUG_LOGGING",
        "EDITHEME_SHOW_HEX",
        "EDITHEME_DEFAULT_FADE",
        "EDITHEME_PALETTE_SIZE",
        "RSTUDIO_CONFIG_HOME",
    ):
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture
def sample_table() -> ThemeTable:
    return ThemeTable.from_tuples(
        [
            ("Night", "keyword", "#112233"),
            ("Night", "operator", "#445566"),
            ("Night", "const_lang", "#778899"),
            ("Night", "string", "#AABBCC"),
            ("Night", "comment", "#DDEEFF"),
            ("Night", "background", "#000000"),
            ("Night", "base_text", "#FFFFFF"),
            ("Sparse", "keyword", "#FF0000"),
            ("Sparse", "string", "#00FF00"),
            ("Sparse", "background", "#FAFAFA"),
            ("Sparse", "base_text", "#101010"),
        ],
        require_complete=False,
    )
