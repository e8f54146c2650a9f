"""Tests covering the utilities modules."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from editheme.utils import logging as logging_utils


@pytest.fixture
def restore_root_logging():  # type: ignore[no-untyped-def]
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_writes_rotating_log_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, restore_root_logging: None
) -> None:
    monkeypatch.setenv("EDITHEME_LOG_DIR", str(tmp_path / "logs"))

    log_path = logging_utils.setup_logging(logging.DEBUG, console=False, force=True)
    logging_utils.get_logger("editheme.test").debug("hello palette")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_path == tmp_path / "logs" / "editheme.log"
    assert logging_utils.get_log_path() == log_path
    assert "hello palette" in log_path.read_text(encoding="utf-8")


def test_setup_logging_is_idempotent_without_force(tmp_path: Path, restore_root_logging: None) -> None:
    first = logging_utils.setup_logging(log_dir=tmp_path / "a", console=False, force=True)
    second = logging_utils.setup_logging(log_dir=tmp_path / "b", console=False)

    assert first == second == tmp_path / "a" / "editheme.log"


def test_setup_logging_without_file_handler(tmp_path: Path, restore_root_logging: None) -> None:
    result = logging_utils.setup_logging(log_dir=tmp_path, log_file=False, force=True)

    assert result is None
    assert not (tmp_path / "editheme.log").exists()


def test_external_loggers_are_quieted(tmp_path: Path, restore_root_logging: None) -> None:
    logging_utils.setup_logging(logging.DEBUG, log_dir=tmp_path, console=False, force=True)

    assert logging.getLogger("PySide6").level == logging.WARNING
