"""Settings dataclasses and persistence helpers."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Tuple

__all__ = ["Settings", "SettingsStore", "default_settings_path"]

LOGGER = logging.getLogger(__name__)
_SETTINGS_DIR = Path.home() / ".editheme"
_SETTINGS_VERSION = 1
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}


def _parse_env_flag(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


def _parse_env_theme(value: str) -> str:
    text = value.strip()
    if not text:
        raise ValueError("empty theme name")
    return text


_ENV_OVERRIDES: Mapping[str, Tuple[str, Callable[[str], Any]]] = {
    "EDITHEME_THEME": ("theme", _parse_env_theme),
    "EDITHEME_DEBUG_LOGGING": ("debug_logging", _parse_env_flag),
    "EDITHEME_SHOW_HEX": ("show_hex", _parse_env_flag),
    "EDITHEME_DEFAULT_FADE": ("default_fade", float),
    "EDITHEME_PALETTE_SIZE": ("palette_size", lambda value: int(value, 10)),
}


def default_settings_path() -> Path:
    """Return the settings file location, honouring ``EDITHEME_SETTINGS_PATH``."""

    override = os.environ.get("EDITHEME_SETTINGS_PATH")
    if override:
        return Path(override).expanduser()
    return _SETTINGS_DIR / "settings.json"


@dataclass(slots=True)
class Settings:
    """User-configurable settings persisted between sessions."""

    theme: str | None = None
    palette_size: int | None = None
    default_fade: float = 0.0
    show_ribbon: bool = True
    show_hex: bool = False
    debug_logging: bool = False


# JSON types accepted for each persisted field; ``None`` marks optional fields.
_FIELD_TYPES: Mapping[str, Tuple[Any, ...]] = {
    "theme": (str, None),
    "palette_size": (int, None),
    "default_fade": (int, float),
    "show_ribbon": (bool,),
    "show_hex": (bool,),
    "debug_logging": (bool,),
}


class SettingsStore:
    """Persistence adapter for :class:`Settings`."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_settings_path()

    @property
    def path(self) -> Path:
        """Return the resolved path backing this store."""

        return self._path

    def load(self, *, overrides: Mapping[str, Any] | None = None) -> Settings:
        """Load settings from disk, applying CLI/environment overrides when present.

        Unreadable files and fields of the wrong type are logged and replaced
        by defaults; loading never fails because of the file's contents.
        """

        payload = self._read_payload()
        settings = Settings()
        if payload:
            data = _filter_fields(payload, source=str(self._path))
            settings = Settings(**data)
            LOGGER.debug("Settings loaded from %s: %s", self._path, sorted(data))

        if overrides:
            settings = self._apply_overrides(settings, overrides, source="CLI")

        return self._apply_env_overrides(settings)

    def save(self, settings: Settings) -> Path:
        """Persist settings to disk with atomic file writes."""

        payload = asdict(settings)
        payload["version"] = _SETTINGS_VERSION
        body = json.dumps(payload, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(self._path)
        LOGGER.debug("Settings saved to %s", self._path)
        return self._path

    def _read_payload(self) -> Dict[str, Any]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except UnicodeDecodeError as exc:
            LOGGER.warning("Settings file %s is not valid UTF-8: %s", self._path, exc)
            return {}
        except OSError as exc:
            LOGGER.warning("Could not read settings file %s: %s", self._path, exc)
            return {}
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            LOGGER.warning("Settings file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Settings file %s must contain a JSON object", self._path)
            return {}
        return payload

    def _apply_overrides(
        self,
        settings: Settings,
        overrides: Mapping[str, Any],
        *,
        source: str,
    ) -> Settings:
        allowed = {field.name for field in fields(Settings)}
        filtered = {key: value for key, value in overrides.items() if key in allowed and value is not None}
        if filtered:
            LOGGER.debug("Applying %s settings overrides: %s", source, sorted(filtered))
            settings = replace(settings, **filtered)
        return settings

    def _apply_env_overrides(self, settings: Settings) -> Settings:
        overrides: Dict[str, Any] = {}
        for env_name, (field_name, parse) in _ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is None:
                continue
            try:
                overrides[field_name] = parse(value)
            except ValueError:
                LOGGER.warning("Ignoring environment override %s=%r", env_name, value)
        if overrides:
            settings = self._apply_overrides(settings, overrides, source="environment")
        return settings


def _filter_fields(payload: Mapping[str, Any], *, source: str) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for key, value in payload.items():
        expected = _FIELD_TYPES.get(key)
        if expected is None:
            continue
        if value is None and None in expected:
            data[key] = None
            continue
        types = tuple(kind for kind in expected if kind is not None)
        if isinstance(value, bool) and bool not in types:
            matches = False
        else:
            matches = isinstance(value, types)
        if not matches:
            LOGGER.warning("Ignoring setting %r=%r from %s: wrong type", key, value, source)
            continue
        data[key] = value
    return data
