"""Command line entry point for browsing, blending and previewing palettes."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, TextIO, get_args, get_origin, get_type_hints

from .errors import EditThemeError
from .preview import format_palette, render
from .services.active_theme import ChainedThemeSource, RStudioThemeSource, StaticThemeSource
from .services.settings import Settings, SettingsStore
from .theme.blend import blend_background, blend_foreground
from .theme.manager import ThemeManager
from .utils import logging as logging_utils

_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_FALSE_VALUES = {"0", "false", "no", "off", "disabled"}
_LOGGER = logging.getLogger(__name__)

CommandHandler = Callable[[argparse.Namespace, Settings, ThemeManager, TextIO], int]


def configure_logging(debug: bool = False, *, force: bool = False) -> None:
    """Configure logging for command line runs."""

    level = logging.DEBUG if debug else logging.WARNING
    logging_utils.setup_logging(level, force=force)
    logging_utils.install_qt_message_handler()
    _LOGGER.debug("Logging configured (level=%s)", logging.getLevelName(level))


def load_settings(
    path: Optional[Path] = None,
    *,
    store: SettingsStore | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Settings:
    """Load persisted settings or fall back to defaults."""

    active_store = store or SettingsStore(path)
    try:
        settings = active_store.load(overrides=overrides)
    except OSError as exc:
        _LOGGER.warning("Failed to load settings from %s: %s", active_store.path, exc)
        settings = Settings()
    return settings


def build_manager(settings: Settings) -> ThemeManager:
    """Theme manager whose active theme comes from settings, then RStudio."""

    source = ChainedThemeSource([StaticThemeSource(settings.theme), RStudioThemeSource()])
    return ThemeManager(active_source=source)


def main(argv: Sequence[str] | None = None, *, stdout: TextIO | None = None) -> int:
    """Entry point invoked by the ``editheme`` console script."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    out = stdout or sys.stdout

    debug = args.debug or _env_flag("EDITHEME_DEBUG", default=False)
    configure_logging(debug)

    settings_path = Path(args.settings_path).expanduser() if args.settings_path else None
    settings_store = SettingsStore(settings_path)
    try:
        cli_overrides = _coerce_cli_overrides(args.overrides or [])
    except ValueError as exc:
        print(f"Invalid --set override: {exc}", file=sys.stderr)
        return 2

    settings = load_settings(store=settings_store, overrides=cli_overrides or None)

    if args.dump_settings:
        _dump_settings(settings, settings_store, overrides=cli_overrides, stream=out)
        return 0

    if settings.debug_logging and not debug:
        configure_logging(True, force=True)

    handler: CommandHandler | None = getattr(args, "handler", None)
    if handler is None:
        parser.print_help(out)
        return 2

    manager = build_manager(settings)
    try:
        return handler(args, settings, manager, out)
    except EditThemeError as exc:
        _LOGGER.debug("Command %s failed: %s", args.command, exc)
        print(f"error: {exc.message}", file=sys.stderr)
        return 2


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_list(args: argparse.Namespace, settings: Settings, manager: ThemeManager, out: TextIO) -> int:
    names = manager.list_themes()
    if args.json:
        json.dump(names, out, indent=2)
        out.write("\n")
    else:
        for name in names:
            out.write(f"{name}\n")
    return 0


def _cmd_show(args: argparse.Namespace, settings: Settings, manager: ThemeManager, out: TextIO) -> int:
    count = args.count if args.count is not None else settings.palette_size
    palette = manager.get_palette(args.theme, count)
    if args.json:
        json.dump(palette.to_dict(), out, indent=2)
        out.write("\n")
    else:
        out.write(format_palette(palette) + "\n")
    return 0


def _cmd_blend(args: argparse.Namespace, settings: Settings, manager: ThemeManager, out: TextIO) -> int:
    fade = args.fade if args.fade is not None else settings.default_fade
    palette = manager.get_palette(args.theme)
    blend = blend_foreground if args.foreground else blend_background
    out.write(blend(palette, fade) + "\n")
    return 0


def _cmd_preview(args: argparse.Namespace, settings: Settings, manager: ThemeManager, out: TextIO) -> int:
    count = args.count if args.count is not None else settings.palette_size
    palette = manager.get_palette(args.theme, count)
    show_ribbon = settings.show_ribbon if args.ribbon is None else args.ribbon
    show_hex = settings.show_hex if args.hex is None else args.hex
    try:
        render(palette, show_ribbon, show_hex, path=args.output)
    except (RuntimeError, OSError) as exc:
        _LOGGER.debug("Preview rendering failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2
    out.write(f"{args.output}\n")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="editheme",
        description="Color palettes matching the RStudio editor themes.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument(
        "--dump-settings",
        action="store_true",
        help="Print the effective settings payload and exit.",
    )
    parser.add_argument(
        "--settings",
        dest="settings_path",
        metavar="PATH",
        help="Override the default ~/.editheme/settings.json path.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Override persisted settings for this run (repeatable).",
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    list_parser = commands.add_parser("list", help="List available themes.")
    list_parser.add_argument("--json", action="store_true", help="Emit a JSON array.")
    list_parser.set_defaults(handler=_cmd_list)

    show_parser = commands.add_parser("show", help="Print the palette of a theme.")
    _add_theme_argument(show_parser)
    _add_count_argument(show_parser)
    show_parser.add_argument("--json", action="store_true", help="Emit the palette as JSON.")
    show_parser.set_defaults(handler=_cmd_show)

    blend_parser = commands.add_parser("blend", help="Blend background and foreground colors.")
    _add_theme_argument(blend_parser)
    blend_parser.add_argument(
        "--fade",
        type=float,
        default=None,
        help="Fraction between 0 and 1 (defaults to the default_fade setting).",
    )
    blend_parser.add_argument(
        "--foreground",
        action="store_true",
        help="Fade the foreground towards the background instead of the reverse.",
    )
    blend_parser.set_defaults(handler=_cmd_blend)

    preview_parser = commands.add_parser("preview", help="Render a palette preview image.")
    _add_theme_argument(preview_parser)
    _add_count_argument(preview_parser)
    preview_parser.add_argument(
        "-o", "--output", required=True, type=Path, help="Image file to write (PNG, JPG, ...)."
    )
    preview_parser.add_argument(
        "--ribbon",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Draw the theme name ribbon.",
    )
    preview_parser.add_argument(
        "--hex",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Label each swatch with its hex code.",
    )
    preview_parser.set_defaults(handler=_cmd_preview)
    return parser


def _add_theme_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "theme",
        nargs="?",
        default=None,
        help="Theme name; defaults to the configured or active RStudio theme.",
    )


def _add_count_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-n", "--count", type=int, default=None, help="Number of colors.")


# ---------------------------------------------------------------------------
# Settings overrides
# ---------------------------------------------------------------------------


def _env_flag(name: str, *, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _coerce_cli_overrides(items: Sequence[str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if not items:
        return overrides

    fields = Settings.__dataclass_fields__  # type: ignore[attr-defined]
    type_hints = get_type_hints(Settings)
    for entry in items:
        if "=" not in entry:
            raise ValueError(f"Override '{entry}' must use KEY=VALUE syntax.")
        key, raw_value = entry.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError("Override is missing a field name.")
        if key not in fields:
            raise ValueError(f"Unknown setting '{key}'.")
        annotation = type_hints.get(key, fields[key].type)
        overrides[key] = _coerce_value(annotation, raw_value.strip())
    return overrides


def _coerce_value(annotation: Any, raw_value: str) -> Any:
    target = _resolve_annotation(annotation)
    normalized = raw_value.strip()

    if target is str or target is Any:
        return normalized
    if target is bool:
        return _parse_bool(normalized)
    if normalized.lower() in {"none", "null"}:
        return None
    if target is int:
        return int(normalized, 10)
    if target is float:
        return float(normalized)
    return normalized


def _resolve_annotation(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is None:
        return annotation
    args = [arg for arg in get_args(annotation) if arg is not type(None)]
    if not args:
        return origin
    return args[0]


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Cannot coerce '{value}' to a boolean.")


def _dump_settings(
    settings: Settings,
    store: SettingsStore,
    *,
    overrides: Mapping[str, Any],
    stream: TextIO | None = None,
) -> None:
    destination = stream or sys.stdout
    metadata = {
        "path": str(store.path),
        "cli_overrides": sorted(overrides.keys()),
        "environment_variables": sorted(name for name in os.environ if name.startswith("EDITHEME_")),
    }
    json.dump({"settings": asdict(settings), "meta": metadata}, destination, indent=2)
    destination.write("\n")
