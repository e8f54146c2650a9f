"""Foreground/background blending for palettes."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Any, Union

from ..errors import InvalidFadeError
from .manager import ThemeManager, theme_manager
from .models import ColorTuple, Palette, normalize_color, to_hex

#: A built palette, a theme name, or ``None`` for the active editor theme.
PaletteSource = Union[Palette, str, None]


def resolve_palette(source: PaletteSource, *, manager: ThemeManager | None = None) -> Palette:
    """Return ``source`` as a :class:`Palette`, building one when given a name."""

    if isinstance(source, Palette):
        return source
    if source is None or isinstance(source, str):
        return (manager or theme_manager).get_palette(source)
    raise TypeError(f"Expected a Palette, a theme name or None, received {type(source)!r}")


def validate_fade(fade: Any) -> float:
    if isinstance(fade, bool) or not isinstance(fade, Real):
        raise InvalidFadeError(fade)
    value = float(fade)
    if math.isnan(value) or value < 0.0 or value > 1.0:
        raise InvalidFadeError(fade)
    return value


def _round_channel(value: float) -> int:
    rounded = int(Decimal(repr(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return max(0, min(255, rounded))


def mix(start: Any, end: Any, fade: float) -> str:
    """Interpolate from ``start`` (fade 0) to ``end`` (fade 1) in RGB space."""

    weight = validate_fade(fade)
    first = normalize_color(start)
    second = normalize_color(end)
    channels: ColorTuple = tuple(  # type: ignore[assignment]
        _round_channel(a * (1.0 - weight) + b * weight) for a, b in zip(first, second)
    )
    return to_hex(channels)


def blend_background(
    source: PaletteSource = None,
    fade: float = 0.0,
    *,
    manager: ThemeManager | None = None,
) -> str:
    """Background color faded ``fade`` of the way towards the base text color."""

    palette = resolve_palette(source, manager=manager)
    return mix(palette.background, palette.base_text, fade)


def blend_foreground(
    source: PaletteSource = None,
    fade: float = 0.0,
    *,
    manager: ThemeManager | None = None,
) -> str:
    """Base text color faded ``fade`` of the way towards the background color."""

    palette = resolve_palette(source, manager=manager)
    return mix(palette.base_text, palette.background, fade)


__all__ = [
    "PaletteSource",
    "blend_background",
    "blend_foreground",
    "mix",
    "resolve_palette",
    "validate_fade",
]
