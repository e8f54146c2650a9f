"""Data structures describing editor themes and the palettes derived from them."""

from __future__ import annotations

import collections.abc
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Sequence, Tuple, overload

ColorTuple = Tuple[int, int, int]

#: Syntax rules that make up a palette, in palette order.
PALETTE_RULES: Tuple[str, ...] = ("keyword", "operator", "const_lang", "string", "comment")
#: Structural rules carried as palette metadata.
STRUCTURAL_RULES: Tuple[str, ...] = ("background", "base_text")
RULES: Tuple[str, ...] = PALETTE_RULES + STRUCTURAL_RULES


def _clamp_channel(value: Any) -> int:
    channel = int(value)
    if channel < 0:
        return 0
    if channel > 255:
        return 255
    return channel


def normalize_color(value: Any) -> ColorTuple:
    """Convert ``value`` into an RGB tuple, accepting hex strings or sequences."""

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Color strings cannot be empty")
        if text.startswith("#"):
            text = text[1:]
        if len(text) in (3, 6):
            if len(text) == 3:
                text = "".join(ch * 2 for ch in text)
            try:
                return tuple(int(text[i : i + 2], 16) for i in range(0, 6, 2))  # type: ignore[return-value]
            except ValueError:
                raise ValueError(f"Unsupported color format: {value!r}") from None
        raise ValueError(f"Unsupported color format: {value!r}")

    if isinstance(value, Sequence):
        items = list(value)
        if len(items) != 3:
            raise ValueError(f"RGB sequences must contain 3 values, received {value!r}")
        return tuple(_clamp_channel(component) for component in items)  # type: ignore[return-value]

    raise TypeError(f"Cannot convert {type(value)!r} to an RGB color")


def to_hex(value: ColorTuple) -> str:
    """Format an RGB tuple as an uppercase ``#RRGGBB`` string."""

    return "#" + "".join(f"{_clamp_channel(component):02X}" for component in value)


def normalize_hex(value: Any) -> str:
    """Return ``value`` as a canonical uppercase ``#RRGGBB`` string."""

    return to_hex(normalize_color(value))


def relative_luminance(value: Any) -> float:
    """Return the WCAG relative luminance of ``value`` in ``[0, 1]``."""

    def _linear(channel: int) -> float:
        c = channel / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = normalize_color(value)
    return 0.2126 * _linear(r) + 0.7152 * _linear(g) + 0.0722 * _linear(b)


@dataclass(frozen=True, slots=True)
class ThemeRow:
    """One ``(theme_name, rule, value)`` entry of the theme table."""

    theme_name: str
    rule: str
    value: str


@dataclass(frozen=True, slots=True)
class ThemeRecord:
    """All rule colors that belong to a single theme."""

    name: str
    colors: Mapping[str, str] = field(default_factory=dict)

    def color(self, rule: str) -> str | None:
        return self.colors.get(rule)

    def rgb(self, rule: str) -> ColorTuple | None:
        value = self.color(rule)
        return normalize_color(value) if value is not None else None

    @property
    def background(self) -> str:
        return self.colors["background"]

    @property
    def base_text(self) -> str:
        return self.colors["base_text"]

    def palette_values(self) -> list[tuple[str, str | None]]:
        """Return ``(rule, value)`` pairs in palette order; missing rules map to ``None``."""

        return [(rule, self.colors.get(rule)) for rule in PALETTE_RULES]


@dataclass(frozen=True)
class Palette(collections.abc.Sequence):
    """Ordered colors extracted from a theme, with the theme's metadata attached.

    A palette behaves like a read-only sequence of hex strings. ``rules`` lists
    the syntax rule behind each color, so ``palette.rules[i]`` names
    ``palette[i]``.
    """

    colors: Tuple[str, ...]
    theme: str
    rules: Tuple[str, ...]
    background: str
    base_text: str

    def __post_init__(self) -> None:
        if len(self.colors) != len(self.rules):
            raise ValueError("Palette colors and rules must have the same length")
        if len(self.colors) > len(PALETTE_RULES):
            raise ValueError(f"Palettes hold at most {len(PALETTE_RULES)} colors")

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[str, ...]: ...

    def __getitem__(self, index: int | slice) -> str | Tuple[str, ...]:
        return self.colors[index]

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[str]:
        return iter(self.colors)

    def __str__(self) -> str:
        lines = [
            "[" + ", ".join(f'"{color}"' for color in self.colors) + "]",
            "",
            f"Palette for the theme: {self.theme}",
            f"Foreground: {self.base_text}",
            f"Background: {self.background}",
        ]
        return "\n".join(lines)

    @property
    def foreground(self) -> str:
        return self.base_text

    @property
    def is_dark(self) -> bool:
        """True when the background is darker than the base text."""

        return relative_luminance(self.background) < relative_luminance(self.base_text)

    def rgb(self) -> list[ColorTuple]:
        return [normalize_color(color) for color in self.colors]

    def by_rule(self) -> Dict[str, str]:
        return dict(zip(self.rules, self.colors))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "theme": self.theme,
            "colors": list(self.colors),
            "rules": list(self.rules),
            "background": self.background,
            "base_text": self.base_text,
        }


__all__ = [
    "ColorTuple",
    "PALETTE_RULES",
    "Palette",
    "RULES",
    "STRUCTURAL_RULES",
    "ThemeRecord",
    "ThemeRow",
    "normalize_color",
    "normalize_hex",
    "relative_luminance",
    "to_hex",
]
