"""Standardized error types for palette lookups.

Every error raised by the library derives from :class:`EditThemeError` and
serializes to the same ``{"error": ..., "message": ...}`` shape so the CLI
and callers embedding the library can report failures consistently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence


# -----------------------------------------------------------------------------
# Error Code Constants
# -----------------------------------------------------------------------------

class ErrorCode:
    """Constants for error codes attached to library errors."""

    UNKNOWN_THEME = "unknown_theme"
    NO_THEME_SPECIFIED = "no_theme_specified"
    PALETTE_TOO_SMALL = "palette_too_small"
    INVALID_COUNT = "invalid_count"
    INVALID_FADE = "invalid_fade"
    CORRUPT_TABLE = "corrupt_table"


# -----------------------------------------------------------------------------
# Base Error Class
# -----------------------------------------------------------------------------

@dataclass
class EditThemeError(Exception):
    """Base exception class for all palette errors.

    Attributes:
        error_code: Machine-readable error identifier.
        message: Human-readable error description.
        details: Additional structured error information.
    """

    error_code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary for JSON output."""
        result: dict[str, Any] = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = dict(self.details)
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# -----------------------------------------------------------------------------
# Lookup Errors
# -----------------------------------------------------------------------------

class UnknownThemeError(EditThemeError):
    """Raised when a theme name does not match any bundled theme."""

    def __init__(self, theme: str, candidates: Sequence[str] = ()) -> None:
        if candidates:
            message = (
                f"Theme '{theme}' is ambiguous; candidates are: "
                + ", ".join(candidates)
            )
        else:
            message = f"Unknown theme '{theme}'. Use list_themes() to see available themes."
        details: dict[str, Any] = {"theme": theme}
        if candidates:
            details["candidates"] = list(candidates)
        super().__init__(ErrorCode.UNKNOWN_THEME, message, details)
        self.theme = theme
        self.candidates = tuple(candidates)


class NoThemeSpecifiedError(EditThemeError):
    """Raised when no theme was given and no active theme could be detected."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            ErrorCode.NO_THEME_SPECIFIED,
            message or "No theme specified and no active editor theme could be detected.",
        )


class PaletteTooSmallError(EditThemeError):
    """Raised when more colors are requested than a theme provides."""

    def __init__(self, theme: str, maximum: int, requested: int) -> None:
        super().__init__(
            ErrorCode.PALETTE_TOO_SMALL,
            f"n is too large, allowed maximum for {theme} is {maximum}.",
            {"theme": theme, "maximum": maximum, "requested": requested},
        )
        self.theme = theme
        self.maximum = maximum
        self.requested = requested


# -----------------------------------------------------------------------------
# Argument Errors
# -----------------------------------------------------------------------------

class InvalidCountError(EditThemeError):
    """Raised when the requested palette size is not a non-negative integer."""

    def __init__(self, count: Any) -> None:
        super().__init__(
            ErrorCode.INVALID_COUNT,
            f"Palette size must be a non-negative integer, received {count!r}.",
            {"count": repr(count)},
        )
        self.count = count


class InvalidFadeError(EditThemeError):
    """Raised when a fade fraction falls outside ``[0, 1]``."""

    def __init__(self, fade: Any) -> None:
        super().__init__(
            ErrorCode.INVALID_FADE,
            f"Fade must be a number between 0 and 1, received {fade!r}.",
            {"fade": repr(fade)},
        )
        self.fade = fade


# -----------------------------------------------------------------------------
# Data Errors
# -----------------------------------------------------------------------------

class CorruptTableError(EditThemeError):
    """Raised when the theme table fails its integrity checks."""

    def __init__(self, reason: str, *, theme: str | None = None, rule: str | None = None) -> None:
        details: dict[str, Any] = {}
        if theme is not None:
            details["theme"] = theme
        if rule is not None:
            details["rule"] = rule
        super().__init__(ErrorCode.CORRUPT_TABLE, f"Theme table is corrupt: {reason}", details)
        self.reason = reason


__all__ = [
    "CorruptTableError",
    "EditThemeError",
    "ErrorCode",
    "InvalidCountError",
    "InvalidFadeError",
    "NoThemeSpecifiedError",
    "PaletteTooSmallError",
    "UnknownThemeError",
]
