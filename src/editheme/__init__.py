"""Color palettes matching the RStudio editor themes.

>>> from editheme import get_palette, blend_background
>>> pal = get_palette("Twilight", 3)
>>> list(pal)
['#CDA869', '#CDA869', '#CF6A4C']
>>> blend_background("Twilight", 0.5)
'#7A7A7A'
"""

from .errors import (
    CorruptTableError,
    EditThemeError,
    InvalidCountError,
    InvalidFadeError,
    NoThemeSpecifiedError,
    PaletteTooSmallError,
    UnknownThemeError,
)
from .preview import format_palette, render
from .theme import (
    Palette,
    ThemeManager,
    blend_background,
    blend_foreground,
    get_palette,
    list_themes,
)

__all__ = [
    "CorruptTableError",
    "EditThemeError",
    "InvalidCountError",
    "InvalidFadeError",
    "NoThemeSpecifiedError",
    "Palette",
    "PaletteTooSmallError",
    "ThemeManager",
    "UnknownThemeError",
    "blend_background",
    "blend_foreground",
    "format_palette",
    "get_palette",
    "list_themes",
    "render",
]
