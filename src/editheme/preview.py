"""Palette previews: a labeled color strip drawn with Qt, plus a text summary."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Tuple

from .theme.models import Palette

__all__ = ["RIBBON_OPACITY", "format_palette", "render"]

LOGGER = logging.getLogger(__name__)

RIBBON_OPACITY = 0.8
_DEFAULT_SWATCH_SIZE: Tuple[int, int] = (100, 160)
_gui_app: Any | None = None


def format_palette(palette: Palette) -> str:
    """Return the multi-line text summary printed for a palette."""

    return str(palette)


def _ensure_gui_application() -> Any:
    """Return a QGuiApplication, creating an offscreen one when none is running."""

    global _gui_app
    try:  # Local import to avoid loading Qt for lookups and blending.
        from PySide6.QtGui import QGuiApplication
    except ImportError as exc:  # pragma: no cover - depends on desktop stack
        raise RuntimeError("PySide6 must be installed to render palette previews.") from exc

    app = QGuiApplication.instance()
    if app is not None:
        return app
    if sys.platform.startswith("linux") and not (
        os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY")
    ):
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    _gui_app = QGuiApplication([])
    return _gui_app


def render(
    palette: Palette,
    show_ribbon: bool = True,
    show_hex: bool = False,
    *,
    swatch_size: Tuple[int, int] = _DEFAULT_SWATCH_SIZE,
    margin: int = 10,
    path: Path | str | None = None,
) -> Any:
    """Draw ``palette`` as a strip of equal-width swatches and return the ``QImage``.

    The strip sits on the palette background. ``show_ribbon`` lays a band of
    the background color at 80% opacity across the middle of the strip and
    writes the theme name on it in the base text color. ``show_hex`` writes
    each swatch's hex code under the band in the background color. When
    ``path`` is given the image is also saved there, in the format implied by
    the suffix.
    """

    _ensure_gui_application()
    from PySide6.QtCore import QRectF, Qt
    from PySide6.QtGui import QColor, QFont, QImage, QPainter

    swatch_width, swatch_height = swatch_size
    if swatch_width <= 0 or swatch_height <= 0:
        raise ValueError(f"Swatch size must be positive, received {swatch_size!r}")
    margin = max(0, int(margin))
    count = len(palette)
    width = max(count, 1) * swatch_width + 2 * margin
    height = swatch_height + 2 * margin

    image = QImage(width, height, QImage.Format.Format_ARGB32)
    background = QColor(palette.background)
    image.fill(background)

    painter = QPainter(image)
    try:
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing, True)
        for index, color in enumerate(palette):
            painter.fillRect(
                margin + index * swatch_width, margin, swatch_width, swatch_height, QColor(color)
            )

        band_height = swatch_height * 0.2
        font = QFont(painter.font())
        font.setPixelSize(max(8, int(band_height * 0.6)))

        if show_ribbon:
            ribbon = QRectF(0, margin + swatch_height * 0.4, width, band_height)
            ribbon_color = QColor(palette.background)
            ribbon_color.setAlpha(round(RIBBON_OPACITY * 255))
            painter.fillRect(ribbon, ribbon_color)
            painter.setFont(font)
            painter.setPen(QColor(palette.base_text))
            painter.drawText(ribbon, int(Qt.AlignmentFlag.AlignCenter), palette.theme)

        if show_hex:
            hex_font = QFont(font)
            hex_font.setPixelSize(max(8, int(font.pixelSize() * 0.8)))
            painter.setFont(hex_font)
            painter.setPen(QColor(palette.background))
            for index, color in enumerate(palette):
                label = QRectF(
                    margin + index * swatch_width,
                    margin + swatch_height * 0.7,
                    swatch_width,
                    band_height,
                )
                painter.drawText(label, int(Qt.AlignmentFlag.AlignCenter), color)
    finally:
        painter.end()

    if path is not None:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        if not image.save(str(target)):
            raise OSError(f"Could not write palette preview to {target}")
        LOGGER.debug("Palette preview for %s written to %s", palette.theme, target)
    return image
