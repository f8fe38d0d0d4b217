from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QImage, QLinearGradient, QPainter, QPaintEvent
from PyQt6.QtWidgets import QWidget

LOGGER = logging.getLogger("ui.icons.icon_view")

GRADIENT_START = "#1D4ED8"
GRADIENT_END = "#0D2666"
GLYPH = "✈"
CORNER_RATIO = 0.22
GLYPH_RATIO = 0.4
GLYPH_ROTATION = -15.0
MANIFEST_NAME = "Contents.json"


def paint_icon(painter: QPainter, size: int) -> None:
    """Draw the app icon artwork into a ``size`` x ``size`` square."""

    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
    rect = QRectF(0, 0, size, size)

    gradient = QLinearGradient(rect.topLeft(), rect.bottomRight())
    gradient.setColorAt(0.0, QColor(GRADIENT_START))
    gradient.setColorAt(1.0, QColor(GRADIENT_END))
    painter.setPen(Qt.PenStyle.NoPen)
    painter.setBrush(QBrush(gradient))
    radius = size * CORNER_RATIO
    painter.drawRoundedRect(rect, radius, radius)

    font = QFont()
    font.setPixelSize(max(1, round(size * GLYPH_RATIO)))
    font.setBold(True)
    painter.setFont(font)
    painter.setPen(QColor("#FFFFFF"))
    painter.save()
    painter.translate(QPointF(size / 2, size / 2))
    painter.rotate(GLYPH_ROTATION)
    painter.drawText(QRectF(-size / 2, -size / 2, size, size), Qt.AlignmentFlag.AlignCenter, GLYPH)
    painter.restore()


def render_icon(size: int) -> QImage:
    if size <= 0:
        raise ValueError(f"Icon size must be positive, got {size}")
    image = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    image.fill(Qt.GlobalColor.transparent)
    painter = QPainter(image)
    try:
        paint_icon(painter, size)
    finally:
        painter.end()
    return image


def export_icon_set(directory: Path, sizes: Iterable[int]) -> List[Path]:
    """Write ``AppIcon-<size>.png`` for every size plus an asset manifest."""

    sizes = list(dict.fromkeys(sizes))
    for size in sizes:
        if size <= 0:
            raise ValueError(f"Icon size must be positive, got {size}")
    directory.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    images = []
    for size in sizes:
        target = directory / f"AppIcon-{size}.png"
        if not render_icon(size).save(str(target), "PNG"):
            raise OSError(f"Unable to write icon {target}")
        LOGGER.info("Exported %sx%s icon to %s", size, size, target)
        written.append(target)
        images.append(
            {"filename": target.name, "idiom": "universal", "scale": "1x", "size": f"{size}x{size}"}
        )
    manifest = directory / MANIFEST_NAME
    manifest.write_text(
        json.dumps({"images": images, "info": {"author": "pathfinder", "version": 1}}, indent=2),
        encoding="utf-8",
    )
    written.append(manifest)
    return written


class AppIconView(QWidget):
    """Fixed-size widget that renders the app icon for screenshots."""

    def __init__(self, size: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        if size <= 0:
            raise ValueError(f"Icon size must be positive, got {size}")
        self._size = size
        self.setFixedSize(size, size)
        self.setToolTip(f"{size}x{size}")

    @property
    def icon_size(self) -> int:
        return self._size

    def paintEvent(self, event: QPaintEvent) -> None:  # type: ignore[override]
        painter = QPainter(self)
        try:
            paint_icon(painter, self._size)
        finally:
            painter.end()
