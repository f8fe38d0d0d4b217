from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from ui.core import FlatCard, FlatSectionHeader, PrimaryButton
from ui.core.tokens import DesignTokens

from .icon_view import AppIconView, export_icon_set
from .sizes import APP_ICON_SIZES, GENERATOR_ROWS, GENERATOR_SIZES

LOGGER = logging.getLogger("ui.icons.pages")

EXPORT_STEPS = (
    "1. Take screenshots of the icons above",
    "2. Save them as PNG files",
    "3. Add them to Assets.xcassets/AppIcon.appiconset/",
    "4. Update Contents.json with proper sizes",
)


def _scrolling(content: QWidget, parent: QWidget) -> QScrollArea:
    scroll = QScrollArea(parent)
    scroll.setWidgetResizable(True)
    scroll.setFrameShape(QScrollArea.Shape.NoFrame)
    scroll.setWidget(content)
    return scroll


class AppIconSizesPage(QWidget):
    """Every App Store / device preset stacked for manual capture."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        content = QWidget()
        layout = QVBoxLayout(content)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(16)
        layout.addWidget(FlatSectionHeader("App Icon Sizes", parent=content))

        self._icons: List[AppIconView] = []
        for preset in APP_ICON_SIZES:
            row = QHBoxLayout()
            row.setSpacing(16)
            icon = AppIconView(preset.pixels, content)
            self._icons.append(icon)
            row.addWidget(icon)
            caption = QLabel(f"{preset.label}  {preset.usage}", content)
            caption.setProperty("role", "muted")
            row.addWidget(caption, 0, Qt.AlignmentFlag.AlignVCenter)
            row.addStretch(1)
            layout.addLayout(row)
        layout.addStretch(1)
        outer.addWidget(_scrolling(content, self))

    def icon_sizes(self) -> List[int]:
        return [icon.icon_size for icon in self._icons]


class IconGeneratorPage(QWidget):
    """Preview grid for icon capture plus a direct PNG export."""

    def __init__(self, tokens: DesignTokens, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._last_export: List[Path] = []

        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        content = QWidget()
        layout = QVBoxLayout(content)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(20)

        layout.addWidget(
            FlatSectionHeader("App Icon Generator", "Use this view to generate app icons", content)
        )

        grid_card = FlatCard(tokens, content)
        grid_layout = QVBoxLayout(grid_card)
        grid_layout.setSpacing(16)
        self._icons: List[AppIconView] = []
        for sizes in GENERATOR_ROWS:
            row = QHBoxLayout()
            row.setSpacing(16)
            row.addStretch(1)
            for size in sizes:
                icon = AppIconView(size, grid_card)
                self._icons.append(icon)
                row.addWidget(icon, 0, Qt.AlignmentFlag.AlignBottom)
            row.addStretch(1)
            grid_layout.addLayout(row)
        layout.addWidget(grid_card)

        instructions = FlatCard(tokens, content)
        steps_layout = QVBoxLayout(instructions)
        steps_layout.setSpacing(8)
        heading = QLabel("Instructions:", instructions)
        heading.setObjectName("section-header-title")
        steps_layout.addWidget(heading)
        for step in EXPORT_STEPS:
            label = QLabel(step, instructions)
            label.setProperty("role", "muted")
            steps_layout.addWidget(label)
        layout.addWidget(instructions)

        self._export_button = PrimaryButton("Export PNGs", tokens, content)
        self._export_button.clicked.connect(self._handle_export)  # type: ignore[arg-type]
        layout.addWidget(self._export_button)
        layout.addStretch(1)
        outer.addWidget(_scrolling(content, self))

    def icon_sizes(self) -> List[int]:
        return [icon.icon_size for icon in self._icons]

    def export_to(self, directory: Path) -> List[Path]:
        self._last_export = export_icon_set(directory, GENERATOR_SIZES)
        return list(self._last_export)

    def _handle_export(self) -> None:
        chosen = QFileDialog.getExistingDirectory(self, "Export App Icons")
        if not chosen:
            return
        try:
            written = self.export_to(Path(chosen))
        except OSError as exc:
            LOGGER.exception("Icon export failed")
            QMessageBox.warning(self, "Export App Icons", f"Export failed: {exc}")
            return
        QMessageBox.information(
            self, "Export App Icons", f"Wrote {len(written)} files to {chosen}"
        )
