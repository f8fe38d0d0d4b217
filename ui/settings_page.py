from __future__ import annotations

from typing import Optional

from PyQt6.QtWidgets import QVBoxLayout, QWidget

from ui.core import EventBus, FlatListRow, FlatSectionHeader, FlatToggle, ThemeManager
from ui.core.events import NAV_REQUEST


class AppSettingsPage(QWidget):
    """Appearance preferences plus shortcuts to the developer tools."""

    def __init__(
        self,
        theme_manager: ThemeManager,
        event_bus: EventBus,
        *,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._theme_manager = theme_manager
        tokens = theme_manager.tokens

        layout = QVBoxLayout(self)
        layout.setContentsMargins(tokens.padding_l, tokens.padding_l, tokens.padding_l, tokens.padding_l)
        layout.setSpacing(0)

        layout.addWidget(FlatSectionHeader("Appearance", "Choose how PathFinder looks", self))
        self._dark_mode_toggle = FlatToggle(
            "Dark Mode",
            "Use a dark background throughout the app",
            checked=theme_manager.is_dark_mode,
            parent=self,
        )
        self._dark_mode_toggle.toggled.connect(theme_manager.set_dark_mode)
        theme_manager.darkModeChanged.connect(self._dark_mode_toggle.set_checked)
        layout.addWidget(self._dark_mode_toggle)

        layout.addSpacing(tokens.padding_l)
        layout.addWidget(FlatSectionHeader("Developer", parent=self))
        for title, key in (
            ("Database Migration", "migration"),
            ("App Icon Generator", "icon-generator"),
            ("App Icon Sizes", "icon-sizes"),
        ):
            row = FlatListRow(title, self)
            row.clicked.connect(lambda key=key: event_bus.emit(NAV_REQUEST, key))  # type: ignore[misc]
            layout.addWidget(row)
        layout.addStretch(1)

    @property
    def dark_mode_toggle(self) -> FlatToggle:
        return self._dark_mode_toggle
