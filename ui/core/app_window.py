from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from PyQt6.QtCore import QSize, Qt, pyqtSignal
from PyQt6.QtGui import QIcon, QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QButtonGroup,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from .components import SecondaryButton
from .events import NAV_CHANGED, NAV_REQUEST, EventBus
from .theme import ThemeManager


@dataclass
class NavItem:
    key: str
    title: str
    icon: QIcon | None = None


class NavSidebar(QFrame):
    navigateRequested = pyqtSignal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("nav-sidebar")
        self.setFixedWidth(220)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 24, 16, 24)
        layout.setSpacing(8)
        layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        self._button_group = QButtonGroup(self)
        self._button_group.setExclusive(True)
        self._buttons: Dict[str, QPushButton] = {}

    def add_item(self, item: NavItem) -> None:
        button = QPushButton(item.title, self)
        button.setCheckable(True)
        button.setObjectName("nav-button")
        button.setCursor(Qt.CursorShape.PointingHandCursor)
        if item.icon is not None:
            button.setIcon(item.icon)
            button.setIconSize(QSize(18, 18))
        self._button_group.addButton(button)
        self._buttons[item.key] = button
        button.clicked.connect(lambda _: self.navigateRequested.emit(item.key))  # type: ignore[arg-type]
        self.layout().addWidget(button)
        if len(self._buttons) == 1:
            button.setChecked(True)

    def set_active(self, key: str) -> None:
        button = self._buttons.get(key)
        if button:
            button.setChecked(True)


class TopBar(QFrame):
    def __init__(self, theme_manager: ThemeManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("top-bar")
        self._theme_manager = theme_manager

        layout = QHBoxLayout(self)
        layout.setContentsMargins(24, 12, 24, 12)
        layout.setSpacing(16)

        self._title_label = QLabel("PathFinder")
        self._title_label.setObjectName("top-bar-title")
        layout.addWidget(self._title_label)
        layout.addStretch(1)

        self._theme_toggle = SecondaryButton("", theme_manager.tokens, self)
        self._theme_toggle.setObjectName("top-bar-theme")
        self._theme_toggle.setToolTip("Toggle dark mode")
        self._theme_toggle.clicked.connect(self._theme_manager.toggle)
        layout.addWidget(self._theme_toggle)

        theme_manager.darkModeChanged.connect(self._sync_theme_label)
        self._sync_theme_label(theme_manager.is_dark_mode)

    def set_title(self, title: str) -> None:
        self._title_label.setText(title)

    def _sync_theme_label(self, is_dark: bool) -> None:
        self._theme_toggle.setText("Light Mode" if is_dark else "Dark Mode")


class AppWindow(QMainWindow):
    def __init__(
        self,
        theme_manager: ThemeManager,
        event_bus: EventBus | None = None,
        *,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("PathFinder")
        self.resize(1100, 760)
        self._theme_manager = theme_manager
        self._event_bus = event_bus or EventBus()
        self._pages: Dict[str, QWidget] = {}
        self._page_titles: Dict[str, str] = {}

        container = QWidget(self)
        root_layout = QHBoxLayout(container)
        root_layout.setContentsMargins(0, 0, 0, 0)
        root_layout.setSpacing(0)

        self._sidebar = NavSidebar(container)
        self._sidebar.navigateRequested.connect(self.navigate)
        root_layout.addWidget(self._sidebar)

        main_column = QWidget(container)
        main_layout = QVBoxLayout(main_column)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        self._topbar = TopBar(self._theme_manager, main_column)
        main_layout.addWidget(self._topbar)

        self._stack = QStackedWidget(main_column)
        main_layout.addWidget(self._stack)

        root_layout.addWidget(main_column)
        self.setCentralWidget(container)

        self._unsubscribe_nav = self._event_bus.subscribe(NAV_REQUEST, self._on_nav_request)
        esc_shortcut = QShortcut(QKeySequence(Qt.Key.Key_Escape), self)
        esc_shortcut.activated.connect(self.close)

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    def register_page(self, item: NavItem, widget: QWidget, title: Optional[str] = None) -> None:
        if item.key in self._pages:
            raise KeyError(f"Page '{item.key}' already registered")
        self._pages[item.key] = widget
        self._page_titles[item.key] = title or item.title
        self._sidebar.add_item(item)
        self._stack.addWidget(widget)
        if self._stack.count() == 1:
            self._stack.setCurrentWidget(widget)
            self._topbar.set_title(self._page_titles[item.key])

    def page(self, key: str) -> QWidget | None:
        return self._pages.get(key)

    def current_key(self) -> str | None:
        current = self._stack.currentWidget()
        for key, widget in self._pages.items():
            if widget is current:
                return key
        return None

    def navigate(self, key: str) -> None:
        widget = self._pages.get(key)
        if widget is None:
            return
        self._stack.setCurrentWidget(widget)
        self._topbar.set_title(self._page_titles.get(key, key.title()))
        self._sidebar.set_active(key)
        self._event_bus.emit(NAV_CHANGED, key)

    def _on_nav_request(self, payload: object) -> None:
        if isinstance(payload, str):
            self.navigate(payload)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._unsubscribe_nav()
        for widget in self._pages.values():
            shutdown = getattr(widget, "shutdown", None)
            if callable(shutdown):
                shutdown()
        super().closeEvent(event)
