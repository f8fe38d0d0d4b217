from __future__ import annotations

import logging
from dataclasses import dataclass

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtGui import QColor, QPalette
from PyQt6.QtWidgets import QApplication

from . import styles
from .events import THEME_CHANGED, EventBus
from .preferences import DatabaseSettingsBackend, SettingsBackend, read_flag, write_flag
from .tokens import DesignTokens

LOGGER = logging.getLogger("ui.core.theme")

DARK_MODE_KEY = "isDarkMode"


@dataclass(frozen=True)
class ThemePalette:
    """Colors derived from the dark-mode preference."""

    name: str
    is_dark: bool
    primary: str
    background: str
    secondary_background: str
    card_background: str
    text: str
    secondary_text: str
    destination_text: str
    shadow: str
    border: str
    oled_background: str
    oled_card_background: str
    oled_secondary_background: str


def palette_for(is_dark: bool, tokens: DesignTokens) -> ThemePalette:
    """Pure mapping from the preference flag to the palette."""

    if is_dark:
        return ThemePalette(
            name="dark",
            is_dark=True,
            primary=tokens.brand_orange,
            background="#000000",
            secondary_background="#1A1A1A",
            card_background="#262626",
            text="#F2F2F2",
            secondary_text="#808080",
            destination_text=tokens.brand_orange,
            shadow="#0D000000",
            border=tokens.border_dark,
            oled_background="#000000",
            oled_card_background="#121212",
            oled_secondary_background="#141414",
        )
    return ThemePalette(
        name="light",
        is_dark=False,
        primary=tokens.brand_orange,
        background="#FFFFFF",
        secondary_background="#F9F9F9",
        card_background="#FFFFFF",
        text="#333333",
        secondary_text="#808080",
        destination_text=tokens.brand_orange,
        shadow="#0D000000",
        border=tokens.border_light,
        oled_background="#FFFFFF",
        oled_card_background="#FFFFFF",
        oled_secondary_background="#F9F9F9",
    )


class ThemeManager(QObject):
    """Owns the dark-mode preference and applies the derived palette."""

    darkModeChanged = pyqtSignal(bool)

    def __init__(
        self,
        tokens: DesignTokens,
        settings_backend: SettingsBackend | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        super().__init__()
        self._tokens = tokens
        self._settings = settings_backend or DatabaseSettingsBackend()
        self._event_bus = event_bus
        self._is_dark_mode = read_flag(self._settings, DARK_MODE_KEY)
        self._app: QApplication | None = None

    @property
    def tokens(self) -> DesignTokens:
        return self._tokens

    @property
    def is_dark_mode(self) -> bool:
        return self._is_dark_mode

    @property
    def palette(self) -> ThemePalette:
        return palette_for(self._is_dark_mode, self._tokens)

    def attach(self, app: QApplication) -> None:
        """Bind to a QApplication and immediately apply the active palette."""
        self._app = app
        self._apply_to_app()

    def set_dark_mode(self, value: bool) -> bool:
        """Set and persist the preference; returns ``False`` if the write failed."""
        value = bool(value)
        if value == self._is_dark_mode:
            return True
        self._is_dark_mode = value
        persisted = write_flag(self._settings, DARK_MODE_KEY, value)
        if not persisted:
            LOGGER.warning("Failed to persist dark mode preference (%s)", value)
        self._apply_to_app()
        self.darkModeChanged.emit(value)
        if self._event_bus is not None:
            self._event_bus.emit(THEME_CHANGED, self.palette)
        return persisted

    def toggle(self) -> None:
        self.set_dark_mode(not self._is_dark_mode)

    def _apply_to_app(self) -> None:
        if self._app is None:
            return
        current = self.palette
        palette = QPalette()
        palette.setColor(QPalette.ColorRole.Window, QColor(current.background))
        palette.setColor(QPalette.ColorRole.WindowText, QColor(current.text))
        palette.setColor(QPalette.ColorRole.Base, QColor(current.card_background))
        palette.setColor(QPalette.ColorRole.AlternateBase, QColor(current.secondary_background))
        palette.setColor(QPalette.ColorRole.Text, QColor(current.text))
        palette.setColor(QPalette.ColorRole.Button, QColor(current.card_background))
        palette.setColor(QPalette.ColorRole.ButtonText, QColor(current.text))
        palette.setColor(QPalette.ColorRole.Highlight, QColor(self._tokens.primary_blue))
        palette.setColor(QPalette.ColorRole.HighlightedText, QColor(self._tokens.on_primary))
        self._app.setPalette(palette)
        self._app.setStyleSheet(build_stylesheet(self._tokens, current))
        self._app.setProperty("themeName", current.name)


def build_stylesheet(tokens: DesignTokens, palette: ThemePalette) -> str:
    """Generate the application-wide stylesheet from tokens and palette."""
    blocks = [
        f"""
        QWidget {{
            background-color: {palette.background};
            color: {palette.text};
            font-family: {tokens.font_family};
            font-size: {tokens.body_size}px;
        }}

        QFrame#nav-sidebar {{
            background-color: {palette.secondary_background};
            border-right: 1px solid {palette.border};
        }}

        QPushButton#nav-button {{
            background-color: transparent;
            color: {palette.secondary_text};
            border: none;
            text-align: left;
            padding: 12px 14px;
            border-radius: {tokens.radius_m}px;
        }}
        QPushButton#nav-button:checked {{
            background-color: {palette.card_background};
            color: {palette.primary};
        }}

        QFrame#top-bar {{
            background-color: {palette.secondary_background};
            border-bottom: 1px solid {palette.border};
        }}
        QLabel#top-bar-title {{
            font-weight: 700;
            font-size: {tokens.title_size}px;
        }}

        QLabel#section-header-title {{
            font-size: {tokens.title_size}px;
            font-weight: 700;
        }}
        QLabel#section-header-subtitle, QLabel#toggle-subtitle, QLabel[role='muted'] {{
            color: {palette.secondary_text};
        }}
        QLabel#list-row-chevron {{
            color: {palette.secondary_text};
            font-weight: 500;
        }}
        QLabel#migration-status[state='busy'] {{
            color: {tokens.accent_orange};
        }}
        QLabel#migration-status[state='idle'] {{
            color: {tokens.accent_green};
        }}

        QProgressBar {{
            border: 1px solid {palette.border};
            border-radius: {tokens.radius_m}px;
            background-color: {palette.card_background};
            height: 8px;
        }}
        QProgressBar::chunk {{
            border-radius: {tokens.radius_m}px;
            background-color: {palette.primary};
        }}
        """,
        styles.to_qss("QPushButton[variant='primary']", styles.primary_button(tokens, palette)),
        styles.to_qss(
            "QPushButton[variant='primary']:disabled",
            styles.primary_button(tokens, palette, enabled=False),
        ),
        styles.to_qss("QPushButton[variant='secondary']", styles.secondary_button(tokens, palette)),
        styles.to_qss(
            "QPushButton[variant='secondary']:disabled",
            styles.secondary_button(tokens, palette, enabled=False),
        ),
        styles.to_qss("QFrame[component='card']", styles.card(tokens, palette)),
        styles.to_qss("QFrame[component='list-row']", styles.list_row(tokens, palette)),
        styles.to_qss("QFrame[component='toggle-row']", styles.toggle_row(tokens, palette)),
        styles.to_qss("QLineEdit[component='text-field']", styles.text_field(tokens, palette)),
        styles.to_qss(
            "QLineEdit[component='text-field']:focus",
            styles.text_field(tokens, palette, focused=True),
        ),
    ]
    return "\n".join(blocks)
