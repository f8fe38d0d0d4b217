"""Core UI package providing the flat design system widgets and services."""

from .app_window import AppWindow, NavItem
from .components import (
    FlatCard,
    FlatListRow,
    FlatSectionHeader,
    FlatTextField,
    FlatToggle,
    PrimaryButton,
    SecondaryButton,
)
from .events import EventBus
from .preferences import (
    CompositeSettingsBackend,
    DatabaseSettingsBackend,
    JsonFallbackSettingsBackend,
    SettingsBackend,
)
from .theme import ThemeManager, ThemePalette, palette_for
from .tokens import DesignTokens

__all__ = [
    "AppWindow",
    "NavItem",
    "FlatCard",
    "FlatListRow",
    "FlatSectionHeader",
    "FlatTextField",
    "FlatToggle",
    "PrimaryButton",
    "SecondaryButton",
    "EventBus",
    "CompositeSettingsBackend",
    "DatabaseSettingsBackend",
    "JsonFallbackSettingsBackend",
    "SettingsBackend",
    "ThemeManager",
    "ThemePalette",
    "palette_for",
    "DesignTokens",
]
