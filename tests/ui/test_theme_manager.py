from pathlib import Path

from PyQt6.QtWidgets import QApplication

from ui.core import CompositeSettingsBackend, EventBus, JsonFallbackSettingsBackend, ThemeManager, palette_for
from ui.core.events import THEME_CHANGED
from ui.core.theme import DARK_MODE_KEY, build_stylesheet


def test_defaults_to_light_mode_when_unset(tokens, settings) -> None:
    manager = ThemeManager(tokens, settings)

    assert manager.is_dark_mode is False
    assert manager.palette.name == "light"


def test_set_dark_mode_persists_and_survives_restart(tokens, tmp_path: Path) -> None:
    path = tmp_path / "settings" / "ui.json"
    manager = ThemeManager(tokens, JsonFallbackSettingsBackend(path))

    assert manager.set_dark_mode(True) is True
    assert ThemeManager(tokens, JsonFallbackSettingsBackend(path)).is_dark_mode is True

    manager.toggle()
    assert ThemeManager(tokens, JsonFallbackSettingsBackend(path)).is_dark_mode is False


def test_every_change_is_written_through(tokens, settings) -> None:
    manager = ThemeManager(tokens, settings)

    manager.set_dark_mode(True)
    assert settings.values[DARK_MODE_KEY] == "true"
    manager.set_dark_mode(False)
    assert settings.values[DARK_MODE_KEY] == "false"


def test_failed_write_is_reported_but_flag_still_changes(tokens, settings) -> None:
    settings.writable = False
    manager = ThemeManager(tokens, settings)

    assert manager.set_dark_mode(True) is False
    assert manager.is_dark_mode is True


def test_palette_is_pure_function_of_flag(tokens, settings) -> None:
    manager = ThemeManager(tokens, settings)
    manager.set_dark_mode(True)

    assert manager.palette == manager.palette == palette_for(True, tokens)
    assert palette_for(False, tokens) == palette_for(False, tokens)
    assert palette_for(True, tokens) != palette_for(False, tokens)
    assert palette_for(True, tokens).background == "#000000"
    assert palette_for(False, tokens).background == "#FFFFFF"


def test_observers_are_notified_synchronously(tokens, settings) -> None:
    bus = EventBus()
    manager = ThemeManager(tokens, settings, bus)
    signalled: list[bool] = []
    published = []
    manager.darkModeChanged.connect(signalled.append)
    bus.subscribe(THEME_CHANGED, published.append)

    manager.set_dark_mode(True)
    manager.set_dark_mode(True)

    assert signalled == [True]
    assert [palette.name for palette in published] == ["dark"]


def test_attach_applies_theme_to_application(qt_app: QApplication, tokens, settings) -> None:
    manager = ThemeManager(tokens, settings)
    manager.attach(qt_app)
    assert qt_app.property("themeName") == "light"

    manager.toggle()

    assert qt_app.property("themeName") == "dark"
    assert "#000000" in qt_app.styleSheet()
    manager.set_dark_mode(False)


def test_stylesheet_covers_component_variants(tokens) -> None:
    sheet = build_stylesheet(tokens, palette_for(False, tokens))

    for selector in (
        "QPushButton[variant='primary']",
        "QPushButton[variant='primary']:disabled",
        "QPushButton[variant='secondary']:disabled",
        "QFrame[component='card']",
        "QFrame[component='list-row']",
        "QLineEdit[component='text-field']:focus",
    ):
        assert selector in sheet


def test_partial_write_is_not_reported_as_persisted(tokens, settings_factory) -> None:
    primary, fallback = settings_factory(), settings_factory()
    store = CompositeSettingsBackend(primary, fallback)
    manager = ThemeManager(tokens, store)
    assert manager.set_dark_mode(True) is True

    primary.writable = False
    assert manager.set_dark_mode(False) is False

    restarted = ThemeManager(tokens, CompositeSettingsBackend(primary, fallback))
    assert restarted.is_dark_mode is True
