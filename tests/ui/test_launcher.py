from __future__ import annotations

import logging

import pytest
from sqlalchemy import inspect

import domain.db as db
from ui import launcher
from ui.core import DesignTokens, EventBus, ThemeManager


@pytest.fixture()
def isolated_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(launcher.HOME_ENV_VAR, str(tmp_path / "home"))
    monkeypatch.setattr(db, "engine", db.engine)
    names = (launcher.LOGGER.name, "domain", "ui")
    saved = {
        name: (list(logging.getLogger(name).handlers), logging.getLogger(name).propagate, logging.getLogger(name).level)
        for name in names
    }
    yield tmp_path / "home"
    for name, (handlers, propagate, level) in saved.items():
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers[:] = handlers
        logger.propagate = propagate
        logger.setLevel(level)
    db.engine.dispose()


def test_prepare_environment_uses_home_override(isolated_environment) -> None:
    config = launcher.prepare_environment()

    assert config.user_home == isolated_environment
    assert config.database_path == isolated_environment / "pathfinder.db"
    assert config.database_url.endswith("pathfinder.db")
    assert inspect(db.engine).get_table_names() == ["app_settings"]
    assert launcher.LOGGER.name == "ui.launcher"
    assert "Environment ready" in config.log_file.read_text(encoding="utf-8")


def test_build_main_window_registers_every_screen(isolated_environment, settings) -> None:
    config = launcher.prepare_environment()
    tokens = DesignTokens()
    bus = EventBus()
    window = launcher.build_main_window(config, tokens, ThemeManager(tokens, settings, bus), bus)

    assert window.current_key() == "settings"
    for key in ("migration", "icon-generator", "icon-sizes"):
        assert window.page(key) is not None
    window.close()
