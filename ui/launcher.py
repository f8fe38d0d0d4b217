from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from PyQt6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import domain.db as db
from domain.migration import MigrationManager
from ui.core import AppWindow, DesignTokens, EventBus, NavItem, ThemeManager
from ui.core.preferences import default_backend
from ui.icons import AppIconSizesPage, IconGeneratorPage
from ui.migration import MigrationController, MigrationIntegrationPage
from ui.settings_page import AppSettingsPage

LOGGER = logging.getLogger("ui.launcher")

APP_DIR_NAME = "PathFinder"
HOME_ENV_VAR = "PATHFINDER_HOME"
DEFAULT_DB_NAME = "pathfinder.db"
LOG_FILE_NAME = "pathfinder.log"


@dataclass
class LauncherConfig:
    user_home: Path
    database_path: Path
    log_file: Path

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.database_path}"


def _configure_logging(log_file: Path) -> None:
    LOGGER.handlers.clear()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    for name in ("domain", "ui"):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False


def _local_appdata() -> Path:
    raw = os.environ.get("LOCALAPPDATA")
    if raw:
        return Path(raw)
    # Fallback for non-Windows environments (dev)
    return Path.home() / "AppData" / "Local"


def _user_home() -> Path:
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override)
    return _local_appdata() / APP_DIR_NAME


def prepare_environment() -> LauncherConfig:
    user_home = _user_home()
    user_home.mkdir(parents=True, exist_ok=True)
    config = LauncherConfig(
        user_home=user_home,
        database_path=user_home / DEFAULT_DB_NAME,
        log_file=user_home / LOG_FILE_NAME,
    )
    _configure_logging(config.log_file)
    db.configure_engine(config.database_url)
    db.create_all([db.AppSettingRow.__table__])  # type: ignore[attr-defined]
    LOGGER.info("Environment ready (user_home=%s, database=%s)", user_home, config.database_path)
    return config


def build_main_window(
    config: LauncherConfig,
    tokens: DesignTokens,
    theme_manager: ThemeManager,
    event_bus: EventBus,
) -> AppWindow:
    window = AppWindow(theme_manager, event_bus)
    controller = MigrationController(MigrationManager(), event_bus)
    window.register_page(NavItem("settings", "Settings"), AppSettingsPage(theme_manager, event_bus))
    window.register_page(
        NavItem("migration", "Migration"),
        MigrationIntegrationPage(controller, tokens),
        title="Database Migration",
    )
    window.register_page(
        NavItem("icon-generator", "Icon Generator"),
        IconGeneratorPage(tokens),
        title="App Icon Generator",
    )
    window.register_page(NavItem("icon-sizes", "Icon Sizes"), AppIconSizesPage(), title="App Icon Sizes")
    LOGGER.info("Main window built with user data at %s", config.user_home)
    return window


def main() -> None:
    config = prepare_environment()
    app = QApplication(sys.argv)
    tokens = DesignTokens()
    event_bus = EventBus()
    theme_manager = ThemeManager(tokens, default_backend(config.user_home), event_bus)
    theme_manager.attach(app)
    window = build_main_window(config, tokens, theme_manager, event_bus)
    window.show()
    app.exec()


if __name__ == "__main__":
    main()
