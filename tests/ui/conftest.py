from __future__ import annotations

import os
import sys
from concurrent.futures import Executor, Future
from pathlib import Path
from typing import Callable, List

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from PyQt6.QtWidgets import QApplication

from domain.records import RouteRecord, StopRecord
from ui.core import DesignTokens, SettingsBackend


class MemorySettingsBackend(SettingsBackend):
    def __init__(self, initial: dict[str, str] | None = None, *, writable: bool = True) -> None:
        self.values: dict[str, str] = dict(initial or {})
        self.writable = writable

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> bool:
        if not self.writable:
            return False
        self.values[key] = value
        return True


@pytest.fixture(scope="session", autouse=True)
def qt_app() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture()
def tokens() -> DesignTokens:
    return DesignTokens()


@pytest.fixture()
def settings() -> MemorySettingsBackend:
    return MemorySettingsBackend()


@pytest.fixture()
def settings_factory():
    return MemorySettingsBackend


class ManualExecutor(Executor):
    """Holds submitted work until the test runs it."""

    def __init__(self) -> None:
        self.jobs: list[tuple[Future, Callable, tuple, dict]] = []

    def submit(self, fn, /, *args, **kwargs):  # type: ignore[override]
        future: Future = Future()
        self.jobs.append((future, fn, args, kwargs))
        return future

    def run_all(self) -> None:
        while self.jobs:
            future, fn, args, kwargs = self.jobs.pop(0)
            if not future.set_running_or_notify_cancel():
                continue
            try:
                future.set_result(fn(*args, **kwargs))
            except Exception as exc:
                future.set_exception(exc)

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        self.jobs.clear()


class FakeMigrationManager:
    def __init__(self) -> None:
        self.status = "Ready to migrate"
        self.is_migrating = False
        self.routes: List[RouteRecord] = []
        self.stops: List[StopRecord] = []
        self.final_status = "Migration completed successfully!"
        self.verify_error: Exception | None = None
        self.query_error: Exception | None = None
        self.run_calls = 0
        self.stop_requests: list[str] = []
        self._subscribers: list[Callable[[str, bool], None]] = []

    def subscribe(self, callback):
        self._subscribers.append(callback)
        return lambda: self._subscribers.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self.status, self.is_migrating)

    def set_status(self, status: str) -> None:
        self.status = status
        self._notify()

    def run_migration(self) -> None:
        self.run_calls += 1
        self.is_migrating = True
        self.set_status("Starting migration...")
        self.is_migrating = False
        self.set_status(self.final_status)

    def verify_migration(self):
        self.set_status("Verifying migration...")
        if self.verify_error is not None:
            raise self.verify_error
        self.set_status("Migration verified: 1 routes, 5 stops")

    def fetch_all_routes(self):
        if self.query_error is not None:
            raise self.query_error
        return list(self.routes)

    def fetch_stops_for_route(self, route_id: str):
        self.stop_requests.append(route_id)
        return list(self.stops)


@pytest.fixture()
def manual_executor() -> ManualExecutor:
    return ManualExecutor()


@pytest.fixture()
def fake_manager() -> FakeMigrationManager:
    return FakeMigrationManager()
