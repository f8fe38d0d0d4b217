from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Sequence

from PyQt6.QtCore import QObject, pyqtSignal

from domain.migration import status_message
from domain.records import RouteRecord, StopRecord
from ui.core.events import MIGRATION_FINISHED, MIGRATION_STATUS, EventBus

LOGGER = logging.getLogger("ui.migration.controller")

TEST_QUERIES_OK = "Test queries completed successfully!"


class MigrationBackend(Protocol):
    """What the migration screen needs from a migration manager."""

    @property
    def status(self) -> str: ...

    @property
    def is_migrating(self) -> bool: ...

    def subscribe(self, callback: Callable[[str, bool], None]) -> Callable[[], None]: ...

    def set_status(self, status: str) -> None: ...

    def run_migration(self) -> None: ...

    def verify_migration(self) -> Any: ...

    def fetch_all_routes(self) -> Sequence[RouteRecord]: ...

    def fetch_stops_for_route(self, route_id: str) -> Sequence[StopRecord]: ...


class MigrationAction(str, Enum):
    RUN = "run"
    VERIFY = "verify"
    TEST_QUERIES = "test_queries"


@dataclass(frozen=True)
class BusyState:
    action: MigrationAction | None = None

    @property
    def is_busy(self) -> bool:
        return self.action is not None


IDLE = BusyState()


def run_test_queries(manager: MigrationBackend) -> List[str]:
    """Fetch routes and the first route's stops; return the diagnostic lines."""

    routes = list(manager.fetch_all_routes())
    lines = [f"Found {len(routes)} routes:"]
    lines.extend(route.describe() for route in routes)
    if routes:
        stops = list(manager.fetch_stops_for_route(routes[0].id))
        lines.append(f"Found {len(stops)} stops for route:")
        lines.extend(stop.describe() for stop in stops)
    return lines


class MigrationController(QObject):
    """Runs migration actions off the UI thread, one at a time.

    Every action is gated by the same busy state, so run, verify and test
    queries never overlap.
    """

    stateChanged = pyqtSignal(object)
    statusChanged = pyqtSignal(str, bool)
    actionFinished = pyqtSignal(object, object)

    _statusPosted = pyqtSignal(str, bool)
    _workFinished = pyqtSignal(object, object, object)

    def __init__(
        self,
        manager: MigrationBackend,
        event_bus: EventBus | None = None,
        *,
        executor: Executor | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._manager = manager
        self._event_bus = event_bus
        self._executor = executor or ThreadPoolExecutor(max_workers=1)
        self._state = IDLE
        self._pending: Future | None = None
        self._last_report: List[str] = []

        # Manager callbacks may arrive on the worker thread; the signal hop
        # delivers them on the thread that owns this controller.
        self._statusPosted.connect(self._on_status_posted)
        self._workFinished.connect(self._on_work_finished)
        self._unsubscribe = manager.subscribe(self._statusPosted.emit)

    # ------------------------------------------------------------------
    @property
    def state(self) -> BusyState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state.is_busy

    @property
    def status(self) -> str:
        return self._manager.status

    @property
    def is_migrating(self) -> bool:
        return self._manager.is_migrating

    @property
    def last_report(self) -> List[str]:
        return list(self._last_report)

    def run_migration(self) -> bool:
        return self.trigger(MigrationAction.RUN)

    def verify_migration(self) -> bool:
        return self.trigger(MigrationAction.VERIFY)

    def test_queries(self) -> bool:
        return self.trigger(MigrationAction.TEST_QUERIES)

    def trigger(self, action: MigrationAction) -> bool:
        if self._state.is_busy:
            LOGGER.info(
                "Ignoring %s while %s is running", action.value, self._state.action.value  # type: ignore[union-attr]
            )
            return False
        try:
            future = self._executor.submit(self._work_for(action))
        except RuntimeError as exc:
            LOGGER.error("Could not start migration action '%s': %s", action.value, exc)
            return False
        LOGGER.info("Starting migration action '%s'", action.value)
        self._set_state(BusyState(action))
        self._pending = future
        # The busy state must be set before a done callback can run.
        future.add_done_callback(lambda f: self._handle_done(action, f))
        return True

    def shutdown(self) -> None:
        self._unsubscribe()
        if self._pending and not self._pending.done():
            self._pending.cancel()
        self._executor.shutdown(wait=False, cancel_futures=True)

    # ------------------------------------------------------------------
    def _work_for(self, action: MigrationAction) -> Callable[[], Any]:
        if action is MigrationAction.RUN:
            return self._manager.run_migration
        if action is MigrationAction.VERIFY:
            return self._manager.verify_migration
        return lambda: run_test_queries(self._manager)

    def _handle_done(self, action: MigrationAction, future: Future) -> None:
        if future.cancelled():
            return
        try:
            result = future.result()
            error: Optional[BaseException] = None
        except Exception as exc:
            result = None
            error = exc
        self._workFinished.emit(action, result, error)

    def _on_work_finished(self, action: MigrationAction, result: Any, error: Optional[BaseException]) -> None:
        self._pending = None
        if error is not None:
            LOGGER.error("Migration action '%s' failed: %s", action.value, error, exc_info=error)
            self._manager.set_status(self._failure_message(action, error))
        elif action is MigrationAction.TEST_QUERIES:
            self._last_report = list(result or [])
            for line in self._last_report:
                LOGGER.info("%s", line)
            self._manager.set_status(TEST_QUERIES_OK)
        self._set_state(IDLE)
        self.actionFinished.emit(action, error)
        if self._event_bus is not None:
            self._event_bus.emit(MIGRATION_FINISHED, {"action": action, "error": error})

    @staticmethod
    def _failure_message(action: MigrationAction, error: BaseException) -> str:
        if action is MigrationAction.RUN:
            return f"Migration failed: {status_message(error)}"
        if action is MigrationAction.VERIFY:
            return f"Verification failed: {status_message(error)}"
        return f"Test queries failed: {status_message(error)}"

    def _on_status_posted(self, status: str, is_migrating: bool) -> None:
        self.statusChanged.emit(status, is_migrating)
        if self._event_bus is not None:
            self._event_bus.emit(MIGRATION_STATUS, status)

    def _set_state(self, state: BusyState) -> None:
        if state == self._state:
            return
        self._state = state
        self.stateChanged.emit(state)
