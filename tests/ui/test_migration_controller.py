from __future__ import annotations

from concurrent.futures import Executor

import pytest

from domain.migration import QueryError, VerificationError
from domain.records import RouteRecord, StopRecord
from ui.core import EventBus
from ui.core.events import MIGRATION_FINISHED
from ui.migration import IDLE, BusyState, MigrationAction, MigrationController
from ui.migration.controller import TEST_QUERIES_OK


@pytest.fixture()
def controller(fake_manager, manual_executor):
    controller = MigrationController(fake_manager, executor=manual_executor)
    yield controller
    controller.shutdown()


def test_second_trigger_while_running_is_ignored(controller, fake_manager, manual_executor) -> None:
    assert controller.run_migration() is True
    assert controller.state == BusyState(MigrationAction.RUN)

    assert controller.run_migration() is False
    assert controller.verify_migration() is False
    assert controller.test_queries() is False
    assert len(manual_executor.jobs) == 1

    manual_executor.run_all()

    assert fake_manager.run_calls == 1
    assert controller.state == IDLE


@pytest.mark.parametrize(
    "final_status",
    ["Migration completed successfully!", "Migration failed: disk I/O error"],
)
def test_status_after_run_matches_manager(controller, fake_manager, manual_executor, final_status) -> None:
    fake_manager.final_status = final_status
    seen: list[tuple[str, bool]] = []
    controller.statusChanged.connect(lambda status, busy: seen.append((status, busy)))

    controller.run_migration()
    manual_executor.run_all()

    assert controller.is_migrating is False
    assert controller.status == final_status
    assert seen[0] == ("Starting migration...", True)
    assert seen[-1] == (final_status, False)


def test_state_transitions_are_signalled(controller, manual_executor) -> None:
    states: list[BusyState] = []
    finished: list[tuple[MigrationAction, object]] = []
    controller.stateChanged.connect(states.append)
    controller.actionFinished.connect(lambda action, error: finished.append((action, error)))

    controller.verify_migration()
    manual_executor.run_all()

    assert states == [BusyState(MigrationAction.VERIFY), IDLE]
    assert finished == [(MigrationAction.VERIFY, None)]


def test_empty_routes_skip_stop_query(controller, fake_manager, manual_executor) -> None:
    controller.test_queries()
    manual_executor.run_all()

    assert fake_manager.stop_requests == []
    assert controller.status == TEST_QUERIES_OK
    assert controller.last_report == ["Found 0 routes:"]


def test_route_without_total_cost_is_described_without_it(controller, fake_manager, manual_executor) -> None:
    fake_manager.routes = [
        RouteRecord.model_validate({"id": "r-1", "title": "Paris Loop"}),
        RouteRecord.model_validate({"id": "r-2", "title": "Asia Route 2026", "total_cost": 3000}),
    ]
    fake_manager.stops = [StopRecord(id="s-1", location="Paris", country="France", nights=2)]

    controller.test_queries()
    manual_executor.run_all()

    assert fake_manager.stop_requests == ["r-1"]
    assert controller.status == TEST_QUERIES_OK
    assert controller.last_report == [
        "Found 2 routes:",
        "- Paris Loop",
        "- Asia Route 2026: €3000",
        "Found 1 stops for route:",
        "- Paris, France: 2 nights",
    ]


def test_query_failure_becomes_status(controller, fake_manager, manual_executor) -> None:
    fake_manager.query_error = RuntimeError("database is locked")
    errors: list[object] = []
    controller.actionFinished.connect(lambda _action, error: errors.append(error))

    controller.test_queries()
    manual_executor.run_all()

    assert controller.status == "Test queries failed: database is locked"
    assert controller.state == IDLE
    assert isinstance(errors[0], RuntimeError)


def test_verify_failure_is_caught_and_reported(controller, fake_manager, manual_executor) -> None:
    fake_manager.verify_error = VerificationError("No travel routes found; run the migration first")

    controller.verify_migration()
    manual_executor.run_all()

    assert controller.status == "Verification failed: No travel routes found; run the migration first"
    assert controller.state == IDLE
    assert controller.verify_migration() is True


def test_finished_actions_are_published_on_the_bus(fake_manager, manual_executor) -> None:
    bus = EventBus()
    payloads: list[dict] = []
    bus.subscribe(MIGRATION_FINISHED, payloads.append)
    controller = MigrationController(fake_manager, bus, executor=manual_executor)

    controller.run_migration()
    manual_executor.run_all()
    controller.shutdown()

    assert payloads == [{"action": MigrationAction.RUN, "error": None}]


def test_shutdown_stops_status_forwarding(fake_manager, manual_executor) -> None:
    controller = MigrationController(fake_manager, executor=manual_executor)
    seen: list[str] = []
    controller.statusChanged.connect(lambda status, _busy: seen.append(status))

    controller.shutdown()
    fake_manager.set_status("after shutdown")

    assert seen == []


class _ClosedExecutor(Executor):
    def submit(self, fn, /, *args, **kwargs):  # type: ignore[override]
        raise RuntimeError("cannot schedule new futures after shutdown")


def test_rejected_submit_leaves_controller_idle(fake_manager) -> None:
    controller = MigrationController(fake_manager, executor=_ClosedExecutor())
    states: list[BusyState] = []
    controller.stateChanged.connect(states.append)

    assert controller.run_migration() is False
    assert controller.state == IDLE
    assert states == []
    controller.shutdown()


def test_failure_status_keeps_only_first_line(controller, fake_manager, manual_executor) -> None:
    fake_manager.query_error = QueryError(
        "Could not fetch routes: (sqlite3.OperationalError) no such table: travel_routes\n"
        "[SQL: SELECT travel_routes.id FROM travel_routes]\n"
        "(Background on this error at: https://sqlalche.me/e/20/e3q8)"
    )

    controller.test_queries()
    manual_executor.run_all()

    assert controller.status == (
        "Test queries failed: Could not fetch routes: (sqlite3.OperationalError) no such table: travel_routes"
    )
