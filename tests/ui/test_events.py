from __future__ import annotations

from ui.core import EventBus
from ui.core.events import MIGRATION_STATUS
from ui.migration import MigrationController


def test_callbacks_may_unsubscribe_while_notified() -> None:
    bus = EventBus()
    received: list[object] = []
    unsubscribe = bus.subscribe("topic", lambda payload: (received.append(payload), unsubscribe()))
    bus.subscribe("topic", lambda payload: received.append(("second", payload)))

    bus.emit("topic", 1)
    bus.emit("topic", 2)

    assert received == [1, ("second", 1), ("second", 2)]


def test_unsubscribe_is_idempotent() -> None:
    bus = EventBus()
    received: list[object] = []
    unsubscribe = bus.subscribe("topic", received.append)

    unsubscribe()
    unsubscribe()
    bus.emit("topic", "late")

    assert received == []


def test_migration_status_is_published(fake_manager, manual_executor) -> None:
    bus = EventBus()
    statuses: list[str] = []
    bus.subscribe(MIGRATION_STATUS, statuses.append)
    controller = MigrationController(fake_manager, bus, executor=manual_executor)

    controller.run_migration()
    manual_executor.run_all()
    controller.shutdown()

    assert statuses == ["Starting migration...", "Migration completed successfully!"]
