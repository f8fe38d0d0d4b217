from __future__ import annotations

from sqlmodel import create_engine

from domain.migration import MigrationManager
from ui.migration import MigrationController, MigrationIntegrationPage


def test_buttons_disable_while_any_action_runs(tokens, fake_manager, manual_executor) -> None:
    controller = MigrationController(fake_manager, executor=manual_executor)
    page = MigrationIntegrationPage(controller, tokens)
    buttons = (page.run_button, page.verify_button, page.query_button)
    assert all(button.isEnabled() for button in buttons)

    page.query_button.click()
    assert not any(button.isEnabled() for button in buttons)
    assert page.run_button.text() == "Run Migration"

    manual_executor.run_all()
    assert all(button.isEnabled() for button in buttons)

    page.run_button.click()
    assert page.run_button.text() == "Migrating..."
    page.verify_button.setEnabled(True)
    page.verify_button.click()
    assert len(manual_executor.jobs) == 1

    manual_executor.run_all()
    assert page.run_button.text() == "Run Migration"
    assert page.status_text() == "Migration completed successfully!"
    page.shutdown()


def test_page_runs_real_migration(tokens, manual_executor, tmp_path) -> None:
    engine = create_engine(f"sqlite:///{tmp_path / 'page.db'}")
    controller = MigrationController(MigrationManager(engine), executor=manual_executor)
    page = MigrationIntegrationPage(controller, tokens)
    assert page.status_text() == "Ready to migrate"

    page.run_button.click()
    manual_executor.run_all()
    assert page.status_text() == "Migration completed successfully!"

    page.verify_button.click()
    manual_executor.run_all()
    assert page.status_text() == "Migration verified: 1 routes, 5 stops"

    page.query_button.click()
    manual_executor.run_all()
    assert page.status_text() == "Test queries completed successfully!"
    assert "- Asia Route 2026: €3000" in controller.last_report
    page.shutdown()
    engine.dispose()
