from __future__ import annotations

from typing import Optional

from PyQt6.QtWidgets import QHBoxLayout, QLabel, QProgressBar, QVBoxLayout, QWidget

from ui.core import FlatCard, FlatSectionHeader, PrimaryButton, SecondaryButton
from ui.core.tokens import DesignTokens

from .controller import BusyState, MigrationAction, MigrationController


class MigrationIntegrationPage(QWidget):
    """Developer screen that runs, verifies and spot-checks the travel routes migration."""

    def __init__(
        self,
        controller: MigrationController,
        tokens: DesignTokens,
        *,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller

        layout = QVBoxLayout(self)
        layout.setContentsMargins(tokens.padding_m, tokens.padding_m, tokens.padding_m, tokens.padding_m)
        layout.setSpacing(tokens.padding_l)

        layout.addWidget(FlatSectionHeader("Database Migration", "Set up travel routes database", self))

        status_card = FlatCard(tokens, self)
        status_layout = QVBoxLayout(status_card)
        status_layout.setSpacing(tokens.padding_s)
        status_layout.addWidget(QLabel("Migration Status", status_card))
        status_row = QHBoxLayout()
        self._status_icon = QLabel(status_card)
        self._status_icon.setObjectName("migration-status")
        status_row.addWidget(self._status_icon)
        self._status_label = QLabel(status_card)
        self._status_label.setObjectName("migration-status-text")
        self._status_label.setWordWrap(True)
        status_row.addWidget(self._status_label, 1)
        status_layout.addLayout(status_row)
        self._progress = QProgressBar(status_card)
        self._progress.setRange(0, 0)
        self._progress.setTextVisible(False)
        status_layout.addWidget(self._progress)
        layout.addWidget(status_card)

        self._run_button = PrimaryButton("Run Migration", tokens, self)
        self._run_button.clicked.connect(controller.run_migration)  # type: ignore[arg-type]
        layout.addWidget(self._run_button)

        self._verify_button = SecondaryButton("Verify Migration", tokens, self)
        self._verify_button.clicked.connect(controller.verify_migration)  # type: ignore[arg-type]
        layout.addWidget(self._verify_button)

        self._query_button = SecondaryButton("Test Queries", tokens, self)
        self._query_button.clicked.connect(controller.test_queries)  # type: ignore[arg-type]
        layout.addWidget(self._query_button)
        layout.addStretch(1)

        controller.statusChanged.connect(self._on_status_changed)
        controller.stateChanged.connect(self._on_state_changed)
        self._on_status_changed(controller.status, controller.is_migrating)
        self._on_state_changed(controller.state)

    @property
    def run_button(self) -> PrimaryButton:
        return self._run_button

    @property
    def verify_button(self) -> SecondaryButton:
        return self._verify_button

    @property
    def query_button(self) -> SecondaryButton:
        return self._query_button

    def status_text(self) -> str:
        return self._status_label.text()

    def shutdown(self) -> None:
        self._controller.shutdown()

    def _on_status_changed(self, status: str, is_migrating: bool) -> None:
        self._status_label.setText(status)
        self._status_icon.setText("◷" if is_migrating else "✓")
        self._status_icon.setProperty("state", "busy" if is_migrating else "idle")
        self._status_icon.style().unpolish(self._status_icon)
        self._status_icon.style().polish(self._status_icon)
        self._progress.setVisible(is_migrating)

    def _on_state_changed(self, state: BusyState) -> None:
        for button in (self._run_button, self._verify_button, self._query_button):
            button.setEnabled(not state.is_busy)
        running = state.action is MigrationAction.RUN
        self._run_button.setText("Migrating..." if running else "Run Migration")
