"""Travel routes migration screen."""

from .controller import IDLE, BusyState, MigrationAction, MigrationController, run_test_queries
from .page import MigrationIntegrationPage

__all__ = [
    "IDLE",
    "BusyState",
    "MigrationAction",
    "MigrationController",
    "run_test_queries",
    "MigrationIntegrationPage",
]
