"""Repository layer for database persistence."""

from .workflow_repository import WorkflowRepository
from .test_run_repository import TestRunRepository

__all__ = [
    "WorkflowRepository",
    "TestRunRepository",
]
