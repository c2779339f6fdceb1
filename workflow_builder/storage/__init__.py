"""Storage layer for workflows and test runs."""

from .base import WorkflowStore, TestRunStore
from .workflow_store import InMemoryWorkflowStore
from .test_run_store import InMemoryTestRunStore

__all__ = [
    "WorkflowStore",
    "TestRunStore",
    "InMemoryWorkflowStore",
    "InMemoryTestRunStore",
]
