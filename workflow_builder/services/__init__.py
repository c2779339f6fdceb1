"""Service layer for workflow builder business logic."""

from .workflow_service import WorkflowService
from .test_run_service import TestRunService
from .node_service import NodeService

__all__ = [
    "WorkflowService",
    "TestRunService",
    "NodeService",
]
