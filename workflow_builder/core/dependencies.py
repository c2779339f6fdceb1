"""FastAPI dependency injection for the workflow builder."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Request

if TYPE_CHECKING:
    from ..engine.node_registry import NodeRegistryClass
    from ..services.node_service import NodeService
    from ..services.test_run_service import TestRunService
    from ..services.workflow_service import WorkflowService
    from ..storage.base import WorkflowStore


# --- Store Dependencies ---


def get_workflow_store(request: Request) -> WorkflowStore:
    """Get the application's workflow store."""
    return request.app.state.workflow_store


def get_node_registry() -> NodeRegistryClass:
    """Get node template registry instance."""
    from ..engine.node_registry import node_registry

    return node_registry


# --- Service Dependencies ---


def get_workflow_service(
    workflow_store=Depends(get_workflow_store),
) -> WorkflowService:
    """Get workflow service instance."""
    from ..services.workflow_service import WorkflowService

    return WorkflowService(workflow_store)


def get_test_run_service(request: Request) -> TestRunService:
    """Get the application-scoped test run coordinator."""
    return request.app.state.test_run_service


def get_node_service(
    node_registry=Depends(get_node_registry),
) -> NodeService:
    """Get node service instance."""
    from ..services.node_service import NodeService

    return NodeService(node_registry)
