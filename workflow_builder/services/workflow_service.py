"""Workflow service for business logic."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from ..core.exceptions import WorkflowNotFoundError
from ..engine.graph import validate_graph
from ..engine.types import Workflow
from ..schemas.workflow import (
    WorkflowCreateRequest,
    WorkflowUpdateRequest,
    connection_from_schema,
    node_from_schema,
)

if TYPE_CHECKING:
    from ..storage.base import WorkflowStore

logger = logging.getLogger(__name__)


class WorkflowService:
    """Service for workflow operations."""

    def __init__(self, workflow_store: WorkflowStore) -> None:
        self._workflow_store = workflow_store

    async def list_workflows(self) -> list[Workflow]:
        """List all workflows."""
        return await self._workflow_store.list()

    async def get_workflow(self, workflow_id: str) -> Workflow:
        """Get a workflow by ID."""
        workflow = await self._workflow_store.get(workflow_id)
        if not workflow:
            raise WorkflowNotFoundError(workflow_id)
        return workflow

    async def create_workflow(self, request: WorkflowCreateRequest) -> Workflow:
        """Create a new workflow. Validation runs before anything is stored."""
        workflow = self._request_to_workflow(request)
        validate_graph(workflow)

        created = await self._workflow_store.create(workflow)
        logger.info("Created workflow %s (%d nodes)", created.id, len(created.nodes))
        return created

    async def update_workflow(
        self, workflow_id: str, request: WorkflowUpdateRequest
    ) -> Workflow:
        """Apply a partial update. Fields left out (or null) keep their value."""
        existing = await self._workflow_store.get(workflow_id)
        if not existing:
            raise WorkflowNotFoundError(workflow_id)

        changes = self._request_to_changes(request)
        validate_graph(replace(existing, **changes))

        updated = await self._workflow_store.update(workflow_id, **changes)
        if not updated:
            raise WorkflowNotFoundError(workflow_id)

        logger.info("Updated workflow %s (%s)", workflow_id, ", ".join(sorted(changes)) or "no changes")
        return updated

    async def delete_workflow(self, workflow_id: str) -> bool:
        """Delete a workflow."""
        deleted = await self._workflow_store.delete(workflow_id)
        if not deleted:
            raise WorkflowNotFoundError(workflow_id)
        logger.info("Deleted workflow %s", workflow_id)
        return True

    def _request_to_workflow(self, request: WorkflowCreateRequest) -> Workflow:
        """Convert request to internal Workflow type."""
        return Workflow(
            name=request.name,
            description=request.description,
            nodes=[node_from_schema(n) for n in request.nodes],
            connections=[connection_from_schema(c) for c in request.connections],
            status=request.status,
        )

    def _request_to_changes(self, request: WorkflowUpdateRequest) -> dict[str, Any]:
        """Collect the fields a partial update actually sets."""
        changes: dict[str, Any] = {}
        if request.name is not None:
            changes["name"] = request.name
        if request.description is not None:
            changes["description"] = request.description
        if request.status is not None:
            changes["status"] = request.status
        if request.nodes is not None:
            changes["nodes"] = [node_from_schema(n) for n in request.nodes]
        if request.connections is not None:
            changes["connections"] = [connection_from_schema(c) for c in request.connections]
        return changes
