"""In-memory workflow storage."""

from __future__ import annotations

import copy
import uuid
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from .base import WorkflowStore

if TYPE_CHECKING:
    from ..engine.types import Workflow

UPDATABLE_FIELDS = frozenset({"name", "description", "nodes", "connections", "status"})


class InMemoryWorkflowStore(WorkflowStore):
    """In-memory workflow storage. Single writer, single event loop."""

    def __init__(self) -> None:
        self._workflows: dict[str, Workflow] = {}

    async def list(self) -> list[Workflow]:
        """List all workflows."""
        return [copy.deepcopy(w) for w in self._workflows.values()]

    async def get(self, workflow_id: str) -> Workflow | None:
        """Get a workflow by ID."""
        stored = self._workflows.get(workflow_id)
        return copy.deepcopy(stored) if stored else None

    async def create(self, workflow: Workflow) -> Workflow:
        """Create a new workflow."""
        workflow_id = workflow.id if not workflow.is_temporary else self._generate_id()
        stored = replace(copy.deepcopy(workflow), id=workflow_id)
        self._workflows[workflow_id] = stored
        return copy.deepcopy(stored)

    async def update(self, workflow_id: str, **fields: Any) -> Workflow | None:
        """Update an existing workflow."""
        existing = self._workflows.get(workflow_id)
        if not existing:
            return None

        changes = {k: copy.deepcopy(v) for k, v in fields.items() if k in UPDATABLE_FIELDS}
        updated = replace(existing, **changes)
        self._workflows[workflow_id] = updated
        return copy.deepcopy(updated)

    async def delete(self, workflow_id: str) -> bool:
        """Delete a workflow."""
        if workflow_id in self._workflows:
            del self._workflows[workflow_id]
            return True
        return False

    def clear(self) -> None:
        """Clear all workflows."""
        self._workflows.clear()

    def _generate_id(self) -> str:
        """Generate a unique workflow ID."""
        return f"wf-{uuid.uuid4()}"
