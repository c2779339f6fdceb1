"""Workflow repository for database persistence."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from sqlmodel import select

from ..db.models import WorkflowModel
from ..schemas.workflow import (
    ConnectionSchema,
    WorkflowNodeSchema,
    connection_from_schema,
    connection_to_schema,
    node_from_schema,
    node_to_schema,
)
from ..storage.base import WorkflowStore

if TYPE_CHECKING:
    from sqlalchemy.orm import sessionmaker

    from ..engine.types import Workflow


class WorkflowRepository(WorkflowStore):
    """Workflow store backed by SQL. Opens one session per operation."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    async def list(self) -> list[Workflow]:
        """List all workflows."""
        async with self._session_factory() as session:
            statement = select(WorkflowModel).order_by(WorkflowModel.created_at)
            result = await session.execute(statement)
            return [self._to_workflow(w) for w in result.scalars().all()]

    async def get(self, workflow_id: str) -> Workflow | None:
        """Get a workflow by ID."""
        async with self._session_factory() as session:
            db_workflow = await session.get(WorkflowModel, workflow_id)
            if not db_workflow:
                return None
            return self._to_workflow(db_workflow)

    async def create(self, workflow: Workflow) -> Workflow:
        """Create a new workflow."""
        workflow_id = workflow.id if not workflow.is_temporary else self._generate_id()
        now = datetime.now(timezone.utc)

        db_workflow = WorkflowModel(
            id=workflow_id,
            name=workflow.name,
            description=workflow.description,
            status=workflow.status,
            nodes=self._dump_nodes(workflow.nodes),
            connections=self._dump_connections(workflow.connections),
            created_at=now,
            updated_at=now,
        )

        async with self._session_factory() as session:
            session.add(db_workflow)
            await session.commit()
            await session.refresh(db_workflow)
            return self._to_workflow(db_workflow)

    async def update(self, workflow_id: str, **fields: Any) -> Workflow | None:
        """Update an existing workflow."""
        async with self._session_factory() as session:
            db_workflow = await session.get(WorkflowModel, workflow_id)
            if not db_workflow:
                return None

            if "name" in fields:
                db_workflow.name = fields["name"]
            if "description" in fields:
                db_workflow.description = fields["description"]
            if "status" in fields:
                db_workflow.status = fields["status"]
            if "nodes" in fields:
                db_workflow.nodes = self._dump_nodes(fields["nodes"])
            if "connections" in fields:
                db_workflow.connections = self._dump_connections(fields["connections"])
            db_workflow.updated_at = datetime.now(timezone.utc)

            await session.commit()
            await session.refresh(db_workflow)
            return self._to_workflow(db_workflow)

    async def delete(self, workflow_id: str) -> bool:
        """Delete a workflow."""
        async with self._session_factory() as session:
            db_workflow = await session.get(WorkflowModel, workflow_id)
            if not db_workflow:
                return False

            await session.delete(db_workflow)
            await session.commit()
            return True

    def _generate_id(self) -> str:
        """Generate a unique workflow ID."""
        return f"wf-{uuid.uuid4()}"

    def _dump_nodes(self, nodes: list) -> list[dict[str, Any]]:
        return [node_to_schema(n).model_dump(mode="json") for n in nodes]

    def _dump_connections(self, connections: list) -> list[dict[str, Any]]:
        return [
            connection_to_schema(c).model_dump(mode="json", by_alias=True)
            for c in connections
        ]

    def _to_workflow(self, db_workflow: WorkflowModel) -> Workflow:
        """Convert database model to Workflow."""
        from ..engine.types import Workflow as WorkflowType

        return WorkflowType(
            id=db_workflow.id,
            name=db_workflow.name,
            description=db_workflow.description,
            status=db_workflow.status,  # type: ignore[arg-type]
            nodes=[
                node_from_schema(WorkflowNodeSchema.model_validate(n))
                for n in db_workflow.nodes
            ],
            connections=[
                connection_from_schema(ConnectionSchema.model_validate(c))
                for c in db_workflow.connections
            ],
        )
