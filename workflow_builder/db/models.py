"""SQLModel database models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlmodel import Column, Field, SQLModel
from sqlalchemy import JSON


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WorkflowModel(SQLModel, table=True):
    """Workflow database model."""

    __tablename__ = "workflows"

    id: str = Field(primary_key=True)
    name: str = Field(index=True)
    description: str = Field(default="")
    status: str = Field(default="draft", index=True)  # draft, active, paused

    # Nodes and connections in their API (camelCase) form
    nodes: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    connections: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=_utc_now, index=True)
    updated_at: datetime = Field(default_factory=_utc_now)


class TestRunModel(SQLModel, table=True):
    """Test run history database model."""

    __tablename__ = "test_runs"

    id: str = Field(primary_key=True)
    workflow_id: str = Field(index=True)

    status: str = Field(index=True)  # running, completed, failed, cancelled

    # One result dict per node, in workflow order
    results: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))

    started_at: datetime = Field(default_factory=_utc_now, index=True)
    completed_at: datetime | None = Field(default=None)
