"""Store interfaces shared by the in-memory and database backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..engine.types import TestRun, Workflow


class WorkflowStore(ABC):
    """Persistence for workflows. Implementations return detached copies."""

    @abstractmethod
    async def list(self) -> list[Workflow]:
        """List all workflows in insertion order."""

    @abstractmethod
    async def get(self, workflow_id: str) -> Workflow | None:
        """Get a workflow by ID."""

    @abstractmethod
    async def create(self, workflow: Workflow) -> Workflow:
        """Store a workflow, generating an ID when it has none (or a temporary one)."""

    @abstractmethod
    async def update(self, workflow_id: str, **fields: Any) -> Workflow | None:
        """Merge fields into an existing workflow. The ID never changes."""

    @abstractmethod
    async def delete(self, workflow_id: str) -> bool:
        """Delete a workflow."""


class TestRunStore(ABC):
    """Persistence for test runs. Implementations return detached copies."""

    __test__ = False

    @abstractmethod
    async def create(self, run: TestRun) -> TestRun:
        """Store a run, generating an ID when it has none."""

    @abstractmethod
    async def get(self, run_id: str) -> TestRun | None:
        """Get a run by ID."""

    @abstractmethod
    async def update(self, run_id: str, **fields: Any) -> TestRun | None:
        """Merge fields into an existing run. The ID never changes."""

    @abstractmethod
    async def list_by_workflow(self, workflow_id: str) -> list[TestRun]:
        """List a workflow's runs in insertion order."""

    @abstractmethod
    async def delete(self, run_id: str) -> bool:
        """Delete a run."""
