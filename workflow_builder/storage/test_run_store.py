"""In-memory test run history storage."""

from __future__ import annotations

import copy
import uuid
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from .base import TestRunStore

if TYPE_CHECKING:
    from ..engine.types import TestRun

UPDATABLE_FIELDS = frozenset({"status", "results", "completed_at"})


class InMemoryTestRunStore(TestRunStore):
    """In-memory test run storage, capped at max_records."""

    def __init__(self, max_records: int = 100) -> None:
        self._runs: dict[str, TestRun] = {}
        self._max_records = max_records

    async def create(self, run: TestRun) -> TestRun:
        """Store a new run."""
        run_id = run.id or self._generate_id()
        stored = replace(copy.deepcopy(run), id=run_id)
        self._runs[run_id] = stored
        self._cleanup()
        return copy.deepcopy(stored)

    async def get(self, run_id: str) -> TestRun | None:
        """Get a run by ID."""
        stored = self._runs.get(run_id)
        return copy.deepcopy(stored) if stored else None

    async def update(self, run_id: str, **fields: Any) -> TestRun | None:
        """Update an existing run."""
        existing = self._runs.get(run_id)
        if not existing:
            return None

        changes = {k: copy.deepcopy(v) for k, v in fields.items() if k in UPDATABLE_FIELDS}
        updated = replace(existing, **changes)
        self._runs[run_id] = updated
        return copy.deepcopy(updated)

    async def list_by_workflow(self, workflow_id: str) -> list[TestRun]:
        """List a workflow's runs in insertion order."""
        return [
            copy.deepcopy(r) for r in self._runs.values() if r.workflow_id == workflow_id
        ]

    async def delete(self, run_id: str) -> bool:
        """Delete a run."""
        if run_id in self._runs:
            del self._runs[run_id]
            return True
        return False

    def clear(self) -> None:
        """Clear all runs."""
        self._runs.clear()

    def _cleanup(self) -> None:
        """Remove the oldest finished runs while over max. Running runs are kept."""
        excess = len(self._runs) - self._max_records
        if excess <= 0:
            return

        for run_id in [rid for rid, r in self._runs.items() if r.is_terminal][:excess]:
            del self._runs[run_id]

    def _generate_id(self) -> str:
        """Generate a unique run ID."""
        return f"run-{uuid.uuid4()}"
