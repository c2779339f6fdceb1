"""
Node executors.

The test-run state machine asks a NodeExecutor for each node's outcome and
never decides success or failure itself. SimulatedNodeExecutor draws random
outcomes to preview the workflow; a real executor (HTTP calls, model
inference) can be swapped in without touching run sequencing.
"""

from __future__ import annotations

import asyncio
import random
from typing import Any, Protocol, runtime_checkable

from .types import NodeOutcome, Workflow, WorkflowNode

SIMULATED_OUTPUT: dict[str, Any] = {"data": "Sample output data"}
SIMULATED_ERROR = "Simulated error for testing"


@runtime_checkable
class NodeExecutor(Protocol):
    """Produces the outcome of running a single node."""

    async def execute(self, node: WorkflowNode, workflow: Workflow) -> NodeOutcome:
        ...


class SimulatedNodeExecutor:
    """Random pass/fail outcomes after a random delay."""

    def __init__(
        self,
        success_probability: float = 0.8,
        delay_ms: tuple[int, int] = (400, 1200),
        duration_ms: tuple[int, int] = (100, 600),
        rng: random.Random | None = None,
    ) -> None:
        if not 0.0 <= success_probability <= 1.0:
            raise ValueError("success_probability must be between 0 and 1")
        if delay_ms[0] > delay_ms[1] or duration_ms[0] > duration_ms[1]:
            raise ValueError("Range minimum must not exceed maximum")

        self.success_probability = success_probability
        self.delay_ms = delay_ms
        self.duration_ms = duration_ms
        self._rng = rng or random.Random()

    @classmethod
    def from_settings(cls, settings: Any, rng: random.Random | None = None) -> SimulatedNodeExecutor:
        """Build an executor from application settings."""
        return cls(
            success_probability=settings.success_probability,
            delay_ms=(settings.step_delay_min_ms, settings.step_delay_max_ms),
            duration_ms=(settings.duration_min_ms, settings.duration_max_ms),
            rng=rng,
        )

    async def execute(self, node: WorkflowNode, workflow: Workflow) -> NodeOutcome:
        delay = self._rng.randint(*self.delay_ms)
        if delay > 0:
            await asyncio.sleep(delay / 1000)

        # Success when random() > 1 - p, i.e. random() > 0.2 for p = 0.8
        success = self._rng.random() > 1.0 - self.success_probability
        duration = self._rng.randint(*self.duration_ms)

        if success:
            return NodeOutcome(success=True, duration=duration, output=dict(SIMULATED_OUTPUT))
        return NodeOutcome(success=False, duration=duration, error=SIMULATED_ERROR)
