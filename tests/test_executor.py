"""
Unit tests for the simulated node executor.
"""
import random

import pytest

from conftest import make_node, make_workflow
from workflow_builder.core.config import Settings
from workflow_builder.engine.executor import (
    SIMULATED_ERROR,
    SIMULATED_OUTPUT,
    NodeExecutor,
    SimulatedNodeExecutor,
)


class TestSimulatedNodeExecutor:
    """Tests for random outcomes."""

    def test_satisfies_protocol(self):
        """The simulator is a NodeExecutor."""
        assert isinstance(SimulatedNodeExecutor(), NodeExecutor)

    @pytest.mark.asyncio
    async def test_always_succeeds_at_probability_one(self):
        """p = 1 never fails (random() is never below zero)."""
        executor = SimulatedNodeExecutor(success_probability=1.0, delay_ms=(0, 0), rng=random.Random(1))
        workflow = make_workflow(1)

        for _ in range(20):
            outcome = await executor.execute(workflow.nodes[0], workflow)
            assert outcome.success is True
            assert outcome.output == SIMULATED_OUTPUT
            assert outcome.error is None

    @pytest.mark.asyncio
    async def test_always_fails_at_probability_zero(self):
        """p = 0 always produces the simulated error."""
        executor = SimulatedNodeExecutor(success_probability=0.0, delay_ms=(0, 0), rng=random.Random(1))
        workflow = make_workflow(1)

        for _ in range(20):
            outcome = await executor.execute(workflow.nodes[0], workflow)
            assert outcome.success is False
            assert outcome.error == SIMULATED_ERROR
            assert outcome.output is None

    @pytest.mark.asyncio
    async def test_duration_within_range(self):
        """Durations are drawn from the configured range."""
        executor = SimulatedNodeExecutor(delay_ms=(0, 0), duration_ms=(100, 600), rng=random.Random(7))
        node = make_node("node-1")

        for _ in range(50):
            outcome = await executor.execute(node, make_workflow(1))
            assert 100 <= outcome.duration <= 600

    @pytest.mark.asyncio
    async def test_seeded_rng_is_reproducible(self):
        """Two executors with the same seed agree."""
        workflow = make_workflow(1)
        node = workflow.nodes[0]
        a = SimulatedNodeExecutor(delay_ms=(0, 0), rng=random.Random(42))
        b = SimulatedNodeExecutor(delay_ms=(0, 0), rng=random.Random(42))

        outcomes_a = [await a.execute(node, workflow) for _ in range(10)]
        outcomes_b = [await b.execute(node, workflow) for _ in range(10)]

        assert outcomes_a == outcomes_b

    @pytest.mark.asyncio
    async def test_success_rate_roughly_matches_probability(self):
        """About 80% of draws succeed by default."""
        executor = SimulatedNodeExecutor(delay_ms=(0, 0), rng=random.Random(2024))
        workflow = make_workflow(1)

        outcomes = [await executor.execute(workflow.nodes[0], workflow) for _ in range(1000)]
        rate = sum(o.success for o in outcomes) / len(outcomes)

        assert 0.74 < rate < 0.86

    def test_invalid_probability_rejected(self):
        with pytest.raises(ValueError):
            SimulatedNodeExecutor(success_probability=1.5)

    def test_inverted_range_rejected(self):
        with pytest.raises(ValueError):
            SimulatedNodeExecutor(delay_ms=(500, 100))

    def test_from_settings(self):
        """Simulation knobs come from Settings."""
        settings = Settings(
            _env_file=None,
            success_probability=0.5,
            step_delay_min_ms=0,
            step_delay_max_ms=10,
            duration_min_ms=1,
            duration_max_ms=2,
        )

        executor = SimulatedNodeExecutor.from_settings(settings)

        assert executor.success_probability == 0.5
        assert executor.delay_ms == (0, 10)
        assert executor.duration_ms == (1, 2)
