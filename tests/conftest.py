"""Shared fixtures for workflow builder tests."""

from __future__ import annotations

import asyncio
from typing import AsyncGenerator, Iterator

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from workflow_builder.core.config import Settings
from workflow_builder.engine.types import (
    Connection,
    NodeOutcome,
    NodePosition,
    Workflow,
    WorkflowNode,
)
from workflow_builder.main import create_app


class ScriptedExecutor:
    """Deterministic executor: nodes listed in `fail` error, everything else succeeds."""

    def __init__(
        self,
        fail: set[str] | None = None,
        delay: float = 0.0,
        raise_on: set[str] | None = None,
    ) -> None:
        self.fail = fail or set()
        self.delay = delay
        self.raise_on = raise_on or set()
        self.calls: list[str] = []

    async def execute(self, node: WorkflowNode, workflow: Workflow) -> NodeOutcome:
        self.calls.append(node.id)
        if self.delay:
            await asyncio.sleep(self.delay)
        if node.id in self.raise_on:
            raise RuntimeError(f"executor blew up on {node.id}")
        if node.id in self.fail:
            return NodeOutcome(success=False, duration=50, error="Simulated error for testing")
        return NodeOutcome(success=True, duration=100, output={"data": "Sample output data"})


def make_node(node_id: str, x: float = 0, y: float = 0, name: str | None = None) -> WorkflowNode:
    return WorkflowNode(
        id=node_id,
        type="action",
        category="integrations",
        name=name or f"Node {node_id}",
        icon="Globe",
        description="Test node",
        position=NodePosition(x=x, y=y),
        config={},
    )


def make_workflow(node_count: int = 3, workflow_id: str = "wf-test", connect: bool = True) -> Workflow:
    nodes = [make_node(f"node-{i}", x=i * 300) for i in range(1, node_count + 1)]
    connections = []
    if connect:
        connections = [
            Connection(id=f"conn-{i}", source_id=nodes[i - 1].id, target_id=nodes[i].id)
            for i in range(1, node_count)
        ]
    return Workflow(
        id=workflow_id,
        name="Test Workflow",
        description="Workflow used in tests",
        nodes=nodes,
        connections=connections,
    )


def node_payload(node_id: str, x: float = 100, y: float = 200) -> dict:
    return {
        "id": node_id,
        "type": "trigger",
        "category": "triggers",
        "name": "Email Received",
        "icon": "Mail",
        "description": "Triggers when a new email arrives",
        "position": {"x": x, "y": y},
        "config": {"folder": "inbox"},
    }


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        storage_backend="memory",
        seed_sample_workflow=True,
        step_delay_min_ms=0,
        step_delay_max_ms=0,
        max_test_runs=100,
    )


@pytest.fixture
def executor() -> ScriptedExecutor:
    return ScriptedExecutor()


@pytest.fixture
def app(test_settings: Settings, executor: ScriptedExecutor) -> FastAPI:
    return create_app(config=test_settings, executor=executor)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """TestClient with the lifespan running, so stores and the run coordinator exist."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
async def http_client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """In-process httpx client against the app, lifespan included."""
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
