"""Seed storage with the sample workflow."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..engine.types import Connection, NodePosition, Workflow, WorkflowNode

if TYPE_CHECKING:
    from ..storage.base import WorkflowStore

logger = logging.getLogger(__name__)

SAMPLE_WORKFLOW_ID = "wf-sample"


def build_sample_workflow() -> Workflow:
    """Three-node email triage workflow shown on first launch."""
    return Workflow(
        id=SAMPLE_WORKFLOW_ID,
        name="Sample Email Agent",
        description="An example workflow that processes incoming emails",
        nodes=[
            WorkflowNode(
                id="node-1",
                type="trigger",
                category="triggers",
                name="Email Received",
                icon="Mail",
                description="Triggers when a new email arrives",
                position=NodePosition(x=100, y=200),
                config={"folder": "inbox"},
            ),
            WorkflowNode(
                id="node-2",
                type="action",
                category="ai",
                name="AI Classify",
                icon="Tags",
                description="Classify the email content",
                position=NodePosition(x=420, y=200),
                config={"categories": ["urgent", "newsletter", "spam"], "inputPath": "data.body"},
            ),
            WorkflowNode(
                id="node-3",
                type="logic",
                category="logic",
                name="Condition",
                icon="GitBranch",
                description="Route based on classification",
                position=NodePosition(x=740, y=200),
                config={"condition": "classification === 'urgent'"},
            ),
        ],
        connections=[
            Connection(id="conn-1", source_id="node-1", target_id="node-2"),
            Connection(id="conn-2", source_id="node-2", target_id="node-3"),
        ],
        status="draft",
    )


async def seed_sample_workflow(store: WorkflowStore) -> bool:
    """Insert the sample workflow unless it already exists."""
    if await store.get(SAMPLE_WORKFLOW_ID) is not None:
        return False

    await store.create(build_sample_workflow())
    logger.info("Seeded sample workflow %s", SAMPLE_WORKFLOW_ID)
    return True
