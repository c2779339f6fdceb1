"""
Builder session - the editor's local draft and the actions that change it.

All edits apply to the local draft immediately. Nothing reaches the server
until save(); a failed save leaves the draft as it was and only adds a
notification.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, replace
from typing import Any, Literal

import httpx

from ..core.exceptions import WorkflowBuilderError
from ..engine import graph
from ..engine.canvas import CanvasState, Point, curve_path, output_port
from ..engine.executor import NodeExecutor
from ..engine.node_registry import NodeRegistryClass, node_registry
from ..engine.test_runner import TestRunner
from ..engine.types import (
    TEMP_ID_PREFIX,
    NodePosition,
    NodeTemplate,
    TestRun,
    TestRunEventCallback,
    Workflow,
    WorkflowNode,
)
from ..storage.test_run_store import InMemoryTestRunStore
from .api_client import WorkflowBuilderClient

logger = logging.getLogger(__name__)

DRAFT_NAME = "New Agent Workflow"
DRAFT_DESCRIPTION = "Configure your AI agent workflow"


@dataclass
class Notification:
    """Non-blocking message for the user (a toast)."""

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


def new_draft() -> Workflow:
    """Fresh unsaved workflow with a temporary id."""
    return Workflow(
        id=f"{TEMP_ID_PREFIX}{int(time.time() * 1000)}",
        name=DRAFT_NAME,
        description=DRAFT_DESCRIPTION,
    )


class BuilderSession:
    """Editing state for one open workflow."""

    def __init__(
        self,
        client: WorkflowBuilderClient,
        executor: NodeExecutor | None = None,
        registry: NodeRegistryClass | None = None,
    ) -> None:
        self._client = client
        self._registry = registry or node_registry
        self._run_store = InMemoryTestRunStore()
        self._runner = TestRunner(executor=executor, store=self._run_store)

        self.workflow: Workflow | None = None
        self.selected_node_id: str | None = None
        self.connecting_from_id: str | None = None
        self.canvas = CanvasState()
        self.pointer = Point(0.0, 0.0)
        self.test_run: TestRun | None = None
        self.test_panel_open = False
        self.notifications: list[Notification] = []

    @property
    def is_connecting(self) -> bool:
        return self.connecting_from_id is not None

    @property
    def selected_node(self) -> WorkflowNode | None:
        if self.workflow is None or self.selected_node_id is None:
            return None
        return self.workflow.get_node(self.selected_node_id)

    async def load(self) -> Workflow:
        """Open the first stored workflow, or start a draft when there is none."""
        try:
            workflows = await self._client.list_workflows()
        except (WorkflowBuilderError, httpx.HTTPError) as e:
            logger.warning("Could not load workflows: %s", e)
            self.notify("Failed to load workflows", str(e), "destructive")
            workflows = []

        self.workflow = workflows[0] if workflows else new_draft()
        return self.workflow

    def notify(
        self,
        title: str,
        description: str,
        variant: Literal["default", "destructive"] = "default",
    ) -> None:
        self.notifications.append(Notification(title, description, variant))

    # --- Node editing ---

    def add_node_from_template(
        self,
        template: NodeTemplate | str,
        position: NodePosition | dict[str, float],
    ) -> WorkflowNode:
        """Append a node built from a palette template and select it."""
        workflow = self._require_workflow()
        node = self._registry.create_node(template, position)
        self.workflow = graph.add_node(workflow, node)
        self.selected_node_id = node.id
        return node

    def drop_template_at(
        self,
        template: NodeTemplate | str,
        client: Point,
        origin: Point | None = None,
    ) -> WorkflowNode:
        """Add a node where a palette item was dropped on the canvas."""
        return self.add_node_from_template(template, self.canvas.drop_position(client, origin))

    def update_node(self, node_id: str, **changes: Any) -> None:
        self.workflow = graph.update_node(self._require_workflow(), node_id, **changes)

    def delete_node(self, node_id: str) -> None:
        """Remove a node and its connections."""
        self.workflow = graph.delete_node(self._require_workflow(), node_id)
        self.selected_node_id = None

    def select_node(self, node_id: str | None) -> None:
        self.selected_node_id = node_id

    def begin_node_drag(self, node_id: str, client: Point, origin: Point | None = None) -> None:
        node = self._require_workflow().get_node(node_id)
        if node is not None:
            self.canvas.begin_drag(node_id, node.position, client, origin)

    def drag_node(self, client: Point, origin: Point | None = None) -> None:
        """Move the dragged node to follow the pointer."""
        position = self.canvas.drag_to(client, origin)
        node_id = self.canvas.dragged_node_id
        if position is not None and node_id is not None:
            self.workflow = graph.move_node(self._require_workflow(), node_id, position.x, position.y)

    def pointer_move(self, client: Point, origin: Point | None = None) -> None:
        """Pan, drag the grabbed node, and track the pointer while connecting."""
        if self.canvas.pan_start is not None:
            self.canvas.pan_to(client)
        elif self.canvas.dragged_node_id is not None:
            self.drag_node(client, origin)

        if self.is_connecting:
            self.pointer = self.canvas.screen_to_canvas(client, origin)

    def click_background(self) -> None:
        """A click on empty canvas clears the selection and any pending connection."""
        self.selected_node_id = None
        self.connecting_from_id = None

    # --- Connections ---

    def start_connection(self, node_id: str) -> None:
        self.connecting_from_id = node_id

    def complete_connection(self, target_id: str) -> None:
        """Connect the pending source to target. Self-targets just end connecting."""
        source_id = self.connecting_from_id
        self.connecting_from_id = None

        workflow = self.workflow
        if workflow is None or source_id is None or source_id == target_id:
            return
        if graph.find_connection(workflow, source_id, target_id) is not None:
            return

        self.workflow, _ = graph.add_connection(workflow, source_id, target_id)

    def cancel_connection(self) -> None:
        self.connecting_from_id = None

    def pending_connection_path(self) -> str | None:
        """Curve from the pending source's output port to the pointer."""
        if self.workflow is None or self.connecting_from_id is None:
            return None
        source = self.workflow.get_node(self.connecting_from_id)
        if source is None:
            return None
        return curve_path(output_port(source.position), self.pointer)

    def delete_connection(self, connection_id: str) -> None:
        self.workflow = graph.delete_connection(self._require_workflow(), connection_id)

    def rename(self, name: str) -> None:
        self.workflow = replace(self._require_workflow(), name=name)

    # --- Persistence ---

    async def save(self) -> bool:
        """Create or update the draft on the server. Returns True on success."""
        workflow = self._require_workflow()
        try:
            if workflow.is_temporary:
                saved = await self._client.create_workflow(workflow)
            else:
                saved = await self._client.update_workflow(workflow.id, workflow)
        except (WorkflowBuilderError, httpx.HTTPError) as e:
            logger.warning("Failed to save workflow %s: %s", workflow.id, e)
            self.notify("Failed to save workflow", str(e), "destructive")
            return False

        self.workflow = saved
        self.notify("Workflow saved", "Your changes have been saved successfully.")
        return True

    # --- Test runs ---

    async def run_test(
        self,
        on_event: TestRunEventCallback | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> TestRun | None:
        """
        Run the current draft locally, saved or not.

        Returns None (with a notification) when there is nothing to run or a
        test is still running.
        """
        if self.test_run is not None and not self.test_run.is_terminal:
            self.notify("Test already running", "Wait for the current test to finish.", "destructive")
            return None

        workflow = self.workflow
        if workflow is None or not workflow.nodes:
            self.notify("Cannot run test", "Add some nodes to your workflow first.", "destructive")
            return None

        self.test_panel_open = True
        run = await self._run_store.create(self._runner.start_run(workflow))
        self.test_run = run

        await self._runner.advance(run, workflow, on_event, cancel_event)

        if run.status == "completed":
            self.notify("Test completed", "Workflow executed successfully.")
        elif run.status == "failed":
            failed = next(r for r in run.results if r.status == "error")
            node = workflow.get_node(failed.node_id)
            name = node.name if node else failed.node_id
            self.notify("Test failed", f'Node "{name}" encountered an error.', "destructive")
        return run

    def _require_workflow(self) -> Workflow:
        if self.workflow is None:
            raise WorkflowBuilderError("No workflow loaded")
        return self.workflow
