"""
Workflow graph mutation helpers.

Every helper returns a new Workflow and leaves the input untouched, so callers
holding the previous version (undo, optimistic UI state) keep a consistent
snapshot. No topological constraints are enforced: graphs may be disconnected
or cyclic, since test runs follow node order and never traverse edges.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import replace
from typing import Any

from ..core.exceptions import (
    ConnectionNotFoundError,
    NodeNotFoundError,
    ValidationError,
)
from .types import Connection, NodePosition, Workflow, WorkflowNode


def generate_node_id() -> str:
    """Generate a node id unique within a workflow."""
    return f"node-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


def generate_connection_id() -> str:
    """Generate a connection id unique within a workflow."""
    return f"conn-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


def add_node(workflow: Workflow, node: WorkflowNode) -> Workflow:
    """Append a node; it becomes the last step of a test run."""
    if workflow.get_node(node.id) is not None:
        raise ValidationError(f"Duplicate node id: {node.id}", field="nodes")
    return replace(workflow, nodes=[*workflow.nodes, node])


def update_node(workflow: Workflow, node_id: str, **changes: Any) -> Workflow:
    """Apply field changes to one node. The node id cannot change."""
    if workflow.get_node(node_id) is None:
        raise NodeNotFoundError(node_id)
    if "id" in changes and changes["id"] != node_id:
        raise ValidationError("Node id cannot be changed", field="id")

    position = changes.get("position")
    if isinstance(position, dict):
        changes["position"] = NodePosition(x=position["x"], y=position["y"])

    return replace(
        workflow,
        nodes=[replace(n, **changes) if n.id == node_id else n for n in workflow.nodes],
    )


def move_node(workflow: Workflow, node_id: str, x: float, y: float) -> Workflow:
    """Set a node's canvas position."""
    return update_node(workflow, node_id, position=NodePosition(x=x, y=y))


def delete_node(workflow: Workflow, node_id: str) -> Workflow:
    """Remove a node together with every connection touching it."""
    if workflow.get_node(node_id) is None:
        raise NodeNotFoundError(node_id)

    return replace(
        workflow,
        nodes=[n for n in workflow.nodes if n.id != node_id],
        connections=[
            c
            for c in workflow.connections
            if c.source_id != node_id and c.target_id != node_id
        ],
    )


def add_connection(
    workflow: Workflow,
    source_id: str,
    target_id: str,
    connection_id: str | None = None,
) -> tuple[Workflow, Connection]:
    """
    Connect source's output port to target's input port.

    Self-loops are rejected. Duplicate and reverse edges are allowed.

    Returns:
        The updated workflow and the new connection
    """
    if source_id == target_id:
        raise ValidationError("A node cannot be connected to itself", field="targetId")
    if workflow.get_node(source_id) is None:
        raise ValidationError(
            f"Connection references unknown source node: {source_id}",
            field="sourceId",
        )
    if workflow.get_node(target_id) is None:
        raise ValidationError(
            f"Connection references unknown target node: {target_id}",
            field="targetId",
        )

    connection = Connection(
        id=connection_id or generate_connection_id(),
        source_id=source_id,
        target_id=target_id,
    )
    return replace(workflow, connections=[*workflow.connections, connection]), connection


def delete_connection(workflow: Workflow, connection_id: str) -> Workflow:
    """Remove a single connection."""
    if not any(c.id == connection_id for c in workflow.connections):
        raise ConnectionNotFoundError(connection_id)
    return replace(
        workflow,
        connections=[c for c in workflow.connections if c.id != connection_id],
    )


def find_connection(workflow: Workflow, source_id: str, target_id: str) -> Connection | None:
    """Find an existing edge with the same direction."""
    for conn in workflow.connections:
        if conn.source_id == source_id and conn.target_id == target_id:
            return conn
    return None


def find_dangling_connections(workflow: Workflow) -> list[Connection]:
    """Connections whose source or target is not a node of the workflow."""
    node_ids = set(workflow.node_ids())
    return [
        c
        for c in workflow.connections
        if c.source_id not in node_ids or c.target_id not in node_ids
    ]


def validate_graph(workflow: Workflow) -> None:
    """
    Check structural integrity before a workflow is persisted.

    Raises:
        ValidationError: On duplicate node ids, self-loops or dangling connections
    """
    node_ids = workflow.node_ids()
    if len(node_ids) != len(set(node_ids)):
        raise ValidationError("Node ids must be unique", field="nodes")

    for conn in workflow.connections:
        if conn.source_id == conn.target_id:
            raise ValidationError(
                f"Connection {conn.id} connects node {conn.source_id} to itself",
                field="connections",
            )

    dangling = find_dangling_connections(workflow)
    if dangling:
        raise ValidationError(
            f"Connection {dangling[0].id} references a node that does not exist",
            field="connections",
        )
