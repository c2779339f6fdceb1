"""Workflow-related Pydantic schemas."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..engine.types import (
    Connection,
    NodePosition,
    NodeTemplate,
    Workflow,
    WorkflowNode,
)

ConfigValueSchema = Union[str, int, float, bool, list[str]]


class NodePositionSchema(BaseModel):
    """Canvas position {x, y}."""

    x: float
    y: float


class WorkflowNodeSchema(BaseModel):
    """Schema for a node in a workflow."""

    id: str = Field(..., min_length=1, description="Node ID, unique within the workflow")
    type: Literal["trigger", "action", "logic", "end"]
    category: Literal["triggers", "integrations", "data", "logic", "ai", "output"]
    name: str
    icon: str
    description: str
    position: NodePositionSchema
    config: dict[str, ConfigValueSchema] = Field(default_factory=dict)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "node-1",
                "type": "trigger",
                "category": "triggers",
                "name": "Email Received",
                "icon": "Mail",
                "description": "Triggers when a new email arrives",
                "position": {"x": 100, "y": 200},
                "config": {"folder": "inbox"},
            }
        }
    )


class ConnectionSchema(BaseModel):
    """Schema for a connection between two nodes."""

    id: str = Field(..., min_length=1)
    source_id: str = Field(..., alias="sourceId", description="Source node ID")
    target_id: str = Field(..., alias="targetId", description="Target node ID")
    source_port: Literal["output"] = Field("output", alias="sourcePort")
    target_port: Literal["input"] = Field("input", alias="targetPort")

    model_config = ConfigDict(populate_by_name=True)


class WorkflowCreateRequest(BaseModel):
    """Request schema for creating a workflow."""

    name: str = Field(..., description="Workflow name")
    description: str = Field("", description="Workflow description")
    nodes: list[WorkflowNodeSchema] = Field(default_factory=list, description="List of nodes")
    connections: list[ConnectionSchema] = Field(
        default_factory=list, description="List of connections"
    )
    status: Literal["draft", "active", "paused"] = "draft"

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Workflow name is required")
        return v


class WorkflowUpdateRequest(BaseModel):
    """Request schema for partially updating a workflow."""

    name: str | None = Field(None, description="Workflow name")
    description: str | None = Field(None, description="Workflow description")
    nodes: list[WorkflowNodeSchema] | None = Field(None, description="List of nodes")
    connections: list[ConnectionSchema] | None = Field(None, description="List of connections")
    status: Literal["draft", "active", "paused"] | None = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str | None) -> str | None:
        if v is not None and not v:
            raise ValueError("Workflow name is required")
        return v


class WorkflowResponse(BaseModel):
    """Full workflow as returned by the API."""

    id: str
    name: str
    description: str
    nodes: list[WorkflowNodeSchema]
    connections: list[ConnectionSchema]
    status: Literal["draft", "active", "paused"]

    model_config = ConfigDict(populate_by_name=True)


class NodeTemplateResponse(BaseModel):
    """Palette entry for the node library."""

    type: str
    category: str
    name: str
    icon: str
    description: str
    default_config: dict[str, ConfigValueSchema] = Field(..., alias="defaultConfig")

    model_config = ConfigDict(populate_by_name=True)


# --- Conversions between API schemas and engine types ---


def node_from_schema(node: WorkflowNodeSchema) -> WorkflowNode:
    return WorkflowNode(
        id=node.id,
        type=node.type,
        category=node.category,
        name=node.name,
        icon=node.icon,
        description=node.description,
        position=NodePosition(x=node.position.x, y=node.position.y),
        config=dict(node.config),
    )


def connection_from_schema(conn: ConnectionSchema) -> Connection:
    return Connection(
        id=conn.id,
        source_id=conn.source_id,
        target_id=conn.target_id,
        source_port=conn.source_port,
        target_port=conn.target_port,
    )


def node_to_schema(node: WorkflowNode) -> WorkflowNodeSchema:
    return WorkflowNodeSchema(
        id=node.id,
        type=node.type,
        category=node.category,
        name=node.name,
        icon=node.icon,
        description=node.description,
        position=NodePositionSchema(x=node.position.x, y=node.position.y),
        config=dict(node.config),
    )


def connection_to_schema(conn: Connection) -> ConnectionSchema:
    return ConnectionSchema(
        id=conn.id,
        source_id=conn.source_id,
        target_id=conn.target_id,
        source_port=conn.source_port,
        target_port=conn.target_port,
    )


def workflow_to_response(workflow: Workflow) -> WorkflowResponse:
    """Convert internal Workflow to its API representation."""
    return WorkflowResponse(
        id=workflow.id,
        name=workflow.name,
        description=workflow.description,
        nodes=[node_to_schema(n) for n in workflow.nodes],
        connections=[connection_to_schema(c) for c in workflow.connections],
        status=workflow.status,
    )


def workflow_from_response(data: WorkflowResponse) -> Workflow:
    """Convert an API workflow back to the internal type."""
    return Workflow(
        id=data.id,
        name=data.name,
        description=data.description,
        nodes=[node_from_schema(n) for n in data.nodes],
        connections=[connection_from_schema(c) for c in data.connections],
        status=data.status,
    )


def template_to_response(template: NodeTemplate) -> NodeTemplateResponse:
    return NodeTemplateResponse(
        type=template.type,
        category=template.category,
        name=template.name,
        icon=template.icon,
        description=template.description,
        default_config=dict(template.default_config),
    )
