"""Node template registry for the builder palette."""

from __future__ import annotations

import copy
from typing import Any

from ..core.exceptions import NodeTemplateNotFoundError
from .graph import generate_node_id
from .types import NodeCategory, NodePosition, NodeTemplate, WorkflowNode

# Node size on the canvas, used to center dropped nodes and place ports
NODE_WIDTH = 256
NODE_HEIGHT = 80


class NodeRegistryClass:
    """Registry of node templates, keyed by template name."""

    def __init__(self) -> None:
        self._templates: dict[str, NodeTemplate] = {}

    def register(self, template: NodeTemplate) -> None:
        """Register (or replace) a template."""
        self._templates[template.name] = template

    def get(self, name: str) -> NodeTemplate:
        """
        Get a template by name.

        Raises:
            NodeTemplateNotFoundError: If no template has that name
        """
        if name not in self._templates:
            raise NodeTemplateNotFoundError(name)
        return self._templates[name]

    def has(self, name: str) -> bool:
        """Check if a template is registered."""
        return name in self._templates

    def list(self, category: NodeCategory | str | None = None) -> list[NodeTemplate]:
        """List templates in registration order, optionally by category."""
        templates = list(self._templates.values())
        if category:
            templates = [t for t in templates if t.category == category]
        return templates

    def create_node(
        self,
        template: NodeTemplate | str,
        position: NodePosition | dict[str, float],
        node_id: str | None = None,
    ) -> WorkflowNode:
        """Instantiate a node from a template with a copy of its default config."""
        if isinstance(template, str):
            template = self.get(template)
        if isinstance(position, dict):
            position = NodePosition(x=position["x"], y=position["y"])

        return WorkflowNode(
            id=node_id or generate_node_id(),
            type=template.type,
            category=template.category,
            name=template.name,
            icon=template.icon,
            description=template.description,
            position=position,
            config=copy.deepcopy(template.default_config),
        )

    def clear(self) -> None:
        self._templates.clear()


BUILTIN_TEMPLATES: list[dict[str, Any]] = [
    {
        "type": "trigger",
        "category": "triggers",
        "name": "Webhook",
        "icon": "Webhook",
        "description": "Trigger on incoming webhook request",
        "default_config": {"url": "", "method": "POST"},
    },
    {
        "type": "trigger",
        "category": "triggers",
        "name": "Schedule",
        "icon": "Clock",
        "description": "Run on a recurring schedule",
        "default_config": {"cron": "0 9 * * *", "timezone": "UTC"},
    },
    {
        "type": "trigger",
        "category": "triggers",
        "name": "Manual",
        "icon": "Play",
        "description": "Manually trigger the workflow",
        "default_config": {},
    },
    {
        "type": "action",
        "category": "integrations",
        "name": "HTTP Request",
        "icon": "Globe",
        "description": "Make an HTTP API call",
        "default_config": {"url": "", "method": "GET", "headers": "{}", "body": ""},
    },
    {
        "type": "action",
        "category": "integrations",
        "name": "Slack",
        "icon": "MessageSquare",
        "description": "Send message to Slack",
        "default_config": {"channel": "", "message": ""},
    },
    {
        "type": "action",
        "category": "integrations",
        "name": "Email",
        "icon": "Mail",
        "description": "Send an email",
        "default_config": {"to": "", "subject": "", "body": ""},
    },
    {
        "type": "action",
        "category": "data",
        "name": "Transform",
        "icon": "Shuffle",
        "description": "Transform data with JavaScript",
        "default_config": {"code": "return data;"},
    },
    {
        "type": "action",
        "category": "data",
        "name": "Filter",
        "icon": "Filter",
        "description": "Filter data based on conditions",
        "default_config": {"condition": ""},
    },
    {
        "type": "logic",
        "category": "logic",
        "name": "Condition",
        "icon": "GitBranch",
        "description": "Branch based on conditions",
        "default_config": {"condition": "", "trueLabel": "Yes", "falseLabel": "No"},
    },
    {
        "type": "logic",
        "category": "logic",
        "name": "Loop",
        "icon": "Repeat",
        "description": "Loop through array items",
        "default_config": {"arrayPath": "data.items"},
    },
    {
        "type": "logic",
        "category": "logic",
        "name": "Delay",
        "icon": "Timer",
        "description": "Wait for specified duration",
        "default_config": {"seconds": 5},
    },
    {
        "type": "action",
        "category": "ai",
        "name": "AI Prompt",
        "icon": "Sparkles",
        "description": "Generate text with AI",
        "default_config": {"prompt": "", "model": "gpt-4"},
    },
    {
        "type": "action",
        "category": "ai",
        "name": "AI Classify",
        "icon": "Tags",
        "description": "Classify content with AI",
        "default_config": {"categories": [], "inputPath": "data.text"},
    },
    {
        "type": "end",
        "category": "output",
        "name": "Response",
        "icon": "Send",
        "description": "Return response to caller",
        "default_config": {"statusCode": 200, "body": "{}"},
    },
    {
        "type": "end",
        "category": "output",
        "name": "Save to DB",
        "icon": "Database",
        "description": "Store data in database",
        "default_config": {"table": "", "data": "{}"},
    },
]


# Global registry instance
node_registry = NodeRegistryClass()


def register_builtin_templates() -> None:
    """Register the built-in palette. Safe to call more than once."""
    for entry in BUILTIN_TEMPLATES:
        node_registry.register(NodeTemplate(**copy.deepcopy(entry)))


register_builtin_templates()
