"""Node template service."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine.node_registry import NodeRegistryClass
    from ..engine.types import NodeTemplate


class NodeService:
    """Service for the node template palette."""

    def __init__(self, node_registry: NodeRegistryClass) -> None:
        self._node_registry = node_registry

    def list_templates(self, category: str | None = None) -> list[NodeTemplate]:
        """List templates, optionally filtered by category."""
        return self._node_registry.list(category)

    def get_template(self, name: str) -> NodeTemplate:
        """Get a template by name. Raises NodeTemplateNotFoundError."""
        return self._node_registry.get(name)
