"""Node template routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.exceptions import NodeTemplateNotFoundError
from ..core.dependencies import get_node_service
from ..services.node_service import NodeService
from ..schemas.workflow import NodeTemplateResponse, template_to_response

router = APIRouter(prefix="/node-templates", tags=["Nodes"])


# Type alias for dependency injection
NodeServiceDep = Annotated[NodeService, Depends(get_node_service)]


@router.get("", response_model=list[NodeTemplateResponse])
async def list_node_templates(
    service: NodeServiceDep,
    category: str | None = Query(None, description="Filter by node category"),
) -> list[NodeTemplateResponse]:
    """List the node palette."""
    return [template_to_response(t) for t in service.list_templates(category)]


@router.get("/{name}", response_model=NodeTemplateResponse)
async def get_node_template(
    name: str,
    service: NodeServiceDep,
) -> NodeTemplateResponse:
    """Get a single template by name."""
    try:
        return template_to_response(service.get_template(name))
    except NodeTemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
