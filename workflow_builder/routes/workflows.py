"""Workflow routes."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response

from ..core.exceptions import (
    InternalError,
    ValidationError,
    WorkflowNotFoundError,
)
from ..core.dependencies import get_workflow_service
from ..services.workflow_service import WorkflowService
from ..schemas.workflow import (
    WorkflowCreateRequest,
    WorkflowUpdateRequest,
    WorkflowResponse,
    workflow_to_response,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workflows", tags=["Workflows"])


# Type alias for dependency injection
WorkflowServiceDep = Annotated[WorkflowService, Depends(get_workflow_service)]


@router.get("", response_model=list[WorkflowResponse])
async def list_workflows(service: WorkflowServiceDep) -> list[WorkflowResponse]:
    """List all workflows."""
    try:
        workflows = await service.list_workflows()
    except Exception:
        logger.exception("Failed to fetch workflows")
        raise InternalError("Failed to fetch workflows")
    return [workflow_to_response(w) for w in workflows]


@router.get("/{workflow_id}", response_model=WorkflowResponse)
async def get_workflow(
    workflow_id: str,
    service: WorkflowServiceDep,
) -> WorkflowResponse:
    """Get a single workflow by ID."""
    try:
        workflow = await service.get_workflow(workflow_id)
    except WorkflowNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception:
        logger.exception("Failed to fetch workflow %s", workflow_id)
        raise InternalError("Failed to fetch workflow")
    return workflow_to_response(workflow)


@router.post("", response_model=WorkflowResponse, status_code=201)
async def create_workflow(
    workflow: WorkflowCreateRequest,
    service: WorkflowServiceDep,
) -> WorkflowResponse:
    """Create a new workflow."""
    try:
        created = await service.create_workflow(workflow)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception:
        logger.exception("Failed to create workflow")
        raise InternalError("Failed to create workflow")
    return workflow_to_response(created)


@router.patch("/{workflow_id}", response_model=WorkflowResponse)
async def update_workflow(
    workflow_id: str,
    workflow: WorkflowUpdateRequest,
    service: WorkflowServiceDep,
) -> WorkflowResponse:
    """Partially update an existing workflow."""
    try:
        updated = await service.update_workflow(workflow_id, workflow)
    except WorkflowNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception:
        logger.exception("Failed to update workflow %s", workflow_id)
        raise InternalError("Failed to update workflow")
    return workflow_to_response(updated)


@router.delete("/{workflow_id}", status_code=204)
async def delete_workflow(
    workflow_id: str,
    service: WorkflowServiceDep,
) -> Response:
    """Delete a workflow."""
    try:
        await service.delete_workflow(workflow_id)
    except WorkflowNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception:
        logger.exception("Failed to delete workflow %s", workflow_id)
        raise InternalError("Failed to delete workflow")
    return Response(status_code=204)
