"""FastAPI routes for the workflow builder."""

from fastapi import APIRouter

from .workflows import router as workflows_router
from .test_runs import router as test_runs_router
from .stream import router as stream_router
from .nodes import router as nodes_router

api_router = APIRouter(prefix="/api")
api_router.include_router(workflows_router)
api_router.include_router(test_runs_router)
api_router.include_router(stream_router)
api_router.include_router(nodes_router)

__all__ = [
    "api_router",
]
