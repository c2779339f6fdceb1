"""Pydantic schemas for API request/response validation."""

from .workflow import (
    NodePositionSchema,
    WorkflowNodeSchema,
    ConnectionSchema,
    WorkflowCreateRequest,
    WorkflowUpdateRequest,
    WorkflowResponse,
    NodeTemplateResponse,
)
from .test_run import (
    TestResultSchema,
    TestRunResponse,
    TestRunEventSchema,
)
from .common import (
    ErrorResponse,
    HealthResponse,
    RootResponse,
)

__all__ = [
    # Workflow schemas
    "NodePositionSchema",
    "WorkflowNodeSchema",
    "ConnectionSchema",
    "WorkflowCreateRequest",
    "WorkflowUpdateRequest",
    "WorkflowResponse",
    "NodeTemplateResponse",
    # Test run schemas
    "TestResultSchema",
    "TestRunResponse",
    "TestRunEventSchema",
    # Common schemas
    "ErrorResponse",
    "HealthResponse",
    "RootResponse",
]
