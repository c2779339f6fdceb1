"""Core module for the workflow builder - config, exceptions, and dependencies."""

from .config import settings, Settings, get_settings
from .exceptions import (
    WorkflowBuilderError,
    ValidationError,
    NotFoundError,
    WorkflowNotFoundError,
    TestRunNotFoundError,
    NodeNotFoundError,
    NodeTemplateNotFoundError,
    ConnectionNotFoundError,
    ConflictError,
    TestRunInProgressError,
    InternalError,
)

__all__ = [
    # Config
    "settings",
    "Settings",
    "get_settings",
    # Exceptions
    "WorkflowBuilderError",
    "ValidationError",
    "NotFoundError",
    "WorkflowNotFoundError",
    "TestRunNotFoundError",
    "NodeNotFoundError",
    "NodeTemplateNotFoundError",
    "ConnectionNotFoundError",
    "ConflictError",
    "TestRunInProgressError",
    "InternalError",
]
