"""Builder client - HTTP API client and the editor's local session."""

from .api_client import ApiError, WorkflowBuilderClient
from .session import BuilderSession, Notification, new_draft

__all__ = [
    "ApiError",
    "WorkflowBuilderClient",
    "BuilderSession",
    "Notification",
    "new_draft",
]
