"""Custom exceptions for the workflow builder."""

from typing import Any


class WorkflowBuilderError(Exception):
    """Base exception for all workflow builder errors."""

    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(WorkflowBuilderError):
    """Raised when input is malformed or incomplete."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(
            message=message,
            details={"field": field} if field else {},
        )
        self.field = field


class NotFoundError(WorkflowBuilderError):
    """Raised when a requested entity does not exist."""

    status_code = 404


class WorkflowNotFoundError(NotFoundError):
    """Raised when a workflow is not found."""

    def __init__(self, workflow_id: str) -> None:
        super().__init__(
            message=f"Workflow not found: {workflow_id}",
            details={"workflow_id": workflow_id},
        )
        self.workflow_id = workflow_id


class TestRunNotFoundError(NotFoundError):
    """Raised when a test run is not found."""

    __test__ = False

    def __init__(self, run_id: str) -> None:
        super().__init__(
            message=f"Test run not found: {run_id}",
            details={"run_id": run_id},
        )
        self.run_id = run_id


class NodeNotFoundError(NotFoundError):
    """Raised when a node id is not part of a workflow."""

    def __init__(self, node_id: str) -> None:
        super().__init__(
            message=f"Node not found: {node_id}",
            details={"node_id": node_id},
        )
        self.node_id = node_id


class NodeTemplateNotFoundError(NotFoundError):
    """Raised when a node template name is unknown."""

    def __init__(self, name: str) -> None:
        super().__init__(
            message=f"Node template not found: {name}",
            details={"template": name},
        )
        self.name = name


class ConnectionNotFoundError(NotFoundError):
    """Raised when a connection id is not part of a workflow."""

    def __init__(self, connection_id: str) -> None:
        super().__init__(
            message=f"Connection not found: {connection_id}",
            details={"connection_id": connection_id},
        )
        self.connection_id = connection_id


class ConflictError(WorkflowBuilderError):
    """Raised when an operation conflicts with the current state."""

    status_code = 409


class TestRunInProgressError(ConflictError):
    """Raised when a test run is requested while another is still running."""

    __test__ = False

    def __init__(self, workflow_id: str, run_id: str) -> None:
        super().__init__(
            message=f"Test run {run_id} is already in progress for workflow {workflow_id}",
            details={"workflow_id": workflow_id, "run_id": run_id},
        )
        self.workflow_id = workflow_id
        self.run_id = run_id



class InternalError(WorkflowBuilderError):
    """Unexpected failure; the message is safe to show to clients."""

    status_code = 500

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message=message)
