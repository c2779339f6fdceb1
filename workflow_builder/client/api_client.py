"""Async HTTP client for the workflow builder REST API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.config import settings
from ..core.exceptions import WorkflowBuilderError
from ..engine.types import NodeTemplate, TestRun, Workflow
from ..schemas.test_run import TestRunResponse, run_from_response
from ..schemas.workflow import (
    NodeTemplateResponse,
    WorkflowResponse,
    workflow_from_response,
    workflow_to_response,
)

logger = logging.getLogger(__name__)


class ApiError(WorkflowBuilderError):
    """Non-2xx answer from the API."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message, details={"status_code": status_code})
        self.status_code = status_code


class WorkflowBuilderClient:
    """
    Thin wrapper over the REST surface that speaks engine types.

    Pass an existing httpx.AsyncClient (for example one built on
    httpx.ASGITransport in tests) or let the client own one.
    """

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._owned_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout,
        )

    async def __aenter__(self) -> WorkflowBuilderClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owned_client:
            await self._http.aclose()

    # --- Workflows ---

    async def list_workflows(self) -> list[Workflow]:
        data = await self._request("GET", "/api/workflows")
        return [workflow_from_response(WorkflowResponse.model_validate(w)) for w in data]

    async def get_workflow(self, workflow_id: str) -> Workflow:
        data = await self._request("GET", f"/api/workflows/{workflow_id}")
        return workflow_from_response(WorkflowResponse.model_validate(data))

    async def create_workflow(self, workflow: Workflow) -> Workflow:
        """Store a workflow; the server assigns its id."""
        data = await self._request("POST", "/api/workflows", json=_workflow_body(workflow))
        return workflow_from_response(WorkflowResponse.model_validate(data))

    async def update_workflow(self, workflow_id: str, changes: dict[str, Any] | Workflow) -> Workflow:
        """PATCH a workflow with either raw camelCase fields or a full Workflow."""
        body = _workflow_body(changes) if isinstance(changes, Workflow) else changes
        data = await self._request("PATCH", f"/api/workflows/{workflow_id}", json=body)
        return workflow_from_response(WorkflowResponse.model_validate(data))

    async def delete_workflow(self, workflow_id: str) -> None:
        await self._request("DELETE", f"/api/workflows/{workflow_id}")

    # --- Test runs ---

    async def start_test(self, workflow_id: str) -> TestRun:
        data = await self._request("POST", f"/api/workflows/{workflow_id}/test")
        return run_from_response(TestRunResponse.model_validate(data))

    async def list_tests(self, workflow_id: str) -> list[TestRun]:
        data = await self._request("GET", f"/api/workflows/{workflow_id}/tests")
        return [run_from_response(TestRunResponse.model_validate(r)) for r in data]

    async def get_test(self, run_id: str) -> TestRun:
        data = await self._request("GET", f"/api/tests/{run_id}")
        return run_from_response(TestRunResponse.model_validate(data))

    async def cancel_test(self, run_id: str) -> TestRun:
        data = await self._request("POST", f"/api/tests/{run_id}/cancel")
        return run_from_response(TestRunResponse.model_validate(data))

    # --- Node templates ---

    async def list_node_templates(self, category: str | None = None) -> list[NodeTemplate]:
        params = {"category": category} if category else None
        data = await self._request("GET", "/api/node-templates", params=params)
        return [_template_from_response(NodeTemplateResponse.model_validate(t)) for t in data]

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self._http.request(method, path, **kwargs)

        if response.status_code >= 400:
            try:
                message = response.json().get("error") or response.text
            except ValueError:
                message = response.text
            logger.debug("%s %s -> %d: %s", method, path, response.status_code, message)
            raise ApiError(message, response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()


def _workflow_body(workflow: Workflow) -> dict[str, Any]:
    return workflow_to_response(workflow).model_dump(mode="json", by_alias=True, exclude={"id"})


def _template_from_response(data: NodeTemplateResponse) -> NodeTemplate:
    return NodeTemplate(
        type=data.type,  # type: ignore[arg-type]
        category=data.category,  # type: ignore[arg-type]
        name=data.name,
        icon=data.icon,
        description=data.description,
        default_config=dict(data.default_config),
    )
