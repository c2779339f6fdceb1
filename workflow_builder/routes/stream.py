"""Server-Sent Events (SSE) routes for live test run progress."""

from __future__ import annotations

from typing import Annotated, AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException
from sse_starlette.sse import EventSourceResponse, ServerSentEvent

from ..core.exceptions import TestRunNotFoundError
from ..core.dependencies import get_test_run_service
from ..services.test_run_service import TestRunService
from ..schemas.test_run import event_to_schema, run_to_response

router = APIRouter(tags=["Streaming"])

TestRunServiceDep = Annotated[TestRunService, Depends(get_test_run_service)]


@router.get("/tests/{run_id}/stream")
async def stream_test_run(run_id: str, service: TestRunServiceDep) -> EventSourceResponse:
    """
    Stream progress events for a test run.

    Emits one "progress" event per state change while the run advances, then a
    final "snapshot" event carrying the full run. A run that already finished
    only gets the snapshot.
    """
    try:
        await service.get_test_run(run_id)
    except TestRunNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    async def event_generator() -> AsyncGenerator[ServerSentEvent, None]:
        async for event in service.subscribe(run_id):
            yield ServerSentEvent(
                data=event_to_schema(event).model_dump_json(by_alias=True, exclude_none=True),
                event="progress",
            )

        run = await service.get_test_run(run_id)
        yield ServerSentEvent(
            data=run_to_response(run).model_dump_json(by_alias=True, exclude_none=True),
            event="snapshot",
        )

    return EventSourceResponse(event_generator())
