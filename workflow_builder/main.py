"""Main entry point for the workflow builder server."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import Settings, settings as default_settings
from .core.exceptions import InternalError, WorkflowBuilderError
from .db.seed import seed_sample_workflow
from .engine.executor import NodeExecutor, SimulatedNodeExecutor
from .routes import api_router
from .schemas.common import RootResponse, HealthResponse
from .services.test_run_service import TestRunService
from .storage import InMemoryTestRunStore, InMemoryWorkflowStore

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def format_validation_errors(exc: RequestValidationError) -> str:
    """Turn pydantic errors into one human-readable line."""
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        msg = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "Validation error: " + "; ".join(parts)


async def _build_stores(app: FastAPI, config: Settings) -> None:
    """Create the configured storage backend on app.state."""
    if config.storage_backend == "sqlite":
        from .db.session import create_engine, create_session_factory, init_db
        from .repositories import TestRunRepository, WorkflowRepository

        engine = create_engine(config.database_url, echo=config.debug)
        await init_db(engine)
        session_factory = create_session_factory(engine)
        app.state.db_engine = engine
        app.state.workflow_store = WorkflowRepository(session_factory)
        app.state.test_run_store = TestRunRepository(
            session_factory, max_records=config.max_test_runs
        )
        logger.info("Database initialized")
    else:
        app.state.workflow_store = InMemoryWorkflowStore()
        app.state.test_run_store = InMemoryTestRunStore(max_records=config.max_test_runs)


def create_app(
    config: Settings | None = None,
    executor: NodeExecutor | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to use instead of the environment-derived defaults
        executor: Node executor for test runs; defaults to the random simulation
    """
    config = config or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler."""
        await _build_stores(app, config)
        if config.seed_sample_workflow:
            await seed_sample_workflow(app.state.workflow_store)

        app.state.test_run_service = TestRunService(
            app.state.workflow_store,
            app.state.test_run_store,
            executor=executor or SimulatedNodeExecutor.from_settings(config),
        )

        logger.info("%s v%s started (%s storage)", config.app_name, config.app_version, config.storage_backend)
        logger.info("API documentation available at /docs")

        yield

        await app.state.test_run_service.shutdown()
        engine = getattr(app.state, "db_engine", None)
        if engine is not None:
            await engine.dispose()
        logger.info("%s stopped", config.app_name)

    app = FastAPI(
        title=config.app_name,
        description="Visual workflow builder backend - workflow storage and simulated test runs",
        version=config.app_version,
        lifespan=lifespan,
        debug=config.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=config.cors_allow_credentials,
        allow_methods=config.cors_allow_methods,
        allow_headers=config.cors_allow_headers,
    )

    # Error bodies are always {"error": "<message>"}
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": format_validation_errors(exc)})

    @app.exception_handler(WorkflowBuilderError)
    async def builder_exception_handler(request: Request, exc: WorkflowBuilderError) -> JSONResponse:
        if exc.status_code >= 500 and not isinstance(exc, InternalError):
            logger.error("Unhandled builder error on %s: %s", request.url.path, exc.message)
            exc = InternalError()
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path)
        error = InternalError()
        return JSONResponse(status_code=error.status_code, content={"error": error.message})

    # Include routers
    app.include_router(api_router)

    # Root endpoints
    @app.get("/", response_model=RootResponse)
    async def root() -> RootResponse:
        """Root endpoint."""
        return RootResponse(
            name=config.app_name,
            version=config.app_version,
            status="running",
        )

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            version=config.app_version,
            storage_backend=config.storage_backend,
        )

    return app


# Create app instance
app = create_app()


def main() -> None:
    """Run the server."""
    configure_logging(default_settings.log_level)
    uvicorn.run(
        "workflow_builder.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.reload,
        log_level=default_settings.log_level,
    )


if __name__ == "__main__":
    main()
