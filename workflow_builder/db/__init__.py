"""Database configuration, models and seed data."""

from .session import DEFAULT_DATABASE_URL, create_engine, create_session_factory, init_db
from .models import WorkflowModel, TestRunModel
from .seed import SAMPLE_WORKFLOW_ID, build_sample_workflow, seed_sample_workflow

__all__ = [
    "create_engine",
    "create_session_factory",
    "init_db",
    "DEFAULT_DATABASE_URL",
    "WorkflowModel",
    "TestRunModel",
    "SAMPLE_WORKFLOW_ID",
    "build_sample_workflow",
    "seed_sample_workflow",
]
