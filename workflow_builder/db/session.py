"""Database session management."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./workflows.db"


def create_engine(database_url: str | None = None, echo: bool = False) -> AsyncEngine:
    """Create the async engine for the configured database."""
    return create_async_engine(
        database_url or DEFAULT_DATABASE_URL,
        echo=echo,
        future=True,
    )


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    """Create a session factory bound to an engine."""
    return sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Initialize database tables."""
    # Register table metadata before create_all
    from . import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
