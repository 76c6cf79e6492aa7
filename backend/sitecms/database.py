"""
SiteCMS Backend: Database Session Management
=============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine over the embedded SQLite file (aiosqlite driver)
       and provides a session dependency that commits on success and rolls
       back on error.
Who:   Used by route handlers via FastAPI's dependency injection system, and
       by the startup sequence (schema setup and seeding).
When:  Engine is created at module import; sessions are created per-request.

Concurrency Model:
    One backend process talks to one data file. Each statement is atomic on
    its own; multi-statement sequences are only atomic where a caller opens
    an explicit transaction (see services/seed_service.py).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from sitecms.config import settings
from sitecms.exceptions import StorageError

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    Separate from the module-level engine so tests and tooling can point a
    fresh engine at a throwaway data file.
    """
    return create_async_engine(
        database_url,
        # Echo SQL queries in DEBUG mode for development visibility
        echo=settings.log_level == "DEBUG",
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: ORM objects stay readable after commit,
    # which route handlers rely on when serializing created records
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


# ── Engine & Session Factory ──────────────────────────────────────────────
engine = build_engine(settings.database_url)
async_session_factory = build_session_factory(engine)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models register their tables on `Base.metadata`, which the schema
    manager uses to create missing tables at startup.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
@asynccontextmanager
async def session_scope(
    factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> AsyncIterator[AsyncSession]:
    """
    One unit of work: commit on success, roll back on error, always close.

    A failed commit is rolled back and raised as StorageError, so the
    caller answers with a 500 instead of reporting the write as done.
    """
    async with (factory or async_session_factory)() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise  # Re-raise so the global error handler can respond

        try:
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error("Commit failed: %s", str(e))
            raise StorageError(
                message="Failed to save changes",
                context={"error_type": type(e).__name__},
            ) from e


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (through a repository)
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session

    Must be declared with `scope="function"` so the commit happens before
    the response is sent:
        def get_user_repository(
            db: AsyncSession = Depends(get_db_session, scope="function"),
        ):
            return UserRepository(db)
    """
    async with session_scope() as session:
        yield session


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """
    What:  Closes all pooled connections to the data file.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
