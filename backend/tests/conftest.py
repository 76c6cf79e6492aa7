"""
SiteCMS Backend: Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own SQLite data file and upload directory under
       pytest's tmp_path; the app's session and file-service dependencies
       are overridden to point at them.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        Async engine on a fresh data file
    ├── session_factory:  Session factory bound to db_engine
    ├── prepared_db:      Schema created and default rows seeded
    ├── upload_dir:       Empty temporary upload directory
    ├── file_service:     FileService writing into upload_dir
    └── test_client:      HTTPX AsyncClient talking to create_app()
"""

import os
import tempfile
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any sitecms imports
_scratch = tempfile.mkdtemp(prefix="sitecms_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_scratch}/database.db"
os.environ["UPLOAD_DIR"] = os.path.join(_scratch, "uploads")
os.environ["APP_ENV"] = "development"
os.environ["LOG_LEVEL"] = "WARNING"

from sitecms.database import (  # noqa: E402
    build_engine,
    build_session_factory,
    get_db_session,
    session_scope,
)
from sitecms.services.file_service import FileService, get_file_service  # noqa: E402
from sitecms.services.schema_service import ensure_schema  # noqa: E402
from sitecms.services.seed_service import seed_defaults  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Async engine on an empty data file, disposed after the test."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'database.db'}")
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return build_session_factory(db_engine)


@pytest_asyncio.fixture
async def prepared_db(db_engine, session_factory):
    """
    A data file in the state the app leaves it after startup:
    tables present, admin account plus default services and team seeded.
    """
    await ensure_schema(db_engine)
    await seed_defaults(session_factory)
    return session_factory


# ══════════════════════════════════════════════════════════════════════════
# Upload Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def file_service(upload_dir):
    return FileService(upload_dir=str(upload_dir), io_timeout=5)


@pytest.fixture
def sample_image_bytes():
    """Minimal PNG header followed by arbitrary payload bytes."""
    return b"\x89PNG\r\n\x1a\n" + bytes(range(256)) * 4


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(prepared_db, file_service) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient routed straight into a fresh app instance.

    The transport does not run lifespan events; prepared_db has already
    done what startup would do.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from sitecms.main import create_app

    app = create_app()

    async def override_session():
        async with session_scope(prepared_db) as session:
            yield session

    app.dependency_overrides[get_db_session] = override_session
    app.dependency_overrides[get_file_service] = lambda: file_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
