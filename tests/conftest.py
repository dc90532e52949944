"""Pytest configuration and fixtures for docflow.

Uses docflow.main:app for HTTP tests. `api_client` swaps the SQL-backed
services for in-memory ones (see tests/fakes.py) through FastAPI
dependency overrides, so API tests run without Postgres. `db_session`
is for repository tests against a real database and skips otherwise.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from docflow.api.v1.dependencies import (
    get_document_lifecycle_service,
    get_document_lifecycle_service_for_write,
    get_document_type_service,
    get_document_type_service_for_write,
)
from docflow.core.limiter import limiter
from docflow.infrastructure.persistence import database
from docflow.main import app
from tests.fakes import InMemoryStore, build_services

APPROVER_ROLES = {"u-manager": "manager", "u-director": "director", "u-admin": "admin"}


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
async def api_client(store: InMemoryStore) -> AsyncClient:
    """HTTP client whose registry and lifecycle services use the in-memory store."""
    registry, lifecycle, _ = build_services(store, roles=APPROVER_ROLES)
    app.dependency_overrides[get_document_type_service] = lambda: registry
    app.dependency_overrides[get_document_type_service_for_write] = lambda: registry
    app.dependency_overrides[get_document_lifecycle_service] = lambda: lifecycle
    app.dependency_overrides[get_document_lifecycle_service_for_write] = lambda: lifecycle
    limiter.enabled = False
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        limiter.enabled = True
        app.dependency_overrides.clear()


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository tests. Rolls back after test.

    Requires DATABASE_URL (postgresql+asyncpg). Skips when it is not set.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
