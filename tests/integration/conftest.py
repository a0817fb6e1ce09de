"""Integration-test fixtures.

All integration tests share a single event-loop so that the module-level
SQLAlchemy async engine pool and Redis pool (both created at import time)
remain valid across the entire test session.

Pre-condition: PostgreSQL + Redis running, `alembic upgrade head` applied,
BALANCE_CACHE_BACKEND=redis. Run with: pytest -m integration
"""

import uuid

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client; keeps the engine pool alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def register_and_login(client: AsyncClient) -> tuple[int, dict[str, str]]:
    """Register a fresh user; return (user_id, auth headers)."""
    creds = {"email": f"it_{uuid.uuid4().hex[:10]}@example.com", "password": "secret1"}
    reg = await client.post("/api/v1/auth/register", json=creds)
    user_id = int(reg.json()["data"]["user_id"])
    login = await client.post("/api/v1/auth/login", json=creds)
    token = login.json()["data"]["access_token"]
    return user_id, {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture(loop_scope="session")
async def trio(client: AsyncClient) -> list[tuple[int, dict[str, str]]]:
    """Three freshly registered users."""
    return [await register_and_login(client) for _ in range(3)]
