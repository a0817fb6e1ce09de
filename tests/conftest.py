"""Shared test fixtures."""

import os

# Settings are read at import time; unit tests need neither Redis nor a secret store.
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("BALANCE_CACHE_BACKEND", "memory")

from datetime import UTC, datetime  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from src.main import app  # noqa: E402
from src.sp_expense.domain.models import Expense  # noqa: E402


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def _make_expense(
    owner_id: int,
    other_ids: list[int],
    amount: float,
    expense_id: int | None = None,
    description: str = "test expense",
) -> Expense:
    return Expense(
        id=expense_id,
        owner_id=owner_id,
        other_ids=tuple(other_ids),
        amount=amount,
        description=description,
        created_at=datetime(2021, 1, 1, 15, 4, 5, tzinfo=UTC),
    )


@pytest.fixture
def meal() -> Expense:
    """User 1 pays 42 split between users 1, 2, 3."""
    return _make_expense(1, [2, 3], 42.0, expense_id=1, description="Food")


@pytest.fixture
def coffee() -> Expense:
    """User 2 pays 8 split between users 1, 2."""
    return _make_expense(2, [1], 8.0, expense_id=2, description="Coffee")
