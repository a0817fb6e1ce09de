"""HTTP-level tests with auth, DB session and cache dependencies overridden."""

from collections.abc import Iterator
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from src.main import app
from src.sp_common.database import get_db_session
from src.sp_common.errors import CacheUnavailableError
from src.sp_expense.api import router as expense_router
from src.sp_expense.domain.models import Expense
from src.sp_gateway.auth.dependencies import get_current_user
from src.sp_gateway.auth.jwt_handler import create_access_token
from src.sp_gateway.user.db_models import UserModel
from src.sp_ledger.application.dependencies import get_balance_cache
from src.sp_ledger.domain.cache import BalanceCache
from src.sp_ledger.infrastructure.cache_backends import InMemoryBalanceCacheBackend


def _make_user(user_id: int) -> UserModel:
    user = UserModel()
    user.id = user_id
    user.email = f"test{user_id}@example.com"
    user.is_active = True
    return user


@pytest.fixture
def repo(meal: Expense) -> AsyncMock:
    mock_repo = AsyncMock()
    mock_repo.list_for_user.return_value = [meal]
    mock_repo.existing_user_ids.return_value = {2, 3}
    mock_repo.append.return_value = 1
    return mock_repo


@pytest.fixture
def cache(repo: AsyncMock) -> BalanceCache:
    return BalanceCache(InMemoryBalanceCacheBackend(), repo, ttl_seconds=5)


@pytest.fixture
def db() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def overrides(
    cache: BalanceCache, db: AsyncMock, repo: AsyncMock, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    async def _db() -> AsyncMock:
        return db

    monkeypatch.setattr(expense_router._service, "_repo", repo)

    app.dependency_overrides[get_current_user] = lambda: _make_user(1)
    app.dependency_overrides[get_db_session] = _db
    app.dependency_overrides[get_balance_cache] = lambda: cache
    yield
    app.dependency_overrides.clear()


class TestBalance:
    async def test_requires_token(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/balance")
        assert resp.status_code == 401

    async def test_returns_bare_balance_shape(self, client: AsyncClient, overrides: None) -> None:
        resp = await client.get("/api/v1/balance")

        assert resp.status_code == 200
        body = resp.json()
        assert set(body) == {"balance", "debit", "credit"}
        assert body["balance"] == pytest.approx(28.0)
        assert body["debit"] == []
        assert body["credit"] == [
            {"user_id": 2, "amount": 14.0},
            {"user_id": 3, "amount": 14.0},
        ]

    async def test_cache_unavailable_returns_503(
        self, client: AsyncClient, overrides: None, repo: AsyncMock
    ) -> None:
        backend = AsyncMock()
        backend.get.side_effect = CacheUnavailableError("Connection refused")
        app.dependency_overrides[get_balance_cache] = lambda: BalanceCache(backend, repo, 5)

        resp = await client.get("/api/v1/balance")

        assert resp.status_code == 503
        assert resp.json()["code"] == 3001


class TestCreateExpense:
    async def test_created(self, client: AsyncClient, overrides: None, cache: BalanceCache) -> None:
        resp = await client.post("/api/v1/expenses", json={
            "description": "Food",
            "amount": 42,
            "created_at": "2021-01-01T15:04:05Z",
            "users": [{"id": 2}, {"id": 3}],
        })

        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["expense_id"] == 1
        assert data["balance"]["balance"] == pytest.approx(28.0)

        balance = await client.get("/api/v1/balance")
        assert balance.json()["balance"] == pytest.approx(28.0)

    async def test_self_in_users_rejected(self, client: AsyncClient, overrides: None) -> None:
        resp = await client.post("/api/v1/expenses", json={
            "description": "Food", "amount": 42, "users": [{"id": 1}],
        })
        assert resp.status_code == 422
        assert resp.json()["code"] == 2001

    async def test_negative_amount_rejected(self, client: AsyncClient, overrides: None) -> None:
        resp = await client.post("/api/v1/expenses", json={
            "description": "Food", "amount": -5, "users": [{"id": 2}],
        })
        assert resp.status_code == 422

    @pytest.mark.parametrize("amount", ["Infinity", "-Infinity", "NaN"])
    async def test_non_finite_amount_rejected(
        self, client: AsyncClient, overrides: None, repo: AsyncMock, amount: str
    ) -> None:
        # Bare JSON literals, as json.loads accepts them
        raw = '{"description": "Food", "amount": %s, "users": [{"id": 2}]}' % amount
        resp = await client.post(
            "/api/v1/expenses", content=raw, headers={"Content-Type": "application/json"}
        )

        assert resp.status_code == 422
        assert all("input" not in err for err in resp.json()["detail"])
        repo.append.assert_not_awaited()

        balance = await client.get("/api/v1/balance")
        assert balance.status_code == 200
        assert balance.json()["balance"] == pytest.approx(28.0)


class TestAuthDependency:
    async def test_valid_token_for_unknown_user_is_401(self, client: AsyncClient) -> None:
        session = AsyncMock()
        session.get.return_value = None

        async def _db() -> AsyncMock:
            return session

        app.dependency_overrides[get_db_session] = _db
        try:
            resp = await client.get(
                "/api/v1/balance",
                headers={"Authorization": f"Bearer {create_access_token(99)}"},
            )
        finally:
            app.dependency_overrides.clear()

        assert resp.status_code == 401


class TestRequestId:
    async def test_client_id_echoed_in_header_and_envelope(
        self, client: AsyncClient, overrides: None
    ) -> None:
        resp = await client.post(
            "/api/v1/expenses",
            json={"description": "Food", "amount": 42, "users": [{"id": 1}]},
            headers={"X-Request-ID": "client-42"},
        )

        assert resp.status_code == 422
        assert resp.headers["X-Request-ID"] == "client-42"
        assert resp.json()["request_id"] == "client-42"

    async def test_malformed_client_id_replaced(self, client: AsyncClient) -> None:
        resp = await client.get("/health", headers={"X-Request-ID": "not an id!"})
        assert resp.headers["X-Request-ID"].startswith("req_")


async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
