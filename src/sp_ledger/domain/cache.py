"""Balance cache: cache-aside over the expense log.

  - Key: f"balance:{user_id}", value: the balance wire JSON
  - Read: check cache → on miss load the user's expenses, recompute, populate
  - Write-through: after an expense commits, the submitter's fresh balance is
    put with a new TTL
  - Other participants are not refreshed; their entries age out via the TTL

No locking. Two concurrent writers touching the same user may both compute
from a snapshot missing the other's expense; the last put wins until the
entry expires.
"""

import logging
from typing import Protocol

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from src.sp_common.errors import InternalError
from src.sp_expense.domain.repository import ExpenseRepositoryProtocol
from src.sp_ledger.domain.engine import compute_balance
from src.sp_ledger.domain.models import Balance

logger = logging.getLogger(__name__)

_BALANCE_ADAPTER: TypeAdapter[Balance] = TypeAdapter(Balance)


class BalanceCacheBackend(Protocol):
    """Per-key string store with expiry. Errors must surface as CacheUnavailableError."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None: ...

    async def delete(self, key: str) -> None: ...


def balance_key(user_id: int) -> str:
    return f"balance:{user_id}"


def encode_balance(balance: Balance) -> str:
    return _BALANCE_ADAPTER.dump_json(balance).decode("utf-8")


def decode_balance(raw: str) -> Balance:
    try:
        return _BALANCE_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise InternalError("Unable to decode cached balance") from exc


class BalanceCache:
    def __init__(
        self,
        backend: BalanceCacheBackend,
        repo: ExpenseRepositoryProtocol,
        ttl_seconds: int,
    ) -> None:
        self._backend = backend
        self._repo = repo
        self._ttl = ttl_seconds

    async def get(self, db: AsyncSession, user_id: int) -> Balance:
        """Return the cached balance, recomputing and storing it on a miss."""
        raw = await self._backend.get(balance_key(user_id))
        if raw is not None:
            return decode_balance(raw)

        logger.debug("Balance cache miss: user=%d", user_id)
        expenses = await self._repo.list_for_user(db, user_id)
        balance = compute_balance(expenses, user_id)
        await self.put(user_id, balance)
        return balance

    async def put(self, user_id: int, balance: Balance) -> None:
        """Overwrite the entry unconditionally with a fresh TTL."""
        await self._backend.set(balance_key(user_id), encode_balance(balance), self._ttl)

    async def invalidate(self, user_id: int) -> None:
        await self._backend.delete(balance_key(user_id))
