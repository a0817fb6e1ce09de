"""FastAPI dependency that wires a BalanceCache to the configured backend.

Usage in any router:
    from src.sp_ledger.application.dependencies import get_balance_cache

    @router.get("/x")
    async def x(cache: BalanceCache = Depends(get_balance_cache)):
        ...

Tests replace it through ``app.dependency_overrides``.
"""

from config.settings import settings
from src.sp_common.redis_client import get_redis
from src.sp_expense.infrastructure.persistence import ExpenseRepository
from src.sp_ledger.domain.cache import BalanceCache, BalanceCacheBackend
from src.sp_ledger.infrastructure.cache_backends import (
    InMemoryBalanceCacheBackend,
    RedisBalanceCacheBackend,
)

# Shared across requests when BALANCE_CACHE_BACKEND=memory (single process only)
_memory_backend: InMemoryBalanceCacheBackend | None = None


async def get_cache_backend() -> BalanceCacheBackend:
    global _memory_backend  # noqa: PLW0603
    if settings.BALANCE_CACHE_BACKEND == "memory":
        if _memory_backend is None:
            _memory_backend = InMemoryBalanceCacheBackend()
        return _memory_backend
    return RedisBalanceCacheBackend(await get_redis())


async def get_balance_cache() -> BalanceCache:
    return BalanceCache(
        backend=await get_cache_backend(),
        repo=ExpenseRepository(),
        ttl_seconds=settings.BALANCE_CACHE_TTL_SECONDS,
    )
