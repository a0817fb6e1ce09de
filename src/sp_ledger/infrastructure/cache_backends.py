"""BalanceCacheBackend implementations: Redis for deployments, a dict for tests/dev."""

import logging
import time
from collections.abc import Callable

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from src.sp_common.errors import CacheUnavailableError

logger = logging.getLogger(__name__)


class RedisBalanceCacheBackend:
    """Balance entries as plain Redis strings with a per-key EX expiry."""

    def __init__(self, client: aioredis.Redis) -> None:
        self._client = client

    async def get(self, key: str) -> str | None:
        try:
            value = await self._client.get(key)
        except RedisError as exc:
            logger.error("Redis GET failed: key=%s err=%s", key, exc)
            raise CacheUnavailableError(str(exc)) from exc
        return None if value is None else str(value)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._client.set(key, value, ex=ttl_seconds)
        except RedisError as exc:
            logger.error("Redis SET failed: key=%s err=%s", key, exc)
            raise CacheUnavailableError(str(exc)) from exc

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except RedisError as exc:
            logger.error("Redis DEL failed: key=%s err=%s", key, exc)
            raise CacheUnavailableError(str(exc)) from exc


class InMemoryBalanceCacheBackend:
    """Process-local backend. Expired entries are treated as absent and dropped on read."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._entries[key] = (value, self._clock() + ttl_seconds)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)
