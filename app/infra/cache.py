"""TTL caches for supplementary data.

Caches are explicit objects created at startup and passed to the clients
that use them, so the in-process implementation can be swapped for Redis
without touching call sites. Cached values only ever feed optional
enrichment; a miss or a stale read never affects required plan fields.
"""

import json
import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any, Protocol

from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class TTLCache(Protocol):
    """Async key/value cache with per-entry expiry."""

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def clear(self) -> None: ...


class InMemoryTTLCache:
    """Bounded in-process cache with lazy expiry.

    Entries are evicted when read after their deadline, and the oldest
    entry is dropped once ``max_entries`` is reached.
    """

    def __init__(
        self,
        default_ttl: int = 300,
        max_entries: int = 256,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, tuple[Any, float]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        expires_at = self._clock() + (ttl if ttl is not None else self.default_ttl)
        self._entries[key] = (value, expires_at)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def clear(self) -> None:
        self._entries.clear()


class RedisTTLCache:
    """Cache backed by Redis, values stored as JSON."""

    def __init__(self, redis: Redis, default_ttl: int = 300, prefix: str = "cache") -> None:
        self.redis = redis
        self.default_ttl = default_ttl
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    async def get(self, key: str) -> Any | None:
        """Get a JSON value from cache."""
        value = await self.redis.get(self._key(key))
        if value:
            return json.loads(value)
        return None

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Set a JSON value in cache with optional TTL."""
        await self.redis.set(
            self._key(key), json.dumps(value), ex=ttl or self.default_ttl
        )

    async def delete(self, key: str) -> None:
        """Delete a key from cache."""
        await self.redis.delete(self._key(key))

    async def clear(self) -> None:
        """Delete every key under this cache's prefix."""
        async for key in self.redis.scan_iter(match=f"{self.prefix}:*", count=100):
            await self.redis.delete(key)
