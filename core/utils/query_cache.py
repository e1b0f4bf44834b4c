"""
In-process query cache for backend reads.

Keys are tuples such as ("players",) or ("playerStats", player_id, season).
Reads are served from memory while fresh; a failed load is retried a fixed
number of times (one by default) and then re-raised. Writes invalidate by key
prefix, so ("players",) drops the list and every ("players", id) entry.
None results are never stored, and stale entries are pruned on every store.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Hashable, Optional, Tuple

logger = logging.getLogger(__name__)

CacheKey = Tuple[Hashable, ...]


class QueryCache:
    """Deduplicating read cache with prefix invalidation"""

    def __init__(
        self,
        ttl_seconds: float = 300,
        retries: int = 1,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.retries = retries
        self._clock = clock
        # {key: (stored_at, value)}
        self._entries: Dict[CacheKey, Tuple[float, Any]] = {}
        self._inflight: Dict[CacheKey, asyncio.Task] = {}
        # Bumped on every invalidation so a load that started earlier
        # does not write a stale value back
        self._generation = 0

    def _fresh(self, key: CacheKey) -> Optional[Tuple[float, Any]]:
        entry = self._entries.get(key)
        if entry and self._clock() - entry[0] < self.ttl_seconds:
            return entry
        return None

    async def fetch(self, key: CacheKey, loader: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value for key, loading it when missing or stale."""
        key = tuple(key)
        entry = self._fresh(key)
        if entry:
            return entry[1]

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key, loader, self._generation))
            self._inflight[key] = task
            task.add_done_callback(lambda t, k=key: self._forget(k, t))
        return await asyncio.shield(task)

    def _forget(self, key: CacheKey, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    async def _load(self, key: CacheKey, loader: Callable[[], Awaitable[Any]], generation: int) -> Any:
        attempt = 0
        while True:
            try:
                value = await loader()
                break
            except Exception as e:
                if attempt >= self.retries:
                    logger.error(f"[CACHE] Load failed for {key[0]}: {e}")
                    raise
                attempt += 1
                logger.warning(f"[CACHE] Load failed for {key[0]}, retry {attempt}/{self.retries}: {e}")

        # Misses (None) are never stored
        if value is not None and generation == self._generation:
            self._prune()
            self._entries[key] = (self._clock(), value)
        return value

    def _prune(self) -> None:
        """Drop every stale entry"""
        now = self._clock()
        for k in [k for k, (stored_at, _v) in self._entries.items() if now - stored_at >= self.ttl_seconds]:
            del self._entries[k]

    def invalidate(self, *prefix: Hashable) -> int:
        """Drop every entry whose key starts with prefix. Returns the count dropped."""
        self._generation += 1
        n = len(prefix)
        stale = [k for k in self._entries if k[:n] == prefix]
        for k in stale:
            del self._entries[k]
        # Later reads start a fresh load instead of joining one that began before the write
        for k in [k for k in self._inflight if k[:n] == prefix]:
            self._inflight.pop(k, None)
        return len(stale)

    def remove(self, *key: Hashable) -> None:
        """Drop exactly one key"""
        self._generation += 1
        self._entries.pop(tuple(key), None)
        self._inflight.pop(tuple(key), None)

    def clear(self) -> None:
        self._generation += 1
        self._entries.clear()
        self._inflight.clear()

    def __contains__(self, key) -> bool:
        return self._fresh(tuple(key)) is not None

    def __len__(self) -> int:
        return len(self._entries)
