"""Disk-backed cache store with per-call TTL evaluation.

Uses diskcache.FanoutCache (SQLite shards). Each put is a single-key upsert
inside a SQLite transaction, so concurrent fetchers writing different keys
never clobber each other and readers never observe a half-written entry.

Entries carry their own capture timestamp; freshness is decided by the
caller's TTL at read time rather than by diskcache expiry.
"""

import asyncio
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from diskcache import FanoutCache

from nba_sgp_advisor.data.policy import EntityKind
from nba_sgp_advisor.monitoring import CacheMetrics, get_logger

log = get_logger()


@dataclass(frozen=True)
class CacheEntry:
    """Cached payload with its capture time.

    Attributes:
        data: JSON-compatible payload
        timestamp: Unix time at which the payload was stored
    """

    data: Any
    timestamp: float

    @property
    def fetched_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp)

    def age(self, now: float | None = None) -> float:
        return (time.time() if now is None else now) - self.timestamp


def is_fresh(entry: CacheEntry | None, ttl: float, now: float | None = None) -> bool:
    """Return True if entry exists and age < ttl (age == ttl is stale)."""
    if entry is None:
        return False
    return entry.age(now) < ttl


def make_key(kind: EntityKind, key: str) -> str:
    """Namespace a composite key by entity kind ("roster:5")."""
    return f"{kind.value}:{key}"


class CacheStore:
    """Persistent key -> CacheEntry mapping shared by all fetchers.

    Example:
        cache = CacheStore()
        entry = await cache.lookup("roster:5", ttl=86400, kind="roster")
        if entry is None:
            entry = await cache.put("roster:5", players)
    """

    def __init__(self, cache_dir: str = ".cache/nba_sgp", metrics: CacheMetrics | None = None):
        """Open (or create) the cache directory.

        Args:
            cache_dir: Directory for the SQLite shards
            metrics: Counter sink for hit/miss/stale lookups
        """
        self._cache = FanoutCache(directory=cache_dir, shards=8, timeout=1.0)
        self.metrics = metrics or CacheMetrics()

    async def get(self, key: str) -> CacheEntry | None:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.get_sync, key)

    async def put(self, key: str, value: Any) -> CacheEntry:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.put_sync, key, value)

    async def lookup(self, key: str, ttl: float, kind: str = "") -> CacheEntry | None:
        """Return the entry only if it is fresh, recording the outcome.

        Args:
            key: Namespaced cache key
            ttl: Freshness window in seconds
            kind: Entity kind label for metrics and logs

        Returns:
            Fresh CacheEntry, or None when missing or stale
        """
        entry = await self.get(key)
        if entry is None:
            self.metrics.record_miss(kind)
            log.debug("cache_miss", key=key)
            return None
        if not is_fresh(entry, ttl):
            self.metrics.record_stale(kind)
            log.debug("cache_stale", key=key, age_s=round(entry.age(), 1), ttl_s=ttl)
            return None
        self.metrics.record_hit(kind)
        log.debug("cache_hit", key=key)
        return entry

    def get_sync(self, key: str) -> CacheEntry | None:
        raw = self._cache.get(key, default=None)
        if not isinstance(raw, dict) or "timestamp" not in raw:
            return None
        return CacheEntry(data=raw.get("data"), timestamp=raw["timestamp"])

    def put_sync(self, key: str, value: Any) -> CacheEntry:
        """Replace value and timestamp for key in one write."""
        entry = CacheEntry(data=value, timestamp=time.time())
        stored = self._cache.set(key, {"data": entry.data, "timestamp": entry.timestamp})
        if not stored:
            # FanoutCache reports lock timeouts by returning False
            log.warning("cache_write_skipped", key=key)
        return entry

    def delete(self, key: str) -> None:
        self._cache.delete(key)

    def clear(self) -> None:
        """Clear entire cache (for testing)."""
        self._cache.clear()

    def close(self) -> None:
        self._cache.close()
