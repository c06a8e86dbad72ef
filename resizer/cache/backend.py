"""Key to bytes stores for encoded resize results."""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Callable, Protocol

from redis import Redis

from resizer.config.settings import Settings

logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    """Opaque store of encoded images. ``put`` on an existing key replaces it."""

    def get(self, key: str) -> bytes | None:
        ...

    def put(self, key: str, data: bytes) -> None:
        ...

    def close(self) -> None:
        ...


class MemoryCacheStore:
    """In-process LRU store with optional time-based expiry."""

    def __init__(
        self,
        max_entries: int = 512,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._max_entries = max_entries
        self._ttl = ttl_seconds if ttl_seconds and ttl_seconds > 0 else None
        self._clock = clock
        self._entries: OrderedDict[str, tuple[bytes, float | None]] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str) -> bytes | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            data, expires_at = entry
            if expires_at is not None and expires_at <= self._clock():
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return data

    def put(self, key: str, data: bytes) -> None:
        expires_at = self._clock() + self._ttl if self._ttl is not None else None
        with self._lock:
            self._entries[key] = (bytes(data), expires_at)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted %s from memory cache", evicted)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def close(self) -> None:
        self.clear()


class RedisCacheStore:
    """Store backed by Redis; expiry is delegated to Redis key TTLs."""

    def __init__(self, client: Redis, ttl_seconds: int | None = None) -> None:
        self._client = client
        self._ttl = ttl_seconds if ttl_seconds and ttl_seconds > 0 else None

    @classmethod
    def from_url(cls, url: str, ttl_seconds: int | None = None) -> RedisCacheStore:
        return cls(Redis.from_url(url), ttl_seconds=ttl_seconds)

    def get(self, key: str) -> bytes | None:
        value = self._client.get(key)
        if value is None:
            return None
        return bytes(value)

    def put(self, key: str, data: bytes) -> None:
        self._client.set(key, data, ex=self._ttl)

    def close(self) -> None:
        self._client.close()


def build_cache_store(settings: Settings) -> CacheStore:
    """Instantiate the cache backend selected in ``settings``."""

    if settings.cache_backend == "memory":
        return MemoryCacheStore(
            max_entries=settings.cache_max_entries,
            ttl_seconds=settings.cache_ttl_seconds,
        )
    if settings.cache_backend == "redis":
        logger.info("Using Redis result cache at %s", settings.redis_url)
        return RedisCacheStore.from_url(settings.redis_url, ttl_seconds=settings.cache_ttl_seconds)
    raise ValueError(f"Unknown cache backend: {settings.cache_backend!r}")
