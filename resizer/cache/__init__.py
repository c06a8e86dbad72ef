"""Result cache backends and cache identity helpers."""

from .backend import CacheStore, MemoryCacheStore, RedisCacheStore, build_cache_store
from .keys import SourceIdentity, compute_cache_key
from .single_flight import SingleFlight

__all__ = [
    "CacheStore",
    "MemoryCacheStore",
    "RedisCacheStore",
    "SingleFlight",
    "SourceIdentity",
    "build_cache_store",
    "compute_cache_key",
]
