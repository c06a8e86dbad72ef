"""Tests for the result cache backends."""

from __future__ import annotations

import threading

import pytest
import pytest_mock

from resizer.cache.backend import MemoryCacheStore, RedisCacheStore, build_cache_store
from resizer.config.settings import Settings


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_memory_get_put_roundtrip() -> None:
    store = MemoryCacheStore()

    assert store.get("k") is None
    store.put("k", b"data")
    assert store.get("k") == b"data"


def test_memory_last_writer_wins() -> None:
    store = MemoryCacheStore()
    store.put("k", b"first")
    store.put("k", b"second")

    assert store.get("k") == b"second"
    assert len(store) == 1


def test_memory_evicts_least_recently_used() -> None:
    store = MemoryCacheStore(max_entries=2)
    store.put("a", b"1")
    store.put("b", b"2")
    store.get("a")
    store.put("c", b"3")

    assert store.get("b") is None
    assert store.get("a") == b"1"
    assert store.get("c") == b"3"


def test_memory_entries_expire() -> None:
    clock = FakeClock()
    store = MemoryCacheStore(ttl_seconds=10, clock=clock)
    store.put("k", b"v")

    clock.now = 9.9
    assert store.get("k") == b"v"
    clock.now = 10.0
    assert store.get("k") is None
    assert len(store) == 0


def test_memory_zero_ttl_disables_expiry() -> None:
    clock = FakeClock()
    store = MemoryCacheStore(ttl_seconds=0, clock=clock)
    store.put("k", b"v")

    clock.now = 1e9
    assert store.get("k") == b"v"


def test_memory_rejects_non_positive_capacity() -> None:
    with pytest.raises(ValueError):
        MemoryCacheStore(max_entries=0)


def test_memory_concurrent_puts_are_safe() -> None:
    store = MemoryCacheStore(max_entries=50)

    def _writer(prefix: str) -> None:
        for index in range(200):
            store.put(f"{prefix}-{index}", prefix.encode())
            store.get(f"{prefix}-{index // 2}")

    threads = [threading.Thread(target=_writer, args=(str(n),)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(store) == 50


def test_redis_store_delegates_to_client(mocker: pytest_mock.MockerFixture) -> None:
    client = mocker.Mock()
    client.get.return_value = b"payload"
    store = RedisCacheStore(client, ttl_seconds=60)

    store.put("k", b"payload")
    assert store.get("k") == b"payload"
    store.close()

    client.set.assert_called_once_with("k", b"payload", ex=60)
    client.get.assert_called_once_with("k")
    client.close.assert_called_once()


def test_redis_store_miss_and_no_ttl(mocker: pytest_mock.MockerFixture) -> None:
    client = mocker.Mock()
    client.get.return_value = None
    store = RedisCacheStore(client, ttl_seconds=0)

    assert store.get("missing") is None
    store.put("k", b"v")
    client.set.assert_called_once_with("k", b"v", ex=None)


def test_build_memory_store_from_settings() -> None:
    store = build_cache_store(Settings(cache_backend="memory", cache_max_entries=3))

    assert isinstance(store, MemoryCacheStore)


def test_build_redis_store_from_settings(mocker: pytest_mock.MockerFixture) -> None:
    from_url = mocker.patch("resizer.cache.backend.Redis.from_url")

    store = build_cache_store(Settings(cache_backend="redis", redis_url="redis://cache:6379/2", cache_ttl_seconds=30))

    assert isinstance(store, RedisCacheStore)
    from_url.assert_called_once_with("redis://cache:6379/2")


def test_unknown_backend_rejected() -> None:
    with pytest.raises(ValueError):
        build_cache_store(Settings(cache_backend="memcached"))
