from __future__ import annotations

from collections.abc import Callable
import json
from pathlib import Path
import threading

import pytest

from browserlist.cache import ConfigCache, FileCacheStore, MemoryCacheStore
from browserlist.constants import CACHE_KEY, CACHE_TTL_SECONDS
from browserlist.model import CacheHit


class _Clock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _counting(result: list[str]) -> tuple[Callable[[], list[str]], list[int]]:
    calls = [0]

    def _populate() -> list[str]:
        calls[0] += 1
        return list(result)

    return _populate, calls


def test_memory_store_expiry() -> None:
    clock = _Clock()
    store = MemoryCacheStore(clock=clock)

    assert store.get(CACHE_KEY) is None
    store.set(CACHE_KEY, ["defaults"], 10)
    assert store.get(CACHE_KEY) == CacheHit(value=["defaults"], is_expired=False)

    store.delete(CACHE_KEY)
    assert store.get(CACHE_KEY) is None


def test_memory_store_evicts_expired_entries() -> None:
    clock = _Clock()
    store = MemoryCacheStore(clock=clock)
    store.set(CACHE_KEY, ["defaults"], 10)
    store.set("longer", ["ie 11"], 100)

    clock.now += 10

    assert store.get(CACHE_KEY) is None
    assert store.get("longer") == CacheHit(value=["ie 11"], is_expired=False)
    assert len(store) == 1


def test_memory_store_is_bounded() -> None:
    store = MemoryCacheStore(maxsize=3)

    for index in range(5):
        store.set(f"key-{index}", ["defaults"], CACHE_TTL_SECONDS)

    assert len(store) == 3
    assert store.get("key-4") is not None


def test_get_or_populate_calls_populate_once_within_ttl() -> None:
    clock = _Clock()
    cache = ConfigCache(MemoryCacheStore(clock=clock))
    populate, calls = _counting(["chrome 90", "firefox 88"])

    assert cache.get_or_populate(CACHE_KEY, CACHE_TTL_SECONDS, populate) == [
        "chrome 90",
        "firefox 88",
    ]
    assert calls[0] == 1

    clock.now += CACHE_TTL_SECONDS - 1
    for _ in range(3):
        assert cache.get_or_populate(CACHE_KEY, CACHE_TTL_SECONDS, populate) == [
            "chrome 90",
            "firefox 88",
        ]
    assert calls[0] == 1


def test_get_or_populate_refetches_after_expiry() -> None:
    clock = _Clock()
    cache = ConfigCache(MemoryCacheStore(clock=clock))
    populate, calls = _counting(["defaults"])

    cache.get_or_populate(CACHE_KEY, CACHE_TTL_SECONDS, populate)
    clock.now += CACHE_TTL_SECONDS
    cache.get_or_populate(CACHE_KEY, CACHE_TTL_SECONDS, populate)

    assert calls[0] == 2


def test_get_or_populate_failure_is_not_stored() -> None:
    store = MemoryCacheStore()
    cache = ConfigCache(store)
    populate, calls = _counting([])

    assert cache.get_or_populate(CACHE_KEY, CACHE_TTL_SECONDS, populate) == []
    assert cache.get_or_populate(CACHE_KEY, CACHE_TTL_SECONDS, populate) == []
    assert calls[0] == 2
    assert store.get(CACHE_KEY) is None


def test_failure_after_expiry_keeps_previous_value(tmp_path: Path) -> None:
    clock = _Clock()
    store = FileCacheStore(tmp_path / "cache.json", clock=clock)
    cache = ConfigCache(store)

    cache.get_or_populate(CACHE_KEY, 60, lambda: ["last 2 versions"])
    clock.now += 61

    assert cache.get_or_populate(CACHE_KEY, 60, lambda: []) == []
    hit = store.get(CACHE_KEY)
    assert hit is not None
    assert hit.value == ["last 2 versions"]
    assert hit.is_expired is True


def test_concurrent_cold_cache_populates_once() -> None:
    cache = ConfigCache(MemoryCacheStore())
    started = threading.Event()
    calls = [0]

    def _slow_populate() -> list[str]:
        calls[0] += 1
        started.wait(timeout=1)
        return ["defaults"]

    results: list[list[str]] = []
    threads = [
        threading.Thread(
            target=lambda: results.append(
                cache.get_or_populate(CACHE_KEY, CACHE_TTL_SECONDS, _slow_populate)
            )
        )
        for _ in range(4)
    ]
    for thread in threads:
        thread.start()
    started.set()
    for thread in threads:
        thread.join()

    assert calls[0] == 1
    assert results == [["defaults"]] * 4


def test_slow_populate_does_not_block_other_keys() -> None:
    cache = ConfigCache(MemoryCacheStore())
    entered = threading.Event()
    release = threading.Event()

    def _blocked_populate() -> list[str]:
        entered.set()
        release.wait(timeout=5)
        return ["defaults"]

    slow = threading.Thread(
        target=lambda: cache.get_or_populate("slow", CACHE_TTL_SECONDS, _blocked_populate)
    )
    slow.start()
    assert entered.wait(timeout=1)

    other_results: list[list[str]] = []
    other = threading.Thread(
        target=lambda: other_results.append(
            cache.get_or_populate("other", CACHE_TTL_SECONDS, lambda: ["ie 11"])
        )
    )
    other.start()
    other.join(timeout=1)

    try:
        assert not other.is_alive()
        assert other_results == [["ie 11"]]
    finally:
        release.set()
        slow.join(timeout=5)
    assert cache.get_or_populate("slow", CACHE_TTL_SECONDS, lambda: []) == ["defaults"]


def test_invalidate_drops_entry() -> None:
    cache = ConfigCache(MemoryCacheStore())
    populate, calls = _counting(["defaults"])

    cache.get_or_populate(CACHE_KEY, CACHE_TTL_SECONDS, populate)
    cache.invalidate(CACHE_KEY)
    cache.get_or_populate(CACHE_KEY, CACHE_TTL_SECONDS, populate)

    assert calls[0] == 2


def test_file_store_round_trip_between_instances(tmp_path: Path) -> None:
    clock = _Clock()
    path = tmp_path / "nested" / "cache.json"

    FileCacheStore(path, clock=clock).set(CACHE_KEY, ["> 1%", "not dead"], 100)
    hit = FileCacheStore(path, clock=clock).get(CACHE_KEY)

    assert hit == CacheHit(value=["> 1%", "not dead"], is_expired=False)
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload[CACHE_KEY]["expires_at"] == 1_100.0

    clock.now = 1_100.0
    expired = FileCacheStore(path, clock=clock).get(CACHE_KEY)
    assert expired is not None
    assert expired.is_expired is True


def test_file_store_delete(tmp_path: Path) -> None:
    store = FileCacheStore(tmp_path / "cache.json")
    store.set(CACHE_KEY, ["defaults"], 100)
    store.set("other", ["ie 11"], 100)

    store.delete(CACHE_KEY)

    assert store.get(CACHE_KEY) is None
    assert store.get("other") is not None


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[1, 2, 3]",
        json.dumps({CACHE_KEY: "oops"}),
        json.dumps({CACHE_KEY: {"value": "x", "expires_at": 1}}),
        json.dumps({CACHE_KEY: {"value": ["x"], "expires_at": "soon"}}),
    ],
)
def test_file_store_malformed_reads_as_missing(tmp_path: Path, content: str) -> None:
    path = tmp_path / "cache.json"
    path.write_text(content, encoding="utf-8")

    assert FileCacheStore(path).get(CACHE_KEY) is None


def test_file_store_write_failure_is_logged(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = FileCacheStore(blocker / "cache.json")
    cache = ConfigCache(store)

    with caplog.at_level("WARNING", logger="browserlist.cache"):
        value = cache.get_or_populate(CACHE_KEY, CACHE_TTL_SECONDS, lambda: ["defaults"])

    assert value == ["defaults"]
    assert "Cannot write cache file" in caplog.text
