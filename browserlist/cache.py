"""Key-value cache with expiry for the fetched browserslist config."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
import json
import logging
from pathlib import Path
import threading
import time
from typing import Any, Protocol

from cachetools import TLRUCache

from .constants import MEMORY_CACHE_MAXSIZE
from .model import CacheHit

LOGGER = logging.getLogger(__name__)

Clock = Callable[[], float]


class CacheStore(Protocol):
    """Host key-value store with per-entry expiry."""

    def get(self, key: str) -> CacheHit | None:
        """Return the stored entry with its expiry state, or None when absent."""
        ...

    def set(self, key: str, value: Sequence[str], ttl: float) -> None:
        """Store `value` under `key` for `ttl` seconds."""
        ...


def _entry_expiry(_key: str, entry: tuple[list[str], float], now: float) -> float:
    return now + entry[1]


class MemoryCacheStore:
    """Process-local store bounded to `maxsize` entries.

    Expired entries are evicted by the underlying `TLRUCache`, so a lookup
    after expiry reads as absent.
    """

    def __init__(self, maxsize: int = MEMORY_CACHE_MAXSIZE, clock: Clock = time.time) -> None:
        self._cache: TLRUCache[str, tuple[list[str], float]] = TLRUCache(
            maxsize, ttu=_entry_expiry, timer=clock
        )
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            self._cache.expire()
            return len(self._cache)

    def get(self, key: str) -> CacheHit | None:
        with self._lock:
            entry = self._cache.get(key)
        if entry is None:
            return None
        return CacheHit(value=list(entry[0]), is_expired=False)

    def set(self, key: str, value: Sequence[str], ttl: float) -> None:
        with self._lock:
            self._cache[key] = (list(value), ttl)

    def delete(self, key: str) -> None:
        with self._lock:
            self._cache.pop(key, None)


class FileCacheStore:
    """JSON file store so cached config survives between CLI runs.

    Layout: ``{key: {"value": [...], "expires_at": <unix ts>}}``. A missing,
    unreadable or malformed file reads as empty; write failures are logged
    and otherwise ignored.
    """

    def __init__(self, path: Path | str, clock: Clock = time.time) -> None:
        self.path = Path(path)
        self._clock = clock

    def _load(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            LOGGER.warning("Cannot read cache file %s: %s", self.path, exc)
            return {}
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            LOGGER.warning("Ignoring malformed cache file %s", self.path)
            return {}
        return payload if isinstance(payload, dict) else {}

    def _save(self, payload: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            LOGGER.warning("Cannot write cache file %s: %s", self.path, exc)

    def get(self, key: str) -> CacheHit | None:
        entry = self._load().get(key)
        if not isinstance(entry, dict):
            return None
        value = entry.get("value")
        expires_at = entry.get("expires_at")
        if not isinstance(value, list) or not isinstance(expires_at, (int, float)):
            return None
        return CacheHit(
            value=[item for item in value if isinstance(item, str)],
            is_expired=self._clock() >= expires_at,
        )

    def set(self, key: str, value: Sequence[str], ttl: float) -> None:
        payload = self._load()
        payload[key] = {"value": list(value), "expires_at": self._clock() + ttl}
        self._save(payload)

    def delete(self, key: str) -> None:
        payload = self._load()
        if payload.pop(key, None) is not None:
            self._save(payload)


class ConfigCache:
    """Get-or-populate access to a `CacheStore`.

    Population is single-flight per key: concurrent callers for the same key
    wait for one populate, callers for other keys are not blocked.
    """

    def __init__(self, store: CacheStore) -> None:
        self.store = store
        self._locks_guard = threading.Lock()
        self._locks: dict[str, tuple[threading.Lock, int]] = {}

    @contextmanager
    def _key_lock(self, key: str) -> Iterator[None]:
        with self._locks_guard:
            lock, users = self._locks.get(key, (threading.Lock(), 0))
            self._locks[key] = (lock, users + 1)
        try:
            with lock:
                yield
        finally:
            with self._locks_guard:
                lock, users = self._locks[key]
                if users <= 1:
                    del self._locks[key]
                else:
                    self._locks[key] = (lock, users - 1)

    def _fresh(self, key: str) -> list[str] | None:
        hit = self.store.get(key)
        if hit is None or hit.is_expired or not hit.value:
            return None
        return hit.value

    def get_or_populate(
        self,
        key: str,
        ttl: float,
        populate_fn: Callable[[], Sequence[str]],
    ) -> list[str]:
        """Return the cached value for `key`, populating it on miss or expiry.

        An empty result from `populate_fn` is returned without touching the
        store, so a previously cached value is never replaced by a failure.
        """
        cached = self._fresh(key)
        if cached is not None:
            LOGGER.debug("Cache hit for %s", key)
            return cached

        with self._key_lock(key):
            # Another caller may have populated while we waited.
            cached = self._fresh(key)
            if cached is not None:
                return cached

            LOGGER.debug("Cache miss for %s", key)
            value = list(populate_fn() or [])
            if not value:
                LOGGER.debug("Populate for %s returned nothing; cache left as is", key)
                return value
            self.store.set(key, value, ttl)
            return value

    def invalidate(self, key: str) -> None:
        delete = getattr(self.store, "delete", None)
        if callable(delete):
            delete(key)
