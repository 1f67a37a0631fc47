"""
In-memory result cache guarded by a reader/writer lock.

Reads proceed concurrently; a write excludes all other readers and writers.
Every lock acquisition waits at most ``lock_timeout`` seconds: a read that
times out is reported as a miss and a write that times out is dropped, so
the cache never blocks a caller indefinitely.

Entries are whole values tagged with their ResultKind. ``put`` rejects a
value whose type does not match its fingerprint's kind, and an entry is only
ever replaced as a whole.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Optional

from gardenplan.calculator.layout import GrowBagLayout

from .fingerprint import Fingerprint, ResultKind

logger = logging.getLogger(__name__)

_RESULT_TYPES: MappingProxyType[ResultKind, type] = MappingProxyType(
    {
        ResultKind.GARDEN_SPACE: float,
        ResultKind.LAYOUT: GrowBagLayout,
        ResultKind.YIELD: float,
    }
)


class ReadWriteLock:
    """A writer-preferring reader/writer lock with bounded waits."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self, timeout: float) -> bool:
        with self._cond:
            acquired = self._cond.wait_for(
                lambda: not self._writer and self._writers_waiting == 0, timeout
            )
            if acquired:
                self._readers += 1
            return acquired

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self, timeout: float) -> bool:
        with self._cond:
            self._writers_waiting += 1
            try:
                acquired = self._cond.wait_for(
                    lambda: not self._writer and self._readers == 0, timeout
                )
            finally:
                self._writers_waiting -= 1
            if acquired:
                self._writer = True
            else:
                self._cond.notify_all()
            return acquired

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self, timeout: float) -> Iterator[bool]:
        acquired = self.acquire_read(timeout)
        try:
            yield acquired
        finally:
            if acquired:
                self.release_read()

    @contextmanager
    def write_locked(self, timeout: float) -> Iterator[bool]:
        acquired = self.acquire_write(timeout)
        try:
            yield acquired
        finally:
            if acquired:
                self.release_write()


@dataclass(frozen=True)
class CacheEntry:
    fingerprint: Fingerprint
    value: Any


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    size: int


class ResultCache:
    """
    Memoization store for calculator results, keyed by Fingerprint.

    Safe to share across threads. Calculators never touch the cache
    directly; the GardenCalculator facade reads and writes through it.
    """

    def __init__(self, lock_timeout: float = 5.0) -> None:
        if lock_timeout <= 0:
            raise ValueError(f"lock_timeout must be positive, got {lock_timeout}")
        self._lock_timeout = lock_timeout
        self._lock = ReadWriteLock()
        self._entries: dict[Fingerprint, CacheEntry] = {}
        self._counter_lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, fingerprint: Fingerprint) -> Optional[Any]:
        """Return the cached value for *fingerprint*, or None on a miss."""
        with self._lock.read_locked(self._lock_timeout) as acquired:
            if not acquired:
                logger.warning("cache read lock timed out for %s", fingerprint.key)
                entry = None
            else:
                entry = self._entries.get(fingerprint)
        self._count(hit=entry is not None)
        if entry is None:
            logger.debug("cache miss: %s", fingerprint.key)
            return None
        logger.debug("cache hit: %s", fingerprint.key)
        return entry.value

    def put(self, fingerprint: Fingerprint, value: Any) -> bool:
        """
        Store *value* under *fingerprint*. Returns False if the write lock
        timed out and the value was not stored.

        Raises:
            TypeError: If *value* does not match the fingerprint's ResultKind.
        """
        expected = _RESULT_TYPES[fingerprint.kind]
        if not isinstance(value, expected):
            raise TypeError(
                f"cache value for {fingerprint.kind.value} must be "
                f"{expected.__name__}, got {type(value).__name__}"
            )
        entry = CacheEntry(fingerprint=fingerprint, value=value)
        with self._lock.write_locked(self._lock_timeout) as acquired:
            if not acquired:
                logger.warning("cache write lock timed out for %s", fingerprint.key)
                return False
            self._entries[fingerprint] = entry
        logger.debug("cache store: %s", fingerprint.key)
        return True

    def clear(self) -> bool:
        """Drop every entry. Returns False if the write lock timed out."""
        with self._lock.write_locked(self._lock_timeout) as acquired:
            if not acquired:
                logger.warning("cache clear lock timed out")
                return False
            self._entries.clear()
        return True

    def stats(self) -> CacheStats:
        with self._counter_lock:
            hits, misses = self._hits, self._misses
        with self._lock.read_locked(self._lock_timeout) as acquired:
            size = len(self._entries) if acquired else -1
        return CacheStats(hits=hits, misses=misses, size=size)

    def __len__(self) -> int:
        return max(self.stats().size, 0)

    def __contains__(self, fingerprint: object) -> bool:
        with self._lock.read_locked(self._lock_timeout) as acquired:
            return acquired and fingerprint in self._entries

    def _count(self, hit: bool) -> None:
        with self._counter_lock:
            if hit:
                self._hits += 1
            else:
                self._misses += 1
