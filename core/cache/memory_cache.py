"""
Process-local TTL cache.

Entries live in a plain dict keyed by string. Expired entries are treated as
absent and evicted lazily on read; a periodic sweep (APScheduler interval
job) evicts entries that are never read again. Everything is lost when the
process exits.

Sync FastAPI routes run on a thread pool and the sweep runs on the
scheduler's thread, so every operation holds the instance lock.
"""

import re
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from core.logging import get_logger

logger = get_logger("cache.memory")

SWEEP_JOB_ID = "cache_sweep"


@dataclass
class CacheEntry:
    value: Any
    expires_at: float


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """
    Translate a wildcard key pattern into an anchored regex.

    `*` matches any run of characters; everything else is literal, so
    "game:*" matches exactly the keys that start with "game:".
    """
    return re.compile(".*".join(re.escape(part) for part in pattern.split("*")), re.DOTALL)


class InMemoryCache:
    """
    In-memory cache with per-entry expiry.

    Usage:
        cache = InMemoryCache()
        cache.start_sweeper(60)

        cache.set("game:detail:42", {"game": {...}}, ttl=86400)
        payload = cache.get("game:detail:42")
        cache.delete_pattern("game:*")
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._clock = clock
        self._scheduler: BackgroundScheduler | None = None

    # =========================================================================
    # Key Operations
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """Return the live value for key, or default when missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                return default
            return entry.value

    def set(self, key: str, value: Any, ttl: int) -> None:
        """Store value for ttl seconds, replacing any existing entry."""
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def delete_pattern(self, pattern: str) -> int:
        """
        Delete all keys matching a wildcard pattern.

        Returns:
            Number of keys deleted
        """
        regex = compile_pattern(pattern)
        with self._lock:
            matched = [key for key in self._entries if regex.fullmatch(key)]
            for key in matched:
                del self._entries[key]
        if matched:
            logger.debug("cache_pattern_deleted", pattern=pattern, deleted=len(matched))
        return len(matched)

    def get_or_compute(self, key: str, compute_fn: Callable[[], Any], ttl: int) -> Any:
        """Read-through helper. A None result is returned but not stored."""
        value = self.get(key)
        if value is not None:
            return value
        value = compute_fn()
        if value is not None:
            self.set(key, value, ttl)
        return value

    def keys(self) -> list[str]:
        """Stored keys, including expired entries the sweep has not reached yet."""
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # =========================================================================
    # Expiry Sweep
    # =========================================================================

    def sweep(self) -> int:
        """Evict every expired entry. Returns the number evicted."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
            for key in expired:
                del self._entries[key]
            remaining = len(self._entries)
        if expired:
            logger.debug("cache_swept", evicted=len(expired), remaining=remaining)
        return len(expired)

    def start_sweeper(self, interval_seconds: int = 60) -> None:
        """Run sweep() every interval_seconds on a background scheduler thread."""
        if self._scheduler is not None:
            return
        scheduler = BackgroundScheduler(timezone="UTC")
        scheduler.add_job(
            self.sweep,
            trigger=IntervalTrigger(seconds=interval_seconds),
            id=SWEEP_JOB_ID,
            coalesce=True,
            max_instances=1,
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.info("cache_sweeper_started", interval_seconds=interval_seconds)

    def stop_sweeper(self) -> None:
        if self._scheduler is None:
            return
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("cache_sweeper_stopped")

    @property
    def sweeper_running(self) -> bool:
        return self._scheduler is not None

    def health_check(self) -> dict[str, Any]:
        return {
            "backend": "memory",
            "status": "healthy",
            "entries": len(self),
            "sweeper_running": self.sweeper_running,
        }
