"""
Redis-backed cache with the same contract as InMemoryCache.

Values are JSON-encoded and stored with SETEX, so Redis handles expiry
itself and the sweep hooks do nothing. Connection problems degrade to
"absent" / no-op and are logged rather than raised.
"""

import json
from collections.abc import Callable
from typing import Any

import redis
from redis.exceptions import ConnectionError, TimeoutError

from core.logging import get_logger

logger = get_logger("cache.redis")

_GLOB_SPECIALS = ("\\", "?", "[", "]")


def to_redis_glob(pattern: str) -> str:
    """
    Escape a wildcard key pattern for SCAN MATCH.

    Only `*` stays a wildcard, matching InMemoryCache's pattern semantics.
    """
    for char in _GLOB_SPECIALS:
        pattern = pattern.replace(char, "\\" + char)
    return pattern


class RedisCache:
    """
    Redis cache client with connection pooling.

    Usage:
        cache = RedisCache("redis://localhost:6379/0")
        cache.set("game:detail:42", {"game": {...}}, ttl=86400)
        payload = cache.get("game:detail:42")
    """

    def __init__(self, url: str, client: "redis.Redis | None" = None):
        self.url = url
        self._client = client or redis.Redis.from_url(
            url,
            max_connections=50,
            socket_timeout=5,
            socket_connect_timeout=5,
        )

    # =========================================================================
    # Key Operations
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        try:
            data = self._client.get(key)
        except (ConnectionError, TimeoutError) as e:
            logger.warning("cache_get_error", key=key, error=str(e))
            return default
        if data is None:
            return default
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        try:
            return json.loads(data)
        except json.JSONDecodeError as e:
            logger.debug("cache_decode_error", key=key, error=str(e))
            return default

    def set(self, key: str, value: Any, ttl: int) -> None:
        """Store value for ttl seconds. Non-positive TTLs store nothing."""
        if ttl <= 0:
            self.delete(key)
            return
        try:
            self._client.setex(key, ttl, json.dumps(value, default=str))
        except (TypeError, ConnectionError, TimeoutError) as e:
            logger.warning("cache_set_error", key=key, error=str(e))

    def delete(self, key: str) -> None:
        try:
            self._client.delete(key)
        except (ConnectionError, TimeoutError) as e:
            logger.warning("cache_delete_error", key=key, error=str(e))

    def delete_pattern(self, pattern: str) -> int:
        """
        Delete all keys matching a wildcard pattern (e.g. "game:*").

        Returns:
            Number of keys deleted
        """
        try:
            keys = list(self._client.scan_iter(match=to_redis_glob(pattern)))
            if not keys:
                return 0
            return int(self._client.delete(*keys))
        except (ConnectionError, TimeoutError) as e:
            logger.warning("cache_delete_pattern_error", pattern=pattern, error=str(e))
            return 0

    def get_or_compute(self, key: str, compute_fn: Callable[[], Any], ttl: int) -> Any:
        value = self.get(key)
        if value is not None:
            return value
        value = compute_fn()
        if value is not None:
            self.set(key, value, ttl)
        return value

    def keys(self) -> list[str]:
        try:
            return [k.decode("utf-8") if isinstance(k, bytes) else k for k in self._client.scan_iter()]
        except (ConnectionError, TimeoutError):
            return []

    def clear(self) -> None:
        """Flush the current Redis database."""
        try:
            self._client.flushdb()
        except (ConnectionError, TimeoutError) as e:
            logger.warning("cache_clear_error", error=str(e))

    # =========================================================================
    # Expiry Sweep (Redis expires keys natively)
    # =========================================================================

    def sweep(self) -> int:
        return 0

    def start_sweeper(self, interval_seconds: int = 60) -> None:
        return None

    def stop_sweeper(self) -> None:
        return None

    def health_check(self) -> dict[str, Any]:
        status: dict[str, Any] = {"backend": "redis"}
        try:
            self._client.ping()
            status["status"] = "healthy"
        except (ConnectionError, TimeoutError):
            status["status"] = "unavailable"
        return status
