"""
Cache backend contract and factory.

The application builds exactly one backend at startup and hands it to
whatever needs it; nothing imports a module-level cache instance.
"""

from collections.abc import Callable
from typing import Any, Protocol

from core.config import Settings, get_settings
from core.logging import get_logger

logger = get_logger("cache")


class CacheBackend(Protocol):
    """Operations every cache backend provides."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any, ttl: int) -> None: ...

    def delete(self, key: str) -> None: ...

    def delete_pattern(self, pattern: str) -> int: ...

    def get_or_compute(self, key: str, compute_fn: Callable[[], Any], ttl: int) -> Any: ...

    def keys(self) -> list[str]: ...

    def clear(self) -> None: ...

    def sweep(self) -> int: ...

    def start_sweeper(self, interval_seconds: int = 60) -> None: ...

    def stop_sweeper(self) -> None: ...

    def health_check(self) -> dict[str, Any]: ...


def create_cache(settings: Settings | None = None) -> CacheBackend:
    """Build the backend selected by CACHE_BACKEND."""
    settings = settings or get_settings()

    if settings.cache_backend == "redis":
        from core.cache.redis_cache import RedisCache

        logger.info("cache_backend_selected", backend="redis", host=settings.redis_host)
        return RedisCache(settings.redis_url)

    from core.cache.memory_cache import InMemoryCache

    logger.info("cache_backend_selected", backend="memory")
    return InMemoryCache()
