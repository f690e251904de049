"""
Caching layer.

Provides a process-local TTL cache (default) and a Redis backend with the
same interface, selected by CACHE_BACKEND.

Usage:
    from core.cache import CacheKeys, create_cache

    cache = create_cache()
    cache.start_sweeper(60)

    cache.set(CacheKeys.game_detail(42), payload, ttl=86400)
    payload = cache.get(CacheKeys.game_detail(42))
    cache.delete_pattern(CacheKeys.game_pattern())
"""

from core.cache.backend import CacheBackend, create_cache
from core.cache.cache_keys import CacheKeys
from core.cache.memory_cache import CacheEntry, InMemoryCache

__all__ = [
    "CacheBackend",
    "CacheEntry",
    "CacheKeys",
    "InMemoryCache",
    "create_cache",
]
