"""
Cache administration endpoint, disabled in production.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from core.cache import CacheBackend, CacheKeys
from core.config import Settings, get_settings
from core.logging import get_logger

from ..auth.dependencies import get_current_user
from ..dependencies import get_cache
from ..schemas import CacheClearRequest

logger = get_logger("api.cache")

router = APIRouter(prefix="/cache", tags=["cache"], dependencies=[Depends(get_current_user)])


@router.post("/clear")
def clear_cache(
    request: CacheClearRequest | None = None,
    cache: CacheBackend = Depends(get_cache),
    settings: Settings = Depends(get_settings),
):
    """
    Delete a key pattern, a single key, or every cached game payload.

    A pattern takes precedence over a key; with neither, `game:*` is cleared.
    """
    if settings.is_production:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not available in production")

    request = request or CacheClearRequest()

    if request.pattern:
        removed = cache.delete_pattern(request.pattern)
        logger.info("cache_cleared", pattern=request.pattern, removed=removed)
        return {"success": True, "message": f"Cleared cache pattern: {request.pattern}"}

    if request.key:
        cache.delete(request.key)
        logger.info("cache_cleared", key=request.key)
        return {"success": True, "message": f"Cleared cache key: {request.key}"}

    removed = cache.delete_pattern(CacheKeys.game_pattern())
    logger.info("cache_cleared", pattern=CacheKeys.game_pattern(), removed=removed)
    return {"success": True, "message": "Cleared all game caches"}
