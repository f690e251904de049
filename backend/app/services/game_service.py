"""
Game service - catalog lookups with read-through caching.

Game payloads are cached under CacheKeys; anything user-specific (the
caller's list entry) is always read fresh.
"""

from typing import Any

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from core.cache import CacheBackend, CacheKeys
from core.config import Settings
from core.logging import get_logger
from core.repositories import GameEntryRepository, GameRepository
from core.scoring import find_similar_games

from ..models import Game, User

logger = get_logger("api.game_service")

SEARCH_LIMIT = 20
SIMILAR_CANDIDATE_LIMIT = 100


def _get_game_or_404(db: Session, game_id: int) -> Game:
    game = GameRepository(db).get_by_id(game_id)
    if game is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")
    return game


def search_games(db: Session, cache: CacheBackend, settings: Settings, query: str | None) -> dict[str, Any]:
    """Case-insensitive name search; an empty query returns no games."""
    query = (query or "").strip().lower()
    if not query:
        return {"games": []}

    key = CacheKeys.game_search(query)
    cached = cache.get(key)
    if cached is not None:
        logger.debug("cache_hit", key=key)
        return {"games": cached}

    logger.debug("cache_miss", key=key)
    games = [game.to_summary() for game in GameRepository(db).search_by_name(query, limit=SEARCH_LIMIT)]
    cache.set(key, games, settings.cache_search_ttl)
    return {"games": games}


def get_game_detail(
    db: Session, cache: CacheBackend, settings: Settings, user: User, game_id: int
) -> dict[str, Any]:
    """
    Return the game payload, the caller's list entry and whether the payload was cached.

    Raises:
        HTTPException: 404 if the game does not exist.
    """
    key = CacheKeys.game_detail(game_id)
    game_payload = cache.get(key)
    was_cached = game_payload is not None

    if was_cached:
        logger.debug("cache_hit", key=key)
    else:
        logger.debug("cache_miss", key=key)
        game_payload = _get_game_or_404(db, game_id).to_detail()
        cache.set(key, game_payload, settings.cache_game_detail_ttl)

    entry = GameEntryRepository(db).get_for_user(user.id, game_id)
    return {
        "game": game_payload,
        "userEntry": entry.to_dict() if entry else None,
        "cached": was_cached,
    }


def get_similar_games(
    db: Session, cache: CacheBackend, settings: Settings, game_id: int
) -> dict[str, Any]:
    """Up to six games sharing franchises, genres or themes with game_id."""
    key = CacheKeys.game_similar(game_id)
    cached = cache.get(key)
    if cached is not None:
        logger.debug("cache_hit", key=key)
        return {"similarGames": cached, "cached": True}

    logger.debug("cache_miss", key=key)
    game = _get_game_or_404(db, game_id)
    candidates = GameRepository(db).list_others(game.id, limit=SIMILAR_CANDIDATE_LIMIT)
    similar = find_similar_games(game, candidates)
    cache.set(key, similar, settings.cache_similar_games_ttl)
    return {"similarGames": similar, "cached": False}
