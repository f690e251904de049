"""
Game catalog endpoints. Responses are served from the cache when warm.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.cache import CacheBackend
from core.config import Settings, get_settings

from ..auth.dependencies import get_current_user
from ..database import get_db
from ..dependencies import get_cache
from ..models import User
from ..services import game_service

router = APIRouter(prefix="/games", tags=["games"], dependencies=[Depends(get_current_user)])


@router.get("/search")
def search_games(
    q: str | None = Query(default=None),
    db: Session = Depends(get_db),
    cache: CacheBackend = Depends(get_cache),
    settings: Settings = Depends(get_settings),
):
    return game_service.search_games(db, cache, settings, q)


@router.get("/{game_id}")
def get_game(
    game_id: int,
    db: Session = Depends(get_db),
    cache: CacheBackend = Depends(get_cache),
    settings: Settings = Depends(get_settings),
    current_user: User = Depends(get_current_user),
):
    return game_service.get_game_detail(db, cache, settings, current_user, game_id)


@router.get("/{game_id}/similar")
def get_similar_games(
    game_id: int,
    db: Session = Depends(get_db),
    cache: CacheBackend = Depends(get_cache),
    settings: Settings = Depends(get_settings),
):
    return game_service.get_similar_games(db, cache, settings, game_id)
