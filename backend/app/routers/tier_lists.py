"""
Tier list endpoints: CRUD, entry moves and similar-ranker recommendations.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.services import AffinityService

from ..auth.dependencies import get_current_user
from ..database import get_db
from ..dependencies import get_affinity_service
from ..models import User
from ..schemas import (
    TierListCreateRequest,
    TierListGameAddRequest,
    TierListGamesUpdateRequest,
    TierListUpdateRequest,
)
from ..services import tier_list_service

router = APIRouter(prefix="/tier-lists", tags=["tier-lists"])


@router.get("")
def list_tier_lists(
    list_type: str = Query(default="my", alias="type"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    affinity: AffinityService = Depends(get_affinity_service),
):
    """Caller's lists (`my`), others' public lists (`public`) or similar rankers (`similar`)."""
    return tier_list_service.list_tier_lists(db, current_user, list_type, affinity)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_tier_list(
    request: TierListCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return tier_list_service.create_tier_list(db, current_user, request)


@router.get("/{tier_list_id}")
def get_tier_list(
    tier_list_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return tier_list_service.get_tier_list(db, current_user, tier_list_id)


@router.patch("/{tier_list_id}")
def update_tier_list(
    tier_list_id: int,
    request: TierListUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return tier_list_service.update_tier_list(db, current_user, tier_list_id, request)


@router.delete("/{tier_list_id}")
def delete_tier_list(
    tier_list_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return tier_list_service.delete_tier_list(db, current_user, tier_list_id)


@router.post("/{tier_list_id}/games", status_code=status.HTTP_201_CREATED)
def add_game(
    tier_list_id: int,
    request: TierListGameAddRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return tier_list_service.add_game(db, current_user, tier_list_id, request)


@router.patch("/{tier_list_id}/games")
def move_games(
    tier_list_id: int,
    request: TierListGamesUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return tier_list_service.move_games(db, current_user, tier_list_id, request)


@router.delete("/{tier_list_id}/games")
def remove_game(
    tier_list_id: int,
    game_id: int | None = Query(default=None, alias="gameId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return tier_list_service.remove_game(db, current_user, tier_list_id, game_id)
