"""
Tier list service - access rules and request validation for tier list endpoints.

Uses TierListRepository for database access and AffinityService for the
"similar rankers" view.
"""

from typing import Any

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from core.enums import TIER_ORDER, GroupRole, Tier
from core.logging import get_logger
from core.repositories import GameRepository, GroupRepository, TierListRepository
from core.services import AffinityService

from ..models import TierList, User
from ..schemas import (
    TierListCreateRequest,
    TierListGameAddRequest,
    TierListGamesUpdateRequest,
    TierListUpdateRequest,
)

logger = get_logger("api.tier_list_service")

MAX_NAME_LENGTH = 100
LIST_TYPES = ("my", "public", "similar")


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _access_denied() -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")


def _parse_tier(label: str | None, detail: str) -> Tier:
    try:
        return Tier.parse(label or "")
    except ValueError:
        raise _bad_request(detail) from None


def _clean_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise _bad_request("Name is required")
    if len(cleaned) > MAX_NAME_LENGTH:
        raise _bad_request(f"Name must be {MAX_NAME_LENGTH} characters or less")
    return cleaned


def _group_role(db: Session, tier_list: TierList, user: User) -> GroupRole | None:
    if tier_list.group_id is None:
        return None
    membership = GroupRepository(db).get_membership(tier_list.group_id, user.id)
    return membership.role if membership else None


def _get_or_404(repo: TierListRepository, tier_list_id: int) -> TierList:
    tier_list = repo.get_by_id(tier_list_id)
    if tier_list is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tier list not found")
    return tier_list


def _require(db: Session, tier_list: TierList, user: User, roles: tuple[GroupRole, ...]) -> None:
    """Allow the owning user, or a member of the owning group holding one of roles."""
    if tier_list.user_id is not None and tier_list.user_id == user.id:
        return
    if _group_role(db, tier_list, user) in roles:
        return
    raise _access_denied()


# =============================================================================
# Lists
# =============================================================================


def list_tier_lists(
    db: Session, user: User, list_type: str, affinity: AffinityService
) -> dict[str, Any]:
    """
    Return the caller's lists, other people's public lists, or similar rankers.

    Raises:
        HTTPException: 400 for an unknown list_type.
    """
    repo = TierListRepository(db)

    if list_type == "my":
        return {
            "tierLists": [
                {**tier_list.to_dict(), "gameCount": count}
                for tier_list, count in repo.list_for_user(user.id)
            ]
        }

    if list_type == "public":
        return {
            "tierLists": [
                {
                    **tier_list.to_dict(),
                    "gameCount": count,
                    "ownerName": owner_name or "Unknown",
                }
                for tier_list, owner_name, count in repo.list_public(user.id)
            ]
        }

    if list_type == "similar":
        return {"recommendations": affinity.find_similar(user.id).to_dict()}

    raise _bad_request("Invalid type parameter")


def create_tier_list(db: Session, user: User, request: TierListCreateRequest) -> dict[str, Any]:
    name = _clean_name(request.name)
    repo = TierListRepository(db)

    if request.group_id is not None:
        if not GroupRepository(db).is_member(request.group_id, user.id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You must be a member of the group",
            )
        tier_list = repo.create(
            name=name,
            description=request.description,
            group_id=request.group_id,
            is_public=request.is_public,
        )
    else:
        tier_list = repo.create(
            name=name,
            description=request.description,
            user_id=user.id,
            is_public=request.is_public,
        )

    db.commit()
    logger.info("tier_list_created", tier_list_id=tier_list.id, user_id=user.id)
    return {"tierList": {**tier_list.to_dict(), "gameCount": 0}}


def get_tier_list(db: Session, user: User, tier_list_id: int) -> dict[str, Any]:
    """
    Return list metadata and its games grouped by tier, S first.

    Visible to the owner, to anyone when public, and to members of the
    owning group.
    """
    repo = TierListRepository(db)
    tier_list = _get_or_404(repo, tier_list_id)

    is_owner = tier_list.user_id is not None and tier_list.user_id == user.id
    if not (is_owner or tier_list.is_public or _group_role(db, tier_list, user) is not None):
        raise _access_denied()

    tiers: dict[str, list[dict[str, Any]]] = {tier.value: [] for tier in TIER_ORDER}
    for entry in repo.get_entries(tier_list.id):
        tiers[entry.tier.value].append(entry.to_dict())

    return {"tierList": {**tier_list.to_dict(), "isOwner": is_owner}, "tiers": tiers}


def update_tier_list(
    db: Session, user: User, tier_list_id: int, request: TierListUpdateRequest
) -> dict[str, Any]:
    repo = TierListRepository(db)
    tier_list = _get_or_404(repo, tier_list_id)
    _require(db, tier_list, user, (GroupRole.OWNER, GroupRole.ADMIN))

    changes = request.model_dump(exclude_unset=True)
    if "name" in changes:
        if not (changes["name"] or "").strip():
            raise _bad_request("Name cannot be empty")
        changes["name"] = _clean_name(changes["name"])

    for field, value in changes.items():
        if field == "is_public" and value is None:
            continue
        if field in ("categories", "platforms", "game_modes") and value is None:
            value = []
        setattr(tier_list, field, value)
    tier_list.touch()

    db.commit()
    logger.info("tier_list_updated", tier_list_id=tier_list.id, fields=sorted(changes))
    return {"tierList": tier_list.to_dict()}


def delete_tier_list(db: Session, user: User, tier_list_id: int) -> dict[str, Any]:
    repo = TierListRepository(db)
    tier_list = _get_or_404(repo, tier_list_id)
    _require(db, tier_list, user, (GroupRole.OWNER,))

    repo.delete(tier_list.id)
    db.commit()
    logger.info("tier_list_deleted", tier_list_id=tier_list_id, user_id=user.id)
    return {"success": True}


# =============================================================================
# Entries
# =============================================================================


def _editable(db: Session, user: User, tier_list_id: int) -> tuple[TierListRepository, TierList]:
    repo = TierListRepository(db)
    tier_list = _get_or_404(repo, tier_list_id)
    _require(db, tier_list, user, tuple(GroupRole))
    return repo, tier_list


def add_game(
    db: Session, user: User, tier_list_id: int, request: TierListGameAddRequest
) -> dict[str, Any]:
    repo, tier_list = _editable(db, user, tier_list_id)

    if request.game_id is None:
        raise _bad_request("Game ID is required")
    tier = _parse_tier(request.tier, "Valid tier is required (S, A, B, C, D, F)")

    if GameRepository(db).get_by_id(request.game_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")
    if repo.get_entry(tier_list.id, request.game_id) is not None:
        raise _bad_request("Game is already in this tier list")

    entry = repo.add_game(tier_list, request.game_id, tier)
    db.commit()
    logger.info(
        "tier_list_game_added",
        tier_list_id=tier_list.id,
        game_id=entry.game_id,
        tier=tier.value,
        position=entry.position,
    )
    return {"entry": entry.to_dict()}


def move_games(
    db: Session, user: User, tier_list_id: int, request: TierListGamesUpdateRequest
) -> dict[str, Any]:
    """Apply a batch of tier/position moves; nothing is written unless every move is valid."""
    repo, tier_list = _editable(db, user, tier_list_id)

    if request.updates is None:
        raise _bad_request("Updates array is required")

    moves: list[tuple[int, Tier, int]] = []
    for update in request.updates:
        if update.game_id is None:
            raise _bad_request("Each update must have a gameId")
        tier = _parse_tier(update.tier, "Each update must have a valid tier")
        if update.position is None:
            raise _bad_request("Each update must have a position")
        moves.append((update.game_id, tier, update.position))

    moved = repo.move_games(tier_list, moves)
    db.commit()
    logger.info("tier_list_games_moved", tier_list_id=tier_list.id, requested=len(moves), moved=moved)
    return {"success": True}


def remove_game(db: Session, user: User, tier_list_id: int, game_id: int | None) -> dict[str, Any]:
    repo, tier_list = _editable(db, user, tier_list_id)

    if game_id is None:
        raise _bad_request("Game ID is required")

    repo.remove_game(tier_list, game_id)
    db.commit()
    logger.info("tier_list_game_removed", tier_list_id=tier_list.id, game_id=game_id)
    return {"success": True}
