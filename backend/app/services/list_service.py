"""
List service - the caller's personal game lists (backlog, wishlist, ...).
"""

from datetime import datetime, timezone
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from core.enums import GameStatus
from core.logging import get_logger
from core.repositories import GameEntryRepository, GameRepository, GroupRepository

from ..models import User, UserGameEntry
from ..schemas import ListEntryCreateRequest, ListEntryUpdateRequest

logger = get_logger("api.list_service")

VALID_STATUSES = ", ".join(s.value for s in GameStatus)


def _parse_status(value: str | None) -> GameStatus:
    try:
        return GameStatus(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status. Must be one of: {VALID_STATUSES}",
        ) from None


def _utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _owned_entry(repo: GameEntryRepository, user: User, entry_id: int, action: str) -> UserGameEntry:
    entry = repo.get_by_id(entry_id)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found")
    if entry.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You do not have permission to {action} this entry",
        )
    return entry


def list_entries(db: Session, user: User, status_filter: str | None = None) -> dict[str, Any]:
    status_value = _parse_status(status_filter) if status_filter else None
    entries = GameEntryRepository(db).list_for_user(user.id, status=status_value)
    return {
        "entries": [
            {**entry.to_dict(), "game": entry.game.to_summary() if entry.game else None}
            for entry in entries
        ]
    }


def create_entry(db: Session, user: User, request: ListEntryCreateRequest) -> dict[str, Any]:
    """
    Add a game to one of the caller's lists.

    Raises:
        HTTPException: 400 for a missing game id, bad status or duplicate;
            404 for an unknown game; 403 when groupId names a group the
            caller is not in.
    """
    if request.game_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Game ID is required")
    status_value = _parse_status(request.status)

    if GameRepository(db).get_by_id(request.game_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")

    repo = GameEntryRepository(db)
    if repo.get_for_user(user.id, request.game_id) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Game is already in your lists",
        )

    if request.group_id is not None and not GroupRepository(db).is_member(request.group_id, user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You must be a member of the group",
        )

    entry = repo.add_entry(
        user.id,
        request.game_id,
        status_value,
        platform=request.platform,
        rating=request.rating,
        notes=request.notes,
        group_id=request.group_id,
    )
    db.commit()
    logger.info("list_entry_created", user_id=user.id, game_id=entry.game_id, status=status_value.value)
    return {"entry": entry.to_dict()}


def get_entry(db: Session, user: User, entry_id: int) -> dict[str, Any]:
    entry = _owned_entry(GameEntryRepository(db), user, entry_id, "access")
    return {
        "entry": {
            **entry.to_dict(),
            "game": entry.game.to_detail() if entry.game else None,
            "group": {"id": entry.group.id, "name": entry.group.name} if entry.group else None,
        }
    }


def update_entry(
    db: Session, user: User, entry_id: int, request: ListEntryUpdateRequest
) -> dict[str, Any]:
    """
    Partially update one of the caller's entries.

    Keys missing from the body are left alone. An empty platform or notes
    string clears the field.
    """
    repo = GameEntryRepository(db)
    entry = _owned_entry(repo, user, entry_id, "modify")

    fields = request.model_dump(exclude_unset=True)
    if "status" in fields:
        fields["status"] = _parse_status(fields["status"])
    for key in ("platform", "notes"):
        if key in fields:
            fields[key] = fields[key] or None
    for key in ("started_at", "finished_at"):
        if key in fields:
            fields[key] = _utc(fields[key])

    repo.update_entry(entry, **fields)
    db.commit()
    logger.info("list_entry_updated", user_id=user.id, entry_id=entry.id, fields=sorted(fields))
    return {"entry": {**entry.to_dict(), "game": entry.game.to_detail() if entry.game else None}}


def delete_entry(db: Session, user: User, entry_id: int) -> dict[str, Any]:
    repo = GameEntryRepository(db)
    entry = repo.get_by_id(entry_id)
    if entry is None or entry.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found")

    repo.delete(entry.id)
    db.commit()
    logger.info("list_entry_deleted", user_id=user.id, entry_id=entry_id)
    return {"success": True}
