"""
Personal game list endpoints.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..auth.dependencies import get_current_user
from ..database import get_db
from ..models import User
from ..schemas import ListEntryCreateRequest, ListEntryUpdateRequest
from ..services import list_service

router = APIRouter(prefix="/lists", tags=["lists"])


@router.get("")
def list_entries(
    status_filter: str | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Caller's entries, most recently updated first."""
    return list_service.list_entries(db, current_user, status_filter)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_entry(
    request: ListEntryCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return list_service.create_entry(db, current_user, request)


@router.get("/{entry_id}")
def get_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return list_service.get_entry(db, current_user, entry_id)


@router.patch("/{entry_id}")
def update_entry(
    entry_id: int,
    request: ListEntryUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Change status, platform, rating, notes or play dates."""
    return list_service.update_entry(db, current_user, entry_id, request)


@router.delete("/{entry_id}")
def delete_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return list_service.delete_entry(db, current_user, entry_id)
