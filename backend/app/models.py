"""
SQLAlchemy ORM models used by the API.

Re-exports from core.models:
    from backend.app.models import TierList, User
"""

from core.models import (
    Base,
    Game,
    Group,
    GroupMember,
    TierList,
    TierListGame,
    User,
    UserGameEntry,
)

__all__ = [
    "Base",
    "Game",
    "Group",
    "GroupMember",
    "TierList",
    "TierListGame",
    "User",
    "UserGameEntry",
]
