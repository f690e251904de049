"""
Repository pattern implementations for data access.

Usage:
    from core.repositories import TierListRepository
    from core.db import db

    with db.session() as session:
        repo = TierListRepository(session)
        lists = repo.list_for_user(user_id)
"""

from .base import BaseRepository
from .game_repository import GameEntryRepository, GameRepository
from .group_repository import GroupRepository
from .tier_list_repository import TierListRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "GameEntryRepository",
    "GameRepository",
    "GroupRepository",
    "TierListRepository",
    "UserRepository",
]
