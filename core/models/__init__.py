"""
SQLAlchemy models for NextUp.

Usage:
    from core.models import User, Game, TierList, TierListGame
"""

from .base import Base
from .game import Game, UserGameEntry
from .group import Group, GroupMember
from .tier_list import TierList, TierListGame
from .user import User

__all__ = [
    "Base",
    "User",
    "Group",
    "GroupMember",
    "Game",
    "UserGameEntry",
    "TierList",
    "TierListGame",
]
