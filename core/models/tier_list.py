"""
Tier list models.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.enums import Tier

from .base import Base
from .game import _iso

if TYPE_CHECKING:
    from .game import Game
    from .group import Group
    from .user import User


class TierList(Base):
    """
    An S..F ranking of games, owned by a user or by a group.

    Exactly one of user_id / group_id is set.
    """

    __tablename__ = "tier_lists"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[Optional[str]] = mapped_column(Text)
    user_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=True
    )
    group_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("groups.id", ondelete="CASCADE"), index=True, nullable=True
    )
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    categories: Mapped[Optional[List[str]]] = mapped_column(JSON, default=list)
    platforms: Mapped[Optional[List[str]]] = mapped_column(JSON, default=list)
    game_modes: Mapped[Optional[List[str]]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )

    user: Mapped[Optional["User"]] = relationship("User", back_populates="tier_lists")
    group: Mapped[Optional["Group"]] = relationship("Group", back_populates="tier_lists")
    games: Mapped[list["TierListGame"]] = relationship(
        "TierListGame",
        back_populates="tier_list",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "userId": self.user_id,
            "groupId": self.group_id,
            "isPublic": self.is_public,
            "categories": self.categories or [],
            "platforms": self.platforms or [],
            "gameModes": self.game_modes or [],
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


class TierListGame(Base):
    """A game placed in one tier of a tier list."""

    __tablename__ = "tier_list_games"
    __table_args__ = (
        UniqueConstraint("tier_list_id", "game_id", name="uq_tier_list_games_list_game"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tier_list_id: Mapped[int] = mapped_column(
        ForeignKey("tier_lists.id", ondelete="CASCADE"), index=True
    )
    game_id: Mapped[int] = mapped_column(ForeignKey("games.id", ondelete="CASCADE"), index=True)
    tier: Mapped[Tier] = mapped_column(Enum(Tier, native_enum=False, length=1))
    position: Mapped[int] = mapped_column(Integer, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )

    tier_list: Mapped["TierList"] = relationship("TierList", back_populates="games")
    game: Mapped["Game"] = relationship("Game")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "gameId": self.game_id,
            "tier": self.tier.value,
            "position": self.position,
            "game": self.game.to_summary() if self.game else None,
        }
