"""
Game catalog and per-user game list models.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, List, Optional

from sqlalchemy import (
    JSON,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.enums import GameStatus

from .base import Base

if TYPE_CHECKING:
    from .group import Group
    from .user import User


def _iso(value: datetime | None) -> str | None:
    """ISO-8601 in UTC. SQLite hands back naive datetimes, stored as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class Game(Base):
    """
    A game imported from an external catalog provider.

    List-valued metadata (genres, platforms, ...) is stored as JSON arrays.
    """

    __tablename__ = "games"
    __table_args__ = (
        UniqueConstraint("provider", "provider_game_id", name="uq_games_provider_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    provider: Mapped[str] = mapped_column(String(32), default="IGDB")
    provider_game_id: Mapped[str] = mapped_column(String(64))
    name: Mapped[str] = mapped_column(String(255), index=True)
    slug: Mapped[Optional[str]] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text)
    cover_url: Mapped[Optional[str]] = mapped_column(String(512))
    banner_url: Mapped[Optional[str]] = mapped_column(String(512))
    first_release_date: Mapped[Optional[datetime]] = mapped_column(DateTime)
    genres: Mapped[Optional[List[str]]] = mapped_column(JSON, default=list)
    platforms: Mapped[Optional[List[str]]] = mapped_column(JSON, default=list)
    themes: Mapped[Optional[List[str]]] = mapped_column(JSON, default=list)
    franchises: Mapped[Optional[List[str]]] = mapped_column(JSON, default=list)
    game_modes: Mapped[Optional[List[str]]] = mapped_column(JSON, default=list)
    videos: Mapped[Optional[List[str]]] = mapped_column(JSON, default=list)
    player_count: Mapped[Optional[str]] = mapped_column(String(64))
    rating: Mapped[Optional[float]] = mapped_column(Float)

    def to_summary(self) -> dict[str, Any]:
        """Fields used in search results."""
        return {
            "id": self.id,
            "providerGameId": self.provider_game_id,
            "name": self.name,
            "coverUrl": self.cover_url,
            "firstReleaseDate": _iso(self.first_release_date),
            "genres": self.genres or [],
            "platforms": self.platforms or [],
            "summary": self.description,
        }

    def to_detail(self) -> dict[str, Any]:
        """Full JSON-safe payload for the detail page (cached)."""
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "coverUrl": self.cover_url,
            "bannerUrl": self.banner_url,
            "firstReleaseDate": _iso(self.first_release_date),
            "genres": self.genres or [],
            "platforms": self.platforms or [],
            "themes": self.themes or [],
            "gameModes": self.game_modes or [],
            "playerCount": self.player_count,
            "videos": self.videos or [],
            "rating": self.rating,
        }


class UserGameEntry(Base):
    """A game on one of a user's lists (wishlist, now playing, ...)."""

    __tablename__ = "user_game_entries"
    __table_args__ = (
        UniqueConstraint("user_id", "game_id", name="uq_user_game_entries_user_game"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    game_id: Mapped[int] = mapped_column(ForeignKey("games.id", ondelete="CASCADE"), index=True)
    group_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("groups.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[GameStatus] = mapped_column(Enum(GameStatus, native_enum=False, length=16))
    platform: Mapped[Optional[str]] = mapped_column(String(64))
    rating: Mapped[Optional[int]] = mapped_column(Integer)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    started_at: Mapped[Optional[datetime]] = mapped_column(DateTime)
    finished_at: Mapped[Optional[datetime]] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship("User", back_populates="game_entries")
    game: Mapped["Game"] = relationship("Game")
    group: Mapped[Optional["Group"]] = relationship("Group")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "gameId": self.game_id,
            "groupId": self.group_id,
            "status": self.status.value,
            "platform": self.platform,
            "rating": self.rating,
            "notes": self.notes,
            "startedAt": _iso(self.started_at),
            "finishedAt": _iso(self.finished_at),
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }
