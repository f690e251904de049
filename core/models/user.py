"""
User model.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .game import UserGameEntry
    from .group import GroupMember
    from .tier_list import TierList


class User(Base):
    """
    A NextUp account.

    Attributes:
        name: Display name shown on public tier lists and affinity results
        email: Login email (unique)
        image_url: Avatar URL
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(512))
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    memberships: Mapped[list["GroupMember"]] = relationship("GroupMember", back_populates="user")
    tier_lists: Mapped[list["TierList"]] = relationship("TierList", back_populates="user")
    game_entries: Mapped[list["UserGameEntry"]] = relationship(
        "UserGameEntry", back_populates="user"
    )
