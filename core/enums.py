"""
Shared enumerations.

Tier labels carry an explicit ordinal table; code that compares or
subtracts tiers must go through `Tier.ordinal`, never the label string.
"""

from enum import Enum


class Tier(str, Enum):
    """Tier list bucket, best (S) to worst (F)."""
    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"

    @property
    def ordinal(self) -> int:
        return TIER_ORDINALS[self]

    @classmethod
    def parse(cls, label: str) -> "Tier":
        """Parse a tier label, raising ValueError for anything outside S..F."""
        try:
            return cls(label)
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(f"Invalid tier {label!r}. Must be one of: {valid}") from None


TIER_ORDINALS: dict[Tier, int] = {
    Tier.S: 6,
    Tier.A: 5,
    Tier.B: 4,
    Tier.C: 3,
    Tier.D: 2,
    Tier.F: 1,
}

# Display order, S first
TIER_ORDER: tuple[Tier, ...] = tuple(sorted(Tier, key=lambda t: -TIER_ORDINALS[t]))


class CandidateKind(str, Enum):
    """Who owns a ranking that can be matched against."""
    USER = "user"
    GROUP = "group"


class GroupRole(str, Enum):
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class GameStatus(str, Enum):
    """Where a game sits in a user's personal lists."""
    NOW_PLAYING = "NOW_PLAYING"
    FINISHED = "FINISHED"
    DROPPED = "DROPPED"
    BACKLOG = "BACKLOG"
    WISHLIST = "WISHLIST"
    FAVORITE = "FAVORITE"
