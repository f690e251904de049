"""Tier list repository."""

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from core.enums import Tier
from core.models import Game, Group, TierList, TierListGame, User

from .base import BaseRepository


class TierListRepository(BaseRepository[TierList]):
    """
    Repository for TierList and TierListGame operations.

    Ranking reads used by affinity matching return rows ordered oldest
    list first, so a later row for the same (owner, game) reflects the most
    recently updated list.
    """

    model = TierList

    def __init__(self, session: Session):
        super().__init__(session)

    # =========================================================================
    # Lists
    # =========================================================================

    def _game_counts(self):
        return (
            self.session.query(
                TierListGame.tier_list_id.label("tier_list_id"),
                func.count(TierListGame.id).label("game_count"),
            )
            .group_by(TierListGame.tier_list_id)
            .subquery()
        )

    def list_for_user(self, user_id: int) -> list[tuple[TierList, int]]:
        """User's own lists with their game counts, most recently updated first."""
        counts = self._game_counts()
        rows = (
            self.session.query(TierList, func.coalesce(counts.c.game_count, 0))
            .outerjoin(counts, counts.c.tier_list_id == TierList.id)
            .filter(TierList.user_id == user_id)
            .order_by(TierList.updated_at.desc(), TierList.id.desc())
            .all()
        )
        return [(tier_list, int(count)) for tier_list, count in rows]

    def list_public(self, exclude_user_id: int, limit: int = 50) -> list[tuple[TierList, str | None, int]]:
        """Public lists not owned by exclude_user_id, with owner user name and game count."""
        counts = self._game_counts()
        rows = (
            self.session.query(TierList, User.name, func.coalesce(counts.c.game_count, 0))
            .outerjoin(User, TierList.user_id == User.id)
            .outerjoin(counts, counts.c.tier_list_id == TierList.id)
            .filter(TierList.is_public.is_(True))
            .filter(or_(TierList.user_id != exclude_user_id, TierList.user_id.is_(None)))
            .order_by(TierList.updated_at.desc(), TierList.id.desc())
            .limit(limit)
            .all()
        )
        return [(tier_list, name, int(count)) for tier_list, name, count in rows]

    # =========================================================================
    # Entries
    # =========================================================================

    def get_entries(self, tier_list_id: int) -> list[TierListGame]:
        """Entries ordered S..F, then by position within each tier."""
        entries = (
            self.session.query(TierListGame)
            .join(Game, TierListGame.game_id == Game.id)
            .filter(TierListGame.tier_list_id == tier_list_id)
            .all()
        )
        return sorted(entries, key=lambda e: (-e.tier.ordinal, e.position, e.id))

    def get_entry(self, tier_list_id: int, game_id: int) -> TierListGame | None:
        return (
            self.session.query(TierListGame)
            .filter(TierListGame.tier_list_id == tier_list_id, TierListGame.game_id == game_id)
            .first()
        )

    def next_position(self, tier_list_id: int, tier: Tier) -> int:
        current = (
            self.session.query(func.max(TierListGame.position))
            .filter(TierListGame.tier_list_id == tier_list_id, TierListGame.tier == tier)
            .scalar()
        )
        return (current or 0) + 1

    def add_game(self, tier_list: TierList, game_id: int, tier: Tier) -> TierListGame:
        entry = TierListGame(
            tier_list_id=tier_list.id,
            game_id=game_id,
            tier=tier,
            position=self.next_position(tier_list.id, tier),
        )
        self.session.add(entry)
        tier_list.touch()
        self.session.flush()
        return entry

    def move_games(self, tier_list: TierList, updates: list[tuple[int, Tier, int]]) -> int:
        """Apply (game_id, tier, position) moves. Returns how many entries changed."""
        moved = 0
        for game_id, tier, position in updates:
            moved += (
                self.session.query(TierListGame)
                .filter(
                    TierListGame.tier_list_id == tier_list.id,
                    TierListGame.game_id == game_id,
                )
                .update({"tier": tier, "position": position}, synchronize_session=False)
            )
        tier_list.touch()
        self.session.flush()
        return moved

    def remove_game(self, tier_list: TierList, game_id: int) -> bool:
        removed = (
            self.session.query(TierListGame)
            .filter(TierListGame.tier_list_id == tier_list.id, TierListGame.game_id == game_id)
            .delete(synchronize_session=False)
        )
        tier_list.touch()
        self.session.flush()
        return bool(removed)

    # =========================================================================
    # Rankings for affinity matching
    # =========================================================================

    def owner_rankings(self, user_id: int) -> list[tuple[int, Tier]]:
        """(game_id, tier) across every list the user owns, public or not."""
        return [
            (game_id, tier)
            for game_id, tier in (
                self.session.query(TierListGame.game_id, TierListGame.tier)
                .join(TierList, TierListGame.tier_list_id == TierList.id)
                .filter(TierList.user_id == user_id)
                .order_by(TierList.updated_at, TierList.id, TierListGame.id)
                .all()
            )
        ]

    def public_rankings(self, exclude_user_id: int) -> list[tuple]:
        """
        Rows from other owners' public lists.

        Each row is (user_id, user_name, group_id, group_name, game_id, tier);
        exactly one of user_id / group_id is set.
        """
        return (
            self.session.query(
                TierList.user_id,
                User.name,
                TierList.group_id,
                Group.name,
                TierListGame.game_id,
                TierListGame.tier,
            )
            .join(TierListGame, TierListGame.tier_list_id == TierList.id)
            .outerjoin(User, TierList.user_id == User.id)
            .outerjoin(Group, TierList.group_id == Group.id)
            .filter(TierList.is_public.is_(True))
            .filter(or_(TierList.user_id != exclude_user_id, TierList.user_id.is_(None)))
            .order_by(TierList.updated_at, TierList.id, TierListGame.id)
            .all()
        )
