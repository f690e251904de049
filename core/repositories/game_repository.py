"""Game catalog and game list repositories."""

from datetime import datetime, timezone

from core.enums import GameStatus
from core.models import Game, UserGameEntry

from .base import BaseRepository


class GameRepository(BaseRepository[Game]):
    """Repository for Game operations."""

    model = Game

    def search_by_name(self, query: str, limit: int = 20) -> list[Game]:
        """Case-insensitive substring match on the game name. `%` and `_` match literally."""
        escaped = query.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        return (
            self.session.query(Game)
            .filter(Game.name.ilike(pattern, escape="\\"))
            .order_by(Game.name)
            .limit(limit)
            .all()
        )

    def list_others(self, game_id: int, limit: int = 100) -> list[Game]:
        """Candidate pool for similar-game scoring."""
        return (
            self.session.query(Game)
            .filter(Game.id != game_id)
            .order_by(Game.id)
            .limit(limit)
            .all()
        )


class GameEntryRepository(BaseRepository[UserGameEntry]):
    """Repository for a user's game list entries."""

    model = UserGameEntry

    def get_for_user(self, user_id: int, game_id: int) -> UserGameEntry | None:
        return (
            self.session.query(UserGameEntry)
            .filter(UserGameEntry.user_id == user_id, UserGameEntry.game_id == game_id)
            .first()
        )

    def list_for_user(self, user_id: int, status: GameStatus | None = None) -> list[UserGameEntry]:
        query = self.session.query(UserGameEntry).filter(UserGameEntry.user_id == user_id)
        if status is not None:
            query = query.filter(UserGameEntry.status == status)
        return query.order_by(UserGameEntry.updated_at.desc(), UserGameEntry.id.desc()).all()

    def add_entry(
        self,
        user_id: int,
        game_id: int,
        status: GameStatus,
        **fields,
    ) -> UserGameEntry:
        now = datetime.now(timezone.utc)
        return self.create(
            user_id=user_id,
            game_id=game_id,
            status=status,
            created_at=now,
            updated_at=now,
            **fields,
        )

    def update_entry(self, entry: UserGameEntry, **fields) -> UserGameEntry:
        """Apply fields to an entry and bump its updated_at."""
        for key, value in fields.items():
            self._column(key)
            setattr(entry, key, value)
        entry.updated_at = datetime.now(timezone.utc)
        self.session.flush()
        return entry
