"""Base repository class with common CRUD operations."""

from typing import Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Usage:
        class GameRepository(BaseRepository[Game]):
            model = Game

        repo = GameRepository(session)
        game = repo.get_by_id(1)
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def _column(self, key: str):
        if not hasattr(self.model, key):
            raise ValueError(f"Unknown filter key for {self.model.__name__}: {key}")
        return getattr(self.model, key)

    def get_by_id(self, id: int) -> T | None:
        return self.session.get(self.model, id)

    def create(self, **kwargs) -> T:
        instance = self.model(**kwargs)
        self.session.add(instance)
        self.session.flush()
        return instance

    def delete(self, id: int) -> bool:
        """Delete a record by ID. Returns False when it did not exist."""
        instance = self.get_by_id(id)
        if instance:
            self.session.delete(instance)
            self.session.flush()
            return True
        return False

    def count(self, **filters) -> int:
        """Count records matching equality filters."""
        query = self.session.query(func.count(self.model.id))  # type: ignore[attr-defined]
        for key, value in filters.items():
            query = query.filter(self._column(key) == value)
        return query.scalar() or 0

    def exists_where(self, **filters) -> bool:
        query = self.session.query(self.model)
        for key, value in filters.items():
            query = query.filter(self._column(key) == value)
        return bool(self.session.query(query.exists()).scalar())
