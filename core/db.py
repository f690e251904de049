"""
Database management layer.

Usage:
    from core.db import db, get_db, Base

    db.initialize()
    with db.session() as session:
        tier_list = session.get(TierList, 1)
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""

    pass


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    SQLite gets a single shared connection (StaticPool) and foreign keys
    switched on so that tier list entries cascade with their list.
    """
    settings = get_settings()

    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=echo,
        )

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        echo=echo,
    )


class DatabaseManager:
    """Owns the engine and session factory for the running process."""

    def __init__(self):
        self.engine: Engine | None = None
        self.SessionLocal: sessionmaker[Session] | None = None

    def initialize(self, database_url: str | None = None) -> None:
        """Create the engine. Repeated calls are ignored."""
        if self.engine is not None:
            return

        settings = get_settings()
        self.engine = build_engine(database_url or settings.database_url, echo=settings.debug)
        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )

    def create_all_tables(self) -> None:
        self._ensure_initialized()
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Context manager for database sessions with auto-commit/rollback.

        Usage:
            with db.session() as session:
                user = session.query(User).first()
        """
        self._ensure_initialized()
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self) -> bool:
        """Return True when a trivial query succeeds."""
        if self.engine is None:
            return False
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def _ensure_initialized(self) -> None:
        if self.engine is None:
            raise RuntimeError("DatabaseManager not initialized. Call initialize() first.")


db = DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.get("/lists")
        def list_entries(db: Session = Depends(get_db)):
            ...
    """
    with db.session() as session:
        yield session


__all__ = ["Base", "DatabaseManager", "build_engine", "db", "get_db"]
