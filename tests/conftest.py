"""
Pytest fixtures for NextUp tests.

Every test gets a fresh in-memory SQLite database.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "nextup-test-secret-key-0123456789abcdef")
os.environ.setdefault("CACHE_BACKEND", "memory")

import pytest  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from core.db import Base, build_engine  # noqa: E402
from core.enums import Tier  # noqa: E402
from core.models import Game, Group, GroupMember, TierList, TierListGame, User  # noqa: E402

TEST_DB_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh test database for each test."""
    engine = build_engine(TEST_DB_URL)
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )

    yield TEST_DB_URL, TestingSessionLocal, engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


# =============================================================================
# Builders
# =============================================================================


@pytest.fixture
def make_user():
    def _make(session, email: str = "player@example.com", name: str | None = "Player") -> User:
        user = User(email=email, name=name)
        session.add(user)
        session.flush()
        return user

    return _make


@pytest.fixture
def make_game():
    counter = {"n": 0}

    def _make(session, name: str = "Game", **fields) -> Game:
        counter["n"] += 1
        game = Game(
            provider="IGDB",
            provider_game_id=fields.pop("provider_game_id", f"igdb-{counter['n']}"),
            name=name,
            slug=fields.pop("slug", name.lower().replace(" ", "-")),
            **fields,
        )
        session.add(game)
        session.flush()
        return game

    return _make


@pytest.fixture
def make_group():
    def _make(session, name: str = "Squad", members: dict | None = None) -> Group:
        """members maps User -> GroupRole."""
        group = Group(name=name)
        session.add(group)
        session.flush()
        for user, role in (members or {}).items():
            session.add(GroupMember(group_id=group.id, user_id=user.id, role=role))
        session.flush()
        return group

    return _make


@pytest.fixture
def make_tier_list():
    def _make(
        session,
        name: str = "My list",
        user: User | None = None,
        group: Group | None = None,
        is_public: bool = False,
        rankings: dict | None = None,
    ) -> TierList:
        """rankings maps Game -> tier label."""
        tier_list = TierList(
            name=name,
            user_id=user.id if user else None,
            group_id=group.id if group else None,
            is_public=is_public,
        )
        session.add(tier_list)
        session.flush()
        for position, (game, tier) in enumerate((rankings or {}).items(), start=1):
            session.add(
                TierListGame(
                    tier_list_id=tier_list.id,
                    game_id=game.id,
                    tier=Tier(tier),
                    position=position,
                )
            )
        session.flush()
        return tier_list

    return _make
