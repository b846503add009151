"""Pytest configuration and shared fixtures for Trak tests.

Database fixtures point at a throwaway SQLite file per test so repositories and
services run against a real schema without touching the app database.
"""

from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from trak import create_app
from trak.config import TestConfig
from trak.infra.database import create_session_factory
from trak.infra.repositories import SQLModelHabitRepository, SQLModelJournalRepository
from trak.models import Habit, HabitCompletion, JournalEntry, User  # noqa: F401

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for a single test."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one repositories receive in the app."""
    return create_session_factory(db_engine)


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def journal_repo(session_factory) -> SQLModelJournalRepository:
    return SQLModelJournalRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


def _make_user(db_session, username: str) -> User:
    u = User(username=username, password_hash="dummy-hash")
    db_session.add(u)
    db_session.commit()
    db_session.refresh(u)
    return u


@pytest.fixture
def user(db_session) -> User:
    """Create a default user for scoping data."""
    return _make_user(db_session, "tester")


@pytest.fixture
def other_user(db_session) -> User:
    """A second user whose rows must never leak into the default user's queries."""
    return _make_user(db_session, "someone-else")


@pytest.fixture
def habit_factory(habit_repo, user):
    """Factory for creating test habits.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(
        title: str = "Test Habit",
        period: str = "daily",
        created_at: datetime | None = None,
        description: str = "",
        owner: User | None = None,
    ) -> Habit:
        owner = owner or user
        created_at = created_at or datetime(2024, 1, 1, 8, 0)
        habit = Habit(
            user_id=owner.id,
            title=title,
            description=description,
            period=period,
            created_at=created_at,
            updated_at=created_at,
        )
        return habit_repo.create(habit, user_id=owner.id)

    return _create_habit


@pytest.fixture
def complete(habit_repo, user):
    """Record completions for a habit at the given datetimes."""

    def _complete(habit: Habit, *moments: datetime, owner: User | None = None) -> None:
        owner = owner or user
        for moment in moments:
            habit_repo.add_completion(
                HabitCompletion(user_id=owner.id, habit_id=habit.id, completed_at=moment),
                user_id=owner.id,
            )

    return _complete


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app(tmp_path, monkeypatch):
    """Flask app wired to a database inside ``tmp_path``."""
    monkeypatch.setenv("TRAK_DATA_DIR", str(tmp_path))
    config = TestConfig(database_url=f"sqlite:///{tmp_path / 'api.db'}")
    return create_app(config=config)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    """Test client signed in as a freshly created user."""
    response = client.post("/auth/signup", json={"username": "ada", "password": "lovelace"})
    assert response.status_code == 201
    return client
