"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import SQLModelHabitRepository, SQLModelJournalRepository
from .models.user import User


@dataclass(frozen=True)
class AppContext:
    """Configuration, repositories and the signed-in user, passed explicitly to callers."""

    config: BaseConfig
    session_factory: SessionFactory
    habit_repo: SQLModelHabitRepository
    journal_repo: SQLModelJournalRepository
    current_user: Optional[User] = None

    def require_user_id(self) -> int:
        """Return the current user id or raise if not set."""

        if self.current_user is None or self.current_user.id is None:
            raise RuntimeError("User is not authenticated")
        return self.current_user.id

    def for_user(self, user: Optional[User]) -> "AppContext":
        """Return a copy of this context bound to ``user``."""

        return replace(self, current_user=user)


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the database, repositories and an anonymous context."""

    if config is None:
        config = BaseConfig()

    _, session_factory = bootstrap_database(config)
    return AppContext(
        config=config,
        session_factory=session_factory,
        habit_repo=SQLModelHabitRepository(session_factory),
        journal_repo=SQLModelJournalRepository(session_factory),
    )


__all__ = ["AppContext", "create_app_context"]
