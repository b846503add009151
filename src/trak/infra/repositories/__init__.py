"""Concrete repository implementations using SQLModel."""

from .habit import SQLModelHabitRepository
from .journal import SQLModelJournalRepository

__all__ = ["SQLModelHabitRepository", "SQLModelJournalRepository"]
