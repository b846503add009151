"""SQLModel table exports."""

from .habit import Habit, HabitCompletion, HabitTag
from .journal import JournalEntry
from .user import User

__all__ = [
    "Habit",
    "HabitCompletion",
    "HabitTag",
    "JournalEntry",
    "User",
]
