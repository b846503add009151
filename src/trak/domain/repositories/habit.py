"""Habit repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol

from ...models.habit import Habit, HabitCompletion, HabitTag


class HabitRepository(Protocol):
    """Repository for habits and their completions, scoped to one user per call."""

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_all(
        self, *, user_id: int, period: Optional[str] = None, tag: Optional[str] = None
    ) -> list[Habit]:
        """List habits, optionally filtered by period and by tag name."""
        ...

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        ...

    def update(self, habit: Habit, *, user_id: int) -> Habit:
        """Update an existing habit."""
        ...

    def delete(self, habit_id: int, *, user_id: int) -> None:
        """Delete a habit with its completions and tags."""
        ...

    # Completion operations
    def add_completion(self, completion: HabitCompletion, *, user_id: int) -> HabitCompletion:
        """Record a completion."""
        ...

    def remove_completions_in_range(
        self, habit_id: int, start: datetime, end: datetime, *, user_id: int
    ) -> int:
        """Delete completions within ``[start, end]``; return how many were removed."""
        ...

    def list_completions(
        self, *, user_id: int, habit_ids: Optional[Iterable[int]] = None
    ) -> list[HabitCompletion]:
        """List completions newest first, optionally for specific habits."""
        ...

    def count_completions(self, habit_id: int, *, user_id: int) -> int:
        """Return the number of completions recorded for a habit."""
        ...

    # Tag operations
    def set_tags(self, habit_id: int, names: Iterable[str], *, user_id: int) -> list[HabitTag]:
        """Replace the tags of a habit with ``names``."""
        ...

    def list_tags(
        self, *, user_id: int, habit_ids: Optional[Iterable[int]] = None
    ) -> list[HabitTag]:
        """List tags newest first, optionally for specific habits."""
        ...
