"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, Optional

from sqlmodel import Session, col, func, select

from ...models.habit import Habit, HabitCompletion, HabitTag


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(
        self, *, user_id: int, period: Optional[str] = None, tag: Optional[str] = None
    ) -> list[Habit]:
        """List habits newest first, optionally filtered by period and by tag name."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .order_by(col(Habit.created_at).desc(), col(Habit.id).desc())
            )
            if period is not None:
                statement = statement.where(Habit.period == period)
            if tag is not None:
                tagged = select(HabitTag.habit_id).where(
                    HabitTag.user_id == user_id, HabitTag.name == tag
                )
                statement = statement.where(col(Habit.id).in_(tagged))

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            habit.user_id = user_id
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def update(self, habit: Habit, *, user_id: int) -> Habit:
        """Update an existing habit."""
        with self.session_factory() as session:
            habit.user_id = user_id
            habit.updated_at = datetime.now()
            habit = session.merge(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def delete(self, habit_id: int, *, user_id: int) -> None:
        """Delete a habit with its completions and tags."""
        with self.session_factory() as session:
            habit = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if habit is None:
                return
            completions = session.exec(
                select(HabitCompletion)
                .where(HabitCompletion.user_id == user_id)
                .where(HabitCompletion.habit_id == habit_id)
            ).all()
            for completion in completions:
                session.delete(completion)
            tags = session.exec(
                select(HabitTag)
                .where(HabitTag.user_id == user_id)
                .where(HabitTag.habit_id == habit_id)
            ).all()
            for tag in tags:
                session.delete(tag)
            session.delete(habit)
            session.commit()

    # Completion operations
    def add_completion(self, completion: HabitCompletion, *, user_id: int) -> HabitCompletion:
        """Record a completion."""
        with self.session_factory() as session:
            completion.user_id = user_id
            session.add(completion)
            session.commit()
            session.refresh(completion)
            session.expunge(completion)
            return completion

    def remove_completions_in_range(
        self, habit_id: int, start: datetime, end: datetime, *, user_id: int
    ) -> int:
        """Delete completions within ``[start, end]``; return how many were removed."""
        with self.session_factory() as session:
            rows = session.exec(
                select(HabitCompletion)
                .where(HabitCompletion.user_id == user_id)
                .where(HabitCompletion.habit_id == habit_id)
                .where(HabitCompletion.completed_at >= start)
                .where(HabitCompletion.completed_at <= end)
            ).all()
            for row in rows:
                session.delete(row)
            session.commit()
            return len(rows)

    def list_completions(
        self, *, user_id: int, habit_ids: Optional[Iterable[int]] = None
    ) -> list[HabitCompletion]:
        """List completions newest first, optionally for specific habits."""
        with self.session_factory() as session:
            statement = (
                select(HabitCompletion)
                .where(HabitCompletion.user_id == user_id)
                .order_by(col(HabitCompletion.completed_at).desc())
            )
            if habit_ids is not None:
                statement = statement.where(col(HabitCompletion.habit_id).in_(list(habit_ids)))

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def count_completions(self, habit_id: int, *, user_id: int) -> int:
        """Return the number of completions recorded for a habit."""
        with self.session_factory() as session:
            total = session.exec(
                select(func.count())
                .select_from(HabitCompletion)
                .where(HabitCompletion.user_id == user_id)
                .where(HabitCompletion.habit_id == habit_id)
            ).one()
            return int(total)

    # Tag operations
    def set_tags(self, habit_id: int, names: Iterable[str], *, user_id: int) -> list[HabitTag]:
        """Replace the tags of a habit with ``names``."""
        with self.session_factory() as session:
            existing = session.exec(
                select(HabitTag)
                .where(HabitTag.user_id == user_id)
                .where(HabitTag.habit_id == habit_id)
            ).all()
            for tag in existing:
                session.delete(tag)
            session.flush()

            now = datetime.now()
            tags = [
                HabitTag(user_id=user_id, habit_id=habit_id, name=name, created_at=now)
                for name in names
            ]
            session.add_all(tags)
            session.commit()
            for tag in tags:
                session.refresh(tag)
            session.expunge_all()
            return tags

    def list_tags(
        self, *, user_id: int, habit_ids: Optional[Iterable[int]] = None
    ) -> list[HabitTag]:
        """List tags newest first, optionally for specific habits."""
        with self.session_factory() as session:
            statement = (
                select(HabitTag)
                .where(HabitTag.user_id == user_id)
                .order_by(col(HabitTag.created_at).desc(), col(HabitTag.id).desc())
            )
            if habit_ids is not None:
                statement = statement.where(col(HabitTag.habit_id).in_(list(habit_ids)))

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows
