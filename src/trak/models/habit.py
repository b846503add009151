"""Habit, completion and tag records."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from ..stats.periods import Period


class Habit(SQLModel, table=True):
    """A user-defined habit with a daily, weekly or monthly recurrence."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=100, index=True)
    description: str = Field(default="", max_length=400)
    period: str = Field(default=Period.DAILY.value, nullable=False, max_length=16)
    created_at: datetime = Field(default_factory=datetime.now, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.now, nullable=False)

    @property
    def recurrence(self) -> Period:
        """Return the stored period as a ``Period``; unknown values raise."""

        return Period.coerce(self.period)


class HabitCompletion(SQLModel, table=True):
    """A single completion of a habit at a point in time."""

    __tablename__: ClassVar[str] = "habit_completion"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True)
    completed_at: datetime = Field(default_factory=datetime.now, nullable=False, index=True)


class HabitTag(SQLModel, table=True):
    """A free-form label attached to a habit."""

    __tablename__: ClassVar[str] = "habit_tag"
    __table_args__ = (UniqueConstraint("habit_id", "name", name="uq_habit_tag_name"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=32, index=True)
    created_at: datetime = Field(default_factory=datetime.now, nullable=False)
