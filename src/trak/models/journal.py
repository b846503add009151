"""Journal entry records."""

from __future__ import annotations

from datetime import date, datetime
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class JournalEntry(SQLModel, table=True):
    """One journal entry per user per calendar day."""

    __tablename__: ClassVar[str] = "journal_entry"
    __table_args__ = (UniqueConstraint("user_id", "entry_date", name="uq_journal_user_day"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    entry_date: date = Field(nullable=False, index=True)
    content: str = Field(default="", nullable=False)
    created_at: datetime = Field(default_factory=datetime.now, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.now, nullable=False)
