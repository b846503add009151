"""SQLModel implementation of Journal repository."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional

from sqlmodel import Session, col, select

from ...models.journal import JournalEntry


class SQLModelJournalRepository:
    """SQLModel-based journal repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_for_date(self, entry_date: date, *, user_id: int) -> Optional[JournalEntry]:
        """Get the entry written on ``entry_date``."""
        with self.session_factory() as session:
            obj = session.exec(
                select(JournalEntry)
                .where(JournalEntry.user_id == user_id)
                .where(JournalEntry.entry_date == entry_date)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def upsert_for_date(self, entry_date: date, content: str, *, user_id: int) -> JournalEntry:
        """Create or replace the entry for ``entry_date``."""
        with self.session_factory() as session:
            existing = session.exec(
                select(JournalEntry)
                .where(JournalEntry.user_id == user_id)
                .where(JournalEntry.entry_date == entry_date)
            ).first()

            if existing:
                existing.content = content
                existing.updated_at = datetime.now()
                entry = existing
            else:
                entry = JournalEntry(user_id=user_id, entry_date=entry_date, content=content)
            session.add(entry)
            session.commit()
            session.refresh(entry)
            session.expunge(entry)
            return entry

    def list_entries(
        self,
        *,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[JournalEntry]:
        """List entries newest first, optionally within a date range."""
        with self.session_factory() as session:
            statement = (
                select(JournalEntry)
                .where(JournalEntry.user_id == user_id)
                .order_by(col(JournalEntry.entry_date).desc())
            )
            if start_date is not None:
                statement = statement.where(JournalEntry.entry_date >= start_date)
            if end_date is not None:
                statement = statement.where(JournalEntry.entry_date <= end_date)

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def delete_for_date(self, entry_date: date, *, user_id: int) -> None:
        """Delete the entry for ``entry_date`` if present."""
        with self.session_factory() as session:
            entry = session.exec(
                select(JournalEntry)
                .where(JournalEntry.user_id == user_id)
                .where(JournalEntry.entry_date == entry_date)
            ).first()
            if entry:
                session.delete(entry)
                session.commit()
