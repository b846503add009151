"""Journal repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.journal import JournalEntry


class JournalRepository(Protocol):
    """Repository for daily journal entries."""

    def get_for_date(self, entry_date: date, *, user_id: int) -> Optional[JournalEntry]:
        """Get the entry written on ``entry_date``."""
        ...

    def upsert_for_date(self, entry_date: date, content: str, *, user_id: int) -> JournalEntry:
        """Create or replace the entry for ``entry_date``."""
        ...

    def list_entries(
        self,
        *,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[JournalEntry]:
        """List entries newest first, optionally within a date range."""
        ...

    def delete_for_date(self, entry_date: date, *, user_id: int) -> None:
        """Delete the entry for ``entry_date`` if present."""
        ...
