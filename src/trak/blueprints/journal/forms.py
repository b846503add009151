"""Journal form definitions."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class JournalForm(BaseModel):
    content: str = Field(default="", max_length=50_000)

    @field_validator("content")
    @classmethod
    def validate_content(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Journal entry cannot be empty.")
        return value


__all__ = ["JournalForm"]
