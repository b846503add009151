"""Habit form definitions."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...stats.periods import Period


class HabitForm(BaseModel):
    """Payload for creating a habit."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(default="", description="Short label for the habit", max_length=100)
    description: str = Field(default="", description="Optional details about the habit", max_length=400)
    period: Period = Field(default=Period.DAILY, description="Habit recurrence")
    tags: list[str] = Field(default_factory=list, description="Free-form labels", max_length=20)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        """Ensure the habit title is present."""

        if not value or not value.strip():
            raise ValueError("Please provide a habit title.")
        return value

    @field_validator("period", mode="before")
    @classmethod
    def normalize_period(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class HabitUpdateForm(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None, max_length=400)
    period: Optional[Period] = None
    tags: Optional[list[str]] = Field(default=None, max_length=20)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("Please provide a habit title.")
        return value

    @field_validator("period", mode="before")
    @classmethod
    def normalize_period(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


__all__ = ["HabitForm", "HabitUpdateForm"]
