"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MarkStatus(str, Enum):
    """Explicit per-day mark recorded for a habit."""

    DONE = "done"
    MISSED = "missed"


class Habit(SQLModel, table=True):
    """A habit tracked day by day from its start date."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=120)
    start_date: date = Field(nullable=False, index=True)
    goal: str = Field(default="", max_length=255)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)

    marks: list["HabitMark"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "HabitMark",
            back_populates="habit",
            cascade="all, delete-orphan",
            order_by="HabitMark.day",
        ),
    )

    @property
    def status(self) -> dict[str, MarkStatus]:
        """Status map keyed by ISO date ("YYYY-MM-DD")."""

        return {mark.day.isoformat(): mark.status for mark in self.marks}


class HabitMark(SQLModel, table=True):
    """Explicit done/missed mark for a habit on one calendar day."""

    __tablename__: ClassVar[str] = "habit_mark"

    habit_id: int = Field(foreign_key="habit.id", primary_key=True)
    day: date = Field(primary_key=True, index=True)
    status: MarkStatus = Field(nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)

    habit: "Habit" = Relationship(
        back_populates="marks",
        sa_relationship=relationship("Habit", back_populates="marks"),
    )
