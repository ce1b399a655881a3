"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import Habit, HabitMark


class HabitRepository(Protocol):
    """Repository for managing habits and their per-day marks."""

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit (with marks) by ID."""
        ...

    def list_all(self) -> list[Habit]:
        """List every habit in creation order."""
        ...

    def create(self, name: str, start_date: date, goal: str = "") -> Habit:
        """Create a new habit with an empty status map."""
        ...

    def delete(self, habit_id: int) -> None:
        """Delete a habit and its marks; raises NotFoundError if absent."""
        ...

    def mark_date(self, habit_id: int, day: date, done: bool) -> HabitMark:
        """Upsert the mark for ``day``; raises NotFoundError if the habit is absent."""
        ...

    def clear_mark(self, habit_id: int, day: date) -> None:
        """Remove an explicit mark; raises NotFoundError if the habit is absent."""
        ...
