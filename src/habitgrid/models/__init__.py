"""SQLModel table exports."""

from .habit import Habit, HabitMark, MarkStatus

__all__ = [
    "Habit",
    "HabitMark",
    "MarkStatus",
]
