"""Blueprint exports."""

from . import calendar, habits, home

__all__ = [
    "calendar",
    "habits",
    "home",
]
