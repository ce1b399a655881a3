"""Domain services: calendar arithmetic and habit progress."""

from . import calendar, habits

__all__ = ["calendar", "habits"]
