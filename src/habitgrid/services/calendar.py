"""Calendar arithmetic shared by every progress computation.

Months are zero-based (January == 0) throughout, matching the query
parameters of the HTTP API. All values are plain :class:`datetime.date`
objects so no time-of-day or timezone offset can shift a day boundary.
"""

from __future__ import annotations

import re
from calendar import monthrange
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator

from ..errors import ValidationError

_ISO_KEY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class MonthBounds:
    """First/last calendar day of a (normalised) month."""

    year: int
    month: int  # zero-based
    first: date
    last: date
    days_in_month: int

    def days(self) -> Iterator[date]:
        """Yield every calendar day of the month in order."""
        return iter_days(self.first, self.last)

    def contains(self, day: date) -> bool:
        return self.first <= day <= self.last


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """Roll an out-of-range zero-based month into the neighbouring years.

    >>> normalize_month(2024, 13)
    (2025, 1)
    >>> normalize_month(2024, -1)
    (2023, 11)
    """
    extra_years, month = divmod(month, 12)
    return year + extra_years, month


def month_bounds(year: int, month: int) -> MonthBounds:
    """Return the bounds of ``month`` (zero-based) in ``year``."""

    year, month = normalize_month(year, month)
    if not 1 <= year <= 9999:
        raise ValidationError(f"year out of range: {year}")
    days_in_month = monthrange(year, month + 1)[1]
    return MonthBounds(
        year=year,
        month=month,
        first=date(year, month + 1, 1),
        last=date(year, month + 1, days_in_month),
        days_in_month=days_in_month,
    )


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Return the (year, zero-based month) ``delta`` months away."""
    return normalize_month(year, month + delta)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each day from ``start`` through ``end`` inclusive."""
    if end < start:
        return
    cursor = start
    while True:
        yield cursor
        # Stepping past date.max would overflow.
        if cursor >= end:
            return
        cursor += timedelta(days=1)


def iso_key(day: date) -> str:
    """Format a status-map key ("YYYY-MM-DD")."""
    return day.isoformat()


def parse_iso_key(value: object) -> date:
    """Parse a strict "YYYY-MM-DD" key; raise ValidationError otherwise."""

    if not isinstance(value, str) or not _ISO_KEY.match(value.strip()):
        raise ValidationError("date must be formatted as YYYY-MM-DD")
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValidationError(f"invalid calendar date: {value}") from exc


__all__ = [
    "MonthBounds",
    "iso_key",
    "iter_days",
    "month_bounds",
    "normalize_month",
    "parse_iso_key",
    "shift_month",
]
