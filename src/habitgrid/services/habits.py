"""Per-day display state, monthly progress and streaks for habits."""

from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Any, Iterable, Mapping, Protocol

from ..models.habit import MarkStatus
from .calendar import MonthBounds, iso_key, iter_days, month_bounds


class DayState(str, Enum):
    """What the calendar shows for one habit on one day."""

    DISABLED = "disabled"
    DONE = "done"
    MISSED = "missed"
    TODAY = "today"
    FUTURE = "future"


class TrackedHabit(Protocol):
    """Anything with a start date and an ISO-keyed status map."""

    start_date: date

    @property
    def status(self) -> Mapping[str, Any]:  # pragma: no cover - interface
        ...


def _mark(status: Mapping[str, Any], day: date) -> MarkStatus | None:
    value = status.get(iso_key(day))
    if value is None:
        return None
    try:
        return MarkStatus(value)
    except ValueError:
        return None


def is_done(habit: TrackedHabit, day: date) -> bool:
    return _mark(habit.status, day) is MarkStatus.DONE


def _resolve_state(start_date: date, status: Mapping[str, Any], day: date, today: date) -> DayState:
    if day < start_date:
        return DayState.DISABLED

    mark = _mark(status, day)
    if mark is MarkStatus.DONE:
        return DayState.DONE
    if mark is MarkStatus.MISSED:
        return DayState.MISSED

    if day == today:
        return DayState.TODAY
    if day < today:
        return DayState.MISSED
    return DayState.FUTURE


def day_state(habit: TrackedHabit, day: date, *, today: date | None = None) -> DayState:
    """Resolve the display state of ``day``.

    Days before the start date are always disabled; otherwise an explicit
    mark wins over anything inferred from the current date.
    """

    return _resolve_state(habit.start_date, habit.status, day, today or date.today())


def month_day_states(
    habit: TrackedHabit, year: int, month: int, *, today: date | None = None
) -> dict[str, str]:
    """Map day-of-month ("1".."31") to its display state value."""

    today = today or date.today()
    bounds = month_bounds(year, month)
    status = habit.status
    return {
        str(day.day): _resolve_state(habit.start_date, status, day, today).value
        for day in bounds.days()
    }


def _div_half_up(numerator: int, denominator: int) -> int:
    # Half rounds away from zero (non-negative inputs), never to even.
    return (2 * numerator + denominator) // (2 * denominator)


def progress_window(
    habit: TrackedHabit, bounds: MonthBounds, *, today: date
) -> tuple[date, date] | None:
    """Return the eligible (start, end) window, or None when it is empty."""

    if habit.start_date > bounds.last:
        return None
    start = max(habit.start_date, bounds.first)
    viewing_future = (bounds.year, bounds.month) > (today.year, today.month - 1)
    end = bounds.last if viewing_future else min(today, bounds.last)
    if end < start:
        return None
    return start, end


def progress_for_month(
    habit: TrackedHabit, year: int, month: int, *, today: date | None = None
) -> int:
    """Percentage of eligible days in the month carrying an explicit done mark."""

    today = today or date.today()
    window = progress_window(habit, month_bounds(year, month), today=today)
    if window is None:
        return 0

    status = habit.status
    eligible = 0
    done = 0
    for day in iter_days(*window):
        eligible += 1
        if _mark(status, day) is MarkStatus.DONE:
            done += 1
    return _div_half_up(100 * done, max(eligible, 1))


def current_streak(habit: TrackedHabit, *, today: date | None = None) -> int:
    """Count consecutive done days ending today, not reaching before the start date."""

    cursor = today or date.today()
    status = habit.status
    streak = 0
    while cursor >= habit.start_date and _mark(status, cursor) is MarkStatus.DONE:
        streak += 1
        if cursor == date.min:
            break
        cursor -= timedelta(days=1)
    return streak


def longest_streak(habit: TrackedHabit, *, today: date | None = None) -> int:
    """Longest run of consecutive done days between the start date and today."""

    today = today or date.today()
    days = sorted(
        day
        for day in (_parse_key(key) for key, value in habit.status.items() if value == MarkStatus.DONE)
        if day is not None and habit.start_date <= day <= today
    )

    longest = 0
    run = 0
    last_day: date | None = None
    for d in days:
        if last_day is not None and (d - last_day).days == 1:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = d
    return longest


def _parse_key(key: str) -> date | None:
    try:
        return date.fromisoformat(key)
    except (TypeError, ValueError):
        return None


def serialize_habit(habit: Any) -> dict[str, Any]:
    """Plain JSON form of a stored habit, including its raw status map."""

    return {
        "id": habit.id,
        "name": habit.name,
        "goal": habit.goal or "",
        "startDate": habit.start_date.isoformat(),
        "startDay": habit.start_date.day,
        "status": {key: MarkStatus(value).value for key, value in sorted(habit.status.items())},
    }


def habit_month_view(
    habit: Any, year: int, month: int, *, today: date | None = None
) -> dict[str, Any]:
    """Enrich one habit with its day states, progress and streaks for a month."""

    today = today or date.today()
    return {
        "id": habit.id,
        "name": habit.name,
        "goal": habit.goal or "",
        "startDate": habit.start_date.isoformat(),
        "startDay": habit.start_date.day,
        "days": month_day_states(habit, year, month, today=today),
        "progress": progress_for_month(habit, year, month, today=today),
        "streak": current_streak(habit, today=today),
        "longestStreak": longest_streak(habit, today=today),
    }


def build_month_view(
    habits: Iterable[Any], year: int, month: int, *, today: date | None = None
) -> dict[str, Any]:
    """Payload for the month listing: bounds plus every enriched habit."""

    today = today or date.today()
    bounds = month_bounds(year, month)
    return {
        "year": bounds.year,
        "month": bounds.month,
        "daysInMonth": bounds.days_in_month,
        "habits": [
            habit_month_view(habit, bounds.year, bounds.month, today=today) for habit in habits
        ],
    }


def summarize_states(habit_views: Iterable[Mapping[str, Any]]) -> dict[str, int]:
    """Count done, missed and pending day states across all habits in view."""

    totals = {"done": 0, "missed": 0, "pending": 0}
    for view in habit_views:
        for state in view.get("days", {}).values():
            if state == DayState.DONE.value:
                totals["done"] += 1
            elif state == DayState.MISSED.value:
                totals["missed"] += 1
            else:
                totals["pending"] += 1
    return totals


def average_progress(habit_views: Iterable[Mapping[str, Any]]) -> int:
    """Mean progress across habits, rounded half up; 0 with no habits."""

    values = [int(view.get("progress", 0) or 0) for view in habit_views]
    if not values:
        return 0
    return _div_half_up(sum(values), len(values))


__all__ = [
    "DayState",
    "average_progress",
    "build_month_view",
    "current_streak",
    "day_state",
    "habit_month_view",
    "is_done",
    "longest_streak",
    "month_day_states",
    "progress_for_month",
    "progress_window",
    "serialize_habit",
    "summarize_states",
]
