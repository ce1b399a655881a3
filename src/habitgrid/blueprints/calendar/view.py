"""View-model for the month calendar page.

Everything the template needs is derived from the month payload returned by
:func:`habitgrid.services.habits.build_month_view`, so the page renders the
same states the JSON API reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping

from ...services.calendar import iso_key, month_bounds, shift_month
from ...services.habits import DayState, average_progress, summarize_states

DISABLED_TITLE = "This habit starts later than this day"


@dataclass
class Pill:
    habit_id: int
    name: str
    state: str
    progress: int
    streak: int
    iso_date: str

    @property
    def clickable(self) -> bool:
        return self.state != DayState.DISABLED.value

    @property
    def next_done(self) -> bool:
        """Clicking a done pill marks it missed; anything else becomes done."""
        return self.state != DayState.DONE.value

    @property
    def title(self) -> str:
        if not self.clickable:
            return DISABLED_TITLE
        return f"Mark {'done' if self.next_done else 'missed'}"


@dataclass
class DayCell:
    day: int
    weekday: str
    iso_date: str
    is_today: bool
    pills: list[Pill] = field(default_factory=list)


@dataclass
class CalendarPage:
    year: int
    month: int
    month_label: str
    prev_year: int
    prev_month: int
    next_year: int
    next_month: int
    habit_count: int
    average_progress: int
    summary: dict[str, int]
    cells: list[DayCell]
    habits: list[Mapping[str, Any]]

    @property
    def habit_count_label(self) -> str:
        return f"{self.habit_count} habit{'' if self.habit_count == 1 else 's'}"


def build_calendar_page(payload: Mapping[str, Any], *, today: date) -> CalendarPage:
    """Lay the month payload out as one cell per day with one pill per habit."""

    bounds = month_bounds(payload["year"], payload["month"])
    habits = list(payload.get("habits", []))

    cells: list[DayCell] = []
    for day in bounds.days():
        key = str(day.day)
        cell = DayCell(
            day=day.day,
            weekday=day.strftime("%a"),
            iso_date=iso_key(day),
            is_today=day == today,
        )
        for habit in habits:
            cell.pills.append(
                Pill(
                    habit_id=habit["id"],
                    name=habit["name"],
                    state=habit["days"].get(key, DayState.FUTURE.value),
                    progress=habit.get("progress", 0),
                    streak=habit.get("streak", 0),
                    iso_date=cell.iso_date,
                )
            )
        cells.append(cell)

    prev_year, prev_month = shift_month(bounds.year, bounds.month, -1)
    next_year, next_month = shift_month(bounds.year, bounds.month, 1)
    return CalendarPage(
        year=bounds.year,
        month=bounds.month,
        month_label=bounds.first.strftime("%B %Y"),
        prev_year=prev_year,
        prev_month=prev_month,
        next_year=next_year,
        next_month=next_month,
        habit_count=len(habits),
        average_progress=average_progress(habits),
        summary=summarize_states(habits),
        cells=cells,
        habits=habits,
    )


__all__ = ["CalendarPage", "DayCell", "Pill", "build_calendar_page"]
