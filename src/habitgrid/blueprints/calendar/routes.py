"""Calendar page routes.

Every mutation redirects back to the month it came from, so the page is
always re-rendered from a fresh read of the store.
"""

from __future__ import annotations


from flask import Response, flash, redirect, render_template, request, url_for

from ...charts import summary_chart_png
from ...errors import HabitGridError
from ...extensions import get_repository, today
from ...logging_config import get_logger
from ...services.calendar import normalize_month
from ...services.habits import build_month_view, summarize_states
from ..habits.forms import HabitCreateForm, MarkForm
from . import bp
from .view import build_calendar_page

logger = get_logger(__name__)


def _requested_month(source) -> tuple[int, int]:
    current = today()
    year = _coerce_int(source.get("year"), default=current.year)
    month = _coerce_int(source.get("month"), default=current.month - 1)
    year, month = normalize_month(year, month)
    if not 1 <= year <= 9999:
        return current.year, current.month - 1
    return year, month


def _coerce_int(raw: str | None, *, default: int) -> int:
    if raw is None or not str(raw).strip():
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        return default


def _back_to(year: int, month: int):
    return redirect(url_for("calendar.month_view", year=year, month=month))


def _report(exc: HabitGridError, action: str) -> None:
    logger.warning("Calendar %s failed: %s", action, exc.message)
    flash(f"Failed to {action}: {exc.public_message}", "error")


@bp.get("/")
def month_view():
    """Render the calendar grid for the requested month."""

    year, month = _requested_month(request.args)
    current = today()
    try:
        payload = build_month_view(get_repository().list_all(), year, month, today=current)
    except HabitGridError as exc:
        _report(exc, "load habits")
        payload = build_month_view([], year, month, today=current)

    page = build_calendar_page(payload, today=current)
    return render_template("calendar/index.html", page=page)


@bp.post("/habits")
def add_habit():
    """Create a habit starting in the viewed month."""

    year, month = _requested_month(request.form)
    try:
        form = HabitCreateForm.from_mapping(
            {
                "name": request.form.get("name", ""),
                "startDay": request.form.get("start_day") or None,
                "goal": request.form.get("goal", ""),
                "year": year,
                "month": month,
            }
        )
        habit = get_repository().create(form.name, form.resolve_start_date(today()), form.goal)
    except HabitGridError as exc:
        _report(exc, "add habit")
    else:
        flash(f"Added habit “{habit.name}”.", "success")
    return _back_to(year, month)


@bp.post("/habits/<int:habit_id>/toggle")
def toggle_habit(habit_id: int):
    """Flip one day between done and missed."""

    year, month = _requested_month(request.form)
    try:
        form = MarkForm.from_mapping(
            {"date": request.form.get("date", ""), "done": request.form.get("done", "")}
        )
        day = form.day
        get_repository().mark_date(habit_id, day, form.done)
    except HabitGridError as exc:
        _report(exc, "update habit status")
        return _back_to(year, month)
    return _back_to(day.year, day.month - 1)


@bp.post("/habits/<int:habit_id>/delete")
def delete_habit(habit_id: int):
    year, month = _requested_month(request.form)
    try:
        get_repository().delete(habit_id)
    except HabitGridError as exc:
        _report(exc, "delete habit")
    else:
        flash("Habit deleted.", "info")
    return _back_to(year, month)


@bp.get("/summary.png")
def summary_chart():
    """PNG pie of done/missed/pending counts for the month in view."""

    year, month = _requested_month(request.args)
    payload = build_month_view(get_repository().list_all(), year, month, today=today())
    png = summary_chart_png(summarize_states(payload["habits"]))
    return Response(png, mimetype="image/png", headers={"Cache-Control": "no-store"})

