"""Habit API routes."""

from __future__ import annotations

from typing import Any

from flask import jsonify, request

from ...errors import NotFoundError
from ...extensions import get_repository, today
from ...services.calendar import parse_iso_key
from ...services.habits import build_month_view, serialize_habit
from . import bp
from .forms import HabitCreateForm, MarkForm


def _coerce_int(raw: str | None, *, default: int) -> int:
    """Parse an integer query parameter, falling back to ``default``."""

    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _json_body() -> dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


@bp.get("")
def list_habits():
    """Every habit enriched with day states, progress and streaks for a month."""

    current = today()
    year = _coerce_int(request.args.get("year"), default=current.year)
    month = _coerce_int(request.args.get("month"), default=current.month - 1)

    habits = get_repository().list_all()
    return jsonify(build_month_view(habits, year, month, today=current))


@bp.post("")
def create_habit():
    """Create a habit starting on a (clamped) day of the requested month."""

    form = HabitCreateForm.from_mapping(_json_body())
    start_date = form.resolve_start_date(today())
    habit = get_repository().create(form.name, start_date, form.goal)
    return jsonify(serialize_habit(habit)), 201


@bp.get("/<int:habit_id>")
def get_habit(habit_id: int):
    habit = get_repository().get_by_id(habit_id)
    if habit is None:
        raise NotFoundError(f"habit {habit_id} not found")
    return jsonify(serialize_habit(habit))


@bp.post("/<int:habit_id>/mark")
def mark_habit(habit_id: int):
    """Record done/missed for one ISO date."""

    form = MarkForm.from_mapping(_json_body())
    get_repository().mark_date(habit_id, form.day, form.done)
    return jsonify({"ok": True})


@bp.delete("/<int:habit_id>/mark/<iso_date>")
def clear_mark(habit_id: int, iso_date: str):
    """Drop an explicit mark so the day reverts to its inferred state."""

    get_repository().clear_mark(habit_id, parse_iso_key(iso_date))
    return jsonify({"ok": True})


@bp.delete("/<int:habit_id>")
def delete_habit(habit_id: int):
    get_repository().delete(habit_id)
    return jsonify({"deleted": True})
