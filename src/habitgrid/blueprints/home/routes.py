"""Home routes."""

from __future__ import annotations

from flask import jsonify, redirect, url_for

from ...extensions import get_engine
from ...infra.database import ping_database
from . import bp


@bp.get("/")
def landing_page():
    """Send browsers to the calendar for the current month."""

    return redirect(url_for("calendar.month_view"))


@bp.get("/health")
def health():
    return jsonify({"ok": True})


@bp.get("/health/ready")
def health_ready():
    """Readiness probe: the database answers a trivial query."""

    ping_database(get_engine())
    return jsonify({"ok": True, "database": "ready"})
