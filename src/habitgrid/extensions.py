"""Database and extension wiring for HabitGrid."""

from __future__ import annotations

from datetime import date
from typing import Any, Callable

from flask import Flask, current_app
from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories.habit import SQLModelHabitRepository

EXTENSION_KEY = "habitgrid"


def init_db(app: Flask) -> None:
    """Initialize the SQLModel engine and session factory for the app."""

    config: BaseConfig = app.config["HABITGRID_CONFIG"]
    engine, session_factory = bootstrap_database(config)

    state = app.extensions.setdefault(EXTENSION_KEY, {})
    state["engine"] = engine
    state["session_factory"] = session_factory
    state.setdefault("clock", config.today)


def _state() -> dict[str, Any]:
    state = current_app.extensions.get(EXTENSION_KEY)
    if not state or "engine" not in state:
        raise RuntimeError("Database engine not initialized")
    return state


def get_engine() -> Engine:
    """Return the engine bound to the current app."""

    return _state()["engine"]


def get_session_factory() -> SessionFactory:
    return _state()["session_factory"]


def get_repository() -> SQLModelHabitRepository:
    """Build a habit repository over the current app's session factory."""

    return SQLModelHabitRepository(get_session_factory())


def set_clock(app: Flask, clock: Callable[[], date]) -> None:
    """Replace the source of "today" (tests pin it to a fixed date)."""

    app.extensions.setdefault(EXTENSION_KEY, {})["clock"] = clock


def today() -> date:
    """Current calendar date as seen by the app."""

    return _state()["clock"]()
