"""Pytest configuration and shared fixtures for HabitGrid tests.

This module provides database fixtures, habit factories, and a Flask app
whose notion of "today" is pinned, so date-dependent behaviour is
deterministic without touching the real app database.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from habitgrid import create_app
from habitgrid.extensions import set_clock
from habitgrid.infra.database import create_session_factory
from habitgrid.infra.repositories.habit import SQLModelHabitRepository
from habitgrid.models import Habit, HabitMark  # noqa: F401  # register tables

# Matches the worked example: a habit started 2025-01-10, viewed on 2025-01-15.
FIXED_TODAY = date(2025, 1, 15)


@dataclass
class StubHabit:
    """Plain stand-in for a stored habit, for engine tests."""

    start_date: date
    status: dict[str, str] = field(default_factory=dict)
    id: int = 1
    name: str = "Stub"
    goal: str = ""


@pytest.fixture
def stub_habit():
    """Factory building StubHabit instances from day -> status pairs."""

    def _build(start: date, marks: dict[date, str] | None = None, **kwargs) -> StubHabit:
        status = {day.isoformat(): value for day, value in (marks or {}).items()}
        return StubHabit(start_date=start, status=status, **kwargs)

    return _build


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one the app builds."""

    return create_session_factory(db_engine)


@pytest.fixture
def repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def habit_factory(repo):
    """Factory for creating persisted habits with optional marks.

    Returns:
        Callable: Function that creates a habit and applies ``marks``
        (mapping of date -> done flag), returning the reloaded habit.
    """

    def _create_habit(
        name: str = "Test Habit",
        start_date: date = date(2025, 1, 10),
        goal: str = "",
        marks: dict[date, bool] | None = None,
    ) -> Habit:
        habit = repo.create(name, start_date, goal)
        for day, done in (marks or {}).items():
            repo.mark_date(habit.id, day, done)
        return repo.get_by_id(habit.id)

    return _create_habit


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture()
def app(tmp_path, monkeypatch: pytest.MonkeyPatch):
    db_path = tmp_path / "habitgrid.db"
    monkeypatch.setenv("HABITGRID_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("HABITGRID_DATABASE_URL", f"sqlite:///{db_path}")
    monkeypatch.delenv("HABITGRID_TIMEZONE", raising=False)
    flask_app = create_app("testing")
    flask_app.config.update(TESTING=True)
    set_clock(flask_app, lambda: FIXED_TODAY)
    yield flask_app
    flask_app.extensions["habitgrid"]["engine"].dispose()


@pytest.fixture()
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def app_repo(app) -> SQLModelHabitRepository:
    """Repository bound to the app's own database."""

    return SQLModelHabitRepository(app.extensions["habitgrid"]["session_factory"])
