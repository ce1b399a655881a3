"""SQLModel implementation of the Habit repository."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ...errors import NotFoundError, PersistenceError
from ...logging_config import get_logger
from ...models.habit import Habit, HabitMark, MarkStatus, utcnow
from ..database import SessionFactory

logger = get_logger(__name__)


@contextmanager
def _storage_errors(action: str) -> Iterator[None]:
    """Translate driver failures into PersistenceError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Habit store failure during %s", action)
        raise PersistenceError() from exc


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    @staticmethod
    def _load(session: Session, habit_id: int) -> Optional[Habit]:
        statement = (
            select(Habit)
            .where(Habit.id == habit_id)
            .options(selectinload(Habit.marks))  # type: ignore[arg-type]
        )
        return session.exec(statement).first()

    @staticmethod
    def _require(session: Session, habit_id: int) -> Habit:
        habit = session.get(Habit, habit_id)
        if habit is None:
            raise NotFoundError(f"habit {habit_id} not found")
        return habit

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit (with marks) by ID."""
        with _storage_errors("get"), self.session_factory() as session:
            obj = self._load(session, habit_id)
            if obj:
                session.expunge_all()
            return obj

    def list_all(self) -> list[Habit]:
        """List every habit in creation order."""
        with _storage_errors("list"), self.session_factory() as session:
            statement = (
                select(Habit)
                .options(selectinload(Habit.marks))  # type: ignore[arg-type]
                .order_by(Habit.id)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, name: str, start_date: date, goal: str = "") -> Habit:
        """Create a new habit with an empty status map."""
        with _storage_errors("create"), self.session_factory() as session:
            habit = Habit(name=name, start_date=start_date, goal=goal or "")
            session.add(habit)
            session.commit()
            created = self._load(session, habit.id)  # type: ignore[arg-type]
            session.expunge_all()
        logger.info("Habit created", extra={"habit_id": habit.id, "start_date": start_date.isoformat()})
        return created  # type: ignore[return-value]

    def delete(self, habit_id: int) -> None:
        """Delete a habit and its marks."""
        with _storage_errors("delete"), self.session_factory() as session:
            habit = self._require(session, habit_id)
            session.delete(habit)
            session.commit()
        logger.info("Habit deleted", extra={"habit_id": habit_id})

    def mark_date(self, habit_id: int, day: date, done: bool) -> HabitMark:
        """Insert or overwrite the mark for ``day``."""
        status = MarkStatus.DONE if done else MarkStatus.MISSED
        with _storage_errors("mark"), self.session_factory() as session:
            habit = self._require(session, habit_id)
            mark = session.get(HabitMark, (habit_id, day))
            if mark is None:
                mark = HabitMark(habit_id=habit_id, day=day, status=status)
            else:
                mark.status = status
                mark.updated_at = utcnow()
            habit.updated_at = utcnow()
            session.add(mark)
            session.add(habit)
            session.commit()
            session.refresh(mark)
            session.expunge(mark)
        logger.info(
            "Habit marked",
            extra={"habit_id": habit_id, "day": day.isoformat(), "status": status.value},
        )
        return mark

    def clear_mark(self, habit_id: int, day: date) -> None:
        """Remove an explicit mark so the day falls back to date-based inference."""
        with _storage_errors("clear_mark"), self.session_factory() as session:
            self._require(session, habit_id)
            mark = session.get(HabitMark, (habit_id, day))
            if mark is not None:
                session.delete(mark)
                session.commit()
        logger.info("Habit mark cleared", extra={"habit_id": habit_id, "day": day.isoformat()})
