"""Demo data seeding for local development."""

from __future__ import annotations

from datetime import date, timedelta

from ..domain.repositories import HabitRepository
from ..logging_config import get_logger

logger = get_logger(__name__)

DEMO_HABITS = [
    {"name": "Morning run", "goal": "3 km before breakfast", "offset_days": 20, "pattern": "dddmd"},
    {"name": "Read 20 pages", "goal": "", "offset_days": 12, "pattern": "ddd"},
    {"name": "No sugar", "goal": "Skip desserts", "offset_days": 6, "pattern": "mdd"},
]


def seed_demo_habits(repo: HabitRepository, *, today: date | None = None, force: bool = False) -> int:
    """Create a handful of habits with marks leading up to ``today``.

    Each pattern character marks one day counting back from yesterday
    (``d`` done, ``m`` missed). Returns the number of habits created; nothing
    is created when habits already exist unless ``force`` is set.
    """

    today = today or date.today()
    if repo.list_all() and not force:
        logger.info("Demo seed skipped; habits already present")
        return 0

    created = 0
    for spec in DEMO_HABITS:
        habit = repo.create(
            spec["name"], today - timedelta(days=spec["offset_days"]), spec["goal"]
        )
        for index, code in enumerate(spec["pattern"]):
            day = today - timedelta(days=index + 1)
            repo.mark_date(habit.id, day, code == "d")  # type: ignore[arg-type]
        created += 1
    logger.info("Demo seed created %s habits", created)
    return created
