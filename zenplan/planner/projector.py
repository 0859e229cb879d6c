"""Derived views over the schedule collection.

Nothing here is stored: statistics, search results and progress figures
are recomputed from the current snapshot on every read.
"""
import datetime as dt
from collections.abc import Iterable

from pydantic import BaseModel

from zenplan.models import Schedule


class TodayStats(BaseModel):
    today_total: int = 0
    completed_items: int = 0
    total_items: int = 0
    percent: int = 0


def percent_of(completed: int, total: int) -> int:
    """Whole-number percentage rounded half up; 0 when total is 0."""
    if total == 0:
        return 0
    return (completed * 200 + total) // (total * 2)


def schedules_for_day(schedules: Iterable[Schedule], day: dt.date) -> list[Schedule]:
    return [s for s in schedules if s.date == day]


def is_today(schedule: Schedule, today: dt.date | None = None) -> bool:
    return schedule.date == (today or dt.date.today())


def today_stats(schedules: Iterable[Schedule], today: dt.date | None = None) -> TodayStats:
    """
    Aggregate checklist progress for schedules dated today.

    "Today" is the local calendar date unless given explicitly.
    """
    todays = schedules_for_day(schedules, today or dt.date.today())
    total_items = sum(len(s.checklist) for s in todays)
    completed_items = sum(s.completed_count for s in todays)
    return TodayStats(
        today_total=len(todays),
        completed_items=completed_items,
        total_items=total_items,
        percent=percent_of(completed_items, total_items),
    )


def matches(schedule: Schedule, query: str) -> bool:
    """Case-insensitive substring match on title, description or notes."""
    needle = query.lower()
    return (
        needle in schedule.title.lower()
        or needle in schedule.description.lower()
        or needle in (schedule.notes or "").lower()
    )


def filtered_and_sorted(schedules: Iterable[Schedule], query: str = "") -> list[Schedule]:
    """
    Schedules matching ``query``, ordered by date then priority.

    An empty query matches everything. Priority ties order high, medium,
    low; remaining ties keep collection order (newest first).
    """
    found = [s for s in schedules if matches(s, query)]
    return sorted(found, key=lambda s: (s.date, s.priority.rank))


def schedule_progress(schedule: Schedule) -> int:
    return percent_of(schedule.completed_count, len(schedule.checklist))
