"""Schedule model for dated planner objectives.

This module defines the Schedule model which represents a single planned
objective with a target date, priority, free-text notes and a checklist.
Schedules are the central entity users interact with; the whole collection
is persisted as one JSON array in a key-value slot.
"""

import datetime as dt
import random
import time
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from zenplan.models.checklist import ChecklistItem, new_id

# Display-style tags, one chosen at random for each new schedule
COLORS = ("blue", "emerald", "amber", "rose", "indigo", "slate")


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Sort rank: high first, then medium, then low."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


def random_color() -> str:
    return random.choice(COLORS)


def now_millis() -> int:
    return int(time.time() * 1000)


class Schedule(BaseModel):
    """A planned objective on a calendar date.

    Schedules are immutable values: every store operation that changes one
    builds a replacement with ``model_copy`` and leaves the previous
    snapshot intact. Field names are snake_case in Python and camelCase in
    the persisted JSON (``createdAt``, ``isCompleted``).

    Attributes:
        id: Identifier, unique within the collection.
        title: Non-empty title.
        description: Short summary of the intended outcome.
        notes: Optional free-text notes, replaced wholesale on edit.
        date: Target calendar date, stored as ``YYYY-MM-DD``.
        priority: One of low, medium or high.
        checklist: Ordered checklist items, in insertion order.
        color: Display tag drawn from ``COLORS`` at creation time.
        created_at: Creation instant in epoch milliseconds.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(default_factory=new_id)
    title: str
    description: str = ""
    notes: str | None = None
    date: dt.date
    priority: Priority = Priority.MEDIUM
    checklist: tuple[ChecklistItem, ...] = ()
    color: str = Field(default_factory=random_color)
    created_at: int = Field(default_factory=now_millis)

    @property
    def completed_count(self) -> int:
        return sum(1 for item in self.checklist if item.is_completed)

    def find_item(self, item_id: str) -> ChecklistItem | None:
        return next((item for item in self.checklist if item.id == item_id), None)
