"""Checklist item model for schedule progress tracking.

This module defines the ChecklistItem model which represents a single
sub-task belonging to a schedule. Items are added and removed by the user
and checked off to track progress toward the schedule's objective.
"""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def new_id() -> str:
    """Generate an opaque identifier for a schedule or checklist item."""
    return uuid4().hex


class ChecklistItem(BaseModel):
    """A checklist item associated with a schedule.

    Items are immutable values. Toggling completion produces a replacement
    item via ``toggled()`` so earlier snapshots of a schedule are never
    altered.

    Attributes:
        id: Identifier, unique within the owning schedule.
        text: Display text for the checklist item.
        is_completed: Whether the item has been marked complete.
            Persisted as ``isCompleted``.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(default_factory=new_id)
    text: str
    is_completed: bool = False

    def toggled(self) -> "ChecklistItem":
        return self.model_copy(update={"is_completed": not self.is_completed})
