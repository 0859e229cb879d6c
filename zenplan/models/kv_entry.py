"""Key-value entry model for the persisted planner state.

The planner keeps its whole state in a single key-value slot. This table
is the SQLite home of those slots when the app runs as a service.
"""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class KeyValueEntry(SQLModel, table=True):
    """A stored string value under a fixed key.

    Attributes:
        key: Slot name, e.g. ``zenplan_schedules``.
        value: Serialized payload, written whole on every save.
        updated_at: When the slot was last written.
    """
    key: str = Field(primary_key=True)
    value: str
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
