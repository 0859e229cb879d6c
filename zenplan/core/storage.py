"""Key-value slots used to persist planner state."""
import logging
from datetime import UTC, datetime
from typing import Protocol

from sqlalchemy.engine import Engine
from sqlmodel import Session

from zenplan.models import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """String key-value interface the schedule store persists through."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryKeyValueStore:
    """Dict-backed key-value store for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class SQLKeyValueStore:
    """Key-value store backed by the ``keyvalueentry`` table."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def get(self, key: str) -> str | None:
        with Session(self.engine) as session:
            entry = session.get(KeyValueEntry, key)
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        with Session(self.engine) as session:
            entry = session.get(KeyValueEntry, key)
            if entry:
                entry.value = value
                entry.updated_at = datetime.now(UTC)
            else:
                entry = KeyValueEntry(key=key, value=value)
            session.add(entry)
            session.commit()
        logger.debug(f"Wrote {len(value)} bytes to slot {key}")
