"""Database configuration for the SQLite key-value backend.

The planner's state lives in a single key-value slot. When running as a
service that slot is a row in SQLite, configured the same way as any web
app database:

    - **WAL (Write-Ahead Logging)**: readers are not blocked while the store
      rewrites its slot.

    - **check_same_thread=False**: Required for FastAPI. Connections may be
      used from the threadpool that runs sync dependencies.
"""

import threading

from sqlalchemy import event as sa_event
from sqlmodel import SQLModel, create_engine

from zenplan.core.config import settings
from zenplan.core.storage import SQLKeyValueStore
from zenplan.planner.store import ScheduleStore

connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


@sa_event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection.

    Pragmas are connection-level, so they must be set each time a new
    connection is established from the pool.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def create_db_and_tables():
    """Create all database tables."""
    SQLModel.metadata.create_all(engine)


_store: ScheduleStore | None = None
_store_lock = threading.Lock()


def get_store() -> ScheduleStore:
    """Dependency returning the process-wide schedule store.

    Sync dependencies run in the threadpool, so the first build is guarded;
    exactly one store may own the slot.
    """
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = ScheduleStore(SQLKeyValueStore(engine), key=settings.storage_key)
    return _store
