"""Shared test fixtures."""

import datetime as dt

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, create_engine
from sqlmodel.pool import StaticPool

from zenplan.assistant.board import ReminderBoard, get_board
from zenplan.assistant.client import Reminder
from zenplan.core.database import get_store
from zenplan.core.storage import InMemoryKeyValueStore
from zenplan.main import app
from zenplan.models import ChecklistItem, Priority, Schedule
from zenplan.planner.store import ScheduleStore, dump_schedules

STORAGE_KEY = "zenplan_schedules"


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="kv")
def kv_fixture() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture(name="store")
def store_fixture(kv: InMemoryKeyValueStore) -> ScheduleStore:
    """An empty schedule store over an in-memory slot."""
    return ScheduleStore(kv, key=STORAGE_KEY)


@pytest.fixture(name="board")
def board_fixture() -> ReminderBoard:
    """A reminder board whose fetch answers without the network."""

    async def fake_fetch(schedules):
        return Reminder(
            message=f"{len(schedules)} schedules on the board",
            suggestions=["Do the hard thing first"],
        )

    return ReminderBoard(fetch=fake_fetch)


@pytest.fixture(name="client")
def client_fixture(store: ScheduleStore, board: ReminderBoard):
    """Create a test client bound to the test store and board."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_board] = lambda: board
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="today")
def today_fixture() -> dt.date:
    return dt.date.today()


@pytest.fixture(name="sample_schedule")
def sample_schedule_fixture(store: ScheduleStore, today: dt.date) -> Schedule:
    """Create a sample schedule dated today."""
    return store.create(
        title="Quarterly Review",
        description="Prepare the slides",
        notes="Ask finance for numbers",
        priority=Priority.HIGH,
        date=today,
    )


@pytest.fixture(name="schedule_with_items")
def schedule_with_items_fixture(store: ScheduleStore, today: dt.date) -> Schedule:
    """Create a schedule with checklist items, one of them completed."""
    schedule = store.create(title="Pack for trip", date=today)
    for text in ("Laptop", "Charger", "Passport"):
        store.add_item(schedule.id, text)
    passport = store.get(schedule.id).checklist[2]
    store.toggle_item(schedule.id, passport.id)
    return store.get(schedule.id)


@pytest.fixture(name="storage_key")
def storage_key_fixture() -> str:
    return STORAGE_KEY


@pytest.fixture(name="make_schedule")
def make_schedule_fixture():
    """Factory building schedules directly, one checklist item per entry in ``done``."""

    def build(title="Task", date=dt.date(2024, 1, 1), priority=Priority.MEDIUM,
              done=(), **kwargs) -> Schedule:
        checklist = tuple(
            ChecklistItem(text=f"item {i}", is_completed=flag) for i, flag in enumerate(done)
        )
        return Schedule(title=title, date=date, priority=priority, checklist=checklist, **kwargs)

    return build


@pytest.fixture(name="seeded_kv")
def seeded_kv_fixture():
    """Factory for a key-value store already holding the given schedules."""

    def build(*schedules: Schedule) -> InMemoryKeyValueStore:
        return InMemoryKeyValueStore({STORAGE_KEY: dump_schedules(schedules)})

    return build
