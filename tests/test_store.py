"""Tests for the schedule store and its collection operations."""

import datetime as dt
import json

import pytest

from zenplan.core.storage import InMemoryKeyValueStore
from zenplan.models import COLORS, Priority
from zenplan.planner.store import (
    ChecklistAction,
    ScheduleStore,
    create_schedule,
    delete_schedule,
    dump_schedules,
    load_schedules,
    mutate_checklist,
    update_notes,
)


class TestCreate:
    def test_create_prepends(self, store: ScheduleStore):
        """Test a new schedule grows the collection by one at index 0."""
        first = store.create(title="First", date=dt.date(2024, 1, 1))
        second = store.create(title="Second", date=dt.date(2024, 1, 2))

        assert len(store.schedules) == 2
        assert store.schedules[0] is second
        assert store.schedules[1] is first

    def test_create_fields(self, store: ScheduleStore):
        schedule = store.create(
            title="  Review  ",
            description="Slides",
            notes="Bring coffee",
            priority="high",
            date=dt.date(2024, 1, 1),
        )

        assert schedule.title == "Review"
        assert schedule.description == "Slides"
        assert schedule.notes == "Bring coffee"
        assert schedule.priority is Priority.HIGH
        assert schedule.checklist == ()
        assert schedule.color in COLORS

    def test_create_defaults_to_today(self, store: ScheduleStore, today: dt.date):
        schedule = store.create(title="Today")
        assert schedule.date == today
        assert schedule.priority is Priority.MEDIUM

    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    def test_blank_title_rejected(
        self, store: ScheduleStore, kv: InMemoryKeyValueStore, storage_key, title
    ):
        """Test blank titles are silently refused and nothing is written."""
        store.create(title="Existing", date=dt.date(2024, 1, 1))
        before = store.schedules
        written = kv.get(storage_key)

        assert store.create(title=title) is None
        assert store.schedules is before
        assert kv.get(storage_key) == written

    def test_pure_create_returns_same_collection_for_blank_title(self, make_schedule):
        schedules = (make_schedule(),)
        assert create_schedule(schedules, " ") is schedules


class TestDelete:
    def test_delete(self, store: ScheduleStore, sample_schedule):
        store.delete(sample_schedule.id)
        assert store.schedules == ()

    def test_delete_twice_is_noop(self, store: ScheduleStore, sample_schedule):
        """Test deleting the same id twice does not fail."""
        other = store.create(title="Keep me", date=dt.date(2024, 1, 1))
        store.delete(sample_schedule.id)
        after_first = store.schedules
        store.delete(sample_schedule.id)

        assert store.schedules is after_first
        assert store.schedules == (other,)

    def test_delete_keeps_other_schedules_identical(self, make_schedule):
        a, b, c = make_schedule("A"), make_schedule("B"), make_schedule("C")
        result = delete_schedule((a, b, c), b.id)
        assert result[0] is a
        assert result[1] is c


class TestUpdateNotes:
    def test_update_notes(self, store: ScheduleStore, sample_schedule):
        store.update_notes(sample_schedule.id, "New notes")
        assert store.get(sample_schedule.id).notes == "New notes"

    def test_update_notes_unknown_id(self, store: ScheduleStore, sample_schedule):
        before = store.schedules
        store.update_notes("missing", "New notes")
        assert store.schedules is before

    def test_previous_snapshot_untouched(self, store: ScheduleStore, sample_schedule):
        store.update_notes(sample_schedule.id, "New notes")
        assert sample_schedule.notes == "Ask finance for numbers"

    def test_other_schedules_keep_identity(self, make_schedule):
        a, b = make_schedule("A"), make_schedule("B")
        result = update_notes((a, b), a.id, "changed")
        assert result[0] is not a
        assert result[1] is b


class TestChecklist:
    def test_add_item(self, store: ScheduleStore, sample_schedule):
        store.add_item(sample_schedule.id, "  Charts  ")
        checklist = store.get(sample_schedule.id).checklist

        assert len(checklist) == 1
        assert checklist[0].text == "Charts"
        assert checklist[0].is_completed is False

    def test_add_appends_in_order(self, schedule_with_items):
        texts = [item.text for item in schedule_with_items.checklist]
        assert texts == ["Laptop", "Charger", "Passport"]

    def test_item_ids_unique_within_schedule(self, schedule_with_items):
        ids = [item.id for item in schedule_with_items.checklist]
        assert len(set(ids)) == len(ids)

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_add_blank_text_is_noop(self, store: ScheduleStore, sample_schedule, text):
        before = store.schedules
        store.mutate_checklist(sample_schedule.id, "add", text=text)
        assert store.schedules is before

    def test_toggle_twice_restores_item(self, store: ScheduleStore, schedule_with_items):
        """Test toggle is its own inverse and leaves everything else alone."""
        item = schedule_with_items.checklist[0]

        store.toggle_item(schedule_with_items.id, item.id)
        assert store.get(schedule_with_items.id).checklist[0].is_completed is True

        store.toggle_item(schedule_with_items.id, item.id)
        assert store.get(schedule_with_items.id) == schedule_with_items

    def test_toggle_replaces_only_target_item(self, store: ScheduleStore, schedule_with_items):
        item = schedule_with_items.checklist[1]
        store.toggle_item(schedule_with_items.id, item.id)
        checklist = store.get(schedule_with_items.id).checklist

        assert checklist[0] is schedule_with_items.checklist[0]
        assert checklist[1] is not item
        assert checklist[2] is schedule_with_items.checklist[2]

    def test_toggle_unknown_item_is_noop(self, store: ScheduleStore, schedule_with_items):
        before = store.schedules
        store.toggle_item(schedule_with_items.id, "missing")
        store.toggle_item("missing", schedule_with_items.checklist[0].id)
        assert store.schedules is before

    def test_remove_item(self, store: ScheduleStore, schedule_with_items):
        item = schedule_with_items.checklist[1]
        store.remove_item(schedule_with_items.id, item.id)
        texts = [i.text for i in store.get(schedule_with_items.id).checklist]
        assert texts == ["Laptop", "Passport"]

    def test_remove_unknown_item_is_noop(self, store: ScheduleStore, schedule_with_items):
        before = store.schedules
        store.remove_item(schedule_with_items.id, "missing")
        assert store.schedules is before

    def test_pure_mutation_keeps_untargeted_schedules(self, make_schedule):
        a = make_schedule("A", done=(False,))
        b = make_schedule("B", done=(True,))
        result = mutate_checklist((a, b), a.id, ChecklistAction.TOGGLE, item_id=a.checklist[0].id)

        assert result[0].checklist[0].is_completed is True
        assert result[1] is b
        assert a.checklist[0].is_completed is False

    def test_unknown_action_rejected(self):
        with pytest.raises(ValueError):
            mutate_checklist((), "x", "rename")


class TestPersistence:
    def test_every_mutation_is_written(
        self, store: ScheduleStore, kv: InMemoryKeyValueStore, storage_key
    ):
        schedule = store.create(title="Persist me", date=dt.date(2024, 1, 1))
        assert json.loads(kv.get(storage_key))[0]["title"] == "Persist me"

        store.add_item(schedule.id, "Step")
        assert json.loads(kv.get(storage_key))[0]["checklist"][0]["text"] == "Step"

        store.delete(schedule.id)
        assert json.loads(kv.get(storage_key)) == []

    def test_restores_from_slot(
        self, store: ScheduleStore, kv: InMemoryKeyValueStore, storage_key, schedule_with_items
    ):
        store.update_notes(schedule_with_items.id, "Remember snacks")
        restored = ScheduleStore(kv, key=storage_key)
        assert restored.schedules == store.schedules

    def test_round_trip(self, make_schedule):
        schedules = (
            make_schedule("A", done=(True, False), notes="n"),
            make_schedule("B", date=dt.date(2024, 2, 29), priority=Priority.LOW),
        )
        assert load_schedules(dump_schedules(schedules)) == schedules

    @pytest.mark.parametrize("payload", [None, "", "not json {", '{"id": 1}', '[{"title": 5}]'])
    def test_bad_payload_starts_empty(self, payload, storage_key):
        """Test unreadable persisted state never breaks initialization."""
        kv = InMemoryKeyValueStore({} if payload is None else {storage_key: payload})
        store = ScheduleStore(kv, key=storage_key)
        assert store.schedules == ()

    def test_seeded_slot(self, make_schedule, seeded_kv, storage_key):
        a = make_schedule("A")
        store = ScheduleStore(seeded_kv(a), key=storage_key)
        assert store.get(a.id) == a
        assert store.get("missing") is None
