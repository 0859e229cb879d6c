"""Schedule store: the authoritative collection and its persistence.

The module-level functions are pure: each takes the current collection and
returns a new one, reusing every schedule the operation does not target so
callers can detect changes by identity. Operations that change nothing
return the input collection itself.

``ScheduleStore`` owns the current snapshot, applies those functions and
writes the whole collection to its key-value slot after each change.
"""
import datetime as dt
import json
import logging
from enum import StrEnum

from pydantic import TypeAdapter, ValidationError

from zenplan.core.storage import KeyValueStore
from zenplan.models import ChecklistItem, Priority, Schedule

logger = logging.getLogger(__name__)

Schedules = tuple[Schedule, ...]

_collection_adapter = TypeAdapter(Schedules)


class ChecklistAction(StrEnum):
    TOGGLE = "toggle"
    ADD = "add"
    REMOVE = "remove"


def create_schedule(
    schedules: Schedules,
    title: str,
    description: str = "",
    notes: str | None = None,
    priority: Priority | str = Priority.MEDIUM,
    date: dt.date | None = None,
) -> Schedules:
    """Prepend a new schedule. Blank titles leave the collection unchanged."""
    if not title.strip():
        return schedules
    schedule = Schedule(
        title=title.strip(),
        description=description,
        notes=notes,
        priority=Priority(priority),
        date=date or dt.date.today(),
    )
    return (schedule, *schedules)


def delete_schedule(schedules: Schedules, schedule_id: str) -> Schedules:
    remaining = tuple(s for s in schedules if s.id != schedule_id)
    if len(remaining) == len(schedules):
        return schedules
    return remaining


def _replace(schedules: Schedules, schedule_id: str, update) -> Schedules:
    """Apply ``update`` to the matching schedule, keeping all others as-is."""
    changed = False
    result = []
    for schedule in schedules:
        if schedule.id == schedule_id:
            updated = update(schedule)
            if updated is not schedule:
                changed = True
            result.append(updated)
        else:
            result.append(schedule)
    return tuple(result) if changed else schedules


def update_notes(schedules: Schedules, schedule_id: str, notes: str | None) -> Schedules:
    return _replace(
        schedules, schedule_id, lambda s: s.model_copy(update={"notes": notes})
    )


def _toggle(schedule: Schedule, item_id: str | None) -> Schedule:
    if schedule.find_item(item_id) is None:
        return schedule
    checklist = tuple(
        item.toggled() if item.id == item_id else item for item in schedule.checklist
    )
    return schedule.model_copy(update={"checklist": checklist})


def _add(schedule: Schedule, text: str | None) -> Schedule:
    if not text or not text.strip():
        return schedule
    item = ChecklistItem(text=text.strip())
    # Item ids only need to be unique within their schedule
    while schedule.find_item(item.id) is not None:
        item = ChecklistItem(text=text.strip())
    return schedule.model_copy(update={"checklist": (*schedule.checklist, item)})


def _remove(schedule: Schedule, item_id: str | None) -> Schedule:
    if schedule.find_item(item_id) is None:
        return schedule
    checklist = tuple(item for item in schedule.checklist if item.id != item_id)
    return schedule.model_copy(update={"checklist": checklist})


def mutate_checklist(
    schedules: Schedules,
    schedule_id: str,
    action: ChecklistAction | str,
    item_id: str | None = None,
    text: str | None = None,
) -> Schedules:
    """Toggle, add or remove a checklist item on one schedule.

    ``toggle`` and ``remove`` use ``item_id``; ``add`` uses ``text``.
    Unknown schedules or items and blank text are no-ops.
    """
    action = ChecklistAction(action)
    if action is ChecklistAction.TOGGLE:
        return _replace(schedules, schedule_id, lambda s: _toggle(s, item_id))
    if action is ChecklistAction.ADD:
        return _replace(schedules, schedule_id, lambda s: _add(s, text))
    return _replace(schedules, schedule_id, lambda s: _remove(s, item_id))


def dump_schedules(schedules: Schedules) -> str:
    """Serialize the collection as a JSON array with camelCase keys."""
    return _collection_adapter.dump_json(schedules, by_alias=True).decode()


def load_schedules(payload: str | None) -> Schedules:
    """Deserialize a persisted collection.

    Absent, empty, non-JSON or wrongly shaped payloads all yield an empty
    collection; the cause is logged.
    """
    if not payload:
        return ()
    try:
        raw = json.loads(payload)
    except json.JSONDecodeError as e:
        logger.warning(f"Persisted schedules are not valid JSON, starting empty: {e}")
        return ()
    if not isinstance(raw, list):
        logger.warning(f"Persisted schedules are a {type(raw).__name__}, not a list, starting empty")
        return ()
    try:
        return _collection_adapter.validate_python(raw)
    except ValidationError as e:
        logger.warning(
            f"Persisted schedules have an unexpected shape, starting empty: "
            f"{e.error_count()} errors"
        )
        return ()


class ScheduleStore:
    """Owns the schedule collection and mirrors it to a key-value slot."""

    def __init__(self, kv: KeyValueStore, key: str = "zenplan_schedules"):
        self.kv = kv
        self.key = key
        self._schedules = load_schedules(kv.get(key))
        logger.info(f"Loaded {len(self._schedules)} schedules from slot {key}")

    @property
    def schedules(self) -> Schedules:
        """Current read-only snapshot."""
        return self._schedules

    def get(self, schedule_id: str) -> Schedule | None:
        return next((s for s in self._schedules if s.id == schedule_id), None)

    def _commit(self, schedules: Schedules) -> bool:
        if schedules is self._schedules:
            return False
        self._schedules = schedules
        self.kv.set(self.key, dump_schedules(schedules))
        return True

    def create(
        self,
        title: str,
        description: str = "",
        notes: str | None = None,
        priority: Priority | str = Priority.MEDIUM,
        date: dt.date | None = None,
    ) -> Schedule | None:
        """Create a schedule and return it, or None if the title is blank."""
        if self._commit(
            create_schedule(self._schedules, title, description, notes, priority, date)
        ):
            created = self._schedules[0]
            logger.info(f"Created schedule {created.id} for {created.date}")
            return created
        return None

    def delete(self, schedule_id: str) -> None:
        if self._commit(delete_schedule(self._schedules, schedule_id)):
            logger.info(f"Deleted schedule {schedule_id}")

    def update_notes(self, schedule_id: str, notes: str | None) -> None:
        self._commit(update_notes(self._schedules, schedule_id, notes))

    def mutate_checklist(
        self,
        schedule_id: str,
        action: ChecklistAction | str,
        item_id: str | None = None,
        text: str | None = None,
    ) -> None:
        self._commit(
            mutate_checklist(self._schedules, schedule_id, action, item_id, text)
        )

    def toggle_item(self, schedule_id: str, item_id: str) -> None:
        self.mutate_checklist(schedule_id, ChecklistAction.TOGGLE, item_id=item_id)

    def add_item(self, schedule_id: str, text: str) -> None:
        self.mutate_checklist(schedule_id, ChecklistAction.ADD, text=text)

    def remove_item(self, schedule_id: str, item_id: str) -> None:
        self.mutate_checklist(schedule_id, ChecklistAction.REMOVE, item_id=item_id)
