from zenplan.models.checklist import ChecklistItem
from zenplan.models.kv_entry import KeyValueEntry
from zenplan.models.schedule import COLORS, Priority, Schedule

__all__ = ["Schedule", "ChecklistItem", "Priority", "KeyValueEntry", "COLORS"]
