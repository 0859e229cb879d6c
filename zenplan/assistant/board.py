"""Holds the reminder currently shown by the daily assistant."""
import logging
from collections.abc import Iterable

from zenplan.assistant.client import Reminder, get_daily_reminder
from zenplan.models import Schedule

logger = logging.getLogger(__name__)


class ReminderBoard:
    """The displayed reminder plus the bookkeeping for in-flight refreshes.

    Every refresh is stamped with a generation number from ``begin()``.
    ``resolve()`` only applies a result whose generation is newer than the
    one on display, so a slow, superseded request can never replace the
    answer to a later one.
    """

    def __init__(self, fetch=get_daily_reminder):
        self.fetch = fetch
        self.current: Reminder | None = None
        self._issued = 0
        self._applied = 0
        self._pending: set[int] = set()

    @property
    def loading(self) -> bool:
        return bool(self._pending)

    @property
    def generation(self) -> int:
        """Generation of the reminder on display (0 before the first)."""
        return self._applied

    def begin(self) -> int:
        self._issued += 1
        self._pending.add(self._issued)
        return self._issued

    def resolve(self, generation: int, reminder: Reminder) -> bool:
        """Record a finished request. Returns True if its result is displayed."""
        self._pending.discard(generation)
        if generation <= self._applied:
            logger.debug(
                f"Discarding stale reminder {generation}, showing {self._applied}"
            )
            return False
        self._applied = generation
        self.current = reminder
        return True

    async def refresh(self, schedules: Iterable[Schedule]) -> Reminder | None:
        """Fetch a reminder for a snapshot of ``schedules`` and display it."""
        snapshot = tuple(schedules)
        generation = self.begin()
        try:
            reminder = await self.fetch(snapshot)
        except Exception:
            self._pending.discard(generation)
            raise
        self.resolve(generation, reminder)
        return self.current


reminder_board = ReminderBoard()


def get_board() -> ReminderBoard:
    """Dependency returning the process-wide reminder board."""
    return reminder_board
