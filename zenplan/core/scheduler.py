"""Background jobs for refreshing the daily assistant reminder."""
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from zenplan.assistant.board import reminder_board
from zenplan.core.config import settings
from zenplan.core.database import get_store

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


async def reminder_job():
    """Fetch a reminder for the current schedules."""
    try:
        reminder = await reminder_board.refresh(get_store().schedules)
        logger.info(f"Daily reminder refreshed: {reminder.message if reminder else None}")
    except Exception as e:
        logger.error(f"Daily reminder refresh failed: {e}")


def start_scheduler():
    """Start the background scheduler.

    The reminder is fetched once right away for the session. A periodic
    refresh is added only when ``reminder_refresh_minutes`` is positive.
    """
    scheduler.add_job(reminder_job, id="reminder_startup", replace_existing=True)
    if settings.reminder_refresh_minutes > 0:
        scheduler.add_job(
            reminder_job,
            trigger=IntervalTrigger(minutes=settings.reminder_refresh_minutes),
            id="reminder_refresh",
            replace_existing=True,
        )
        logger.info(
            f"Scheduler started, refreshing reminder every "
            f"{settings.reminder_refresh_minutes} minutes"
        )
    scheduler.start()


def shutdown_scheduler():
    """Graceful shutdown."""
    scheduler.shutdown(wait=False)
    logger.info("Scheduler shut down")
