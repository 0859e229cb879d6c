"""Daily assistant and statistics routes."""
from fastapi import APIRouter, Depends

from zenplan.assistant.board import ReminderBoard, get_board
from zenplan.core.database import get_store
from zenplan.planner.projector import TodayStats, today_stats
from zenplan.planner.store import ScheduleStore

router = APIRouter(tags=["assistant"])


def board_state(board: ReminderBoard) -> dict:
    current = board.current
    return {
        "message": current.message if current else None,
        "suggestions": current.suggestions if current else [],
        "loading": board.loading,
    }


@router.get("/stats/today", response_model=TodayStats)
async def stats_today(store: ScheduleStore = Depends(get_store)):
    """Checklist progress across the schedules dated today."""
    return today_stats(store.schedules)


@router.get("/assistant/reminder")
async def current_reminder(board: ReminderBoard = Depends(get_board)):
    """
    Get the reminder currently on display.

    ``message`` is null until the first refresh has resolved.
    """
    return board_state(board)


@router.post("/assistant/refresh")
async def refresh_reminder(
    store: ScheduleStore = Depends(get_store),
    board: ReminderBoard = Depends(get_board),
):
    """
    Fetch a fresh reminder for the current schedules.

    A response that resolves after a newer refresh has already been
    displayed is discarded.
    """
    await board.refresh(store.schedules)
    return board_state(board)
