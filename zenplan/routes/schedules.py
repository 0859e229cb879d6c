"""Schedule routes for listing, creating and editing schedules."""
import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from zenplan.core.database import get_store
from zenplan.models import Priority, Schedule
from zenplan.planner.projector import filtered_and_sorted, is_today, schedule_progress
from zenplan.planner.store import ScheduleStore

router = APIRouter(prefix="/schedules", tags=["schedules"])


class ScheduleCreate(BaseModel):
    title: str
    description: str = ""
    notes: str | None = None
    priority: Priority = Priority.MEDIUM
    date: dt.date | None = None


class NotesUpdate(BaseModel):
    notes: str | None = None


def schedule_view(schedule: Schedule, today: dt.date | None = None) -> dict:
    """Serialize a schedule with its derived progress figures."""
    return {
        **schedule.model_dump(mode="json"),
        "progress": schedule_progress(schedule),
        "is_today": is_today(schedule, today),
    }


def get_or_404(store: ScheduleStore, schedule_id: str) -> Schedule:
    schedule = store.get(schedule_id)
    if not schedule:
        raise HTTPException(status_code=404, detail="Schedule not found")
    return schedule


@router.get("")
async def list_schedules(q: str = "", store: ScheduleStore = Depends(get_store)):
    """
    List schedules matching a search query.

    Matches ``q`` case-insensitively against title, description and notes.
    Results are ordered by date, then priority (high first).
    """
    today = dt.date.today()
    return [schedule_view(s, today) for s in filtered_and_sorted(store.schedules, q)]


@router.post("")
async def create_schedule(body: ScheduleCreate, store: ScheduleStore = Depends(get_store)):
    """
    Create a schedule.

    A blank title is refused without error: the response reports
    ``created: false`` and nothing is stored.
    """
    schedule = store.create(
        title=body.title,
        description=body.description,
        notes=body.notes,
        priority=body.priority,
        date=body.date,
    )
    return {
        "created": schedule is not None,
        "schedule": schedule_view(schedule) if schedule else None,
    }


@router.get("/{schedule_id}")
async def schedule_detail(schedule_id: str, store: ScheduleStore = Depends(get_store)):
    return schedule_view(get_or_404(store, schedule_id))


@router.delete("/{schedule_id}", status_code=204)
async def delete_schedule(schedule_id: str, store: ScheduleStore = Depends(get_store)):
    """Delete a schedule. Deleting an unknown id succeeds as well."""
    store.delete(schedule_id)
    return Response(status_code=204)


@router.put("/{schedule_id}/notes")
async def update_notes(
    schedule_id: str,
    body: NotesUpdate,
    store: ScheduleStore = Depends(get_store),
):
    """Replace a schedule's notes."""
    get_or_404(store, schedule_id)
    store.update_notes(schedule_id, body.notes)
    return schedule_view(store.get(schedule_id))
