"""Item routes for managing checklist items."""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from zenplan.core.database import get_store
from zenplan.planner.projector import schedule_progress
from zenplan.planner.store import ScheduleStore
from zenplan.routes.schedules import get_or_404, schedule_view

router = APIRouter(prefix="/schedules/{schedule_id}/items", tags=["items"])


class ItemCreate(BaseModel):
    text: str


@router.post("")
async def create_item(
    schedule_id: str,
    body: ItemCreate,
    store: ScheduleStore = Depends(get_store),
):
    """
    Add an item to a schedule's checklist.

    Blank text is ignored and the schedule is returned unchanged.
    """
    get_or_404(store, schedule_id)
    store.add_item(schedule_id, body.text)
    return schedule_view(store.get(schedule_id))


@router.post("/{item_id}/toggle")
async def toggle_item(
    schedule_id: str,
    item_id: str,
    store: ScheduleStore = Depends(get_store),
):
    """
    Toggle item completed state.

    Returns the item's new state together with the schedule's updated
    progress so a client can refresh its counters without a reload.
    """
    schedule = get_or_404(store, schedule_id)
    if schedule.find_item(item_id) is None:
        raise HTTPException(status_code=404, detail="Item not found")

    store.toggle_item(schedule_id, item_id)
    schedule = store.get(schedule_id)
    return {
        "success": True,
        "item_id": item_id,
        "is_completed": schedule.find_item(item_id).is_completed,
        "completed_count": schedule.completed_count,
        "total_count": len(schedule.checklist),
        "progress": schedule_progress(schedule),
    }


@router.delete("/{item_id}")
async def delete_item(
    schedule_id: str,
    item_id: str,
    store: ScheduleStore = Depends(get_store),
):
    """Remove an item from the checklist. Unknown items are ignored."""
    get_or_404(store, schedule_id)
    store.remove_item(schedule_id, item_id)
    return schedule_view(store.get(schedule_id))
