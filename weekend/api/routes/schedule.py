"""Current-plan routes: lifecycle of the open plan and its schedule operations."""
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
import logging

from weekend.api.dependencies import get_store, require_current_plan, require_day
from weekend.domain.Activity import Activity
from weekend.logic.planning.plan_store import PlanStore
from weekend.utilities.config import DEFAULT_START_TIME
from weekend.utilities.validators import AddActivityInput, MoveInput, ReorderInput, RetimeInput, ThemeInput

router = APIRouter(prefix="/api", tags=["schedule"])
logger = logging.getLogger(__name__)


def _plan_payload(store: PlanStore):
    plan = store.current_plan
    return {
        "plan": plan.to_dict() if plan else None,
        "selected_theme": store.selected_theme,
    }


# -------------------- Current plan lifecycle --------------------
@router.get("/plan/current")
def get_current_plan(store: PlanStore = Depends(get_store)):
    return _plan_payload(store)


@router.post("/plan/new")
def new_plan(payload: Optional[ThemeInput] = Body(default=None), store: PlanStore = Depends(get_store)):
    """Start a fresh plan; without a body the selected theme is used."""
    theme = payload.theme if payload else store.selected_theme
    plan = store.create_new_plan(theme)
    return plan.to_dict()


@router.post("/plan/current/clear")
def clear_current_plan(store: PlanStore = Depends(get_store)):
    store.clear_current_plan()
    return {"success": True}


@router.post("/plan/save")
def save_plan(store: PlanStore = Depends(get_store)):
    plan = require_current_plan(store)
    store.save_plan()
    return {"success": True, "plan_id": plan.id}


@router.post("/theme")
def set_theme(payload: ThemeInput, store: PlanStore = Depends(get_store)):
    store.set_theme(payload.theme)
    return {"selected_theme": store.selected_theme}


# -------------------- Schedule operations --------------------
@router.post("/plan/current/activities")
def add_activity(payload: AddActivityInput, store: PlanStore = Depends(get_store)):
    """Place an activity; the response tells whether it was pushed to a later slot."""
    require_current_plan(store)
    if payload.activity is not None:
        activity = Activity.from_dict(payload.activity.model_dump())
    else:
        activity = store.find_activity(payload.activity_id)
        if activity is None:
            raise HTTPException(status_code=404, detail="Activity not found")
    result = store.add_activity_to_schedule(activity, payload.day, payload.start_time or DEFAULT_START_TIME)
    return result.to_dict()


@router.delete("/plan/current/activities/{day}/{activity_id}")
def remove_activity(day: str, activity_id: str, store: PlanStore = Depends(get_store)):
    require_current_plan(store)
    require_day(day)
    store.remove_activity_from_schedule(activity_id, day)
    return _plan_payload(store)


@router.put("/plan/current/activities/{day}/{activity_id}/time")
def retime_activity(day: str, activity_id: str, payload: RetimeInput, store: PlanStore = Depends(get_store)):
    require_current_plan(store)
    require_day(day)
    result = store.update_activity_time(activity_id, day, payload.start_time)
    if not result.success:
        raise HTTPException(status_code=404, detail="Activity not scheduled on this day")
    return result.to_dict()


@router.post("/plan/current/reorder")
def reorder(payload: ReorderInput, store: PlanStore = Depends(get_store)):
    require_current_plan(store)
    store.reorder_activities(payload.day, payload.old_index, payload.new_index)
    return _plan_payload(store)


@router.post("/plan/current/move")
def move_activity(payload: MoveInput, store: PlanStore = Depends(get_store)):
    require_current_plan(store)
    result = store.move_activity_between_days(payload.activity_id, payload.from_day, payload.to_day,
                                              payload.start_time)
    if not result.success:
        raise HTTPException(status_code=404, detail="Activity not scheduled on this day")
    return result.to_dict()
