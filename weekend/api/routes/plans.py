"""Saved-plans routes: listing, loading, metadata updates and import."""
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
import logging

from weekend.api.dependencies import get_store, require_plan
from weekend.domain.Plan import MoodEntry
from weekend.logic.planning.plan_store import PlanStore, generate_id
from weekend.utilities.validators import MoodInput, PlanImportInput, RenameInput, ThemeColorsInput

router = APIRouter(prefix="/api/plans", tags=["plans"])
logger = logging.getLogger(__name__)


def _require_saved(store: PlanStore, plan_id: str):
    if plan_id not in store.saved_plans:
        raise HTTPException(status_code=404, detail="Plan not found")
    return store.saved_plans[plan_id]


@router.get("")
def list_plans(store: PlanStore = Depends(get_store)):
    return [p.to_dict() for p in store.list_plans()]


@router.post("/import")
def import_plan(payload: PlanImportInput, store: PlanStore = Depends(get_store)):
    """Import external plan data as a new plan (fresh id); it becomes the current plan."""
    plan = store.import_plan(payload.model_dump())
    return plan.to_dict()


@router.post("/{plan_id}/load")
def load_plan(plan_id: str, store: PlanStore = Depends(get_store)):
    _require_saved(store, plan_id)
    return store.load_plan(plan_id).to_dict()


@router.delete("/{plan_id}")
def delete_plan(plan_id: str, store: PlanStore = Depends(get_store)):
    require_plan(store, plan_id)
    store.delete_plan(plan_id)
    return {"success": True}


@router.post("/{plan_id}/duplicate")
def duplicate_plan(plan_id: str, store: PlanStore = Depends(get_store)):
    _require_saved(store, plan_id)
    return store.duplicate_plan(plan_id).to_dict()


@router.put("/{plan_id}/name")
def rename_plan(plan_id: str, payload: RenameInput, store: PlanStore = Depends(get_store)):
    require_plan(store, plan_id)
    store.update_plan_name(plan_id, payload.name)
    return store.get_plan(plan_id).to_dict()


@router.post("/{plan_id}/mood")
def record_mood(plan_id: str, payload: MoodInput, store: PlanStore = Depends(get_store)):
    """Append a mood journal entry and set it as the plan's overall mood."""
    require_plan(store, plan_id)
    entry = MoodEntry(
        id=generate_id(),
        mood=payload.mood,
        timestamp=datetime.now(),
        notes=payload.notes,
        activity_id=payload.activity_id,
    )
    store.update_plan_mood(plan_id, payload.mood, entry)
    return entry.to_dict()


@router.put("/{plan_id}/colors")
def update_colors(plan_id: str, payload: ThemeColorsInput, store: PlanStore = Depends(get_store)):
    require_plan(store, plan_id)
    store.update_theme_colors(plan_id, payload.model_dump())
    return store.get_plan(plan_id).to_dict()
