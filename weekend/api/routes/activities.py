from fastapi import APIRouter, Depends, HTTPException
import logging

from weekend.api.dependencies import get_store
from weekend.logic.planning.plan_store import PlanStore
from weekend.utilities.validators import CustomActivityInput

router = APIRouter(prefix="/api", tags=["catalog"])
logger = logging.getLogger(__name__)


@router.get("/activities")
def list_activities(store: PlanStore = Depends(get_store)):
    """Catalog activities followed by the user's custom ones."""
    return [a.to_dict() for a in store.all_activities()]


@router.post("/activities/custom")
def add_custom_activity(payload: CustomActivityInput, store: PlanStore = Depends(get_store)):
    if payload.id and store.find_activity(payload.id) is not None:
        raise HTTPException(status_code=400, detail="Activity with this id already exists")
    activity = store.add_custom_activity(payload.model_dump())
    return activity.to_dict()


@router.delete("/activities/custom/{activity_id}")
def remove_custom_activity(activity_id: str, store: PlanStore = Depends(get_store)):
    if activity_id not in store.custom_activities:
        raise HTTPException(status_code=404, detail="Custom activity not found")
    store.remove_custom_activity(activity_id)
    return {"success": True}


@router.get("/themes")
def list_themes(store: PlanStore = Depends(get_store)):
    return [t.to_dict() for t in store.themes()]
