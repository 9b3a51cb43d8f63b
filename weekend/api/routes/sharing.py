"""Export, share-link and statistics routes for a single plan."""
from fastapi import APIRouter, Depends, HTTPException, Query, Response
import logging

from weekend.api.dependencies import get_store, require_plan
from weekend.logic.planning.plan_store import PlanStore
from weekend.utilities.export_import import DataExporter, encode_shared_plan, generate_shareable_link, parse_shared_plan
from weekend.utilities.statistics import WeekendPlanStats

router = APIRouter(prefix="/api", tags=["sharing"])
logger = logging.getLogger(__name__)


@router.get("/plans/{plan_id}/export")
def export_plan(plan_id: str, format: str = Query(default="json", pattern=r"^(json|csv|txt|pdf)$"),
                store: PlanStore = Depends(get_store)):
    plan = require_plan(store, plan_id)
    content, media_type, ext = DataExporter(store).render(plan, format)
    return Response(
        content=content,
        media_type=media_type,
        headers={
            "Content-Disposition": f"attachment; filename=weekend_plan_{plan.id}.{ext}"
        },
    )


@router.get("/plans/{plan_id}/share")
def share_plan(plan_id: str, store: PlanStore = Depends(get_store)):
    plan = require_plan(store, plan_id)
    return {"link": generate_shareable_link(plan), "token": encode_shared_plan(plan)}


@router.get("/shared")
def open_shared_plan(token: str = Query(..., min_length=1)):
    """Decode a share token into a read-only plan preview."""
    plan = parse_shared_plan(token)
    if plan is None:
        raise HTTPException(status_code=400, detail="Invalid share link")
    return plan.to_dict()


@router.get("/plans/{plan_id}/stats")
def plan_stats(plan_id: str, store: PlanStore = Depends(get_store)):
    plan = require_plan(store, plan_id)
    return WeekendPlanStats(plan).generate_report()
