"""The application's single PlanStore and the FastAPI dependency that hands it to routes.

Tests replace the store with `app.dependency_overrides[get_store]`.
"""
from fastapi import HTTPException

from weekend.domain.Activity import parse_day
from weekend.infra.Plan_Repository import PlanRepository
from weekend.infra.paths import PLANS_FILE
from weekend.logic.planning.plan_store import PlanStore

store = PlanStore(repository=PlanRepository(PLANS_FILE))


def get_store() -> PlanStore:
    return store


def require_plan(store: PlanStore, plan_id: str):
    plan = store.get_plan(plan_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="Plan not found")
    return plan


def require_current_plan(store: PlanStore):
    if store.current_plan is None:
        raise HTTPException(status_code=404, detail="No current plan")
    return store.current_plan


def require_day(day: str):
    parsed = parse_day(day)
    if parsed is None:
        raise HTTPException(status_code=400, detail=f"Unknown day: {day}")
    return parsed
