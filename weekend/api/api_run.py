from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse

from typing import Optional
import logging

from weekend.events.web_observers import start as start_event_observers, get_events as get_web_events
from weekend.logic.timing.clock import InvalidTimeFormat

# Routers
from weekend.api.routes import activities, plans, schedule, sharing

# Logging
logger = logging.getLogger("weekend_app")

# Initialize FastAPI app
app = FastAPI(title="Weekend Planner API")

# Include routers
app.include_router(activities.router)
app.include_router(schedule.router)
app.include_router(plans.router)
app.include_router(sharing.router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for web notifications when the app starts."""
    start_event_observers()
    logger.info("Web observers for plan events started")


# -------------------- Error mapping --------------------
@app.exception_handler(InvalidTimeFormat)
async def _invalid_time(request: Request, exc: InvalidTimeFormat):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(ValueError)
async def _invalid_value(request: Request, exc: ValueError):
    # unknown day / theme names reach the enums as plain strings
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.get('/api/notifications')
def api_notifications(
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value")
):
    """
    Return recent plan notifications (reschedules, plan lifecycle).

    Client polling strategy:
        1. First call without 'since' to load current backlog (optional).
        2. Store 'next_cursor' from response.
        3. Subsequent polls: /api/notifications?since=<next_cursor>
    """
    return get_web_events(since)
