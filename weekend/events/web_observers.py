"""Web-facing observers for plan and schedule events.

Subscribes to a bus for reschedules and plan lifecycle events and keeps a
lightweight in-memory ring buffer of notifications that the web layer can
poll to show toast messages.

Design:
  * Each notification gets an auto-increment integer id (cursor) so clients
    can request only newer ones (since=<last_id_seen>).
  * A Lock guards the buffer; uvicorn may serve requests from a thread pool.
  * A MAX_EVENTS cap prevents unbounded memory growth.
"""
from __future__ import annotations
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime

from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS, ACTIVITY_RESCHEDULED, PLAN_CREATED, PLAN_SAVED,
    PLAN_LOADED, PLAN_DELETED, PLAN_IMPORTED
)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started_on: List[EventBus] = []

_WATCHED = (ACTIVITY_RESCHEDULED, PLAN_CREATED, PLAN_SAVED, PLAN_LOADED, PLAN_DELETED, PLAN_IMPORTED)


def _message(event_name: str, payload: Dict[str, Any]) -> str:
    if event_name == ACTIVITY_RESCHEDULED:
        if payload.get('still_conflicts'):
            return (f"{payload.get('day', '').capitalize()} is full: activity placed at "
                    f"{payload.get('final')} still overlaps another one")
        return f"Time conflict: activity moved from {payload.get('requested')} to {payload.get('final')}"
    return event_name.split('.', 1)[-1].capitalize() + " plan"


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    data = payload if isinstance(payload, dict) else {}
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now().isoformat(),
            'message': _message(event_name, data),
        }
        for k in ('plan_id', 'activity_id', 'day', 'requested', 'final', 'still_conflicts'):
            if k in data:
                evt[k] = data[k]
        _events.append(evt)
        _next_id += 1
        # Trim buffer
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start(bus: Optional[EventBus] = None):
    """Idempotent start: subscribe observers once per bus."""
    bus = bus or GLOBAL_EVENT_BUS
    if any(b is bus for b in _started_on):
        return
    for event_name in _WATCHED:
        bus.subscribe(event_name, _record)
    _started_on.append(bus)


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return notifications newer than 'since' (exclusive).

    If since is None, returns the last N (up to MAX_EVENTS) notifications.
    Response includes next_cursor (largest id) so client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


def clear():
    with _lock:
        _events.clear()


__all__ = ['start', 'get_events', 'clear']
