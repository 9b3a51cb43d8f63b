"""Simple Event Bus / Observer implementation for plan and schedule changes.

Event names used so far:
  plan.created         -> payload {"plan_id": str, "theme": str}
  plan.saved           -> payload {"plan_id": str}
  plan.loaded          -> payload {"plan_id": str}
  plan.deleted         -> payload {"plan_id": str, "was_current": bool}
  plan.imported        -> payload {"plan_id": str}
  plan.updated         -> payload {"plan_id": str, "field": str}
  schedule.changed     -> payload {"plan_id": str, "operation": str, "day": str}
  activity.rescheduled -> payload {"plan_id", "activity_id", "day", "requested", "final", "still_conflicts"}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
PLAN_CREATED = "plan.created"
PLAN_SAVED = "plan.saved"
PLAN_LOADED = "plan.loaded"
PLAN_DELETED = "plan.deleted"
PLAN_IMPORTED = "plan.imported"
PLAN_UPDATED = "plan.updated"
SCHEDULE_CHANGED = "schedule.changed"
ACTIVITY_RESCHEDULED = "activity.rescheduled"


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        if callback not in self._subscribers[event_name]:
            self._subscribers[event_name].append(callback)

    def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        try:
            self._subscribers[event_name].remove(callback)
        except (ValueError, KeyError):
            pass

    def publish(self, event_name: str, payload: Any = None):
        for cb in list(self._subscribers.get(event_name, [])):
            try:
                cb(event_name, payload)
            except Exception:
                # a failing subscriber must not abort the state change that published
                logger.exception(f"[EventBus] Error delivering {event_name} to {cb}")


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
    'EventBus', 'GLOBAL_EVENT_BUS',
    'PLAN_CREATED', 'PLAN_SAVED', 'PLAN_LOADED', 'PLAN_DELETED', 'PLAN_IMPORTED', 'PLAN_UPDATED',
    'SCHEDULE_CHANGED', 'ACTIVITY_RESCHEDULED'
]
