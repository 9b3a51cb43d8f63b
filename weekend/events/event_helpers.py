"""Event helper utilities.

Helpers that build the payloads for plan and schedule events and publish them
on a bus (the global bus unless one is given).

Quick import:
    from weekend.events.event_helpers import (
        publish_plan_event, publish_schedule_changed, publish_rescheduled
    )
"""
from __future__ import annotations
from typing import Optional

from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS, SCHEDULE_CHANGED, ACTIVITY_RESCHEDULED
)

__all__ = ['publish_plan_event', 'publish_schedule_changed', 'publish_rescheduled']


def publish_plan_event(event_name: str, plan_id: str, bus: Optional[EventBus] = None, **extra):
    """Publish a plan lifecycle event (plan.created, plan.saved, ...)."""
    (bus or GLOBAL_EVENT_BUS).publish(event_name, {'plan_id': plan_id, **extra})


def publish_schedule_changed(plan_id: str, operation: str, day: str, bus: Optional[EventBus] = None):
    """Publish a schedule.changed event after a day list was mutated."""
    (bus or GLOBAL_EVENT_BUS).publish(SCHEDULE_CHANGED, {
        'plan_id': plan_id,
        'operation': operation,
        'day': day
    })


def publish_rescheduled(plan_id: str, activity_id: str, day: str, requested: str, result,
                        bus: Optional[EventBus] = None):
    """Publish an activity.rescheduled event from a ScheduleResult.

    Payload structure:
        {
          'plan_id', 'activity_id', 'day',
          'requested': <HH:MM asked for>, 'final': <HH:MM placed at>,
          'still_conflicts': <bool>
        }
    """
    (bus or GLOBAL_EVENT_BUS).publish(ACTIVITY_RESCHEDULED, {
        'plan_id': plan_id,
        'activity_id': activity_id,
        'day': day,
        'requested': requested,
        'final': result.final_start_time,
        'still_conflicts': result.still_conflicts
    })
