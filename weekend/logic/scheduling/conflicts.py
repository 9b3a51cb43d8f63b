"""Conflict detection and greedy forward rescheduling for one day's activities.

Intervals are half-open [start, start + duration): an activity that starts
exactly when another ends does not conflict with it. Each existing activity's
interval is derived from its start time and duration, so an activity that
wraps past midnight still occupies the tail of the day.

Known limitation: find_next_available_time only pushes the proposed start
later. It never looks for an earlier free gap, and when the pushed slot would
run past midnight it is clamped to the last slot that ends at 24:00, which
may still overlap. resolve_start_time reports that case via still_conflicts.
"""
from typing import Iterable, List, NamedTuple, Optional

from weekend.domain.Activity import ScheduledActivity
from weekend.logic.timing.clock import minutes_to_time, time_to_minutes
from weekend.utilities.constants import MINUTES_PER_DAY


class SlotResolution(NamedTuple):
    start_time: str
    rescheduled: bool
    still_conflicts: bool


def _interval(activity: ScheduledActivity):
    start = time_to_minutes(activity.start_time)
    return start, start + activity.duration


def _others(existing: Iterable[ScheduledActivity], exclude_id: Optional[str]) -> List[ScheduledActivity]:
    return [a for a in existing if exclude_id is None or a.id != exclude_id]


def _overlaps(start: int, end: int, other_start: int, other_end: int) -> bool:
    return start < other_end and end > other_start


def has_conflict(existing: Iterable[ScheduledActivity], proposed_start: str, duration: int,
                 exclude_id: Optional[str] = None) -> bool:
    """True if [proposed_start, proposed_start + duration) overlaps any activity other than exclude_id."""
    start = time_to_minutes(proposed_start)
    end = start + duration
    return any(_overlaps(start, end, *_interval(a)) for a in _others(existing, exclude_id))


def find_next_available_time(existing: Iterable[ScheduledActivity], preferred_start: str, duration: int,
                             exclude_id: Optional[str] = None) -> str:
    """Earliest start at or after preferred_start that clears every blocking activity.

    Single forward sweep over the activities sorted by start: whenever the
    proposed interval overlaps the activity under examination, the proposal
    moves to that activity's end. If the result would run past midnight it is
    clamped to max(0, 1440 - duration).
    """
    ordered = sorted(_others(existing, exclude_id), key=lambda a: time_to_minutes(a.start_time))
    proposed = time_to_minutes(preferred_start)
    for activity in ordered:
        other_start, other_end = _interval(activity)
        if _overlaps(proposed, proposed + duration, other_start, other_end):
            proposed = other_end
    if proposed + duration > MINUTES_PER_DAY:
        proposed = max(0, MINUTES_PER_DAY - duration)
    return minutes_to_time(proposed)


def resolve_start_time(existing: Iterable[ScheduledActivity], preferred_start: str, duration: int,
                       exclude_id: Optional[str] = None) -> SlotResolution:
    """Keep preferred_start when it is free, otherwise reschedule it forward.

    still_conflicts is True only when the midnight clamp produced a slot that
    overlaps an existing activity (the day is full).
    """
    existing = list(existing)
    if not has_conflict(existing, preferred_start, duration, exclude_id):
        return SlotResolution(minutes_to_time(time_to_minutes(preferred_start)), False, False)
    final_start = find_next_available_time(existing, preferred_start, duration, exclude_id)
    still_conflicts = has_conflict(existing, final_start, duration, exclude_id)
    return SlotResolution(final_start, True, still_conflicts)


__all__ = ["SlotResolution", "has_conflict", "find_next_available_time", "resolve_start_time"]
