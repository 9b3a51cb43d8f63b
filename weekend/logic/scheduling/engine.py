"""Schedule engine: all mutations of a WeekendPlan's day lists.

Every operation works on one plan and leaves each touched day sorted by start
time. Lookups that find nothing (unknown day, unknown activity id, index out
of range) are silent no-ops. Malformed time strings raise (InvalidTimeFormat),
and so does adding to a day that does not exist.
"""
import logging
from datetime import datetime
from typing import Callable, List, NamedTuple, Optional

from weekend.domain.Activity import Activity, Day, ScheduledActivity, parse_day
from weekend.domain.Plan import WeekendPlan
from weekend.logic.scheduling.conflicts import resolve_start_time
from weekend.logic.timing.clock import calculate_end_time, minutes_to_time, time_to_minutes

logger = logging.getLogger(__name__)


class ScheduleResult(NamedTuple):
    success: bool
    rescheduled: bool
    final_start_time: Optional[str]
    still_conflicts: bool = False

    def to_dict(self):
        return {
            "success": self.success,
            "rescheduled": self.rescheduled,
            "final_start_time": self.final_start_time,
            "still_conflicts": self.still_conflicts,
        }


NOT_APPLIED = ScheduleResult(False, False, None)


def sort_by_start(activities: List[ScheduledActivity]) -> List[ScheduledActivity]:
    """Stable ascending sort by start time (minutes, not string compare)."""
    return sorted(activities, key=lambda a: time_to_minutes(a.start_time))


def _find(activities: List[ScheduledActivity], activity_id: str) -> Optional[ScheduledActivity]:
    return next((a for a in activities if a.id == activity_id), None)


class ScheduleEngine:
    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock

    def _touch(self, plan: WeekendPlan):
        plan.updated_at = self._clock()

    def add_activity_to_schedule(self, plan: WeekendPlan, activity: Activity, day: str,
                                 preferred_start: str) -> ScheduleResult:
        """Place a catalog activity on a day, pushing it later if the preferred slot is taken.

        Never fails: when the day is full the start is clamped near midnight and
        the result reports still_conflicts=True.
        """
        day = Day(day).value
        current = plan.activities_for(day)
        slot = resolve_start_time(current, preferred_start, activity.duration)
        end_time = calculate_end_time(slot.start_time, activity.duration)
        scheduled = ScheduledActivity.from_activity(activity, day, slot.start_time, end_time)
        plan.set_activities(day, sort_by_start(current + [scheduled]))
        self._touch(plan)
        self._log_resolution(plan, activity.id, day, preferred_start, slot)
        return ScheduleResult(True, slot.rescheduled, slot.start_time, slot.still_conflicts)

    def remove_activity_from_schedule(self, plan: WeekendPlan, activity_id: str, day: str):
        """Drop every entry with this activity id from the day. Idempotent."""
        if parse_day(day) is None:
            return
        current = plan.activities_for(day)
        remaining = [a for a in current if a.id != activity_id]
        if len(remaining) == len(current):
            return
        plan.set_activities(day, remaining)
        self._touch(plan)

    def update_activity_time(self, plan: WeekendPlan, activity_id: str, day: str,
                             new_start: str) -> ScheduleResult:
        """Retime an activity; conflicts are checked against the rest of the day only."""
        if parse_day(day) is None:
            return NOT_APPLIED
        current = plan.activities_for(day)
        target = _find(current, activity_id)
        if target is None:
            return NOT_APPLIED
        slot = resolve_start_time(current, new_start, target.duration, exclude_id=activity_id)
        moved = target.placed_at(slot.start_time, calculate_end_time(slot.start_time, target.duration))
        plan.set_activities(day, sort_by_start([moved if a is target else a for a in current]))
        self._touch(plan)
        self._log_resolution(plan, activity_id, day, new_start, slot)
        return ScheduleResult(True, slot.rescheduled, slot.start_time, slot.still_conflicts)

    def reorder_activities(self, plan: WeekendPlan, day: str, old_index: int, new_index: int):
        """Move the entry at old_index to new_index, then compact the day back-to-back.

        After the splice the list is re-sorted by start time; the first activity
        keeps its start and every following one starts when the previous ends.
        """
        if parse_day(day) is None:
            return
        activities = list(plan.activities_for(day))
        if not 0 <= old_index < len(activities):
            return
        item = activities.pop(old_index)
        activities.insert(max(0, new_index), item)
        ordered = sort_by_start(activities)

        compacted: List[ScheduledActivity] = []
        cursor = None
        for activity in ordered:
            if cursor is None:
                cursor = time_to_minutes(activity.start_time)
                compacted.append(activity)
            else:
                start = minutes_to_time(cursor)
                compacted.append(activity.placed_at(start, calculate_end_time(start, activity.duration)))
            cursor += activity.duration
        plan.set_activities(day, compacted)
        self._touch(plan)

    def move_activity_between_days(self, plan: WeekendPlan, activity_id: str, from_day: str,
                                   to_day: str, new_start: str) -> ScheduleResult:
        """Move an activity to another day at (or after) new_start. The source day is not compacted."""
        source_day, destination_day = parse_day(from_day), parse_day(to_day)
        if source_day is None or destination_day is None:
            return NOT_APPLIED
        from_day, to_day = source_day.value, destination_day.value
        if from_day == to_day:
            return self.update_activity_time(plan, activity_id, from_day, new_start)
        source = plan.activities_for(from_day)
        target = _find(source, activity_id)
        if target is None:
            return NOT_APPLIED
        destination = plan.activities_for(to_day)
        slot = resolve_start_time(destination, new_start, target.duration)
        moved = target.placed_at(slot.start_time, calculate_end_time(slot.start_time, target.duration), to_day)
        plan.set_activities(from_day, [a for a in source if a is not target])
        plan.set_activities(to_day, sort_by_start(destination + [moved]))
        self._touch(plan)
        self._log_resolution(plan, activity_id, to_day, new_start, slot)
        return ScheduleResult(True, slot.rescheduled, slot.start_time, slot.still_conflicts)

    def normalize(self, plan: WeekendPlan) -> WeekendPlan:
        """Recompute every end time from start + duration and re-sort both days (used for imported data)."""
        for day in Day:
            fixed = [a.placed_at(minutes_to_time(time_to_minutes(a.start_time)),
                                 calculate_end_time(a.start_time, a.duration))
                     for a in plan.activities_for(day)]
            plan.set_activities(day, sort_by_start(fixed))
        return plan

    def _log_resolution(self, plan, activity_id, day, requested, slot):
        if slot.still_conflicts:
            logger.warning(f"Day {day} of plan {plan.id} is full: {activity_id} clamped to {slot.start_time} and still overlaps")
        elif slot.rescheduled:
            logger.info(f"Rescheduled {activity_id} on {day} from {requested} to {slot.start_time}")


__all__ = ["ScheduleEngine", "ScheduleResult", "NOT_APPLIED", "sort_by_start"]
