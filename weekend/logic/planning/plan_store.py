"""Plan store: the current plan, the saved-plans collection, theme selection and custom activities.

One PlanStore is owned by the application shell. Schedule mutations are
delegated to the ScheduleEngine; everything else here is plan-level
bookkeeping. Plans cross the boundary between current and saved by value,
so editing the current plan never silently edits its saved copy.

Only saved_plans is persisted (through the repository, after every change to
it). current_plan and selected_theme are session state.
"""
import copy
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional
from uuid import uuid4

from weekend.domain.Activity import Activity, Day, parse_day
from weekend.domain.Plan import MoodEntry, Theme, ThemeColors, WeekendPlan
from weekend.domain.WeekendTheme import WeekendTheme
from weekend.events.Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS, PLAN_CREATED, PLAN_DELETED, PLAN_IMPORTED, PLAN_LOADED,
    PLAN_SAVED, PLAN_UPDATED
)
from weekend.events.event_helpers import publish_plan_event, publish_rescheduled, publish_schedule_changed
from weekend.infra.Catalog_Repository import reading_from_activities, reading_from_themes
from weekend.logic.scheduling.engine import NOT_APPLIED, ScheduleEngine, ScheduleResult
from weekend.utilities.config import DEFAULT_START_TIME, SEED_NEW_PLANS
from weekend.utilities.constants import COPY_SUFFIX, DEFAULT_THEME, PLAN_NAME_DATE_FORMAT, PLAN_NAME_TEMPLATE

logger = logging.getLogger(__name__)


def generate_id() -> str:
    return uuid4().hex[:9]


class PlanStore:
    def __init__(self, repository=None, event_bus: Optional[EventBus] = None,
                 engine: Optional[ScheduleEngine] = None, clock: Callable[[], datetime] = datetime.now,
                 id_factory: Callable[[], str] = generate_id,
                 catalog: Optional[List[Activity]] = None, themes: Optional[List[WeekendTheme]] = None,
                 seed_new_plans: bool = SEED_NEW_PLANS):
        self._repository = repository
        self._bus = event_bus or GLOBAL_EVENT_BUS
        self._clock = clock
        self._engine = engine or ScheduleEngine(clock)
        self._new_id = id_factory
        self._catalog = catalog
        self._themes = themes
        self._seed_new_plans = seed_new_plans

        self.current_plan: Optional[WeekendPlan] = None
        self.saved_plans: Dict[str, WeekendPlan] = {}
        self.selected_theme: str = DEFAULT_THEME
        self.custom_activities: Dict[str, Activity] = {}

        if repository is not None:
            for plan in repository.load():
                self.saved_plans[plan.id] = plan
            logger.info(f"Loaded {len(self.saved_plans)} saved plans")

    # --- Catalog ------------------------------------------------------------
    def catalog(self) -> List[Activity]:
        if self._catalog is None:
            self._catalog = reading_from_activities()
        return self._catalog

    def themes(self) -> List[WeekendTheme]:
        if self._themes is None:
            self._themes = reading_from_themes()
        return self._themes

    def theme(self, theme_id: str) -> Optional[WeekendTheme]:
        return next((t for t in self.themes() if t.id == theme_id), None)

    def all_activities(self) -> List[Activity]:
        """Predefined catalog followed by the user's custom activities."""
        return list(self.catalog()) + list(self.custom_activities.values())

    def find_activity(self, activity_id: str) -> Optional[Activity]:
        if activity_id in self.custom_activities:
            return self.custom_activities[activity_id]
        return next((a for a in self.catalog() if a.id == activity_id), None)

    def add_custom_activity(self, activity) -> Activity:
        '''Registers a user-created activity; an id is generated when missing.'''
        data = activity.to_dict() if isinstance(activity, Activity) else dict(activity)
        data["is_custom"] = True
        if not data.get("id"):
            data["id"] = f"custom-{self._new_id()}"
        custom = Activity.from_dict(data)
        self.custom_activities[custom.id] = custom
        logger.info(f"Added custom activity {custom.id}")
        return custom

    def remove_custom_activity(self, activity_id: str):
        self.custom_activities.pop(activity_id, None)

    # --- Plan lifecycle -----------------------------------------------------
    def create_new_plan(self, theme: str) -> WeekendPlan:
        theme = Theme(theme).value
        now = self._clock()
        plan = WeekendPlan(
            id=self._new_id(),
            name=PLAN_NAME_TEMPLATE.format(date=now.strftime(PLAN_NAME_DATE_FORMAT)),
            theme=theme,
            created_at=now,
            updated_at=now,
        )
        if self._seed_new_plans:
            self._seed(plan)
        self.current_plan = plan
        self.selected_theme = theme
        logger.info(f"Created plan {plan.id} with theme {theme}")
        publish_plan_event(PLAN_CREATED, plan.id, self._bus, theme=theme)
        return plan

    def _seed(self, plan: WeekendPlan):
        """Sample data: the theme's suggested activities, split across both days from DEFAULT_START_TIME."""
        preset = self.theme(plan.theme)
        if preset is None:
            return
        suggested = [a for a in (self.find_activity(i) for i in preset.suggested_activities) if a]
        half = (len(suggested) + 1) // 2
        for index, activity in enumerate(suggested):
            day = Day.SATURDAY if index < half else Day.SUNDAY
            self._engine.add_activity_to_schedule(plan, activity, day.value, DEFAULT_START_TIME)
        plan.updated_at = plan.created_at

    def save_plan(self):
        """Upsert the current plan into saved plans (by value). No-op without a current plan."""
        if self.current_plan is None:
            return
        self.saved_plans[self.current_plan.id] = self.current_plan.copy()
        self._persist()
        logger.info(f"Saved plan {self.current_plan.id}")
        publish_plan_event(PLAN_SAVED, self.current_plan.id, self._bus)

    def load_plan(self, plan_id: str) -> Optional[WeekendPlan]:
        plan = self.saved_plans.get(plan_id)
        if plan is None:
            return None
        self.current_plan = plan.copy()
        self.selected_theme = plan.theme
        logger.info(f"Loaded plan {plan_id}")
        publish_plan_event(PLAN_LOADED, plan_id, self._bus)
        return self.current_plan

    def delete_plan(self, plan_id: str):
        removed = self.saved_plans.pop(plan_id, None) is not None
        was_current = self.current_plan is not None and self.current_plan.id == plan_id
        if was_current:
            self.current_plan = None
        if removed:
            self._persist()
        if removed or was_current:
            logger.info(f"Deleted plan {plan_id}")
            publish_plan_event(PLAN_DELETED, plan_id, self._bus, was_current=was_current)

    def duplicate_plan(self, plan_id: str) -> Optional[WeekendPlan]:
        '''Copies a saved plan under a new id with fresh timestamps and an empty mood journal.'''
        source = self.saved_plans.get(plan_id)
        if source is None:
            return None
        now = self._clock()
        duplicate = source.copy()
        duplicate.id = self._new_id()
        duplicate.name = f"{source.name}{COPY_SUFFIX}"
        duplicate.created_at = now
        duplicate.updated_at = now
        duplicate.mood_journal = []
        self.saved_plans[duplicate.id] = duplicate
        self._persist()
        logger.info(f"Duplicated plan {plan_id} as {duplicate.id}")
        publish_plan_event(PLAN_CREATED, duplicate.id, self._bus, theme=duplicate.theme)
        return duplicate

    def import_plan(self, plan_data) -> WeekendPlan:
        '''Treats external data as a template: new id and timestamps, normalized days; becomes current.'''
        source = plan_data.copy() if isinstance(plan_data, WeekendPlan) else WeekendPlan.from_dict(plan_data)
        now = self._clock()
        source.id = self._new_id()
        source.created_at = now
        source.updated_at = now
        self._engine.normalize(source)
        self.saved_plans[source.id] = source
        self.current_plan = source.copy()
        self.selected_theme = source.theme
        self._persist()
        logger.info(f"Imported plan {source.id} ({source.name})")
        publish_plan_event(PLAN_IMPORTED, source.id, self._bus)
        return self.current_plan

    def clear_current_plan(self):
        self.current_plan = None

    def set_theme(self, theme: str):
        self.selected_theme = Theme(theme).value

    def get_plan(self, plan_id: str) -> Optional[WeekendPlan]:
        """Current plan if it has this id, otherwise the saved copy."""
        if self.current_plan is not None and self.current_plan.id == plan_id:
            return self.current_plan
        return self.saved_plans.get(plan_id)

    def list_plans(self) -> List[WeekendPlan]:
        return list(self.saved_plans.values())

    # --- Plan metadata (applied to current AND saved copies) ----------------
    def _apply(self, plan_id: str, field: str, update: Callable[[WeekendPlan], None]):
        touched_saved = False
        now = self._clock()
        if self.current_plan is not None and self.current_plan.id == plan_id:
            update(self.current_plan)
            self.current_plan.updated_at = now
        saved = self.saved_plans.get(plan_id)
        if saved is not None:
            update(saved)
            saved.updated_at = now
            touched_saved = True
        if touched_saved:
            self._persist()
        if touched_saved or (self.current_plan is not None and self.current_plan.id == plan_id):
            publish_plan_event(PLAN_UPDATED, plan_id, self._bus, field=field)

    def update_plan_name(self, plan_id: str, name: str):
        def _rename(plan):
            plan.name = name
        self._apply(plan_id, "name", _rename)

    def update_plan_mood(self, plan_id: str, mood: str, entry):
        entry = MoodEntry.from_dict(entry)

        def _record(plan):
            plan.overall_mood = mood.value if hasattr(mood, "value") else mood
            plan.mood_journal = plan.mood_journal + [copy.copy(entry)]
        self._apply(plan_id, "mood", _record)

    def update_theme_colors(self, plan_id: str, colors):
        colors = ThemeColors.from_dict(colors)

        def _recolor(plan):
            plan.custom_theme_colors = copy.copy(colors)
        self._apply(plan_id, "colors", _recolor)

    # --- Schedule operations on the current plan ----------------------------
    def add_activity_to_schedule(self, activity: Activity, day: str, preferred_start: str) -> ScheduleResult:
        plan = self.current_plan
        if plan is None:
            return NOT_APPLIED
        result = self._engine.add_activity_to_schedule(plan, activity, day, preferred_start)
        self._after_schedule_change(plan, "add", day, activity.id, preferred_start, result)
        return result

    def remove_activity_from_schedule(self, activity_id: str, day: str):
        plan = self.current_plan
        if plan is None or parse_day(day) is None:
            return
        self._engine.remove_activity_from_schedule(plan, activity_id, day)
        publish_schedule_changed(plan.id, "remove", Day(day).value, self._bus)

    def update_activity_time(self, activity_id: str, day: str, new_start: str) -> ScheduleResult:
        plan = self.current_plan
        if plan is None:
            return NOT_APPLIED
        result = self._engine.update_activity_time(plan, activity_id, day, new_start)
        self._after_schedule_change(plan, "retime", day, activity_id, new_start, result)
        return result

    def reorder_activities(self, day: str, old_index: int, new_index: int):
        plan = self.current_plan
        if plan is None or parse_day(day) is None:
            return
        self._engine.reorder_activities(plan, day, old_index, new_index)
        publish_schedule_changed(plan.id, "reorder", Day(day).value, self._bus)

    def move_activity_between_days(self, activity_id: str, from_day: str, to_day: str,
                                   new_start: str) -> ScheduleResult:
        plan = self.current_plan
        if plan is None:
            return NOT_APPLIED
        result = self._engine.move_activity_between_days(plan, activity_id, from_day, to_day, new_start)
        if result.success and Day(from_day) is not Day(to_day):
            publish_schedule_changed(plan.id, "move", Day(from_day).value, self._bus)
        self._after_schedule_change(plan, "move", to_day, activity_id, new_start, result)
        return result

    def _after_schedule_change(self, plan, operation, day, activity_id, requested, result):
        if not result.success:
            return
        publish_schedule_changed(plan.id, operation, Day(day).value, self._bus)
        if result.rescheduled:
            publish_rescheduled(plan.id, activity_id, Day(day).value, requested, result, self._bus)

    # --- Persistence --------------------------------------------------------
    def _persist(self):
        if self._repository is None:
            return
        try:
            self._repository.save(self.saved_plans.values())
        except OSError as e:
            # in-memory state stays authoritative; the next change retries the write
            logger.error(f"Failed to persist saved plans: {e}")
