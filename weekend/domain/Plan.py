"""WeekendPlan aggregate: two ordered days of scheduled activities plus theme, mood and color metadata."""
import copy
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from weekend.domain.Activity import Day, ScheduledActivity, _enum_value


class Theme(str, Enum):
    LAZY = "lazy"
    ADVENTUROUS = "adventurous"
    FAMILY = "family"
    PRODUCTIVE = "productive"
    SOCIAL = "social"


# camelCase keys as written by the web client
_CAMEL_KEYS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "overallMood": "overall_mood",
    "moodJournal": "mood_journal",
    "customThemeColors": "custom_theme_colors",
    "activityId": "activity_id",
}


def _snake_keys(data) -> dict:
    d = dict(data) if isinstance(data, dict) else {}
    return {_CAMEL_KEYS.get(k, k): v for k, v in d.items()}


def parse_timestamp(value) -> Optional[datetime]:
    '''Parses an ISO timestamp (a trailing "Z" is accepted); returns None when unparseable.'''
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if isinstance(value, datetime) else None


class ThemeColors:
    def __init__(self, primary: str, secondary: str, accent: str):
        self.primary = primary
        self.secondary = secondary
        self.accent = accent

    def __eq__(self, other):
        if not isinstance(other, ThemeColors):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"ThemeColors({self.primary}, {self.secondary}, {self.accent})"

    @staticmethod
    def from_dict(data):
        if isinstance(data, ThemeColors):
            return data
        if not isinstance(data, dict):
            return None
        return ThemeColors(data.get("primary", ""), data.get("secondary", ""), data.get("accent", ""))

    def to_dict(self):
        return {"primary": self.primary, "secondary": self.secondary, "accent": self.accent}


class MoodEntry:
    def __init__(self, id: str, mood: str, timestamp: Optional[datetime] = None,
                 notes: Optional[str] = None, activity_id: Optional[str] = None):
        self.id = id
        self.mood = _enum_value(mood)
        self.timestamp = timestamp or datetime.now()
        self.notes = notes or None
        self.activity_id = activity_id

    def __repr__(self) -> str:
        return f"MoodEntry({self.id}, {self.mood}, {self.timestamp:%Y-%m-%d %H:%M})"

    @staticmethod
    def from_dict(data):
        if isinstance(data, MoodEntry):
            return data
        d = _snake_keys(data)
        return MoodEntry(
            id=d.get("id", ""),
            mood=d.get("mood", ""),
            timestamp=parse_timestamp(d.get("timestamp")),
            notes=d.get("notes"),
            activity_id=d.get("activity_id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "timestamp": _format_timestamp(self.timestamp),
            "mood": self.mood,
            "notes": self.notes,
            "activity_id": self.activity_id,
        }


class WeekendPlan:
    def __init__(self, id: str, name: str, theme: str = Theme.LAZY.value,
                 saturday: Optional[List[ScheduledActivity]] = None,
                 sunday: Optional[List[ScheduledActivity]] = None,
                 created_at: Optional[datetime] = None, updated_at: Optional[datetime] = None,
                 overall_mood: Optional[str] = None, mood_journal: Optional[List[MoodEntry]] = None,
                 custom_theme_colors: Optional[ThemeColors] = None):
        now = datetime.now()
        self.id = id
        self.name = name
        self.theme = Theme(_enum_value(theme)).value
        self.saturday = saturday[:] if saturday else []
        self.sunday = sunday[:] if sunday else []
        self.created_at = created_at or now
        self.updated_at = updated_at or self.created_at
        self.overall_mood = _enum_value(overall_mood) or None
        self.mood_journal = mood_journal[:] if mood_journal else []
        self.custom_theme_colors = custom_theme_colors

    def __str__(self) -> str:
        return (f"{self.name} ({self.id}) - Theme: {self.theme} - "
                f"Saturday: {len(self.saturday)} - Sunday: {len(self.sunday)}")

    __repr__ = __str__

    def activities_for(self, day) -> List[ScheduledActivity]:
        return self.saturday if Day(_enum_value(day)) is Day.SATURDAY else self.sunday

    def set_activities(self, day, activities: List[ScheduledActivity]):
        if Day(_enum_value(day)) is Day.SATURDAY:
            self.saturday = list(activities)
        else:
            self.sunday = list(activities)

    def all_activities(self) -> List[ScheduledActivity]:
        return self.saturday + self.sunday

    def copy(self):
        '''Deep copy: mutating the copy never touches this plan.'''
        return copy.deepcopy(self)

    @staticmethod
    def from_dict(data):
        '''Builds a plan from a record. Activities take their day from the list they appear in.'''
        d = _snake_keys(data)
        days = {}
        for day in Day:
            entries = []
            for entry in d.get(day.value) or []:
                if isinstance(entry, ScheduledActivity):
                    entries.append(entry.placed_at(entry.start_time, entry.end_time, day.value))
                    continue
                item = dict(entry)
                item["day"] = day.value
                entries.append(ScheduledActivity.from_dict(item))
            days[day.value] = entries
        return WeekendPlan(
            id=d.get("id", ""),
            name=d.get("name", ""),
            theme=d.get("theme") or Theme.LAZY.value,
            saturday=days[Day.SATURDAY.value],
            sunday=days[Day.SUNDAY.value],
            created_at=parse_timestamp(d.get("created_at")),
            updated_at=parse_timestamp(d.get("updated_at")),
            overall_mood=d.get("overall_mood"),
            mood_journal=[MoodEntry.from_dict(e) for e in d.get("mood_journal") or []],
            custom_theme_colors=ThemeColors.from_dict(d.get("custom_theme_colors")),
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "theme": self.theme,
            "saturday": [a.to_dict() for a in self.saturday],
            "sunday": [a.to_dict() for a in self.sunday],
            "created_at": _format_timestamp(self.created_at),
            "updated_at": _format_timestamp(self.updated_at),
            "overall_mood": self.overall_mood,
            "mood_journal": [e.to_dict() for e in self.mood_journal],
            "custom_theme_colors": self.custom_theme_colors.to_dict() if self.custom_theme_colors else None,
        }
