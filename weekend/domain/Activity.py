"""Activity domain entities: catalog template (Activity) and its placement on a day (ScheduledActivity)."""
from enum import Enum
from typing import Dict, Optional


class Day(str, Enum):
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Category(str, Enum):
    OUTDOOR = "outdoor"
    INDOOR = "indoor"
    SOCIAL = "social"
    WELLNESS = "wellness"
    FOOD = "food"
    ENTERTAINMENT = "entertainment"


class ActivityMood(str, Enum):
    """Mood an activity is meant to evoke (catalog metadata)."""
    ENERGETIC = "energetic"
    RELAXED = "relaxed"
    HAPPY = "happy"
    ADVENTUROUS = "adventurous"


class UserMood(str, Enum):
    """Mood reported by the user (mood journal, plan overall mood)."""
    EXCITED = "excited"
    NEUTRAL = "neutral"
    STRESSED = "stressed"
    TIRED = "tired"
    MOTIVATED = "motivated"


CATEGORY_ICONS: Dict[Category, str] = {
    Category.OUTDOOR: "🌳",
    Category.INDOOR: "🏠",
    Category.SOCIAL: "👥",
    Category.WELLNESS: "🧘",
    Category.FOOD: "🍽️",
    Category.ENTERTAINMENT: "🎭",
}
DEFAULT_CATEGORY_ICON = "📝"

USER_MOOD_ICONS: Dict[UserMood, str] = {
    UserMood.EXCITED: "😄",
    UserMood.MOTIVATED: "💪",
    UserMood.NEUTRAL: "😐",
    UserMood.TIRED: "😴",
    UserMood.STRESSED: "😰",
}
DEFAULT_MOOD_ICON = "🙂"


def category_icon(category: str) -> str:
    """Icon for a category; custom categories fall back to DEFAULT_CATEGORY_ICON."""
    try:
        return CATEGORY_ICONS[Category(category)]
    except ValueError:
        return DEFAULT_CATEGORY_ICON


def mood_icon(mood: str) -> str:
    try:
        return USER_MOOD_ICONS[UserMood(mood)]
    except ValueError:
        return DEFAULT_MOOD_ICON


# camelCase keys as written by the web client
_CAMEL_KEYS = {
    "isCustom": "is_custom",
    "startTime": "start_time",
    "endTime": "end_time",
    "userMood": "user_mood",
}


def _snake_keys(data) -> dict:
    d = dict(data) if isinstance(data, dict) else {}
    return {_CAMEL_KEYS.get(k, k): v for k, v in d.items()}


def _enum_value(value):
    return value.value if isinstance(value, Enum) else value


def parse_day(value) -> Optional[Day]:
    """Day for 'saturday'/'sunday' (or a Day); None for anything else."""
    try:
        return Day(_enum_value(value))
    except ValueError:
        return None


class Activity:
    def __init__(self, id: str = "", name: str = "", category: str = Category.INDOOR.value,
                 duration: int = 60, icon: str = "", description: str = "",
                 mood: Optional[str] = None, is_custom: bool = False):
        self.id = id
        self.name = name
        self.category = _enum_value(category)
        self.duration = int(duration)
        self.icon = icon or category_icon(self.category)
        self.description = description or ""
        self.mood = _enum_value(mood) or None
        self.is_custom = bool(is_custom)

    def __str__(self) -> str:
        mood = f" - Mood: {self.mood}" if self.mood else ""
        return f"{self.name} ({self.id}) - {self.duration} min - {self.category}{mood}"

    __repr__ = __str__

    _FIELDS = ("id", "name", "category", "duration", "icon", "description", "mood", "is_custom")

    @classmethod
    def from_dict(cls, data):
        '''Creates an Activity from a dictionary. Ignores unknown keys.'''
        d = _snake_keys(data)
        filtered = {k: v for k, v in d.items() if k in cls._FIELDS}
        return Activity(**filtered)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "duration": self.duration,
            "icon": self.icon,
            "description": self.description,
            "mood": self.mood,
            "is_custom": self.is_custom,
        }


class ScheduledActivity(Activity):
    def __init__(self, id: str = "", name: str = "", category: str = Category.INDOOR.value,
                 duration: int = 60, icon: str = "", description: str = "",
                 mood: Optional[str] = None, is_custom: bool = False,
                 day: str = Day.SATURDAY.value, start_time: str = "", end_time: str = "",
                 user_mood: Optional[str] = None, notes: Optional[str] = None):
        super().__init__(id, name, category, duration, icon, description, mood, is_custom)
        self.day = Day(_enum_value(day)).value
        self.start_time = start_time
        self.end_time = end_time
        self.user_mood = _enum_value(user_mood) or None
        self.notes = notes or None

    @classmethod
    def from_activity(cls, activity: Activity, day: str, start_time: str, end_time: str):
        '''Places a catalog activity on a day. Placement fields of a ScheduledActivity input are replaced.'''
        extra = {}
        if isinstance(activity, ScheduledActivity):
            extra = {"user_mood": activity.user_mood, "notes": activity.notes}
        return cls(activity.id, activity.name, activity.category, activity.duration, activity.icon,
                   activity.description, activity.mood, activity.is_custom,
                   day=day, start_time=start_time, end_time=end_time, **extra)

    def placed_at(self, start_time: str, end_time: str, day: Optional[str] = None):
        '''Returns a copy of this placement with new times (and optionally a new day).'''
        return ScheduledActivity.from_activity(self, day or self.day, start_time, end_time)

    def __str__(self) -> str:
        return f"{self.start_time}-{self.end_time} {super().__str__()}"

    __repr__ = __str__

    _FIELDS = Activity._FIELDS + ("day", "start_time", "end_time", "user_mood", "notes")

    def to_dict(self):
        d = super().to_dict()
        d.update({
            "day": self.day,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "user_mood": self.user_mood,
            "notes": self.notes,
        })
        return d

    @classmethod
    def from_dict(cls, data):
        d = _snake_keys(data)
        filtered = {k: v for k, v in d.items() if k in cls._FIELDS}
        return ScheduledActivity(**filtered)
