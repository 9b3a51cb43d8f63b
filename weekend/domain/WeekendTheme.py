"""WeekendTheme: named preset with a palette and a starter activity set (read-only catalog data)."""
from typing import List, Optional

from weekend.domain.Plan import ThemeColors


class WeekendTheme:
    def __init__(self, id: str = "", name: str = "", description: str = "",
                 suggested_activities: Optional[List[str]] = None,
                 primary_color: str = "", secondary_color: str = "", accent_color: str = "",
                 icon: str = "", mood: str = "", vibe: str = ""):
        self.id = id
        self.name = name
        self.description = description
        self.suggested_activities = suggested_activities[:] if suggested_activities else []
        self.primary_color = primary_color
        self.secondary_color = secondary_color
        self.accent_color = accent_color
        self.icon = icon
        self.mood = mood
        self.vibe = vibe

    def __str__(self) -> str:
        return f"{self.icon} {self.name} ({self.id})".strip()

    __repr__ = __str__

    def colors(self) -> ThemeColors:
        return ThemeColors(self.primary_color, self.secondary_color, self.accent_color)

    @staticmethod
    def from_dict(data):
        allowed = {"id", "name", "description", "suggested_activities", "primary_color",
                   "secondary_color", "accent_color", "icon", "mood", "vibe"}
        d = dict(data) if isinstance(data, dict) else {}
        return WeekendTheme(**{k: v for k, v in d.items() if k in allowed})

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "suggested_activities": self.suggested_activities,
            "primary_color": self.primary_color,
            "secondary_color": self.secondary_color,
            "accent_color": self.accent_color,
            "icon": self.icon,
            "mood": self.mood,
            "vibe": self.vibe,
        }
