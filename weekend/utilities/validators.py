"""
Input validation schemas using Pydantic for the HTTP surface.
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Any, Dict, List, Optional

DAY_PATTERN = r'^(saturday|sunday)$'
TIME_PATTERN = r'^\d{1,2}:\d{2}$'
THEME_PATTERN = r'^(lazy|adventurous|family|productive|social)$'
HEX_COLOR_PATTERN = r'^#[0-9a-fA-F]{6}$'


class ActivityInput(BaseModel):
    """Schema for an activity carried inline in a request."""
    id: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=50)
    duration: int = Field(..., ge=1, le=1440)
    icon: str = ""
    description: str = ""
    mood: Optional[str] = None
    is_custom: bool = False

    @field_validator('name', 'category')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v


class CustomActivityInput(BaseModel):
    """Schema for a user-created activity; the id is generated when omitted."""
    id: Optional[str] = Field(None, max_length=100)
    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=50)
    duration: int = Field(..., ge=1, le=1440)
    icon: str = ""
    description: str = ""
    mood: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Activity name cannot be empty')
        return v.strip()


class AddActivityInput(BaseModel):
    """Add a catalog/custom activity by id, or an inline activity."""
    activity_id: Optional[str] = None
    activity: Optional[ActivityInput] = None
    day: str = Field(..., pattern=DAY_PATTERN)
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)

    @model_validator(mode='after')
    def require_activity(self):
        if not self.activity_id and self.activity is None:
            raise ValueError("Either 'activity_id' or 'activity' is required")
        return self


class RetimeInput(BaseModel):
    start_time: str = Field(..., pattern=TIME_PATTERN)


class ReorderInput(BaseModel):
    day: str = Field(..., pattern=DAY_PATTERN)
    old_index: int = Field(..., ge=0)
    new_index: int = Field(..., ge=0)


class MoveInput(BaseModel):
    activity_id: str = Field(..., min_length=1)
    from_day: str = Field(..., pattern=DAY_PATTERN)
    to_day: str = Field(..., pattern=DAY_PATTERN)
    start_time: str = Field(..., pattern=TIME_PATTERN)


class ThemeInput(BaseModel):
    theme: str = Field(..., pattern=THEME_PATTERN)


class RenameInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate plan name."""
        if not v.strip():
            raise ValueError('Plan name cannot be empty')
        return v.strip()


class MoodInput(BaseModel):
    """Mood journal entry; the mood also becomes the plan's overall mood."""
    mood: str = Field(..., min_length=1, max_length=50)
    notes: Optional[str] = Field(None, max_length=1000)
    activity_id: Optional[str] = None

    @field_validator('notes')
    @classmethod
    def blank_notes_to_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v


class ThemeColorsInput(BaseModel):
    primary: str = Field(..., pattern=HEX_COLOR_PATTERN)
    secondary: str = Field(..., pattern=HEX_COLOR_PATTERN)
    accent: str = Field(..., pattern=HEX_COLOR_PATTERN)


class PlanImportInput(BaseModel):
    """Schema for plan import: only the name and the two day lists are required."""
    name: str = Field(..., min_length=1, max_length=200)
    theme: str = Field('lazy', pattern=THEME_PATTERN)
    saturday: List[Dict[str, Any]] = Field(default_factory=list)
    sunday: List[Dict[str, Any]] = Field(default_factory=list)
    overall_mood: Optional[str] = None
    mood_journal: List[Dict[str, Any]] = Field(default_factory=list)
    custom_theme_colors: Optional[ThemeColorsInput] = None

    @field_validator('saturday', 'sunday')
    @classmethod
    def validate_entries(cls, v):
        """Every scheduled entry needs an id, a positive duration and a start time."""
        for entry in v:
            if not entry.get('id'):
                raise ValueError('Scheduled activity is missing an id')
            try:
                duration = int(entry.get('duration', 0))
            except (TypeError, ValueError):
                raise ValueError(f"Invalid duration for {entry.get('id')}")
            if duration <= 0:
                raise ValueError('Scheduled activity duration must be positive')
            if not (entry.get('start_time') or entry.get('startTime')):
                raise ValueError(f"Scheduled activity {entry.get('id')} has no start time")
        return v
