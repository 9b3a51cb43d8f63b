from typing import Final

MINUTES_PER_DAY: Final[int] = 24 * 60
DEFAULT_THEME: Final[str] = "lazy"
COPY_SUFFIX: Final[str] = " (Copy)"
PLAN_NAME_TEMPLATE: Final[str] = "Weekend Plan - {date}"
PLAN_NAME_DATE_FORMAT: Final[str] = "%m/%d/%Y"
CSV_HEADERS: Final[list[str]] = [
    "Day", "Activity", "Start Time", "End Time", "Duration", "Category", "Mood", "Notes"
]
SHARE_QUERY_PARAM: Final[str] = "shared"
