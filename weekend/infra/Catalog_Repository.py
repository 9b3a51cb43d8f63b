import json
import logging
from typing import List, Optional

from weekend.domain.Activity import Activity
from weekend.domain.WeekendTheme import WeekendTheme
from weekend.infra.paths import ACTIVITIES_FILE, THEMES_FILE

logger = logging.getLogger(__name__)


def _read_json_list(path) -> list:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return data if isinstance(data, list) else []
    except FileNotFoundError:
        logger.warning(f"Catalog file not found: {path}. Returning empty list.")
        return []
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in catalog file {path}: {e}")
        return []


def reading_from_activities(path=ACTIVITIES_FILE) -> List[Activity]:
    """Read the predefined activity catalog (read-only)."""
    return [Activity.from_dict(entry) for entry in _read_json_list(path)]


def reading_from_themes(path=THEMES_FILE) -> List[WeekendTheme]:
    """Read the weekend theme presets (read-only)."""
    return [WeekendTheme.from_dict(entry) for entry in _read_json_list(path)]


def find_theme(theme_id: str, themes: Optional[List[WeekendTheme]] = None) -> Optional[WeekendTheme]:
    for theme in themes if themes is not None else reading_from_themes():
        if theme.id == theme_id:
            return theme
    return None
