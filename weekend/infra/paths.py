from pathlib import Path

from weekend.utilities.config import DATA_DIR as _CONFIGURED_DATA_DIR

# Centralized paths for data files (single source of truth)
PACKAGE_DATA_DIR = (Path(__file__).parent.parent / 'data').resolve()
ACTIVITIES_FILE = PACKAGE_DATA_DIR / 'activities.json'
THEMES_FILE = PACKAGE_DATA_DIR / 'themes.json'

DATA_DIR = Path(_CONFIGURED_DATA_DIR).resolve()
PLANS_FILE = DATA_DIR / 'plans.json'
BACKUP_DIR = DATA_DIR / 'backups'

__all__ = ['PACKAGE_DATA_DIR', 'ACTIVITIES_FILE', 'THEMES_FILE', 'DATA_DIR', 'PLANS_FILE', 'BACKUP_DIR']
