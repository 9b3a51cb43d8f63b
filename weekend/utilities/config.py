"""Configuration management for the Weekend Planner application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
# any routable address works; only used to learn which interface the OS would pick
LAN_PROBE_HOST: Final[str] = os.getenv('LAN_PROBE_HOST', '8.8.8.8')

# Sharing
SHARE_BASE_URL: Final[str] = os.getenv('SHARE_BASE_URL', 'http://localhost:3000')

# Scheduling defaults
DEFAULT_START_TIME: Final[str] = os.getenv('DEFAULT_START_TIME', '09:00')
SEED_NEW_PLANS: Final[bool] = os.getenv('SEED_NEW_PLANS', 'False').lower() == 'true'

# Backups
BACKUP_KEEP: Final[int] = int(os.getenv('BACKUP_KEEP', '10'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('WEEKEND_DATA_DIR', str(BASE_DIR / 'data')))
