"""Saved-plans persistence: the only durable state of the planner.

The store hands over its whole saved-plans collection after each change;
current plan and selected theme are session state and never written here.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional

from weekend.domain.Plan import WeekendPlan
from weekend.infra.paths import PLANS_FILE

logger = logging.getLogger(__name__)


class PlanRepository:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else PLANS_FILE

    def load(self) -> List[WeekendPlan]:
        """Read saved plans; a missing or corrupt file yields an empty list."""
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f) or []
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Invalid JSON in plans file {self.path}: {e}")
            return []
        plans = []
        for entry in data if isinstance(data, list) else []:
            try:
                plans.append(WeekendPlan.from_dict(entry))
            except (ValueError, TypeError) as e:
                logger.error(f"Skipping unreadable saved plan {entry.get('id') if isinstance(entry, dict) else entry!r}: {e}")
        return plans

    def save(self, plans: Iterable[WeekendPlan]) -> None:
        """Write all saved plans atomically (temp file + move) so a crash never leaves a half-written file."""
        records = [p.to_dict() for p in plans]
        os.makedirs(self.path.parent, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".plans_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(records, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        logger.info(f"Persisted {len(records)} saved plans to {self.path}")
