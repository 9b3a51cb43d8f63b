"""
Export and Import functionality for weekend plans.

Text formats (JSON, CSV, summary) and the shareable-link token are pure
functions over a WeekendPlan. DataExporter / DataImporter work on files and
go through a PlanStore.
"""
import base64
import binascii
import json
import zipfile
from datetime import datetime
from pathlib import Path
from typing import List, Optional
import logging

from weekend.domain.Activity import Day
from weekend.domain.Plan import WeekendPlan
from weekend.infra.Catalog_Repository import find_theme
from weekend.infra.pdf_utils import generate_pdf_for_plan
from weekend.logic.scheduling.engine import ScheduleEngine, sort_by_start
from weekend.utilities.config import SHARE_BASE_URL
from weekend.utilities.constants import CSV_HEADERS, SHARE_QUERY_PARAM

logger = logging.getLogger(__name__)

SHARED_FIELDS = ("id", "name", "theme", "saturday", "sunday")


def export_plan_as_json(plan: WeekendPlan) -> str:
    return json.dumps(plan.to_dict(), indent=2, ensure_ascii=False)


def _quote(value: str) -> str:
    return '"' + (value or "").replace('"', '""') + '"'


def export_plan_as_csv(plan: WeekendPlan) -> str:
    """One row per scheduled activity, Saturday first. Name and notes are always quoted."""
    rows = [",".join(CSV_HEADERS)]
    for day in Day:
        for activity in plan.activities_for(day):
            rows.append(",".join([
                day.label,
                _quote(activity.name),
                activity.start_time,
                activity.end_time,
                f"{activity.duration} minutes",
                activity.category,
                activity.mood or "",
                _quote(activity.notes or ""),
            ]))
    return "\n".join(rows)


def format_duration(minutes: int) -> str:
    hours, mins = divmod(int(minutes), 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def generate_plan_summary(plan: WeekendPlan, themes: Optional[List] = None) -> str:
    """Readable text summary of a plan (theme display name from the catalog when known)."""
    theme = find_theme(plan.theme, themes)
    activities = plan.all_activities()
    total = sum(a.duration for a in activities)
    lines = [
        f"Weekend Plan: {plan.name}",
        f"Theme: {theme.name if theme else plan.theme}",
        f"Total Activities: {len(activities)}",
        f"Total Duration: {format_duration(total)}",
    ]
    for day in Day:
        day_activities = plan.activities_for(day)
        lines.append("")
        lines.append(f"{day.label} ({len(day_activities)} activities):")
        for activity in sort_by_start(day_activities):
            lines.append(f"• {activity.start_time} - {activity.name} ({format_duration(activity.duration)})")
    return "\n".join(lines)


def encode_shared_plan(plan: WeekendPlan) -> str:
    """URL-safe Base64 of the JSON subset (id, name, theme, both days)."""
    record = plan.to_dict()
    subset = {k: record[k] for k in SHARED_FIELDS}
    return base64.urlsafe_b64encode(json.dumps(subset, ensure_ascii=False).encode("utf-8")).decode("ascii")


def generate_shareable_link(plan: WeekendPlan, base_url: str = SHARE_BASE_URL) -> str:
    return f"{base_url}?{SHARE_QUERY_PARAM}={encode_shared_plan(plan)}"


def parse_shared_plan(shared_data: str) -> Optional[WeekendPlan]:
    """Decode a share token into a plan skeleton; None when the token is malformed.

    Timestamps are fresh and the mood journal is empty, they are not part of the token.
    Days come back sorted with end times recomputed; a bad start time makes the token malformed.
    """
    try:
        raw = base64.urlsafe_b64decode(shared_data.encode("ascii"))
        data = json.loads(raw.decode("utf-8"))
        if not isinstance(data, dict):
            raise ValueError("shared plan is not an object")
        record = {k: data.get(k) for k in SHARED_FIELDS}
        record["mood_journal"] = []
        return ScheduleEngine().normalize(WeekendPlan.from_dict(record))
    except (binascii.Error, ValueError, TypeError, AttributeError) as e:
        logger.error(f"Failed to parse shared plan: {e}")
        return None


class DataExporter:
    """Export weekend plans in various formats."""

    FORMATS = ("json", "csv", "txt", "pdf")

    def __init__(self, store):
        self.store = store

    def render(self, plan: WeekendPlan, fmt: str = "json"):
        """Return (content, media_type, extension) for one plan."""
        if fmt == "json":
            return export_plan_as_json(plan), "application/json", "json"
        if fmt == "csv":
            return export_plan_as_csv(plan), "text/csv", "csv"
        if fmt == "txt":
            return generate_plan_summary(plan, self.store.themes()), "text/plain", "txt"
        if fmt == "pdf":
            theme = self.store.theme(plan.theme)
            return generate_pdf_for_plan(plan, theme.name if theme else plan.theme), "application/pdf", "pdf"
        raise ValueError(f"Unsupported export format: {fmt}")

    def export_plan(self, plan_id: str, fmt: str = "json", output_path: Path = None) -> Optional[Path]:
        """Write one saved (or current) plan to a file."""
        plan = self.store.get_plan(plan_id)
        if plan is None:
            logger.error(f"Plan not found: {plan_id}")
            return None
        content, _, ext = self.render(plan, fmt)
        if output_path is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_path = Path(f"weekend_plan_{plan_id}_{timestamp}.{ext}")
        try:
            if isinstance(content, bytes):
                Path(output_path).write_bytes(content)
            else:
                Path(output_path).write_text(content, encoding="utf-8")
            logger.info(f"Exported plan {plan_id} as {fmt} to {output_path}")
            return Path(output_path)
        except OSError as e:
            logger.error(f"Export failed: {e}")
            return None

    def export_all(self, output_path: Path = None) -> Optional[Path]:
        """Export all saved plans as a ZIP archive (one JSON file per plan + metadata)."""
        if output_path is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_path = Path(f"weekend_planner_backup_{timestamp}.zip")

        plans = self.store.list_plans()
        try:
            with zipfile.ZipFile(output_path, 'w', zipfile.ZIP_DEFLATED) as zipf:
                for plan in plans:
                    zipf.writestr(f"plan_{plan.id}.json", export_plan_as_json(plan))

                metadata = {
                    'export_date': datetime.now().isoformat(),
                    'version': '1.0',
                    'files': [f"plan_{p.id}.json" for p in plans]
                }
                zipf.writestr('metadata.json', json.dumps(metadata, indent=2))

            logger.info(f"Exported {len(plans)} plans to {output_path}")
            return Path(output_path)
        except OSError as e:
            logger.error(f"Export failed: {e}")
            return None


class DataImporter:
    """Import weekend plans from files; each imported plan gets a fresh id."""

    def __init__(self, store):
        self.store = store

    def _import_records(self, data) -> List[WeekendPlan]:
        records = data if isinstance(data, list) else [data]
        imported = []
        for record in records:
            try:
                imported.append(self.store.import_plan(record))
            except (ValueError, TypeError) as e:
                logger.error(f"Skipping invalid plan record: {e}")
        return imported

    def import_plans(self, input_path: Path) -> List[WeekendPlan]:
        """Import a JSON file holding one plan object or a list of them."""
        try:
            with open(input_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Import failed: {e}")
            return []
        imported = self._import_records(data)
        logger.info(f"Imported {len(imported)} plans from {input_path}")
        return imported

    def import_from_zip(self, zip_path: Path) -> List[WeekendPlan]:
        """Import every plan JSON in a ZIP produced by DataExporter.export_all."""
        imported = []
        try:
            with zipfile.ZipFile(zip_path, 'r') as zipf:
                for file_info in zipf.filelist:
                    if file_info.filename.endswith('.json') and file_info.filename != 'metadata.json':
                        data = json.loads(zipf.read(file_info).decode('utf-8'))
                        imported.extend(self._import_records(data))
                        logger.info(f"Extracted {file_info.filename}")
        except (OSError, zipfile.BadZipFile, json.JSONDecodeError) as e:
            logger.error(f"Import from ZIP failed: {e}")
        return imported


# CLI interface
if __name__ == "__main__":
    import argparse
    from weekend.infra.Plan_Repository import PlanRepository
    from weekend.logic.planning.plan_store import PlanStore

    parser = argparse.ArgumentParser(description='Export/Import Weekend Planner data')
    parser.add_argument('action', choices=['export', 'import', 'list'], help='Action to perform')
    parser.add_argument('--plan', help='Plan id to export (omit to export all as ZIP)')
    parser.add_argument('--format', choices=list(DataExporter.FORMATS), default='json', help='Export format')
    parser.add_argument('--file', help='Input/output file path')

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    store = PlanStore(repository=PlanRepository())

    if args.action == 'list':
        from weekend.utilities.statistics import summarize_plans
        for row in summarize_plans(store.list_plans()):
            print(f"  - {row['id']}: {row['name']} ({row['activity_count']} activities, {row['total_minutes']} min)")

    elif args.action == 'export':
        exporter = DataExporter(store)
        if args.plan:
            result = exporter.export_plan(args.plan, args.format, Path(args.file) if args.file else None)
        else:
            result = exporter.export_all(Path(args.file) if args.file else None)

        print(f"✓ Exported to: {result}" if result else "✗ Export failed")

    elif args.action == 'import':
        if not args.file:
            print("Error: --file is required for import")
            raise SystemExit(1)

        importer = DataImporter(store)
        if args.file.endswith('.zip'):
            plans = importer.import_from_zip(Path(args.file))
        else:
            plans = importer.import_plans(Path(args.file))

        if plans:
            print(f"✓ Imported {len(plans)} plan(s) from: {args.file}")
        else:
            print("✗ Import failed")
