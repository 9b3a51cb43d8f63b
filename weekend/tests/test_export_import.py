import base64
import json
import zipfile
from datetime import datetime

from weekend.domain.Activity import Activity
from weekend.domain.Plan import MoodEntry, WeekendPlan
from weekend.events.Event_Bus import EventBus
from weekend.infra.Catalog_Repository import reading_from_themes
from weekend.infra.Plan_Repository import PlanRepository
from weekend.logic.planning.plan_store import PlanStore
from weekend.logic.scheduling.engine import ScheduleEngine
from weekend.utilities.export_import import (
    DataExporter, DataImporter, export_plan_as_csv, export_plan_as_json, format_duration,
    generate_plan_summary, generate_shareable_link, parse_shared_plan
)

READING = Activity(id="reading", name="Reading", category="indoor", duration=120, mood="relaxed")
YOGA = Activity(id="yoga", name="Yoga", category="wellness", duration=60, mood="relaxed")


def reading_plan():
    plan = WeekendPlan(id="p1", name="Quiet weekend", theme="lazy", created_at=datetime(2026, 10, 17, 8, 0))
    ScheduleEngine().add_activity_to_schedule(plan, READING, "saturday", "09:00")
    return plan


def make_store(tmp_path):
    return PlanStore(repository=PlanRepository(tmp_path / "plans.json"), event_bus=EventBus(),
                     seed_new_plans=False)


def test_csv_export():
    lines = export_plan_as_csv(reading_plan()).split("\n")
    assert lines[0] == "Day,Activity,Start Time,End Time,Duration,Category,Mood,Notes"
    assert lines[1].startswith('Saturday,"Reading",09:00,11:00,120 minutes,indoor,relaxed')
    assert lines[1] == 'Saturday,"Reading",09:00,11:00,120 minutes,indoor,relaxed,""'


def test_csv_doubles_embedded_quotes():
    plan = reading_plan()
    plan.saturday[0].notes = 'the "good" chair'
    row = export_plan_as_csv(plan).split("\n")[1]
    assert row.endswith(',"the ""good"" chair"')


def test_json_export_is_full_record():
    plan = reading_plan()
    data = json.loads(export_plan_as_json(plan))
    assert data["id"] == "p1"
    assert data["saturday"][0]["start_time"] == "09:00"
    assert data["created_at"] == "2026-10-17T08:00:00"


def test_format_duration():
    assert format_duration(45) == "45m"
    assert format_duration(120) == "2h"
    assert format_duration(225) == "3h 45m"


def test_plan_summary():
    plan = reading_plan()
    ScheduleEngine().add_activity_to_schedule(plan, YOGA, "sunday", "10:00")
    summary = generate_plan_summary(plan, reading_from_themes()).split("\n")
    assert summary[:4] == [
        "Weekend Plan: Quiet weekend",
        "Theme: Lazy Weekend",
        "Total Activities: 2",
        "Total Duration: 3h",
    ]
    assert "Saturday (1 activities):" in summary
    assert "• 09:00 - Reading (2h)" in summary
    assert "• 10:00 - Yoga (1h)" in summary


def test_share_link_round_trip():
    plan = reading_plan()
    ScheduleEngine().add_activity_to_schedule(plan, YOGA, "sunday", "10:00")
    plan.mood_journal.append(MoodEntry("m1", "excited"))
    link = generate_shareable_link(plan, "https://weekend.example")
    assert link.startswith("https://weekend.example?shared=")

    shared = parse_shared_plan(link.split("shared=", 1)[1])
    assert shared.name == plan.name
    assert len(shared.saturday) == len(plan.saturday)
    assert len(shared.sunday) == len(plan.sunday)
    assert shared.mood_journal == []
    assert shared.created_at != plan.created_at


def test_malformed_share_tokens_yield_none():
    assert parse_shared_plan("garbage") is None
    assert parse_shared_plan("") is None
    not_an_object = base64.urlsafe_b64encode(b"[1, 2]").decode("ascii")
    assert parse_shared_plan(not_an_object) is None
    bad_theme = base64.urlsafe_b64encode(json.dumps({"name": "x", "theme": "nope"}).encode()).decode("ascii")
    assert parse_shared_plan(bad_theme) is None


def _token(record):
    return base64.urlsafe_b64encode(json.dumps(record).encode("utf-8")).decode("ascii")


def test_shared_plan_days_are_normalized():
    token = _token({
        "id": "p1", "name": "Shared", "theme": "lazy",
        "saturday": [
            {"id": "b", "name": "B", "duration": 30, "day": "saturday", "startTime": "14:00", "endTime": "99:99"},
            {"id": "a", "name": "A", "duration": 60, "day": "saturday", "startTime": "9:00", "endTime": "09:00"},
        ],
        "sunday": [],
    })
    shared = parse_shared_plan(token)
    assert [(a.id, a.start_time, a.end_time) for a in shared.saturday] == [
        ("a", "09:00", "10:00"), ("b", "14:00", "14:30")]


def test_shared_plan_with_bad_start_time_yields_none():
    token = _token({
        "id": "p1", "name": "Shared", "theme": "lazy",
        "saturday": [{"id": "a", "name": "A", "duration": 60, "day": "saturday", "startTime": "garbage"}],
        "sunday": [],
    })
    assert parse_shared_plan(token) is None


def test_export_plan_files(tmp_path):
    store = make_store(tmp_path)
    plan = store.import_plan(reading_plan())
    exporter = DataExporter(store)

    csv_path = exporter.export_plan(plan.id, "csv", tmp_path / "plan.csv")
    assert csv_path.read_text(encoding="utf-8").startswith("Day,Activity")
    pdf_path = exporter.export_plan(plan.id, "pdf", tmp_path / "plan.pdf")
    assert pdf_path.read_bytes().startswith(b"%PDF")
    assert exporter.export_plan("missing", "json", tmp_path / "none.json") is None


def test_zip_export_then_import(tmp_path):
    source = make_store(tmp_path / "a")
    source.import_plan(reading_plan())
    source.create_new_plan("social")
    source.save_plan()

    archive = DataExporter(source).export_all(tmp_path / "all.zip")
    with zipfile.ZipFile(archive) as zipf:
        names = set(zipf.namelist())
    assert "metadata.json" in names
    assert len(names) == 3

    target = make_store(tmp_path / "b")
    imported = DataImporter(target).import_from_zip(archive)
    assert len(imported) == 2
    assert len(target.saved_plans) == 2
    assert not set(target.saved_plans) & set(source.saved_plans)


def test_import_json_list_skips_invalid(tmp_path):
    path = tmp_path / "plans.json"
    path.write_text(json.dumps([
        reading_plan().to_dict(),
        {"name": "Wrong theme", "theme": "nope"},
    ]), encoding="utf-8")
    store = make_store(tmp_path / "store")
    imported = DataImporter(store).import_plans(path)
    assert [p.name for p in imported] == ["Quiet weekend"]
    assert DataImporter(store).import_plans(tmp_path / "missing.json") == []
