"""
Statistics and Analytics module for Weekend Planner.
Provides insights into the mood journal and how a weekend is filled.
"""
from collections import Counter
from datetime import datetime
from typing import Dict, List
import json
from pathlib import Path
import logging

from weekend.domain.Activity import Day, mood_icon
from weekend.domain.Plan import WeekendPlan

logger = logging.getLogger(__name__)

RECENT_ENTRIES = 3


class WeekendPlanStats:
    """Generate statistics and insights from one weekend plan."""

    def __init__(self, plan: WeekendPlan):
        self.plan = plan

    def mood_stats(self) -> Dict:
        """Mood journal summary; dominant_mood is None for an empty journal."""
        journal = self.plan.mood_journal
        counter = Counter(entry.mood for entry in journal)
        dominant = counter.most_common(1)[0][0] if counter else None
        recent = sorted(journal, key=lambda e: e.timestamp.timestamp(), reverse=True)[:RECENT_ENTRIES]
        return {
            'total_entries': len(journal),
            'dominant_mood': dominant,
            'mood_counts': dict(counter),
            'recent_entries': [entry.to_dict() for entry in recent],
        }

    def category_distribution(self) -> Dict[str, int]:
        """Number of scheduled activities per category across both days."""
        counter = Counter(a.category for a in self.plan.all_activities())
        return dict(counter.most_common())

    def activity_mood_distribution(self) -> Dict[str, int]:
        counter = Counter(a.mood for a in self.plan.all_activities() if a.mood)
        return dict(counter.most_common())

    def minutes_per_day(self) -> Dict[str, int]:
        return {day.value: sum(a.duration for a in self.plan.activities_for(day)) for day in Day}

    def total_minutes(self) -> int:
        return sum(self.minutes_per_day().values())

    def generate_report(self) -> Dict:
        """Generate comprehensive statistics report."""
        return {
            'plan_id': self.plan.id,
            'plan_name': self.plan.name,
            'activity_count': len(self.plan.all_activities()),
            'mood': self.mood_stats(),
            'category_distribution': self.category_distribution(),
            'activity_mood_distribution': self.activity_mood_distribution(),
            'minutes_per_day': self.minutes_per_day(),
            'total_minutes': self.total_minutes(),
            'generated_at': datetime.now().isoformat()
        }

    def print_report(self):
        """Print a formatted statistics report."""
        report = self.generate_report()

        print("\n" + "="*60)
        print(f"📊 WEEKEND STATISTICS: {report['plan_name']}")
        print("="*60)

        print("\n📅 SCHEDULED TIME:")
        for day, minutes in report['minutes_per_day'].items():
            bar = "█" * (minutes // 30)
            print(f"  {day.capitalize():10s}: {bar} ({minutes} min)")

        print("\n🏷️  CATEGORIES:")
        for category, count in report['category_distribution'].items():
            print(f"  {category:15s}: {count}")

        mood = report['mood']
        print(f"\n📝 MOOD JOURNAL ({mood['total_entries']} entries):")
        if mood['dominant_mood']:
            print(f"  Dominant mood: {mood_icon(mood['dominant_mood'])} {mood['dominant_mood']}")
        for entry in mood['recent_entries']:
            print(f"  - {entry['timestamp']}: {entry['mood']}")

        print("\n" + "="*60)
        print(f"Report generated: {report['generated_at']}")
        print("="*60 + "\n")


def summarize_plans(plans: List[WeekendPlan]) -> List[Dict]:
    """Short per-plan overview used when listing saved plans."""
    return [
        {
            'id': plan.id,
            'name': plan.name,
            'activity_count': len(plan.all_activities()),
            'total_minutes': WeekendPlanStats(plan).total_minutes(),
        }
        for plan in plans
    ]


# CLI interface
if __name__ == "__main__":
    from weekend.infra.Plan_Repository import PlanRepository

    for saved in PlanRepository().load():
        stats = WeekendPlanStats(saved)
        stats.print_report()

        output_file = Path(f"weekend_stats_{saved.id}.json")
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(stats.generate_report(), f, indent=2, ensure_ascii=False)
        print(f"✓ Detailed report saved to: {output_file}")
