from collections import defaultdict
from typing import Dict, Iterable

from kidscalendar.models import Activity, Child
from kidscalendar.time_utils import time_to_minutes


def calculate_weekly_stats(activities: Iterable[Activity], children: Iterable[Child]) -> Dict:
    """
    Wochenstatistik über alle Aktivitäten mit bekanntem Kind:
      total_hours          : Stunden pro Woche insgesamt
      activities_per_day   : Termine je Wochentag (0=Sonntag)
      activities_per_child : Aktivitäten je Kindername
      average_duration     : mittlere Termindauer in Minuten
    """
    children_by_id = {c.id: c for c in children}

    total_minutes = 0
    total_occurrences = 0
    per_day = defaultdict(int)
    per_child = defaultdict(int)

    for act in activities:
        child = children_by_id.get(act.child_id)
        if child is None:
            continue
        duration = time_to_minutes(act.end_time) - time_to_minutes(act.start_time)
        days = set(act.days_of_week)

        total_minutes += duration * len(days)
        total_occurrences += len(days)
        for d in days:
            per_day[d] += 1
        per_child[child.name] += 1

    return {
        'total_hours': total_minutes / 60,
        'activities_per_day': dict(per_day),
        'activities_per_child': dict(per_child),
        'average_duration': total_minutes / total_occurrences if total_occurrences else 0.0,
    }
