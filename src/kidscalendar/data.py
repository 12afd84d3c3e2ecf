import json
import logging
from dataclasses import asdict
from typing import List, Tuple

from kidscalendar.calendar_logic import InvalidScheduleError, validate_activity_schedule
from kidscalendar.models import Activity, Child


def _child_from_row(row: dict) -> Child:
    return Child(id=str(row['id']), name=row['name'], color=row.get('color') or Child.color)


def _activity_from_row(row: dict) -> Activity:
    return Activity(
        id=str(row['id']),
        child_id=str(row['child_id']),
        title=row.get('title', ''),
        days_of_week=row.get('days_of_week') or (),
        start_time=row.get('start_time'),
        end_time=row.get('end_time'),
        location=row.get('location', ''),
        timezone=row.get('timezone'),
    )


def load_schedule(path: str) -> Tuple[List[Child], List[Activity]]:
    """
    Lese Kinder und Aktivitäten aus einer JSON-Datei
    {"children": [...], "activities": [...]}. Jede Aktivität wird geprüft;
    ungültige Einträge brechen das Laden mit InvalidScheduleError ab.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except ValueError as e:
        raise InvalidScheduleError(f"{path}: kein gültiges JSON ({e})") from e

    if not isinstance(raw, dict):
        raise InvalidScheduleError(f"{path}: Objekt mit 'children' und 'activities' erwartet")

    try:
        children = [_child_from_row(r) for r in raw.get('children', [])]
        activities = [_activity_from_row(r) for r in raw.get('activities', [])]
    except (KeyError, TypeError, AttributeError) as e:
        raise InvalidScheduleError(f"{path}: Eintrag unvollständig ({e})") from e

    for act in activities:
        ok, errors = validate_activity_schedule(act)
        if not ok:
            raise InvalidScheduleError(f"Aktivität {act.id} ({act.title}): " + '; '.join(errors))

    logging.info(f"{len(children)} Kinder und {len(activities)} Aktivitäten aus {path} geladen")
    return children, activities


def save_schedule(path: str, children: List[Child], activities: List[Activity]):
    data = {
        'children': [asdict(c) for c in children],
        'activities': [dict(asdict(a), days_of_week=list(a.days_of_week)) for a in activities],
    }
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
