import logging
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from dateutil import tz
from dateutil.rrule import rrule, WEEKLY, weekday

from .config import get_setting
from .models import Activity, ActivityOccurrence, Child
from .time_utils import (
    InvalidTimeFormat, intervals_overlap, minutes_to_time, time_to_minutes, to_date,
)


class InvalidScheduleError(ValueError):
    """Eine Aktivität hat einen ungültigen Wochenplan."""


def _rrule_weekdays(days_of_week) -> List[weekday]:
    """0=Sonntag … 6=Samstag -> dateutil-Wochentage (MO=0 … SU=6)."""
    out = []
    for d in sorted(set(days_of_week)):
        if not 0 <= d <= 6:
            logging.debug(f"Ungültiger Wochentag {d!r} ignoriert")
            continue
        out.append(weekday((d + 6) % 7))
    return out


def _resolve_zone(name: str):
    zone = tz.gettz(name) if name else None
    if zone is None:
        logging.warning(f"Unbekannte Zeitzone {name!r}, nutze lokale Zeitzone")
        zone = tz.tzlocal()
    return zone


def _combine(day: date, minutes: int, zone=None) -> datetime:
    dt = datetime.combine(day, time(minutes // 60, minutes % 60))
    if zone is None:
        return dt
    # Uhrzeiten in der Sommerzeit-Lücke auf die nächste gültige Zeit schieben
    return tz.resolve_imaginary(dt.replace(tzinfo=zone))


def generate_occurrences_for_activity(
    activity: Activity,
    child: Child,
    start_date,
    end_date,
    localize: bool = False,
) -> List[ActivityOccurrence]:
    """
    Erzeuge alle Termine einer Aktivität im Zeitraum [start_date, end_date]
    (beide Grenzen inklusive, tagesgenau).

    Standardmäßig sind die Zeiten naive Ortszeit. Mit `localize=True` bekommen
    Beginn und Ende die Zeitzone der Aktivität für das jeweilige Datum.
    """
    first = to_date(start_date)
    last = to_date(end_date)
    start_min = time_to_minutes(activity.start_time)
    end_min = time_to_minutes(activity.end_time)

    weekdays = _rrule_weekdays(activity.days_of_week)
    if not weekdays or last < first:
        return []

    zone = _resolve_zone(activity.timezone) if localize else None
    days = rrule(
        WEEKLY,
        byweekday=weekdays,
        dtstart=datetime.combine(first, time()),
        until=datetime.combine(last, time()),
    )

    occurrences: List[ActivityOccurrence] = []
    for dt in days:
        day = dt.date()
        occurrences.append(ActivityOccurrence(
            activity_id=activity.id,
            date=day,
            start_datetime=_combine(day, start_min, zone),
            end_datetime=_combine(day, end_min, zone),
            title=activity.title,
            location=activity.location,
            child_name=child.name,
            child_color=child.color,
        ))
    return occurrences


def generate_activity_occurrences(
    activities: Iterable[Activity],
    children: Iterable[Child],
    start_date,
    end_date,
    localize: bool = False,
) -> List[ActivityOccurrence]:
    """
    Erzeuge die Termine aller Aktivitäten im Zeitraum, sortiert nach Beginn
    und bei Gleichstand nach Kindername. Aktivitäten, deren Kind nicht
    (mehr) existiert, werden stillschweigend übersprungen.
    """
    children_by_id = {c.id: c for c in children}
    occurrences: List[ActivityOccurrence] = []

    for act in activities:
        child = children_by_id.get(act.child_id)
        if child is None:
            logging.debug(f"Aktivität {act.id} übersprungen: Kind {act.child_id} unbekannt")
            continue
        occurrences += generate_occurrences_for_activity(act, child, start_date, end_date, localize)

    occurrences.sort(key=lambda o: (o.start_datetime, o.child_name.casefold()))
    return occurrences


def get_occurrences_for_date(activities, children, day, localize: bool = False) -> List[ActivityOccurrence]:
    return generate_activity_occurrences(activities, children, day, day, localize)


def get_occurrences_for_week(activities, children, week_start, localize: bool = False) -> List[ActivityOccurrence]:
    """Sieben Tage ab `week_start` (inklusive)."""
    first = to_date(week_start)
    return generate_activity_occurrences(activities, children, first, first + timedelta(days=6), localize)


# --- Abfragen auf Terminen ---

def get_next_occurrence(
    activity: Activity,
    child: Child,
    after: Optional[datetime] = None,
) -> Optional[ActivityOccurrence]:
    """Nächster Termin, der echt nach `after` beginnt (Vorschau: lookahead_days)."""
    after = after or datetime.now()
    horizon = after + timedelta(days=get_setting('lookahead_days'))
    for occ in generate_occurrences_for_activity(activity, child, after, horizon):
        if occ.start_datetime > after:
            return occ
    return None


def get_upcoming_occurrences(
    activities,
    children,
    hours_ahead: int = 24,
    now: Optional[datetime] = None,
) -> List[ActivityOccurrence]:
    now = now or datetime.now()
    future = now + timedelta(hours=hours_ahead)
    occurrences = generate_activity_occurrences(activities, children, now, future)
    return [o for o in occurrences if now < o.start_datetime <= future]


def get_occurrences_needing_reminders(
    activities,
    children,
    reminder_minutes: Optional[Iterable[int]] = None,
    now: Optional[datetime] = None,
) -> List[Tuple[ActivityOccurrence, int]]:
    """
    Termine, für die jetzt (±1 Minute) eine Erinnerung fällig ist,
    als Paare (Termin, Minuten vorher).
    """
    now = now or datetime.now()
    minutes_list = list(get_setting('reminder_minutes') if reminder_minutes is None else reminder_minutes)
    if not minutes_list:
        return []
    future = now + timedelta(minutes=max(minutes_list))

    reminders = []
    for occ in generate_activity_occurrences(activities, children, now, future):
        if occ.start_datetime <= now:
            continue
        for minutes in minutes_list:
            reminder_at = occ.start_datetime - timedelta(minutes=minutes)
            if abs((now - reminder_at).total_seconds()) <= 60:
                reminders.append((occ, minutes))
    return reminders


def has_time_conflict(occ1: ActivityOccurrence, occ2: ActivityOccurrence) -> bool:
    if occ1.date != occ2.date:
        return False
    return intervals_overlap(occ1.start_datetime, occ1.end_datetime,
                             occ2.start_datetime, occ2.end_datetime)


def find_conflicting_occurrences(
    target: ActivityOccurrence,
    occurrences: Iterable[ActivityOccurrence],
) -> List[ActivityOccurrence]:
    return [o for o in occurrences
            if o.activity_id != target.activity_id and has_time_conflict(target, o)]


def group_occurrences_by_date(occurrences: Iterable[ActivityOccurrence]) -> Dict[date, List[ActivityOccurrence]]:
    grouped: Dict[date, List[ActivityOccurrence]] = {}
    for occ in occurrences:
        grouped.setdefault(occ.date, []).append(occ)
    for day_occs in grouped.values():
        day_occs.sort(key=lambda o: o.start_datetime)
    return grouped


def get_occurrence_duration(occ: ActivityOccurrence) -> int:
    return round((occ.end_datetime - occ.start_datetime).total_seconds() / 60)


def is_occurrence_active(occ: ActivityOccurrence, now: Optional[datetime] = None) -> bool:
    now = now or datetime.now()
    return occ.start_datetime <= now <= occ.end_datetime


def is_occurrence_past(occ: ActivityOccurrence, now: Optional[datetime] = None) -> bool:
    now = now or datetime.now()
    return occ.end_datetime < now


def is_occurrence_upcoming(occ: ActivityOccurrence, now: Optional[datetime] = None) -> bool:
    """Beginnt innerhalb der nächsten Stunde."""
    now = now or datetime.now()
    return now < occ.start_datetime <= now + timedelta(hours=1)


# --- Validierung und Planung ---

def validate_activity_schedule(activity) -> Tuple[bool, List[str]]:
    """
    Prüft Wochentage, Uhrzeiten, Dauer und Zeitzone einer Aktivität.
    Liefert (gültig, Fehlerliste).
    """
    errors: List[str] = []

    if not getattr(activity, 'days_of_week', None):
        errors.append('Mindestens ein Wochentag muss gewählt sein')
    elif any(not isinstance(d, int) or not 0 <= d <= 6 for d in activity.days_of_week):
        errors.append('Wochentage müssen zwischen 0 (Sonntag) und 6 (Samstag) liegen')

    start_time = getattr(activity, 'start_time', None)
    end_time = getattr(activity, 'end_time', None)
    if not start_time or not end_time:
        errors.append('Start- und Endzeit sind erforderlich')
    else:
        try:
            start_min = time_to_minutes(start_time)
            end_min = time_to_minutes(end_time)
        except InvalidTimeFormat as e:
            errors.append(str(e))
        else:
            duration = end_min - start_min
            if duration <= 0:
                errors.append('Endzeit muss nach der Startzeit liegen')
            elif duration < get_setting('min_duration_minutes'):
                errors.append(f"Aktivität muss mindestens {get_setting('min_duration_minutes')} Minuten dauern")
            elif duration > get_setting('max_duration_minutes'):
                errors.append(f"Aktivität darf höchstens {get_setting('max_duration_minutes') // 60} Stunden dauern")

    if not getattr(activity, 'timezone', None):
        errors.append('Zeitzone ist erforderlich')

    return not errors, errors


def find_optimal_time_slot(
    existing_activities: Iterable[Activity],
    preferred_days: Iterable[int],
    duration_minutes: int,
    earliest_time: str = '08:00',
    latest_time: str = '20:00',
) -> Optional[dict]:
    """
    Suche die erste Lücke von `duration_minutes` zwischen earliest_time und
    latest_time, Tag für Tag in der Reihenfolge von `preferred_days`.
    """
    earliest = time_to_minutes(earliest_time)
    latest = time_to_minutes(latest_time)
    existing = list(existing_activities)

    for day in preferred_days:
        day_activities = sorted(
            (a for a in existing if day in a.days_of_week),
            key=lambda a: time_to_minutes(a.start_time),
        )
        cursor = earliest
        for act in day_activities:
            act_start = time_to_minutes(act.start_time)
            if cursor + duration_minutes <= min(act_start, latest):
                break
            cursor = max(cursor, time_to_minutes(act.end_time))
        if cursor + duration_minutes <= latest:
            return {
                'start_time': minutes_to_time(cursor),
                'end_time': minutes_to_time(cursor + duration_minutes),
                'days': [day],
            }
    return None
