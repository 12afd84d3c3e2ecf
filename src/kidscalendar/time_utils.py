# src/kidscalendar/time_utils.py
import re
from datetime import date, datetime, timedelta
from typing import List

_TIME_RE = re.compile(r'^([01]?[0-9]|2[0-3]):([0-5][0-9])$')


class InvalidTimeFormat(ValueError):
    """Zeitangabe entspricht nicht dem Format HH:MM (24h)."""


def is_valid_time_string(value) -> bool:
    return isinstance(value, str) and _TIME_RE.match(value) is not None


def time_to_minutes(value: str) -> int:
    """'HH:MM' -> Minuten seit Mitternacht (0..1439)."""
    m = _TIME_RE.match(value) if isinstance(value, str) else None
    if m is None:
        raise InvalidTimeFormat(f"Ungültige Uhrzeit: {value!r}")
    return int(m.group(1)) * 60 + int(m.group(2))


def minutes_to_time(minutes: int) -> str:
    hours, mins = divmod(int(minutes), 60)
    return f"{hours:02d}:{mins:02d}"


def intervals_overlap(start1, end1, start2, end2) -> bool:
    """Strikte Überlappung: aneinanderstoßende Intervalle überlappen nicht."""
    return start1 < end2 and start2 < end1


def datetime_to_minutes(dt: datetime) -> int:
    return dt.hour * 60 + dt.minute


def to_date(value) -> date:
    """datetime oder date -> date (Uhrzeit wird abgeschnitten)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def to_sunday_weekday(d: date) -> int:
    """Python-weekday (0=Montag) -> 0=Sonntag … 6=Samstag."""
    return (d.weekday() + 1) % 7


def get_week_start_date(d) -> date:
    """Sonntag der Woche, in der `d` liegt."""
    d = to_date(d)
    return d - timedelta(days=to_sunday_weekday(d))


def get_week_end_date(d) -> date:
    """Samstag der Woche, in der `d` liegt."""
    return get_week_start_date(d) + timedelta(days=6)


def get_week_dates(start) -> List[date]:
    start = to_date(start)
    return [start + timedelta(days=i) for i in range(7)]
