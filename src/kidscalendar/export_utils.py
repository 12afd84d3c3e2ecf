from kidscalendar.models import Activity, ActivityOccurrence
from kidscalendar.time_utils import datetime_to_minutes, minutes_to_time


# 0=Sonntag … 6=Samstag
_DAY_SHORT = ['So', 'Mo', 'Di', 'Mi', 'Do', 'Fr', 'Sa']
_DAY_LONG = ['Sonntag', 'Montag', 'Dienstag', 'Mittwoch', 'Donnerstag', 'Freitag', 'Samstag']

_WEEKDAYS = {1, 2, 3, 4, 5}
_WEEKEND = {0, 6}


def get_recurrence_description(activity: Activity) -> str:
    """Kurzbeschreibung des Wochenrhythmus, z.B. 'Werktags (Mo-Fr)' oder 'Mo, Mi, Fr'."""
    days = sorted({d for d in activity.days_of_week if 0 <= d <= 6})

    if not days:
        return 'Keine Wiederholung'
    if len(days) == 7:
        return 'Täglich'
    if set(days) == _WEEKDAYS:
        return 'Werktags (Mo-Fr)'
    if set(days) == _WEEKEND:
        return 'Wochenende (Sa-So)'
    if len(days) == 1:
        return f"Jeden {_DAY_LONG[days[0]]}"
    return ', '.join(_DAY_SHORT[d] for d in days)


def format_occurrence_time_range(occ: ActivityOccurrence) -> str:
    start = minutes_to_time(datetime_to_minutes(occ.start_datetime))
    end = minutes_to_time(datetime_to_minutes(occ.end_datetime))
    return f"{start} - {end}"
