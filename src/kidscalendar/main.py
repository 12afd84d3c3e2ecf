# src/kidscalendar/main.py

import argparse
import logging
import sys
from datetime import date

from .calendar_logic import InvalidScheduleError, get_occurrences_for_week, group_occurrences_by_date
from .config import get_setting
from .data import load_schedule
from .export_utils import format_occurrence_time_range
from .layout import layout_day
from .time_utils import get_week_dates, get_week_start_date, to_sunday_weekday

SCHEDULE_FILE = "kidscalendar_schedule.json"
_DAY_NAMES = ['Sonntag', 'Montag', 'Dienstag', 'Mittwoch', 'Donnerstag', 'Freitag', 'Samstag']


def _positive_int(value):
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"muss mindestens 1 sein, nicht {value}")
    return n


def _parse_args(argv):
    parser = argparse.ArgumentParser(prog='kidscalendar', description='Wochenübersicht der Kinder-Aktivitäten')
    parser.add_argument('schedule', nargs='?', default=SCHEDULE_FILE, help='JSON-Datei mit Kindern und Aktivitäten')
    parser.add_argument('--date', type=date.fromisoformat, default=None, help='Tag in der gewünschten Woche (YYYY-MM-DD)')
    parser.add_argument('--max-columns', type=_positive_int, default=None, help='Maximale Spaltenzahl pro Tag')
    return parser.parse_args(argv)


def print_week(children, activities, day: date, max_columns: int = 4, out=None) -> int:
    """Gibt die Woche von `day` aus; liefert die Anzahl der Termine."""
    if out is None:
        out = sys.stdout
    week_start = get_week_start_date(day)
    occurrences = get_occurrences_for_week(activities, children, week_start)
    by_date = group_occurrences_by_date(occurrences)

    print(f"📅 Woche ab {week_start.isoformat()}: {len(occurrences)} Termine", file=out)
    for d in get_week_dates(week_start):
        day_occs = by_date.get(d, [])
        print(f"\n{_DAY_NAMES[to_sunday_weekday(d)]}, {d.isoformat()}", file=out)
        if not day_occs:
            print("  –", file=out)
            continue
        layouts = {lay.activity_id: lay for lay in layout_day(day_occs, max_columns)}
        for occ in day_occs:
            lay = layouts[occ.activity_id]
            if lay.is_overflow:
                pos = "+ weitere"
            else:
                pos = ", ".join(f"Spalte {s.column_index + 1}/{s.column_count}" for s in lay.segments)
            place = f" @ {occ.location}" if occ.location else ""
            print(f"  {format_occurrence_time_range(occ)}  {occ.child_name}: {occ.title}{place}  [{pos}]", file=out)
    return len(occurrences)


def run_agenda(argv=None):
    args = _parse_args(argv)
    logging.basicConfig(level=logging.WARNING)
    try:
        children, activities = load_schedule(args.schedule)
    except (OSError, InvalidScheduleError) as e:
        print(f"Fehler beim Laden von {args.schedule}: {e}", file=sys.stderr)
        return 1
    max_columns = get_setting('max_columns') if args.max_columns is None else args.max_columns
    print_week(children, activities, args.date or date.today(), max_columns)
    return 0


if __name__ == "__main__":
    sys.exit(run_agenda())
