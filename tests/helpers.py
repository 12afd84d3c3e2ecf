from datetime import date, datetime

from kidscalendar.models import ActivityOccurrence

DAY = date(2024, 1, 15)   # Montag


def make_occ(activity_id, start_hour, start_min, end_hour, end_min, child_name='Child A', day=DAY):
    return ActivityOccurrence(
        activity_id=activity_id,
        date=day,
        start_datetime=datetime(day.year, day.month, day.day, start_hour, start_min),
        end_datetime=datetime(day.year, day.month, day.day, end_hour, end_min),
        title=f"Activity {activity_id}",
        location='Turnhalle',
        child_name=child_name,
        child_color='#ef4444',
    )
