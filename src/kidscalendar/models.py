# src/kidscalendar/models.py
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Tuple

from .time_utils import datetime_to_minutes


@dataclass(frozen=True)
class Child:
    id: str
    name: str
    color: str = '#3b82f6'


@dataclass(frozen=True)
class Activity:
    """Eine wöchentlich wiederkehrende Aktivität eines Kindes."""
    id: str
    child_id: str
    title: str
    days_of_week: Tuple[int, ...]   # 0=Sonntag … 6=Samstag
    start_time: str                 # "HH:MM", 24h
    end_time: str
    location: str = ''
    timezone: str = 'UTC'           # IANA-Name

    def __post_init__(self):
        # Listen aus JSON o.ä. als Tupel ablegen, damit die Instanz hashbar bleibt
        object.__setattr__(self, 'days_of_week', tuple(self.days_of_week))


@dataclass(frozen=True)
class ActivityOccurrence:
    """Ein konkreter Termin einer Aktivität an einem Kalendertag."""
    activity_id: str
    date: date
    start_datetime: datetime
    end_datetime: datetime
    title: str
    location: str
    child_name: str
    child_color: str

    @property
    def start_minutes(self) -> int:
        return datetime_to_minutes(self.start_datetime)

    @property
    def end_minutes(self) -> int:
        return datetime_to_minutes(self.end_datetime)


@dataclass(frozen=True)
class TimeSegment:
    """Halboffenes Minutenintervall mit konstanter Menge aktiver Termine."""
    start_minutes: int
    end_minutes: int
    activity_ids: Tuple[str, ...]
    column_count: int


@dataclass
class OverlapGroup:
    activities: list = field(default_factory=list)
    segments: list = field(default_factory=list)


@dataclass(frozen=True)
class LayoutSegment:
    start_minutes: int
    end_minutes: int
    column_index: int
    column_count: int
    width: float    # Prozent, 2 Nachkommastellen
    left: float

    @property
    def width_css(self) -> str:
        return f"{self.width:.2f}%"

    @property
    def left_css(self) -> str:
        return f"{self.left:.2f}%"


@dataclass(frozen=True)
class ActivityLayout:
    activity_id: str
    segments: Tuple[LayoutSegment, ...]
    is_overflow: bool = False
