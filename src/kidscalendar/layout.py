import logging
from typing import Dict, Iterable, List, Optional

from .models import ActivityLayout, ActivityOccurrence, LayoutSegment, OverlapGroup
from .overlap import detect_overlaps, occurrence_sort_key
from .time_utils import intervals_overlap


def assign_columns(activities: Iterable[ActivityOccurrence], max_columns: int) -> Dict[str, int]:
    """
    Greedy-Zuweisung: jeder Termin (nach Beginn, dann Kindername) bekommt die
    kleinste Spalte, die kein bereits platzierter, überlappender Termin belegt.
    Alle Spalten ab `max_columns` fallen in den Überlauf (Index = max_columns).
    """
    columns: Dict[str, int] = {}
    placed: List[ActivityOccurrence] = []

    for occ in sorted(activities, key=occurrence_sort_key):
        occupied = {
            columns[other.activity_id]
            for other in placed
            if intervals_overlap(occ.start_minutes, occ.end_minutes,
                                 other.start_minutes, other.end_minutes)
        }
        col = 0
        while col in occupied and col < max_columns:
            col += 1
        columns[occ.activity_id] = col
        placed.append(occ)

    return columns


def _percent(part: float, whole: int) -> float:
    return round(part / whole * 100, 2)


def calculate_layout(overlap_groups: Iterable[OverlapGroup], max_columns: int = 4) -> List[ActivityLayout]:
    """
    Berechnet für jeden Termin seine Layout-Segmente (Spalte, Breite, Versatz).

    Ändert sich die Zahl gleichzeitiger Termine während eines Termins, bekommt
    er pro Abschnitt ein eigenes Segment mit eigener Breite. In jedem Abschnitt
    füllen die sichtbaren Termine zusammen genau 100 % aus; Überlauf-Termine
    tragen den Spaltenindex `max_columns` und sind davon ausgenommen.
    """
    if max_columns <= 0:
        raise ValueError(f"max_columns muss positiv sein, nicht {max_columns}")

    layouts: List[ActivityLayout] = []

    for group in overlap_groups:
        columns = assign_columns(group.activities, max_columns)

        # sichtbare Termine je Segment, nach zugewiesener Spalte geordnet
        visible = {
            seg: sorted((i for i in seg.activity_ids if columns[i] < max_columns), key=columns.get)
            for seg in group.segments
        }

        for occ in group.activities:
            is_overflow = columns[occ.activity_id] >= max_columns
            segments = []
            for seg in group.segments:
                if occ.activity_id not in seg.activity_ids:
                    continue
                if is_overflow:
                    count = min(seg.column_count, max_columns)
                    index = max_columns
                else:
                    shown = visible[seg]
                    count = len(shown)
                    index = shown.index(occ.activity_id)
                segments.append(LayoutSegment(
                    start_minutes=seg.start_minutes,
                    end_minutes=seg.end_minutes,
                    column_index=index,
                    column_count=count,
                    width=_percent(1, count),
                    left=_percent(index, count),
                ))
            layouts.append(ActivityLayout(occ.activity_id, tuple(segments), is_overflow))

    overflow = sum(1 for lay in layouts if lay.is_overflow)
    if overflow:
        logging.debug(f"{overflow} Termine im Überlauf (max_columns={max_columns})")
    return layouts


def layout_day(occurrences: Iterable[ActivityOccurrence], max_columns: int = 4) -> List[ActivityLayout]:
    """Überlappungen erkennen und Layout berechnen in einem Schritt."""
    return calculate_layout(detect_overlaps(occurrences), max_columns)


# --- Hilfen für die Darstellung des Überlaufs ("+N weitere") ---

def get_activity_layout(activity_id: str, layouts: Iterable[ActivityLayout]) -> Optional[ActivityLayout]:
    return next((lay for lay in layouts if lay.activity_id == activity_id), None)


def should_display_activity(activity_id: str, layouts: Iterable[ActivityLayout]) -> bool:
    layout = get_activity_layout(activity_id, layouts)
    return layout is None or not layout.is_overflow


def get_overflow_count(minutes: int, layouts: Iterable[ActivityLayout]) -> int:
    return sum(
        1 for lay in layouts
        if lay.is_overflow and any(s.start_minutes <= minutes < s.end_minutes for s in lay.segments)
    )


def get_overflow_activities(
    start_minutes: int,
    end_minutes: int,
    layouts: Iterable[ActivityLayout],
    activities: Iterable[ActivityOccurrence],
) -> List[ActivityOccurrence]:
    ids = {
        lay.activity_id for lay in layouts
        if lay.is_overflow and any(
            intervals_overlap(s.start_minutes, s.end_minutes, start_minutes, end_minutes)
            for s in lay.segments)
    }
    return [a for a in activities if a.activity_id in ids]


def get_all_overflow_activities(
    layouts: Iterable[ActivityLayout],
    activities: Iterable[ActivityOccurrence],
) -> List[ActivityOccurrence]:
    ids = {lay.activity_id for lay in layouts if lay.is_overflow}
    return [a for a in activities if a.activity_id in ids]
