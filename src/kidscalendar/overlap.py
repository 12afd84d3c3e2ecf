from typing import Dict, Iterable, List

from .models import ActivityOccurrence, OverlapGroup, TimeSegment


def occurrence_sort_key(occ: ActivityOccurrence):
    return (occ.start_minutes, occ.child_name.casefold())


class DisjointSet:
    """Union-Find über Aktivitäts-IDs (Pfadkompression, Union nach Größe)."""

    def __init__(self, items: Iterable[str] = ()):
        self._parent: Dict[str, str] = {}
        self._size: Dict[str, int] = {}
        for item in items:
            self.add(item)

    def add(self, item: str):
        if item not in self._parent:
            self._parent[item] = item
            self._size[item] = 1

    def find(self, item: str) -> str:
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, a: str, b: str):
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return
        if self._size[ra] < self._size[rb]:
            ra, rb = rb, ra
        self._parent[rb] = ra
        self._size[ra] += self._size[rb]


def _sweep(occurrences: List[ActivityOccurrence]) -> List[TimeSegment]:
    # (Minute, 0=Start/1=Ende, ID): bei gleicher Minute kommen Starts vor Enden
    points = []
    for occ in occurrences:
        if occ.end_minutes <= occ.start_minutes:
            continue
        points.append((occ.start_minutes, 0, occ.activity_id))
        points.append((occ.end_minutes, 1, occ.activity_id))
    if not points:
        return []
    points.sort(key=lambda p: (p[0], p[1]))

    segments: List[TimeSegment] = []
    active: Dict[str, None] = {}    # dict als geordnete Menge
    last_minutes = points[0][0]

    for minutes, kind, activity_id in points:
        if minutes > last_minutes and active:
            segments.append(TimeSegment(
                start_minutes=last_minutes,
                end_minutes=minutes,
                activity_ids=tuple(active),
                column_count=len(active),
            ))
        if kind == 0:
            active[activity_id] = None
        else:
            active.pop(activity_id, None)
        last_minutes = minutes

    return segments


def detect_overlaps(occurrences: Iterable[ActivityOccurrence]) -> List[OverlapGroup]:
    """
    Gruppiert die Termine eines Tages in Überlappungsgruppen.

    Ein Sweep über alle Start-/Endpunkte liefert Zeitsegmente mit konstanter
    Menge aktiver Termine. Alle Termine, die sich ein Segment teilen, landen
    (transitiv) in derselben Gruppe. Termine ohne Dauer erzeugen kein Segment
    und bilden eine eigene Gruppe ohne Segmente.
    """
    ordered = sorted(occurrences, key=occurrence_sort_key)
    if not ordered:
        return []

    segments = _sweep(ordered)

    groups_ds = DisjointSet(o.activity_id for o in ordered)
    for seg in segments:
        first = seg.activity_ids[0]
        for other in seg.activity_ids[1:]:
            groups_ds.union(first, other)

    groups: Dict[str, OverlapGroup] = {}
    for occ in ordered:
        root = groups_ds.find(occ.activity_id)
        groups.setdefault(root, OverlapGroup()).activities.append(occ)
    for seg in segments:
        groups[groups_ds.find(seg.activity_ids[0])].segments.append(seg)

    result = list(groups.values())
    for group in result:
        group.segments.sort(key=lambda s: s.start_minutes)
    return result
