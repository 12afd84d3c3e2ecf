from kidscalendar.overlap import DisjointSet, detect_overlaps
from helpers import make_occ


def test_empty_input():
    assert detect_overlaps([]) == []


def test_touching_activities_form_separate_groups():
    groups = detect_overlaps([make_occ('1', 9, 0, 10, 0), make_occ('2', 10, 0, 11, 0, 'Child B')])
    assert len(groups) == 2
    for g in groups:
        assert len(g.activities) == 1
        assert len(g.segments) == 1
        assert g.segments[0].column_count == 1


def test_segments_track_active_count():
    # A 9-11, B 9:30-10:00 -> drei Segmente mit 1, 2, 1 aktiven Terminen
    groups = detect_overlaps([make_occ('A', 9, 0, 11, 0), make_occ('B', 9, 30, 10, 0, 'Child B')])
    assert len(groups) == 1
    segs = groups[0].segments
    assert [(s.start_minutes, s.end_minutes, s.column_count) for s in segs] == [
        (540, 570, 1), (570, 600, 2), (600, 660, 1),
    ]
    assert set(segs[1].activity_ids) == {'A', 'B'}


def test_chained_overlaps_are_transitive():
    # A und C berühren sich nicht, sind aber über B verbunden
    occs = [
        make_occ('A', 9, 0, 10, 0, 'Anna'),
        make_occ('B', 9, 30, 10, 30, 'Ben'),
        make_occ('C', 10, 15, 11, 0, 'Clara'),
        make_occ('D', 12, 0, 13, 0, 'Dora'),
    ]
    groups = detect_overlaps(occs)
    members = [[o.activity_id for o in g.activities] for g in groups]
    assert members == [['A', 'B', 'C'], ['D']]


def test_segments_sorted_and_contiguous_per_group():
    occs = [
        make_occ('A', 8, 0, 12, 0, 'Anna'),
        make_occ('B', 8, 0, 9, 0, 'Ben'),
        make_occ('C', 8, 0, 10, 0, 'Clara'),
        make_occ('D', 9, 30, 11, 0, 'Dora'),
    ]
    (group,) = detect_overlaps(occs)
    starts = [s.start_minutes for s in group.segments]
    assert starts == sorted(starts)
    for prev, nxt in zip(group.segments, group.segments[1:]):
        assert prev.end_minutes == nxt.start_minutes
    assert group.segments[0].start_minutes == 480
    assert group.segments[-1].end_minutes == 720


def test_zero_length_occurrence_gets_own_group_without_segments():
    groups = detect_overlaps([make_occ('A', 9, 0, 10, 0), make_occ('Z', 9, 30, 9, 30, 'Child Z')])
    by_id = {g.activities[0].activity_id: g for g in groups}
    assert by_id['Z'].segments == []
    assert len(by_id['A'].segments) == 1


def test_disjoint_set_union_find():
    ds = DisjointSet(['a', 'b', 'c', 'd'])
    ds.union('a', 'b')
    ds.union('c', 'd')
    assert ds.find('a') == ds.find('b')
    assert ds.find('a') != ds.find('c')
    ds.union('b', 'd')
    assert len({ds.find(x) for x in 'abcd'}) == 1
