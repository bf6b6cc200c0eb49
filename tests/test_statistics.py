import pytest

from seqalign.align import align
from seqalign.editdistance import edit_distance
from seqalign.statistics import AlignmentStatistics


def test_from_alignment():
    _, alignment = align("abcd", "xbd")
    stats = AlignmentStatistics.from_alignment(alignment)
    assert stats.matches == 2
    assert stats.mismatches == 1
    assert stats.deletions == 1
    assert stats.insertions == 0
    assert stats.length == 4
    assert stats.errors == 2
    assert stats.identity == 0.5


def test_from_edit_mapping():
    distance, mapping = edit_distance("ac", "abc", score_only=False, gap="-")
    stats = AlignmentStatistics.from_alignment(mapping, gap="-")
    assert stats.errors == distance == 1
    assert stats.insertions == 1


def test_gap_is_recognized_by_identity():
    gap = object()
    stats = AlignmentStatistics.from_alignment([(None, "a"), (gap, "b")], gap=gap)
    assert stats.insertions == 1
    assert stats.mismatches == 1


def test_custom_equality():
    stats = AlignmentStatistics.from_alignment(
        [("A", "a"), ("b", "B")], equal=lambda a, b: a.lower() == b.lower()
    )
    assert stats.matches == 2


def test_empty():
    stats = AlignmentStatistics()
    assert stats.length == 0
    assert stats.identity == 0.0
    assert stats.as_json() == {
        "matches": 0,
        "mismatches": 0,
        "insertions": 0,
        "deletions": 0,
        "identity": 0.0,
    }


def test_iadd():
    stats = AlignmentStatistics.from_alignment([("a", "a"), (None, "b")])
    stats += AlignmentStatistics.from_alignment([("a", "c"), ("b", None)])
    assert (stats.matches, stats.mismatches, stats.insertions, stats.deletions) == (1, 1, 1, 1)
    with pytest.raises(ValueError):
        stats += 3


def test_as_json_rounds_identity():
    stats = AlignmentStatistics.from_alignment([("a", "a"), ("a", "a"), ("a", "b")])
    assert stats.as_json()["identity"] == 0.6667


def test_repr():
    assert repr(AlignmentStatistics()) == (
        "AlignmentStatistics(matches=0, mismatches=0, insertions=0, deletions=0)"
    )
