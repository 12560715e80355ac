import logging

import pytest

from lockblame.domain.models import AttributionHunk, SpecRegion
from lockblame.services.correlation_service import (
    AggregationPolicy,
    clip,
    correlate,
    overlaps,
)


LINES = ["", "", "", "specs:", "  foo (1.0.0)", "  bar (2.0)", ""]


def hunk(start, count, ts=1000, sha="a" * 40, author="alice"):
    return AttributionHunk(
        start_line=start, line_count=count, timestamp=ts, commit_identity=sha, author=author
    )


def test_hunk_inside_region_is_clipped_to_hunk():
    events = correlate([SpecRegion(4, 7)], [hunk(4, 2, ts=42)], LINES)
    assert len(events) == 1
    e = events[0]
    assert (e.clipped_start, e.clipped_end) == (4, 6)
    assert e.matched_lines == ("  foo (1.0.0)", "  bar (2.0)")
    assert e.timestamp == 42
    assert e.author == "alice"


def test_hunk_covering_whole_file_is_clipped_to_region():
    events = correlate([SpecRegion(4, 6)], [hunk(0, 7)], LINES)
    assert [(e.clipped_start, e.clipped_end) for e in events] == [(4, 6)]


def test_no_regions_gives_no_events():
    assert correlate([], [hunk(0, 7)], LINES) == []


def test_hunk_outside_regions_is_silent():
    assert correlate([SpecRegion(4, 6)], [hunk(0, 3), hunk(6, 1)], LINES) == []


def test_adjacent_ranges_do_not_overlap():
    # hunk ends where the region starts, and starts where it ends
    assert not overlaps(4, 6, 2, 4)
    assert not overlaps(4, 6, 6, 7)
    assert correlate([SpecRegion(4, 6)], [hunk(2, 2), hunk(6, 1)], LINES) == []


def test_closed_interval_adjacency_is_not_an_overlap():
    # read as closed ranges, [2, 4] and [4, 6] would share line 4; half-open they do not
    region = SpecRegion(4, 6)
    assert clip(region, 2, 4) is None
    assert clip(region, 6, 8) is None
    # sharing a real line is an overlap under either convention
    assert clip(region, 2, 5) == (4, 5)
    assert clip(region, 5, 8) == (5, 6)


def test_single_shared_line_overlaps():
    assert overlaps(4, 6, 3, 5)
    assert overlaps(4, 6, 5, 7)
    assert clip(SpecRegion(4, 6), 3, 5) == (4, 5)
    assert clip(SpecRegion(4, 6), 5, 7) == (5, 6)


def test_zero_length_ranges_overlap_nothing():
    assert not overlaps(4, 4, 0, 10)
    assert not overlaps(0, 10, 4, 4)
    assert correlate([SpecRegion(4, 4)], [hunk(0, 7)], LINES) == []


@pytest.mark.parametrize(
    "a,b",
    [
        ((0, 5), (4, 9)),
        ((0, 5), (5, 9)),
        ((3, 3), (0, 9)),
        ((2, 8), (3, 4)),
        ((0, 1), (7, 9)),
    ],
)
def test_overlap_is_symmetric(a, b):
    assert overlaps(*a, *b) == overlaps(*b, *a)


@pytest.mark.parametrize("start,end", [(0, 3), (2, 5), (4, 6), (5, 12), (0, 20), (9, 11)])
def test_clip_is_contained_in_both_ranges(start, end):
    region = SpecRegion(4, 10)
    result = clip(region, start, end)
    if result is None:
        assert not overlaps(4, 10, start, end)
        return
    s, e = result
    assert region.start_line <= s <= e <= region.end_line
    assert start <= s <= e <= end


TWO_BLOCKS = [
    "GIT",
    "  specs:",
    "    a (1.0.0)",
    "",
    "GEM",
    "  specs:",
    "    b (1.0.0)",
    "",
]
REGIONS = [SpecRegion(2, 3), SpecRegion(6, 7)]


def test_policy_all_emits_one_event_per_region():
    events = correlate(REGIONS, [hunk(0, 8)], TWO_BLOCKS, AggregationPolicy.ALL)
    assert [(e.clipped_start, e.clipped_end) for e in events] == [(2, 3), (6, 7)]
    assert [e.matched_lines for e in events] == [("    a (1.0.0)",), ("    b (1.0.0)",)]


def test_policy_union_emits_one_event_with_every_overlap():
    events = correlate(REGIONS, [hunk(0, 8)], TWO_BLOCKS, AggregationPolicy.UNION)
    assert len(events) == 1
    e = events[0]
    assert (e.clipped_start, e.clipped_end) == (2, 7)
    assert e.matched_lines == ("    a (1.0.0)", "    b (1.0.0)")


def test_policy_last_keeps_only_last_region():
    events = correlate(REGIONS, [hunk(0, 8)], TWO_BLOCKS, AggregationPolicy.LAST)
    assert len(events) == 1
    assert (events[0].clipped_start, events[0].clipped_end) == (6, 7)
    assert events[0].matched_lines == ("    b (1.0.0)",)


def test_policy_accepts_plain_string():
    events = correlate(REGIONS, [hunk(0, 8)], TWO_BLOCKS, "last")
    assert len(events) == 1


def test_events_keep_arrival_order():
    hunks = [hunk(6, 2, ts=5, sha="b" * 40), hunk(0, 6, ts=9, sha="c" * 40)]
    events = correlate(REGIONS, hunks, TWO_BLOCKS)
    assert [e.timestamp for e in events] == [5, 9]


def test_hunk_past_end_of_file_is_clipped_with_warning(caplog):
    lines = ["specs:", "a (1.0.0)", "b (1.0.0)"]
    with caplog.at_level(logging.WARNING, logger="lockblame.services.correlation_service"):
        events = correlate([SpecRegion(1, 3)], [hunk(2, 10)], lines)
    assert [(e.clipped_start, e.clipped_end) for e in events] == [(2, 3)]
    assert events[0].matched_lines == ("b (1.0.0)",)
    assert "clipping" in caplog.text


def test_hunk_entirely_past_end_of_file_is_dropped():
    lines = ["specs:", "a (1.0.0)"]
    assert correlate([SpecRegion(1, 2)], [hunk(5, 3)], lines) == []


def test_event_carries_commit_details():
    h = AttributionHunk(4, 2, 42, "d" * 40, author="dana", tz_offset_minutes=60, summary="Bump foo")
    (e,) = correlate([SpecRegion(4, 6)], [h], LINES)
    assert (e.author, e.commit_identity, e.tz_offset_minutes, e.summary) == (
        "dana",
        "d" * 40,
        60,
        "Bump foo",
    )
