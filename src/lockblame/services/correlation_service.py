# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from ..domain.models import AttributionHunk, ReportableEvent, SpecRegion

logger = logging.getLogger(__name__)


class AggregationPolicy(str, Enum):
    """How a hunk that overlaps several spec regions is reported."""

    ALL = "all"  # one event per overlapping region
    UNION = "union"  # one event holding every overlap
    LAST = "last"  # one event for the last overlapping region only


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """True if half-open ranges [a_start, a_end) and [b_start, b_end) intersect."""
    return a_start < b_end and b_start < a_end


def clip(
    region: SpecRegion, start: int, end: int
) -> Optional[Tuple[int, int]]:
    """Intersection of `region` with [start, end), or None when disjoint."""
    if not overlaps(region.start_line, region.end_line, start, end):
        return None
    return max(region.start_line, start), min(region.end_line, end)


def _event(
    hunk: AttributionHunk, start: int, end: int, lines: Tuple[str, ...]
) -> ReportableEvent:
    return ReportableEvent(
        timestamp=hunk.timestamp,
        clipped_start=start,
        clipped_end=end,
        matched_lines=lines,
        author=hunk.author,
        commit_identity=hunk.commit_identity,
        tz_offset_minutes=hunk.tz_offset_minutes,
        summary=hunk.summary,
    )


def correlate(
    regions: Sequence[SpecRegion],
    hunks: Iterable[AttributionHunk],
    lines: Sequence[str],
    policy: AggregationPolicy = AggregationPolicy.ALL,
) -> List[ReportableEvent]:
    """
    Match attribution hunks against spec regions.

    Events come back in hunk arrival order; sorting by time is left to the
    report layer. Hunks reaching past the end of the file are clipped to it.
    """
    policy = AggregationPolicy(policy)
    total = len(lines)
    events: List[ReportableEvent] = []

    for hunk in hunks:
        start, end = hunk.start_line, hunk.end_line
        if end > total:
            logger.warning(
                "correlate: hunk %s covers lines %d-%d but file has %d; clipping",
                hunk.commit_identity[:8],
                start + 1,
                end,
                total,
            )
            end = total
            start = min(start, total)

        matches: List[Tuple[int, int]] = []
        for region in regions:
            r = clip(region, start, end)
            if r is not None:
                matches.append(r)

        if not matches:
            continue

        if policy is AggregationPolicy.ALL:
            for s, e in matches:
                events.append(_event(hunk, s, e, tuple(lines[s:e])))
        elif policy is AggregationPolicy.UNION:
            matched: List[str] = []
            for s, e in matches:
                matched.extend(lines[s:e])
            events.append(_event(hunk, matches[0][0], matches[-1][1], tuple(matched)))
        else:
            s, e = matches[-1]
            events.append(_event(hunk, s, e, tuple(lines[s:e])))

    logger.debug("correlate: %d event(s) (policy=%s)", len(events), policy.value)
    return events
