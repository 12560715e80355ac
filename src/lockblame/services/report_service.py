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

import json
import time
from itertools import groupby
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..domain.models import ReportableEvent
from .time_format import format_absolute, format_relative

FORMATS = ("text", "grouped", "json")


class ReportService:
    """
    Renders reportable events as human- or machine-readable text.

    Notes:
      - text (default): one block per event with a time header, the
        1-indexed inclusive line range and the matched lines.
      - grouped: one block per calendar date, all lines changed that day.
      - json: one JSON array of event objects.
    """

    def __init__(
        self, clock: Optional[Callable[[], float]] = None, with_time: bool = False
    ) -> None:
        self._clock = clock or time.time
        self._with_time = bool(with_time)

    def order(self, events: Iterable[ReportableEvent]) -> List[ReportableEvent]:
        """Oldest first; ties keep arrival order. Empty events are dropped."""
        return sorted(
            (e for e in events if e.matched_lines), key=lambda e: e.timestamp
        )

    def _absolute(self, event: ReportableEvent, with_time: Optional[bool] = None) -> str:
        if with_time is None:
            with_time = self._with_time
        return format_absolute(event.timestamp, event.tz_offset_minutes, with_time)

    def _header(self, event: ReportableEvent, now: float) -> str:
        header = f"Updated {format_relative(event.timestamp, now)} ({self._absolute(event)})"
        if event.author:
            header += f" by {event.author}"
        if event.commit_identity:
            header += f" [{event.commit_identity[:8]}]"
        return header + ":"

    def render_text(self, events: Iterable[ReportableEvent]) -> str:
        now = self._clock()
        blocks: List[str] = []
        for event in self.order(events):
            block = [
                self._header(event, now),
                f"Lines {event.clipped_start + 1}-{event.clipped_end}:",
                *event.matched_lines,
            ]
            blocks.append("\n".join(block) + "\n\n")
        return "".join(blocks)

    def render_grouped(self, events: Iterable[ReportableEvent]) -> str:
        now = self._clock()
        blocks: List[str] = []
        def day(e: ReportableEvent) -> str:
            return self._absolute(e, with_time=False)

        # dates follow each author's offset, so they need not follow time order
        by_day = sorted(self.order(events), key=day)
        for date, group in groupby(by_day, key=day):
            members = list(group)
            # newest change of the day drives the relative label
            relative = format_relative(members[-1].timestamp, now)
            block = [f"Updated {date} ({relative}):"]
            for event in members:
                block.extend(event.matched_lines)
            blocks.append("\n".join(block) + "\n\n")
        return "".join(blocks)

    def render_json(self, events: Iterable[ReportableEvent]) -> str:
        now = self._clock()
        rows: List[Dict[str, Any]] = [
            {
                "timestamp": e.timestamp,
                "date": self._absolute(e),
                "relative": format_relative(e.timestamp, now),
                "author": e.author,
                "commit": e.commit_identity,
                "summary": e.summary,
                "start_line": e.clipped_start + 1,
                "end_line": e.clipped_end,
                "lines": list(e.matched_lines),
            }
            for e in self.order(events)
        ]
        return json.dumps(rows, ensure_ascii=False, indent=2) + "\n"

    def render(self, events: Iterable[ReportableEvent], fmt: str = "text") -> str:
        """
        Render `events` in the specified format.

        Raises:
            ValueError: if an unsupported format is requested.
        """
        fmt = (fmt or "text").lower()
        if fmt == "text":
            return self.render_text(events)
        if fmt == "grouped":
            return self.render_grouped(events)
        if fmt == "json":
            return self.render_json(events)
        raise ValueError(f"Unsupported format: {fmt}")
