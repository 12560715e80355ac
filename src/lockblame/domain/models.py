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

from dataclasses import dataclass
from typing import Tuple

# Zero-indexed, one entry per physical line of the lock file.
LineSequence = Tuple[str, ...]


@dataclass(frozen=True)
class SpecRegion:
    """
    One block of dependency specs in the lock file.

    Half-open interval over zero-indexed lines: `start_line` is the first
    spec line, `end_line` is the terminating blank line (or EOF) and is
    never part of the region.
    """

    start_line: int
    end_line: int

    def __post_init__(self) -> None:
        if self.start_line < 0 or self.start_line > self.end_line:
            raise ValueError(
                f"Invalid region [{self.start_line}, {self.end_line})"
            )

    @property
    def length(self) -> int:
        return self.end_line - self.start_line


@dataclass(frozen=True)
class AttributionHunk:
    """
    A contiguous run of lines in the current file, last touched by one commit.

    `start_line` is zero-indexed; the covered range is
    `[start_line, start_line + line_count)`.
    """

    start_line: int
    line_count: int
    timestamp: int
    commit_identity: str
    author: str = ""
    tz_offset_minutes: int = 0
    summary: str = ""

    def __post_init__(self) -> None:
        if self.start_line < 0 or self.line_count < 0:
            raise ValueError(
                f"Invalid hunk start={self.start_line} count={self.line_count}"
            )

    @property
    def end_line(self) -> int:
        return self.start_line + self.line_count


@dataclass(frozen=True)
class ReportableEvent:
    """A time-stamped change that touched at least one spec region."""

    timestamp: int
    clipped_start: int
    clipped_end: int
    matched_lines: Tuple[str, ...]
    author: str = ""
    commit_identity: str = ""
    tz_offset_minutes: int = 0
    summary: str = ""
