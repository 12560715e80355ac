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
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ...domain.errors import BlameError, RepositoryError
from ...domain.models import AttributionHunk
from ...ports.blame import BlamePort

logger = logging.getLogger(__name__)

_HEX = frozenset("0123456789abcdef")


def _parse_tz(value: str) -> int:
    """Convert a git `+HHMM` / `-HHMM` offset to minutes east of UTC."""
    value = value.strip()
    if len(value) != 5 or value[0] not in "+-" or not value[1:].isdigit():
        raise BlameError(f"Malformed time zone in blame output: {value!r}")
    minutes = int(value[1:3]) * 60 + int(value[3:5])
    return -minutes if value[0] == "-" else minutes


def _is_sha(token: str) -> bool:
    return len(token) in (40, 64) and all(c in _HEX for c in token)


def parse_porcelain(raw: str) -> List[AttributionHunk]:
    """
    Parse `git blame --porcelain` output into attribution hunks.

    Every group of lines is announced by `<sha> <orig> <final> <count>`;
    the per-commit headers (author, author-time, author-tz, summary) follow
    only the first time a commit appears, so hunks are assembled after the
    whole stream has been read.
    """
    groups: List[Tuple[str, int, int]] = []  # (sha, final 1-indexed, count)
    commits: Dict[str, Dict[str, Any]] = {}
    current: Optional[Dict[str, Any]] = None

    for line in raw.split("\n"):
        if not line or line.startswith("\t"):
            # content line; ends the header block of the current line
            current = None
            continue

        parts = line.split(" ")
        if current is None and _is_sha(parts[0]):
            if len(parts) < 3:
                raise BlameError(f"Malformed blame header: {line!r}")
            sha = parts[0]
            current = commits.setdefault(sha, {})
            if len(parts) >= 4:
                try:
                    groups.append((sha, int(parts[2]), int(parts[3])))
                except ValueError as e:
                    raise BlameError(f"Malformed blame header: {line!r}") from e
            continue

        if current is None:
            continue

        key, _, value = line.partition(" ")
        if key == "author":
            current["author"] = value
        elif key == "author-time":
            try:
                current["author_time"] = int(value)
            except ValueError as e:
                raise BlameError(f"Malformed author-time: {value!r}") from e
        elif key == "author-tz":
            current["author_tz"] = _parse_tz(value)
        elif key == "summary":
            current["summary"] = value

    hunks: List[AttributionHunk] = []
    for sha, final_line, count in groups:
        info = commits.get(sha, {})
        if "author_time" not in info:
            raise BlameError(f"No author-time reported for commit {sha}")
        hunks.append(
            AttributionHunk(
                start_line=final_line - 1,
                line_count=count,
                timestamp=info["author_time"],
                commit_identity=sha,
                author=info.get("author", ""),
                tz_offset_minutes=info.get("author_tz", 0),
                summary=info.get("summary", ""),
            )
        )
    return hunks


class GitBlame(BlamePort):
    """Blame backend that shells out to the `git` executable."""

    def __init__(self, git: str = "git") -> None:
        self._git = git

    @property
    def name(self) -> str:
        return "git"

    def blame(self, repo_root: Path, path: Path) -> List[AttributionHunk]:
        cmd = [
            self._git,
            "-C",
            str(repo_root),
            "blame",
            "--porcelain",
            "--",
            str(path),
        ]
        logger.debug("GitBlame.blame: running %s", " ".join(cmd))
        try:
            # bytes, so a stray "\r" in file content is not read as a line break
            result = subprocess.run(cmd, capture_output=True)
        except OSError as e:
            raise BlameError(f"Could not run {self._git}: {e}") from e

        if result.returncode != 0:
            msg = result.stderr.decode("utf-8", errors="replace").strip()
            msg = msg or f"git exited with status {result.returncode}"
            raise RepositoryError(f"Blame failed for {path} in {repo_root}: {msg}")

        hunks = parse_porcelain(result.stdout.decode("utf-8", errors="replace"))
        logger.debug("GitBlame.blame: %d hunks for %s", len(hunks), path)
        return hunks
