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

import logging
from pathlib import Path
from typing import List, Union

from ..domain.models import ReportableEvent
from ..ports.blame import BlamePort
from ..ports.lockfile import LockfilePort
from .correlation_service import AggregationPolicy, correlate
from .region_service import DEFAULT_MARKER, extract_regions

logger = logging.getLogger(__name__)

DEFAULT_LOCKFILE = "Gemfile.lock"


class HistoryService:
    """
    Orchestrates one run over a project directory:
      - reads the lock file (fails here first if it is missing)
      - extracts the spec regions
      - collects the full blame feed
      - correlates hunks with regions

    Errors raised by the ports propagate unchanged; no partial result is
    returned.
    """

    def __init__(
        self,
        lockfile: LockfilePort,
        blame: BlamePort,
        *,
        lockfile_name: Union[str, Path] = DEFAULT_LOCKFILE,
        marker: str = DEFAULT_MARKER,
        policy: AggregationPolicy = AggregationPolicy.ALL,
    ) -> None:
        self._lockfile = lockfile
        self._blame = blame
        self._lockfile_name = Path(lockfile_name)
        self._marker = marker
        self._policy = AggregationPolicy(policy)

    def collect(self, project_dir: Union[str, Path]) -> List[ReportableEvent]:
        """
        Return the unsorted reportable events for `project_dir`.
        """
        root = Path(project_dir)
        lines = self._lockfile.read_lines(root / self._lockfile_name)
        regions = extract_regions(lines, marker=self._marker)
        hunks = list(self._blame.blame(root, self._lockfile_name))
        logger.debug(
            "HistoryService.collect: %d lines, %d regions, %d hunks via %s",
            len(lines),
            len(regions),
            len(hunks),
            self._blame.name,
        )
        return correlate(regions, hunks, lines, self._policy)
