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
from typing import List, Optional, Sequence, Tuple

from ..domain.models import SpecRegion

logger = logging.getLogger(__name__)

DEFAULT_MARKER = "specs:"


def extract_regions(
    lines: Sequence[str], marker: str = DEFAULT_MARKER
) -> Tuple[SpecRegion, ...]:
    """
    Return the spec regions of a lock file, in file order.

    A region starts on the line after a marker line and stops at the next
    blank line, which is excluded. A region still open at end of file is
    closed there. Meeting another marker closes the open region on the
    marker line, so regions never overlap.
    """
    regions: List[SpecRegion] = []
    start: Optional[int] = None

    for i, line in enumerate(lines):
        if line.rstrip().endswith(marker):
            if start is not None:
                regions.append(SpecRegion(start, i))
            start = i + 1
            continue
        if start is not None and not line.strip():
            regions.append(SpecRegion(start, i))
            start = None

    if start is not None:
        # unterminated trailing block
        regions.append(SpecRegion(start, len(lines)))

    logger.debug("extract_regions: %d region(s) found", len(regions))
    return tuple(regions)
