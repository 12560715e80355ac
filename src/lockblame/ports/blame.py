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

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable

from ..domain.models import AttributionHunk


class BlamePort(ABC):
    """Abstract interface for line-level change attribution."""

    @abstractmethod
    def blame(self, repo_root: Path, path: Path) -> Iterable[AttributionHunk]:
        """
        Yield attribution hunks for `path` (relative to `repo_root`).

        Hunks may arrive in any order. In well-formed output they tile the
        file: every line belongs to exactly one hunk.

        Raises RepositoryError when `repo_root` is not a repository or the
        path has no history, BlameError when the tool itself fails.
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name of the blame backend."""
        raise NotImplementedError
