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
from typing import Optional

import typer

from ..adapters.blame.git_blame import GitBlame
from ..adapters.lockfile.local_lockfile import LocalLockfile
from ..domain.errors import LockblameError
from ..services import (
    DEFAULT_LOCKFILE,
    FORMATS,
    AggregationPolicy,
    HistoryService,
    ReportService,
)

from ..logging_config import setup_logging

setup_logging()

app = typer.Typer(
    help="Lockblame - see when the specs in your Gemfile.lock were last updated"
)

logger = logging.getLogger(__name__)


def _parse_fmt(fmt: Optional[str]) -> str:
    """
    Normalise --fmt. Raises Typer BadParameter for unknown formats.
    """
    value = (fmt or "text").strip().lower()
    if value not in FORMATS:
        raise typer.BadParameter(
            f"Unknown format: {fmt}. Valid options: {', '.join(FORMATS)}"
        )
    return value


def _wire(
    lockfile_name: str = DEFAULT_LOCKFILE,
    policy: AggregationPolicy = AggregationPolicy.ALL,
    show_time: bool = False,
) -> tuple[HistoryService, ReportService]:
    """
    Minimal composition root:
      LocalLockfile + GitBlame -> HistoryService, wall clock -> ReportService
    """
    history = HistoryService(
        LocalLockfile(),
        GitBlame(),
        lockfile_name=lockfile_name,
        policy=policy,
    )
    report = ReportService(with_time=show_time)
    return history, report


@app.command()
def main(
    directory: Path = typer.Argument(
        ...,
        help="The directory of the bundler project you want to check.",
    ),
    fmt: str = typer.Option(
        "text",
        "--fmt",
        help="Output format: text, grouped or json.",
    ),
    policy: AggregationPolicy = typer.Option(
        AggregationPolicy.ALL,
        "--policy",
        case_sensitive=False,
        help="How to report a change that spans several spec blocks.",
    ),
    show_time: bool = typer.Option(
        False, "--show-time", help="Include the time of day and offset in dates."
    ),
    lockfile: str = typer.Option(
        DEFAULT_LOCKFILE, "--lockfile", help="Lock file name, relative to DIRECTORY."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
):
    """
    Show when, and by whom, each spec block of the lock file was last changed.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    fmt = _parse_fmt(fmt)
    history, report = _wire(lockfile, AggregationPolicy(policy), show_time)

    try:
        events = history.collect(directory)
    except LockblameError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)

    output = report.render(events, fmt=fmt)
    if output:
        typer.echo(output, nl=False)
