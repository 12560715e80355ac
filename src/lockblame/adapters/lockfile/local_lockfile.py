# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import logging
from pathlib import Path

from ...domain.errors import LockfileError
from ...domain.models import LineSequence
from ...ports.lockfile import LockfilePort

logger = logging.getLogger(__name__)


class LocalLockfile(LockfilePort):
    """Reads the lock file from the local filesystem as UTF-8 text."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def read_lines(self, path: Path) -> LineSequence:
        p = Path(path)
        if not p.is_file():
            raise LockfileError(f"Lock file not found: {p}")
        try:
            text = p.read_bytes().decode(self._encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise LockfileError(f"Could not read {p}: {e}") from e

        # git numbers lines by "\n" only; other line-break characters stay put
        pieces = text.split("\n")
        if pieces[-1] == "":
            pieces.pop()
        lines = tuple(piece[:-1] if piece.endswith("\r") else piece for piece in pieces)
        logger.debug("LocalLockfile.read_lines: %d lines from %s", len(lines), p)
        return lines
