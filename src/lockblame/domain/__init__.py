from .errors import (
    BlameError,
    LockblameError,
    LockfileError,
    RepositoryError,
)
from .models import AttributionHunk, LineSequence, ReportableEvent, SpecRegion

__all__ = [
    "AttributionHunk",
    "BlameError",
    "LineSequence",
    "LockblameError",
    "LockfileError",
    "ReportableEvent",
    "RepositoryError",
    "SpecRegion",
]
