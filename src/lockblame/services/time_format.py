# Licensed under the Apache License, Version 2.0
from __future__ import annotations

from datetime import datetime, timedelta, timezone

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S %z"


def format_absolute(
    timestamp: int, tz_offset_minutes: int = 0, with_time: bool = False
) -> str:
    """Calendar date (optionally with time) in the change's own time zone."""
    tz = timezone(timedelta(minutes=tz_offset_minutes))
    when = datetime.fromtimestamp(timestamp, tz=tz)
    return when.strftime(DATETIME_FORMAT if with_time else DATE_FORMAT)


def format_relative(timestamp: int, now: float) -> str:
    """
    Coarse "N units ago" label. Tiers are checked largest first and use
    integer division, so 25 hours is "1 days ago" and 90 minutes is
    "1 hours ago". Timestamps in the future count as "just now".
    """
    delta = max(0, int(now) - int(timestamp))
    days = delta // 86400
    if days > 0:
        return f"{days} days ago"
    hours = delta // 3600
    if hours > 0:
        return f"{hours} hours ago"
    minutes = delta // 60
    if minutes > 0:
        return f"{minutes} minutes ago"
    return "just now"
