"""Day/week/month bucket keys for event timestamps.

Keys are read straight off the timestamp's own calendar fields; no
timezone conversion happens. Week numbers follow a per-month scheme,

    week = ceil((day_of_month - day_of_week + 1) / 7)    (Sunday = 0)

which restarts every month and ranges 0..5. It is not ISO-8601 week
numbering, and neighbouring months can produce the same week key.
"""

import math
from datetime import datetime
from typing import NamedTuple


class BucketKeys(NamedTuple):
    """The three bucket keys of one timestamp."""

    day: str
    week: str
    month: str


def day_of_week(timestamp: datetime) -> int:
    """Day of week with Sunday = 0 through Saturday = 6."""
    return (timestamp.weekday() + 1) % 7


def day_key(timestamp: datetime) -> str:
    """Calendar day key, e.g. "2024-01-09"."""
    return f"{timestamp.year:04d}-{timestamp.month:02d}-{timestamp.day:02d}"


def week_of_month(timestamp: datetime) -> int:
    return math.ceil((timestamp.day - day_of_week(timestamp) + 1) / 7)


def week_key(timestamp: datetime) -> str:
    """Per-month week key, e.g. "2024-W02"."""
    return f"{timestamp.year:04d}-W{week_of_month(timestamp):02d}"


def month_key(timestamp: datetime) -> str:
    """Calendar month key, e.g. "2024-01"."""
    return f"{timestamp.year:04d}-{timestamp.month:02d}"


def bucket_keys(timestamp: datetime) -> BucketKeys:
    """Compute day, week and month keys for a timestamp."""
    return BucketKeys(
        day=day_key(timestamp),
        week=week_key(timestamp),
        month=month_key(timestamp),
    )
