"""
Time bucketing for trend graphs.

A trailing window of ``window_days`` covers the calendar dates
``[today - window_days, today]``, both ends inclusive.  The window is split
into a short ordered sequence of contiguous, non-overlapping buckets:

- windows up to ``daily_max_days`` get one bucket per day,
- longer windows get ``bucket_count`` buckets of near-equal width (widths
  differ by at most one day; the extra days go to the oldest buckets).

Bucket ``index`` 0 is the **oldest** bucket and the last bucket ends
today, so buckets read left to right on a graph.

All arithmetic uses :class:`datetime.date` (calendar-local), never
timestamps, so there is no midnight / UTC off-by-one.
"""

from __future__ import annotations

import datetime
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from training_analytics.core.config import settings
from training_analytics.schemas.progress import TimeBucket

# ======================================================================
# Configuration
# ======================================================================


class BucketConfig(BaseModel):
    """Bucketing parameters.  Injected in tests, defaulted from settings."""

    bucket_count: int = Field(default_factory=lambda: settings.TREND_BUCKET_COUNT, ge=1, le=31)
    daily_max_days: int = Field(default_factory=lambda: settings.DAILY_BUCKET_MAX_DAYS, ge=0, le=31)


DEFAULT_BUCKET_CONFIG = BucketConfig()

# Trailing windows offered to users (days).
STANDARD_WINDOWS: list[int] = [7, 30, 90, 180, 360]


# ======================================================================
# Window helpers
# ======================================================================


def window_bounds(window_days: int, today: Optional[datetime.date] = None, ) -> tuple[datetime.date, datetime.date]:
    """Return ``(start, end)`` of the trailing window, both inclusive."""
    if window_days < 1:
        raise ValueError(f"window_days must be >= 1, got {window_days}")
    end = today or datetime.date.today()
    return end - datetime.timedelta(days=window_days), end


def _bucket_count(window_days: int, cfg: BucketConfig) -> int:
    total_days = window_days + 1
    if window_days <= cfg.daily_max_days:
        return total_days
    return min(cfg.bucket_count, total_days)


# ======================================================================
# Main entry points
# ======================================================================


def compute_buckets(window_days: int, today: Optional[datetime.date] = None,
                    config: Optional[BucketConfig] = None, ) -> list[TimeBucket]:
    """Split the trailing window into ordered buckets (oldest first).

    Args:
        window_days: Length of the trailing window (>= 1).
        today: Reference day (defaults to the local current date).
        config: Optional :class:`BucketConfig` override.

    Returns:
        Contiguous buckets that jointly span exactly
        ``[today - window_days, today]``.
    """
    cfg = config or DEFAULT_BUCKET_CONFIG
    start, end = window_bounds(window_days, today)

    total_days = (end - start).days + 1
    count = _bucket_count(window_days, cfg)
    base_width, extra_days = divmod(total_days, count)

    buckets: list[TimeBucket] = []
    cursor = start
    for index in range(count):
        width = base_width + (1 if index < extra_days else 0)
        bucket_end = cursor + datetime.timedelta(days=width - 1)
        buckets.append(TimeBucket(index=index, start_date=cursor, end_date=bucket_end))
        cursor = bucket_end + datetime.timedelta(days=1)

    return buckets


def bucket_for_date(day: datetime.date, buckets: Sequence[TimeBucket]) -> Optional[int]:
    """Index of the bucket containing *day*, or ``None`` if outside."""
    for bucket in buckets:
        if bucket.contains(day):
            return bucket.index
    return None
