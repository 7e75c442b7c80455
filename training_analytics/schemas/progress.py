"""
Trend (progress graph) schemas.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from training_analytics.schemas.enums import SportMode


class TimeBucket(BaseModel):
    """A contiguous calendar sub-range of a trend window.

    ``index`` 0 is the **oldest** bucket; the last bucket ends today.
    Both dates are inclusive.
    """

    index: int = Field(..., ge=0)
    start_date: datetime.date
    end_date: datetime.date

    def contains(self, day: datetime.date) -> bool:
        return self.start_date <= day <= self.end_date

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1


class ProgressPoint(BaseModel):
    """One trend data point.  ``value`` is ``None`` when nothing could be
    computed for the bucket."""

    bucket_index: int = Field(..., ge=0)
    value: Optional[float] = None
    start_date: datetime.date
    end_date: datetime.date

    @property
    def is_missing(self) -> bool:
        return self.value is None


class TrendResult(BaseModel):
    """Per-bucket values plus the axis bounds over the non-missing ones."""

    sport: SportMode
    view_name: str
    window_days: int
    points: list[ProgressPoint]
    min_value: Optional[float] = None
    max_value: Optional[float] = None

    @property
    def has_data(self) -> bool:
        return any(p.value is not None for p in self.points)
