"""
Personal record schemas.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from training_analytics.schemas.enums import ExerciseType, RecordMetric, SportMode


class MetricRecord(BaseModel):
    """Best-ever value of one metric and the day it was achieved."""

    value: float = Field(..., ge=0.0)
    achieved_on: datetime.date


class PersonalRecord(BaseModel):
    """All-time bests for one exercise.

    ``records`` only holds metrics that apply to ``exercise_type`` *and*
    have at least one valid logged value; everything else is left unset.
    """

    exercise_name: str
    sport: SportMode
    exercise_type: ExerciseType
    applicable_metrics: list[RecordMetric]
    records: dict[RecordMetric, MetricRecord] = Field(default_factory=dict)
    date_achieved: Optional[datetime.date] = Field(
        None, description="Most recent achievement date across all metrics"
    )

    def best(self, metric: RecordMetric) -> Optional[float]:
        record = self.records.get(metric)
        return record.value if record else None
