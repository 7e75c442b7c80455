"""Pydantic schemas for analytics inputs and results."""

from training_analytics.schemas.enums import (
    CalculationType,
    ExerciseType,
    RecordMetric,
    SportMode,
)
from training_analytics.schemas.view import View
from training_analytics.schemas.training_log import (
    ExerciseOccurrence,
    SetRecord,
    TrainingSessionRecord,
)
from training_analytics.schemas.progress import ProgressPoint, TimeBucket, TrendResult
from training_analytics.schemas.skill_map import SkillMapEntry, SkillMapRequest, SkillMapResult
from training_analytics.schemas.personal_record import MetricRecord, PersonalRecord
from training_analytics.schemas.catalog import LoggedExerciseSummary

__all__ = [
    "CalculationType",
    "ExerciseType",
    "RecordMetric",
    "SportMode",
    "View",
    "ExerciseOccurrence",
    "SetRecord",
    "TrainingSessionRecord",
    "ProgressPoint",
    "TimeBucket",
    "TrendResult",
    "SkillMapEntry",
    "SkillMapRequest",
    "SkillMapResult",
    "MetricRecord",
    "PersonalRecord",
    "LoggedExerciseSummary",
]
