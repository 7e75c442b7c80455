"""
Training log projections.

Read-only views of the externally-owned session / exercise / set data.
They are built fresh by the store on every call and never persisted by
this package.

The ``completed`` column changed from a boolean flag to a numeric count
over time.  :class:`SetRecord` folds both representations into a single
``completed_count`` at validation time, so calculators only ever see a
number:

    completed = True   ->  completed_count = reps
    completed = False  ->  completed_count = 0
"""

from __future__ import annotations

import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from training_analytics.schemas.enums import ExerciseType

_NUMERIC_FIELDS = ("reps", "weight", "attempted", "made", "distance", "time_minutes", "avg_time_seconds",
                   "completed_count", "points",)

_TRUE_STRINGS = {"true", "t", "yes"}
_FALSE_STRINGS = {"false", "f", "no"}


def _to_float(value: Any) -> Optional[float]:
    """Best-effort numeric conversion.  Unparseable values become ``None``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def normalize_completed(value: Any, reps: Any) -> Optional[float]:
    """Fold the legacy boolean ``completed`` flag into a numeric count."""
    if value is None:
        return None
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            value = True
        elif lowered in _FALSE_STRINGS:
            value = False
    if isinstance(value, bool):
        if not value:
            return 0.0
        return _to_float(reps)
    return _to_float(value)


class TrainingSessionRecord(BaseModel):
    """One logged training session (a "workout")."""

    id: str
    performed_on: datetime.date


class ExerciseOccurrence(BaseModel):
    """One time an exercise was logged within one session (a "square")."""

    id: str
    session_id: str
    name: str = ""
    exercise_type: ExerciseType
    performed_on: datetime.date


class SetRecord(BaseModel):
    """One logged set.  Every numeric field is optional: absent means
    "not logged" and is never read as zero."""

    id: str
    occurrence_id: str
    index: int = Field(0, ge=0)

    reps: Optional[float] = None
    weight: Optional[float] = None
    attempted: Optional[float] = None
    made: Optional[float] = None
    distance: Optional[float] = None
    time_minutes: Optional[float] = None
    avg_time_seconds: Optional[float] = None
    completed_count: Optional[float] = None
    points: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_raw_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)

        legacy_completed = data.pop("completed", None)
        if data.get("completed_count") is None and legacy_completed is not None:
            data["completed_count"] = legacy_completed
        data["completed_count"] = normalize_completed(data.get("completed_count"), data.get("reps"))

        for name in _NUMERIC_FIELDS:
            if name in data and name != "completed_count":
                data[name] = _to_float(data[name])
        return data
