"""
Training log database models.

The three tables are owned by the logging application; this package only
reads them.  Column names follow the existing schema:

- ``workouts``           one row per session, ``mode`` is the sport key
                         (lifting is stored as ``workout``),
- ``workout_exercises``  one row per logged exercise ("square"),
- ``workout_sets``       one row per set; every metric column is
                         nullable.  ``completed`` is JSON: a count, or a
                         true/false flag in rows written by older app
                         versions.
"""

import datetime
from typing import Any, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class Workout(SQLModel, table=True):
    """A single logged training session."""

    __tablename__ = "workouts"

    id: str = Field(primary_key=True, max_length=64)
    user_id: str = Field(nullable=False, max_length=64, index=True)
    mode: str = Field(nullable=False, max_length=50, index=True)
    performed_at: datetime.date = Field(nullable=False, index=True)


class WorkoutExercise(SQLModel, table=True):
    """One exercise logged within a workout."""

    __tablename__ = "workout_exercises"

    id: str = Field(primary_key=True, max_length=64)
    workout_id: str = Field(foreign_key="workouts.id", nullable=False, index=True)
    name: Optional[str] = Field(default=None, max_length=255)
    exercise_type: str = Field(default="exercise", nullable=False, max_length=50, index=True)


class WorkoutSet(SQLModel, table=True):
    """One set of a logged exercise."""

    __tablename__ = "workout_sets"

    id: str = Field(primary_key=True, max_length=64)
    workout_exercise_id: str = Field(foreign_key="workout_exercises.id", nullable=False, index=True)
    set_index: int = Field(default=0, nullable=False)

    reps: Optional[float] = None
    weight: Optional[float] = None
    attempted: Optional[float] = None
    made: Optional[float] = None
    distance: Optional[float] = None
    time_min: Optional[float] = None
    avg_time_sec: Optional[float] = None
    completed: Optional[Any] = Field(default=None, sa_column=Column(JSON, nullable=True), )
    points: Optional[float] = None
