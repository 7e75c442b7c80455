"""
Training log repository.

SQL implementation of :class:`~training_analytics.analytics.store.TrainingStore`
over the ``workouts`` / ``workout_exercises`` / ``workout_sets`` tables.

- Occurrences carry the date of their workout (joined, not stored).
- Lifting sessions are looked up under both ``lifting`` and the legacy
  ``workout`` mode key.
- Rows with an exercise type this package does not know are skipped.
- ``timeout`` is applied as a PostgreSQL ``statement_timeout`` for the
  current transaction and ignored on other dialects.
- Any SQLAlchemy error is raised as :class:`StoreFetchError`.
"""

import datetime
from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from training_analytics.analytics.store import TrainingStore
from training_analytics.core.exceptions import StoreFetchError
from training_analytics.models.training_log import Workout, WorkoutExercise, WorkoutSet
from training_analytics.schemas.enums import ExerciseType, SportMode
from training_analytics.schemas.training_log import ExerciseOccurrence, SetRecord, TrainingSessionRecord

_KNOWN_TYPES = {t.value for t in ExerciseType}


class SqlTrainingStore(TrainingStore):
    """Read-only training log access through a SQLModel session."""

    def __init__(self, session: Session):
        self.session = session

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _apply_timeout(self, timeout: Optional[float]) -> None:
        if not timeout or timeout <= 0:
            return
        if self.session.get_bind().dialect.name != "postgresql":
            return
        milliseconds = max(int(timeout * 1000), 1)
        self.session.connection().exec_driver_sql(f"SET LOCAL statement_timeout = {milliseconds}")

    # ------------------------------------------------------------------
    # Store contract
    # ------------------------------------------------------------------

    def list_sessions(self, user_id: str, sport: SportMode, date_from: Optional[datetime.date] = None,
                      date_to: Optional[datetime.date] = None, timeout: Optional[float] = None, ) -> list[
        TrainingSessionRecord]:
        mode_keys = sorted({sport.value, sport.storage_key})
        statement = select(Workout).where(Workout.user_id == user_id, Workout.mode.in_(mode_keys))
        if date_from is not None:
            statement = statement.where(Workout.performed_at >= date_from)
        if date_to is not None:
            statement = statement.where(Workout.performed_at <= date_to)
        statement = statement.order_by(Workout.performed_at, Workout.id)

        try:
            self._apply_timeout(timeout)
            rows = list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise StoreFetchError("list_sessions", str(e)) from e

        return [TrainingSessionRecord(id=w.id, performed_on=w.performed_at) for w in rows]

    def list_occurrences(self, session_ids: Sequence[str], exercise_type: Optional[ExerciseType] = None,
                         timeout: Optional[float] = None, ) -> list[ExerciseOccurrence]:
        if not session_ids:
            return []

        statement = (select(WorkoutExercise, Workout.performed_at).join(Workout,
                                                                        WorkoutExercise.workout_id == Workout.id).where(
            WorkoutExercise.workout_id.in_(list(session_ids))))
        if exercise_type is not None:
            statement = statement.where(WorkoutExercise.exercise_type == exercise_type.value)
        statement = statement.order_by(Workout.performed_at, WorkoutExercise.id)

        try:
            self._apply_timeout(timeout)
            rows = list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise StoreFetchError("list_occurrences", str(e)) from e

        return [
            ExerciseOccurrence(id=ex.id, session_id=ex.workout_id, name=ex.name or "",
                               exercise_type=ExerciseType(ex.exercise_type), performed_on=performed_at, )
            for ex, performed_at in rows if ex.exercise_type in _KNOWN_TYPES
        ]

    def list_sets(self, occurrence_ids: Sequence[str], timeout: Optional[float] = None, ) -> list[SetRecord]:
        if not occurrence_ids:
            return []

        statement = (select(WorkoutSet).where(WorkoutSet.workout_exercise_id.in_(list(occurrence_ids))).order_by(
            WorkoutSet.workout_exercise_id, WorkoutSet.set_index))

        try:
            self._apply_timeout(timeout)
            rows = list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise StoreFetchError("list_sets", str(e)) from e

        return [self._to_set_record(row) for row in rows]

    @staticmethod
    def _to_set_record(row: WorkoutSet) -> SetRecord:
        return SetRecord.model_validate({
            "id": row.id,
            "occurrence_id": row.workout_exercise_id,
            "index": max(row.set_index, 0),
            "reps": row.reps,
            "weight": row.weight,
            "attempted": row.attempted,
            "made": row.made,
            "distance": row.distance,
            "time_minutes": row.time_min,
            "avg_time_seconds": row.avg_time_sec,
            "completed": row.completed,
            "points": row.points,
        })
