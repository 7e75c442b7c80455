"""
Boundary contracts for the externally-owned training log.

The analytics pipelines only ever read through these two interfaces.
Implementations are free to raise :class:`StoreFetchError`; orchestrators
log it and let it through unchanged.

Every store method accepts an optional ``timeout`` (seconds).  It is a
hint forwarded from the caller; stores that cannot enforce it may ignore
it.
"""

from __future__ import annotations

import datetime
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from training_analytics.schemas.enums import ExerciseType, SportMode
from training_analytics.schemas.training_log import ExerciseOccurrence, SetRecord, TrainingSessionRecord


class TrainingStore(ABC):
    """Read-only access to sessions, exercise occurrences and sets."""

    @abstractmethod
    def list_sessions(self, user_id: str, sport: SportMode, date_from: Optional[datetime.date] = None,
                      date_to: Optional[datetime.date] = None, timeout: Optional[float] = None, ) -> list[
        TrainingSessionRecord]:
        """Sessions of *sport* for *user_id*, both date bounds inclusive.

        A ``None`` bound is unbounded on that side.
        """

    @abstractmethod
    def list_occurrences(self, session_ids: Sequence[str], exercise_type: Optional[ExerciseType] = None,
                         timeout: Optional[float] = None, ) -> list[ExerciseOccurrence]:
        """Occurrences logged in *session_ids*, optionally of one type only."""

    @abstractmethod
    def list_sets(self, occurrence_ids: Sequence[str], timeout: Optional[float] = None, ) -> list[SetRecord]:
        """Sets of *occurrence_ids*, ordered by set index."""


class ExerciseTypeClassifier(ABC):
    """Decides which exercise type a free-text exercise name refers to."""

    @abstractmethod
    def primary_exercise_type(self, sport: SportMode, query: str) -> Optional[ExerciseType]:
        """Return the type, or ``None`` when the name cannot be classified."""
