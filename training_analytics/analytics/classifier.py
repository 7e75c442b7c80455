"""
Default exercise-type classifier backed by the user's own log.

The type of a free-text exercise name is the most common type among the
user's logged occurrences (all time, same sport) whose name contains the
query or is contained in it.  Unknown names fall back to ``exercise``.
"""

from __future__ import annotations

from collections import Counter
from typing import Optional

from training_analytics.analytics.fetch import fetch_occurrences
from training_analytics.analytics.matching import MatchMode, filter_matching
from training_analytics.analytics.requests import RequestToken
from training_analytics.analytics.store import ExerciseTypeClassifier, TrainingStore
from training_analytics.core.logging import get_logger
from training_analytics.schemas.enums import ExerciseType, SportMode

logger = get_logger(__name__)

DEFAULT_EXERCISE_TYPE = ExerciseType.EXERCISE


class StoreBackedClassifier(ExerciseTypeClassifier):
    """Classifies names by majority vote over the user's logged occurrences."""

    def __init__(self, store: TrainingStore, user_id: str, timeout: Optional[float] = None,
                 token: Optional[RequestToken] = None):
        self.store = store
        self.user_id = user_id
        self.timeout = timeout
        self.token = token

    def primary_exercise_type(self, sport: SportMode, query: str) -> Optional[ExerciseType]:
        occurrences = fetch_occurrences(self.store, self.user_id, sport, pipeline="classify", token=self.token,
                                        timeout=self.timeout, )
        matched = filter_matching(occurrences, query.strip(), MatchMode.SUBSTRING)
        if not matched:
            return DEFAULT_EXERCISE_TYPE

        # Counter keeps first-seen order, so ties go to the type seen first
        counts = Counter(o.exercise_type for o in matched)
        exercise_type, _ = counts.most_common(1)[0]
        logger.debug("Exercise classified", sport=sport.value, exercise_type=exercise_type.value,
                     candidates=len(matched))
        return exercise_type
