"""
Sequential fetch pipeline shared by the orchestrators.

sessions -> occurrences (scoped to those sessions) -> sets (scoped to
those occurrences).  Each helper returns an empty list as soon as a
stage comes back empty so the next query is never issued.  A request
token, when given, is checked after every stage.
"""

from __future__ import annotations

import datetime
from typing import Optional, Sequence

from training_analytics.analytics.requests import RequestToken
from training_analytics.analytics.store import TrainingStore
from training_analytics.core.exceptions import StoreFetchError
from training_analytics.core.logging import get_logger, log_pipeline_stage, log_short_circuit
from training_analytics.schemas.enums import ExerciseType, SportMode
from training_analytics.schemas.training_log import ExerciseOccurrence, SetRecord

logger = get_logger(__name__)


def _checkpoint(token: Optional[RequestToken]) -> None:
    if token is not None:
        token.ensure_current()


def fetch_occurrences(store: TrainingStore, user_id: str, sport: SportMode, *, pipeline: str,
                      exercise_type: Optional[ExerciseType] = None, date_from: Optional[datetime.date] = None,
                      date_to: Optional[datetime.date] = None, token: Optional[RequestToken] = None,
                      timeout: Optional[float] = None, ) -> list[ExerciseOccurrence]:
    """Occurrences of *sport* sessions between the given dates (inclusive)."""
    try:
        sessions = store.list_sessions(user_id, sport, date_from, date_to, timeout=timeout)
    except StoreFetchError as e:
        logger.error("Store fetch failed", pipeline=pipeline, stage="sessions", error=str(e))
        raise
    _checkpoint(token)
    log_pipeline_stage(logger, pipeline, "sessions", len(sessions))
    if not sessions:
        log_short_circuit(logger, pipeline, "sessions", sport=sport.value)
        return []

    session_ids = [s.id for s in sessions]
    try:
        occurrences = store.list_occurrences(session_ids, exercise_type, timeout=timeout)
    except StoreFetchError as e:
        logger.error("Store fetch failed", pipeline=pipeline, stage="occurrences", error=str(e))
        raise
    _checkpoint(token)
    log_pipeline_stage(logger, pipeline, "occurrences", len(occurrences))
    if not occurrences:
        log_short_circuit(logger, pipeline, "occurrences", sport=sport.value)
    return occurrences


def fetch_sets(store: TrainingStore, occurrences: Sequence[ExerciseOccurrence], *, pipeline: str,
               token: Optional[RequestToken] = None, timeout: Optional[float] = None, ) -> list[SetRecord]:
    """Sets of *occurrences*.  No query is issued for an empty list."""
    if not occurrences:
        return []

    # An occurrence can be matched by more than one selection
    occurrence_ids = list(dict.fromkeys(o.id for o in occurrences))
    try:
        sets = store.list_sets(occurrence_ids, timeout=timeout)
    except StoreFetchError as e:
        logger.error("Store fetch failed", pipeline=pipeline, stage="sets", error=str(e))
        raise
    _checkpoint(token)
    log_pipeline_stage(logger, pipeline, "sets", len(sets))
    if not sets:
        log_short_circuit(logger, pipeline, "sets")
    return sets
