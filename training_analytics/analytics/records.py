"""
Personal-record extractor — all-time bests of one exercise.

1. Ask the classifier which exercise type the name refers to.
2. Fetch every session of the sport (no time bound), their occurrences
   of that type, keep the ones whose name strictly matches, then fetch
   their sets.
3. For each metric that applies to ``(sport, type)`` find the highest
   valid per-set value and the day it was logged.  Equal values resolve
   to the most recent day.

Metric map
----------

==========  ==============  ==================================================
type        sport           metrics
==========  ==============  ==================================================
exercise    any             reps x weight, reps, weight
shooting    basketball      shooting %, attempted, made
shooting    other           distance, reps
drill       football        reps, completion %, reps / minute
drill       other           reps, time, reps / minute
sprints     any             distance, speed, reps
hitting     any             reps, avg distance
fielding    any             reps x distance, reps, distance
rally       any             points, time
==========  ==============  ==================================================

A metric that applies but has no valid value is left out of
``records``; it is never filled with 0.
"""

from __future__ import annotations

import datetime
from typing import Callable, Mapping, Optional, Sequence

from training_analytics.analytics.calculations import (clean_value, positive_value, set_completion_percentage,
                                                       set_load, set_shooting_percentage, set_speed, )
from training_analytics.analytics.fetch import fetch_occurrences, fetch_sets
from training_analytics.analytics.matching import MatchMode, filter_matching
from training_analytics.analytics.requests import RequestToken
from training_analytics.analytics.store import ExerciseTypeClassifier, TrainingStore
from training_analytics.core.logging import get_logger, log_short_circuit
from training_analytics.schemas.enums import ExerciseType, RecordMetric, SportMode
from training_analytics.schemas.personal_record import MetricRecord, PersonalRecord
from training_analytics.schemas.training_log import SetRecord

logger = get_logger(__name__)

_PIPELINE = "personal_records"

MetricExtractor = Callable[[SetRecord], Optional[float]]

# ======================================================================
# Per-set metric extractors
# ======================================================================


def _reps_x_weight(s: SetRecord) -> Optional[float]:
    # A zero-rep set is not a record, even with weight on the bar
    if positive_value(s.reps) is None:
        return None
    return set_load(s)


def _reps_per_minute(s: SetRecord) -> Optional[float]:
    reps = positive_value(s.reps)
    minutes = positive_value(s.time_minutes)
    if reps is None or minutes is None:
        return None
    return reps / minutes


def _reps_x_distance(s: SetRecord) -> Optional[float]:
    reps = positive_value(s.reps)
    distance = clean_value(s.distance)
    if reps is None or distance is None:
        return None
    return reps * distance


METRIC_EXTRACTORS: dict[RecordMetric, MetricExtractor] = {
    RecordMetric.REPS_X_WEIGHT: _reps_x_weight,
    RecordMetric.REPS: lambda s: positive_value(s.reps),
    RecordMetric.WEIGHT: lambda s: clean_value(s.weight),
    RecordMetric.SHOOTING_PERCENTAGE: set_shooting_percentage,
    RecordMetric.ATTEMPTED: lambda s: positive_value(s.attempted),
    RecordMetric.MADE: lambda s: clean_value(s.made),
    RecordMetric.DISTANCE: lambda s: clean_value(s.distance),
    RecordMetric.TIME: lambda s: positive_value(s.time_minutes),
    RecordMetric.COMPLETION_PERCENTAGE: set_completion_percentage,
    RecordMetric.REPS_PER_MINUTE: _reps_per_minute,
    RecordMetric.SPEED: set_speed,
    RecordMetric.AVG_DISTANCE: lambda s: clean_value(s.distance),
    RecordMetric.REPS_X_DISTANCE: _reps_x_distance,
    RecordMetric.POINTS: lambda s: clean_value(s.points),
}

# ======================================================================
# Metric map
# ======================================================================

M = RecordMetric

_TYPE_METRICS: dict[ExerciseType, list[RecordMetric]] = {
    ExerciseType.EXERCISE: [M.REPS_X_WEIGHT, M.REPS, M.WEIGHT],
    ExerciseType.SHOOTING: [M.DISTANCE, M.REPS],
    ExerciseType.DRILL: [M.REPS, M.TIME, M.REPS_PER_MINUTE],
    ExerciseType.SPRINTS: [M.DISTANCE, M.SPEED, M.REPS],
    ExerciseType.HITTING: [M.REPS, M.AVG_DISTANCE],
    ExerciseType.FIELDING: [M.REPS_X_DISTANCE, M.REPS, M.DISTANCE],
    ExerciseType.RALLY: [M.POINTS, M.TIME],
}

_SPORT_TYPE_METRICS: dict[tuple[SportMode, ExerciseType], list[RecordMetric]] = {
    (SportMode.BASKETBALL, ExerciseType.SHOOTING): [M.SHOOTING_PERCENTAGE, M.ATTEMPTED, M.MADE],
    (SportMode.FOOTBALL, ExerciseType.DRILL): [M.REPS, M.COMPLETION_PERCENTAGE, M.REPS_PER_MINUTE],
}


def metrics_for(sport: SportMode, exercise_type: ExerciseType) -> list[RecordMetric]:
    """Metrics tracked for *exercise_type* under *sport*, in display order."""
    override = _SPORT_TYPE_METRICS.get((sport, exercise_type))
    if override is not None:
        return list(override)
    return list(_TYPE_METRICS.get(exercise_type, []))


# ======================================================================
# Best-value search
# ======================================================================


def find_best(sets: Sequence[SetRecord], extractor: MetricExtractor,
              dates: Mapping[str, datetime.date], ) -> Optional[MetricRecord]:
    """Highest valid value of *extractor* over *sets* and the day it happened.

    *dates* maps ``occurrence_id`` to the day the occurrence was logged;
    sets without a known day are skipped.  Equal values keep the most
    recent day.
    """
    best_value: Optional[float] = None
    best_day: Optional[datetime.date] = None

    for s in sets:
        value = clean_value(extractor(s))
        if value is None:
            continue
        day = dates.get(s.occurrence_id)
        if day is None:
            continue

        if best_value is None or value > best_value:
            best_value, best_day = value, day
        elif value == best_value and day > best_day:
            best_day = day

    if best_value is None:
        return None
    return MetricRecord(value=best_value, achieved_on=best_day)


def extract_records(sport: SportMode, exercise_type: ExerciseType, sets: Sequence[SetRecord],
                    dates: Mapping[str, datetime.date], ) -> dict[RecordMetric, MetricRecord]:
    """Best value per applicable metric.  Metrics without data are omitted."""
    records: dict[RecordMetric, MetricRecord] = {}
    for metric in metrics_for(sport, exercise_type):
        best = find_best(sets, METRIC_EXTRACTORS[metric], dates)
        if best is not None:
            records[metric] = best
    return records


# ======================================================================
# Main entry point
# ======================================================================


def compute_personal_records(store: TrainingStore, classifier: ExerciseTypeClassifier, user_id: str,
                             exercise_name: str, sport: SportMode | str, token: Optional[RequestToken] = None,
                             timeout: Optional[float] = None, ) -> Optional[PersonalRecord]:
    """All-time bests of *exercise_name* in *sport*.

    Returns ``None`` for a blank name, an unknown sport, an exercise the
    classifier cannot place, or when no matching sets were ever logged.

    Raises:
        StoreFetchError: propagated from the store.
        SupersededRequestError: a newer request started for the token's key.
    """
    query = (exercise_name or "").strip()
    if not query:
        return None

    try:
        mode = SportMode.from_key(sport)
    except ValueError:
        logger.warning("Unknown sport", pipeline=_PIPELINE, sport=str(sport))
        return None

    exercise_type = classifier.primary_exercise_type(mode, query)
    if exercise_type is None:
        log_short_circuit(logger, _PIPELINE, "classify", sport=mode.value)
        return None
    logger.info("Computing personal records", sport=mode.value, exercise_type=exercise_type.value)

    occurrences = fetch_occurrences(store, user_id, mode, pipeline=_PIPELINE, exercise_type=exercise_type,
                                    token=token, timeout=timeout, )
    matched = filter_matching(occurrences, query, MatchMode.STRICT)
    if not matched:
        if occurrences:
            log_short_circuit(logger, _PIPELINE, "match", sport=mode.value)
        return None

    sets = fetch_sets(store, matched, pipeline=_PIPELINE, token=token, timeout=timeout)
    if not sets:
        return None

    dates = {o.id: o.performed_on for o in matched}
    records = extract_records(mode, exercise_type, sets, dates)

    if token is not None:
        token.ensure_current()

    date_achieved = max((r.achieved_on for r in records.values()), default=None)
    logger.info("Personal records computed", sport=mode.value, metrics=len(records))
    return PersonalRecord(exercise_name=query, sport=mode, exercise_type=exercise_type,
                          applicable_metrics=metrics_for(mode, exercise_type), records=records,
                          date_achieved=date_achieved, )
