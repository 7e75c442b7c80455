"""
Progress aggregator — trend graph over a trailing window.

Pipeline
--------

1. Resolve the view (unknown ``(sport, view)`` -> ``None``).
2. Split the window into buckets.
3. Fetch the sport's sessions in the window, then their occurrences of
   the view's exercise type.
4. Optionally keep only occurrences whose name matches the query
   (loose matching by default, so typing "bench" finds every bench
   variation).
5. Fetch the sets of the surviving occurrences.
6. One value per bucket from the calculator's bucketed form; the axis
   bounds are the min / max of the non-missing values.

Any stage that comes back empty short-circuits to an all-missing result;
the number of points always equals the number of buckets.
"""

from __future__ import annotations

import datetime
from typing import Optional, Sequence

from training_analytics.analytics.buckets import BucketConfig, compute_buckets, window_bounds
from training_analytics.analytics.calculations import calculate_bucket_value
from training_analytics.analytics.fetch import fetch_occurrences, fetch_sets
from training_analytics.analytics.matching import MatchMode, filter_matching
from training_analytics.analytics.requests import RequestToken
from training_analytics.analytics.store import TrainingStore
from training_analytics.analytics.views import view_config
from training_analytics.core.logging import get_logger, log_short_circuit
from training_analytics.schemas.enums import CalculationType, SportMode
from training_analytics.schemas.progress import ProgressPoint, TimeBucket, TrendResult
from training_analytics.schemas.training_log import ExerciseOccurrence, SetRecord

logger = get_logger(__name__)

_PIPELINE = "trend"


# ======================================================================
# Point assembly
# ======================================================================


def _missing_points(buckets: Sequence[TimeBucket]) -> list[ProgressPoint]:
    return [ProgressPoint(bucket_index=b.index, value=None, start_date=b.start_date, end_date=b.end_date) for b in
            buckets]


def _bucket_points(calculation_type: CalculationType, buckets: Sequence[TimeBucket],
                   occurrences: Sequence[ExerciseOccurrence], sets: Sequence[SetRecord], ) -> list[ProgressPoint]:
    return [ProgressPoint(bucket_index=b.index, value=calculate_bucket_value(calculation_type, occurrences, sets, b),
                          start_date=b.start_date, end_date=b.end_date, ) for b in buckets]


def _axis_bounds(points: Sequence[ProgressPoint]) -> tuple[Optional[float], Optional[float]]:
    values = [p.value for p in points if p.value is not None]
    if not values:
        return None, None
    return min(values), max(values)


def _result(sport: SportMode, view_name: str, window_days: int, points: list[ProgressPoint]) -> TrendResult:
    min_value, max_value = _axis_bounds(points)
    return TrendResult(sport=sport, view_name=view_name, window_days=window_days, points=points, min_value=min_value,
                       max_value=max_value, )


# ======================================================================
# Main entry point
# ======================================================================


def compute_trend(store: TrainingStore, user_id: str, sport: SportMode | str, view_name: str, window_days: int,
                  exercise_query: Optional[str] = None, match_mode: MatchMode = MatchMode.LOOSE,
                  today: Optional[datetime.date] = None, token: Optional[RequestToken] = None,
                  timeout: Optional[float] = None, bucket_config: Optional[BucketConfig] = None, ) -> Optional[
    TrendResult]:
    """Compute the trend graph of one view.

    Args:
        store: Training log store.
        user_id: Owner of the logged data.
        sport: Sport (``"workout"`` is accepted for lifting).
        view_name: Name of a view registered for *sport*.
        window_days: Trailing window length (>= 1).
        exercise_query: Optional exercise name filter.
        match_mode: How *exercise_query* is matched.
        today: Reference day (defaults to the local current date).
        token: Request token, checked after every fetch stage.
        timeout: Forwarded to every store call.
        bucket_config: Optional bucketing override.

    Returns:
        :class:`TrendResult`, or ``None`` if the view is unknown.

    Raises:
        ValueError: ``window_days < 1``.
        StoreFetchError: propagated from the store.
        SupersededRequestError: a newer request started for the token's key.
    """
    view = view_config(sport, view_name)
    if view is None:
        logger.warning("Unknown view", pipeline=_PIPELINE, sport=str(sport), view=view_name)
        return None

    buckets = compute_buckets(window_days, today, bucket_config)
    date_from, date_to = window_bounds(window_days, today)
    logger.info("Computing trend", sport=view.sport.value, view=view.name, window_days=window_days,
                buckets=len(buckets), filtered=bool(exercise_query), )

    occurrences = fetch_occurrences(store, user_id, view.sport, pipeline=_PIPELINE,
                                    exercise_type=view.exercise_type_restriction, date_from=date_from,
                                    date_to=date_to, token=token, timeout=timeout, )
    if exercise_query:
        occurrences = filter_matching(occurrences, exercise_query, match_mode)
        if not occurrences:
            log_short_circuit(logger, _PIPELINE, "match", sport=view.sport.value)

    sets = fetch_sets(store, occurrences, pipeline=_PIPELINE, token=token, timeout=timeout)
    if not sets:
        points = _missing_points(buckets)
    else:
        points = _bucket_points(view.calculation_type, buckets, occurrences, sets)

    if token is not None:
        token.ensure_current()

    result = _result(view.sport, view.name, window_days, points)
    logger.info("Trend computed", sport=view.sport.value, view=view.name,
                points_with_data=sum(1 for p in points if p.value is not None), )
    return result
