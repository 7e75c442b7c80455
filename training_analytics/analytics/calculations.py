"""
Metric calculator — one scalar per set of matched occurrences.

Every :class:`~training_analytics.schemas.enums.CalculationType` maps to a
pure function ``(occurrences, sets) -> float | None``.  Two entry points
wrap the dispatch:

- :func:`calculate_bucket_value` — restricted to the occurrences performed
  inside one :class:`~training_analytics.schemas.progress.TimeBucket`
  (trend graphs),
- :func:`calculate_interval_value` — every occurrence handed in, no
  bucketing (skill map, comparisons).

Both forms apply the same formula.

Numeric policy
--------------

* A field that is absent means "not logged" and is never read as zero.
  The single exception is ``weight``: absent or ``0`` both mean a
  bodyweight set, which counts its reps alone.  Tonnage narrows this:
  in an occurrence where some set carries a weight, sets without one
  are skipped.
* Non-finite (NaN / inf) and negative values are dropped from their
  aggregate, as are intermediates that become non-finite.
* An aggregate with no contributing value is ``None``, not ``0``.
* Sets whose ``occurrence_id`` is not among the given occurrences are
  ignored, so a caller cannot leak sets of unmatched exercises.

Nothing here raises or logs.

Formulas
--------

=====================  ====================================================
performance            max over sets of reps × weight (reps if bodyweight)
tonnage                mean over occurrences of
                       (Σ set load) × (number of sets logged);
                       unweighted sets are skipped when any set
                       in the occurrence has a weight
shooting_percentage    mean over sets of min(made / attempted × 100, 100)
jumpshot               Σ attempted
jumpshot_per_square    mean over occurrences of Σ attempted
drill, sprints, hits,  Σ reps
shots, fielding_reps
completion             mean over sets of min(completed / reps × 100, 100)
speed                  max over sets of distance / avg_time_seconds
distance,              mean of distance
shot_distance,
fielding_distance
fielding               mean over occurrences of
                       (Σ reps × distance) / (number of sets logged)
rally                  mean of points, zero-point sets excluded
=====================  ====================================================
"""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Callable, Iterable, Optional, Sequence

from training_analytics.schemas.enums import CalculationType
from training_analytics.schemas.progress import TimeBucket
from training_analytics.schemas.training_log import ExerciseOccurrence, SetRecord

Calculator = Callable[[Sequence[ExerciseOccurrence], Sequence[SetRecord]], Optional[float]]

# Percentages are capped here when made > attempted or completed > reps.
MAX_PERCENTAGE = 100.0

# ======================================================================
# Numeric helpers
# ======================================================================


def clean_value(value: Optional[float]) -> Optional[float]:
    """Return *value* as a float if it is usable (finite, >= 0), else ``None``."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def positive_value(value: Optional[float]) -> Optional[float]:
    number = clean_value(value)
    return number if number is not None and number > 0 else None


def _collect(values: Iterable[Optional[float]]) -> list[float]:
    """Drop ``None`` and unusable values."""
    cleaned = []
    for value in values:
        number = clean_value(value)
        if number is not None:
            cleaned.append(number)
    return cleaned


def _mean(values: Iterable[Optional[float]]) -> Optional[float]:
    usable = _collect(values)
    if not usable:
        return None
    return clean_value(sum(usable) / len(usable))


def _maximum(values: Iterable[Optional[float]]) -> Optional[float]:
    usable = _collect(values)
    return max(usable) if usable else None


def _total(values: Iterable[Optional[float]]) -> Optional[float]:
    usable = _collect(values)
    if not usable:
        return None
    return clean_value(sum(usable))


# ======================================================================
# Set scoping
# ======================================================================


def _scoped_sets(occurrences: Sequence[ExerciseOccurrence], sets: Sequence[SetRecord]) -> list[SetRecord]:
    """Sets that belong to one of *occurrences*."""
    ids = {o.id for o in occurrences}
    return [s for s in sets if s.occurrence_id in ids]


def _sets_by_occurrence(occurrences: Sequence[ExerciseOccurrence],
                        sets: Sequence[SetRecord], ) -> list[list[SetRecord]]:
    """Sets grouped per occurrence, in occurrence order.

    An occurrence listed twice is only counted once.
    """
    grouped: dict[str, list[SetRecord]] = defaultdict(list)
    for s in sets:
        grouped[s.occurrence_id].append(s)

    seen: set[str] = set()
    result = []
    for occurrence in occurrences:
        if occurrence.id in seen:
            continue
        seen.add(occurrence.id)
        result.append(grouped.get(occurrence.id, []))
    return result


# ======================================================================
# Per-set quantities
# ======================================================================


def set_load(s: SetRecord) -> Optional[float]:
    """reps × weight, or reps alone for a bodyweight set (weight absent or 0)."""
    reps = clean_value(s.reps)
    if reps is None:
        return None
    if s.weight is None:
        return reps
    weight = clean_value(s.weight)
    if weight is None:
        return None
    if weight == 0:
        return reps
    return clean_value(reps * weight)


def set_shooting_percentage(s: SetRecord) -> Optional[float]:
    attempted = positive_value(s.attempted)
    made = clean_value(s.made)
    if attempted is None or made is None:
        return None
    return min(made / attempted * 100.0, MAX_PERCENTAGE)


def set_completion_percentage(s: SetRecord) -> Optional[float]:
    reps = positive_value(s.reps)
    completed = clean_value(s.completed_count)
    if reps is None or completed is None:
        return None
    return min(completed / reps * 100.0, MAX_PERCENTAGE)


def set_speed(s: SetRecord) -> Optional[float]:
    distance = clean_value(s.distance)
    avg_time = positive_value(s.avg_time_seconds)
    if distance is None or avg_time is None:
        return None
    return clean_value(distance / avg_time)


def set_reps_x_distance(s: SetRecord) -> Optional[float]:
    reps = clean_value(s.reps)
    distance = clean_value(s.distance)
    if reps is None or distance is None:
        return None
    return clean_value(reps * distance)


# ======================================================================
# Formulas
# ======================================================================


def _performance(occurrences: Sequence[ExerciseOccurrence], sets: Sequence[SetRecord]) -> Optional[float]:
    return _maximum(set_load(s) for s in _scoped_sets(occurrences, sets))


def _square_loads(square_sets: Sequence[SetRecord]) -> list[float]:
    """Per-set loads of one occurrence.

    Once any set carries a weight, sets without one are left out rather
    than read as bodyweight.
    """
    weighted = any(positive_value(s.weight) is not None for s in square_sets)
    return _collect(set_load(s) for s in square_sets if not weighted or s.weight is not None)


def _tonnage(occurrences: Sequence[ExerciseOccurrence], sets: Sequence[SetRecord]) -> Optional[float]:
    per_square: list[Optional[float]] = []
    for square_sets in _sets_by_occurrence(occurrences, sets):
        loads = _square_loads(square_sets)
        if not loads:
            continue
        per_square.append(sum(loads) * len(square_sets))
    return _mean(per_square)


def _shooting_percentage(occurrences: Sequence[ExerciseOccurrence], sets: Sequence[SetRecord]) -> Optional[float]:
    return _mean(set_shooting_percentage(s) for s in _scoped_sets(occurrences, sets))


def _jumpshot_total(occurrences: Sequence[ExerciseOccurrence], sets: Sequence[SetRecord]) -> Optional[float]:
    return _total(s.attempted for s in _scoped_sets(occurrences, sets))


def _jumpshot_per_square(occurrences: Sequence[ExerciseOccurrence], sets: Sequence[SetRecord]) -> Optional[float]:
    return _mean(_total(s.attempted for s in square_sets) for square_sets in _sets_by_occurrence(occurrences, sets))


def _rep_total(occurrences: Sequence[ExerciseOccurrence], sets: Sequence[SetRecord]) -> Optional[float]:
    return _total(s.reps for s in _scoped_sets(occurrences, sets))


def _completion(occurrences: Sequence[ExerciseOccurrence], sets: Sequence[SetRecord]) -> Optional[float]:
    return _mean(set_completion_percentage(s) for s in _scoped_sets(occurrences, sets))


def _speed(occurrences: Sequence[ExerciseOccurrence], sets: Sequence[SetRecord]) -> Optional[float]:
    return _maximum(set_speed(s) for s in _scoped_sets(occurrences, sets))


def _mean_distance(occurrences: Sequence[ExerciseOccurrence], sets: Sequence[SetRecord]) -> Optional[float]:
    return _mean(s.distance for s in _scoped_sets(occurrences, sets))


def _fielding(occurrences: Sequence[ExerciseOccurrence], sets: Sequence[SetRecord]) -> Optional[float]:
    per_square: list[Optional[float]] = []
    for square_sets in _sets_by_occurrence(occurrences, sets):
        products = _collect(set_reps_x_distance(s) for s in square_sets)
        if not products:
            continue
        per_square.append(sum(products) / len(square_sets))
    return _mean(per_square)


def _rally(occurrences: Sequence[ExerciseOccurrence], sets: Sequence[SetRecord]) -> Optional[float]:
    return _mean(positive_value(s.points) for s in _scoped_sets(occurrences, sets))


_CALCULATORS: dict[CalculationType, Calculator] = {
    CalculationType.PERFORMANCE: _performance,
    CalculationType.TONNAGE: _tonnage,
    CalculationType.SHOOTING_PERCENTAGE: _shooting_percentage,
    CalculationType.JUMPSHOT: _jumpshot_total,
    CalculationType.JUMPSHOT_PER_SQUARE: _jumpshot_per_square,
    CalculationType.DRILL: _rep_total,
    CalculationType.SPRINTS: _rep_total,
    CalculationType.HITS: _rep_total,
    CalculationType.SHOTS: _rep_total,
    CalculationType.FIELDING_REPS: _rep_total,
    CalculationType.COMPLETION: _completion,
    CalculationType.SPEED: _speed,
    CalculationType.DISTANCE: _mean_distance,
    CalculationType.SHOT_DISTANCE: _mean_distance,
    CalculationType.FIELDING_DISTANCE: _mean_distance,
    CalculationType.FIELDING: _fielding,
    CalculationType.RALLY: _rally,
}


# ======================================================================
# Main entry points
# ======================================================================


def _resolve(calculation_type: CalculationType | str) -> Optional[Calculator]:
    try:
        return _CALCULATORS.get(CalculationType(calculation_type))
    except ValueError:
        return None


def calculate_interval_value(calculation_type: CalculationType | str, occurrences: Sequence[ExerciseOccurrence],
                             sets: Sequence[SetRecord], ) -> Optional[float]:
    """Whole-interval value over every occurrence handed in.

    Returns ``None`` when the formula has no contributing value or the
    calculation type is unknown.
    """
    calculator = _resolve(calculation_type)
    if calculator is None or not occurrences:
        return None
    return calculator(occurrences, sets)


def calculate_bucket_value(calculation_type: CalculationType | str, occurrences: Sequence[ExerciseOccurrence],
                           sets: Sequence[SetRecord], bucket: TimeBucket, ) -> Optional[float]:
    """Value over the occurrences performed inside *bucket*."""
    in_bucket = [o for o in occurrences if bucket.contains(o.performed_on)]
    return calculate_interval_value(calculation_type, in_bucket, sets)
