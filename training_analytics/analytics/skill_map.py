"""
Skill-map normalizer — relative comparison of up to six exercises.

Each selection is resolved on its own with the strict matcher against
the occurrences of the view's exercise type in the window.  The first
matching logged name becomes the entry's display name; the whole-interval
calculator value over every matched occurrence is its raw value.

Normalisation::

    highest     = max(raw values > 0), or 0 if none
    percentage  = round(raw / highest * 100, 2)   if raw > 0 and highest > 0
                = 0                               otherwise

The first entry holding ``highest`` is the single ``is_highest`` entry
and is pinned to exactly 100; every other entry is capped at 99.99.
Selections are never dropped or reordered: a selection without matches
is kept under its own name with a raw value of 0.
"""

from __future__ import annotations

import datetime
from typing import Optional, Sequence

from training_analytics.analytics.buckets import window_bounds
from training_analytics.analytics.calculations import calculate_interval_value
from training_analytics.analytics.fetch import fetch_occurrences, fetch_sets
from training_analytics.analytics.matching import MatchMode, filter_matching, matches
from training_analytics.analytics.requests import RequestToken
from training_analytics.analytics.store import TrainingStore
from training_analytics.analytics.views import view_config
from training_analytics.core.logging import get_logger
from training_analytics.schemas.enums import CalculationType, SportMode
from training_analytics.schemas.skill_map import SkillMapEntry, SkillMapRequest, SkillMapResult
from training_analytics.schemas.training_log import ExerciseOccurrence, SetRecord

logger = get_logger(__name__)

_PIPELINE = "skill_map"

_PERCENTAGE_DECIMALS = 2

# Only the highest entry reads 100
_MAX_OTHER_PERCENTAGE = 99.99


# ======================================================================
# Helpers
# ======================================================================


def _raw_value(calculation_type: CalculationType, selection: str, occurrences: Sequence[ExerciseOccurrence],
               sets: Sequence[SetRecord], ) -> tuple[str, float]:
    """Display name and raw value of one selection."""
    matched = filter_matching(occurrences, selection, MatchMode.STRICT)
    if not matched:
        return selection, 0.0
    value = calculate_interval_value(calculation_type, matched, sets)
    return matched[0].name or selection, value if value is not None and value > 0 else 0.0


def normalize_entries(raw: Sequence[tuple[str, float]]) -> tuple[list[SkillMapEntry], float]:
    """Turn ``(name, raw_value)`` pairs into entries relative to the highest.

    Returns the entries (input order) and the highest value.
    """
    positives = [value for _, value in raw if value > 0]
    highest = max(positives) if positives else 0.0

    highest_index: Optional[int] = None
    if highest > 0:
        highest_index = next(i for i, (_, value) in enumerate(raw) if value == highest)

    entries: list[SkillMapEntry] = []
    for i, (name, value) in enumerate(raw):
        if i == highest_index:
            percentage = 100.0
        elif value > 0 and highest > 0:
            percentage = min(round(value / highest * 100.0, _PERCENTAGE_DECIMALS), _MAX_OTHER_PERCENTAGE)
        else:
            percentage = 0.0
        entries.append(SkillMapEntry(exercise_name=name, raw_value=value, percentage=percentage,
                                     is_highest=i == highest_index, ))
    return entries, highest


# ======================================================================
# Main entry point
# ======================================================================


def compute_skill_map(store: TrainingStore, user_id: str, sport: SportMode | str, view_name: str,
                      selections: Sequence[str], window_days: int, today: Optional[datetime.date] = None,
                      token: Optional[RequestToken] = None, timeout: Optional[float] = None, ) -> Optional[
    SkillMapResult]:
    """Compare *selections* under one view over a trailing window.

    Returns:
        :class:`SkillMapResult` with one entry per selection, or ``None``
        if the view is unknown.

    Raises:
        pydantic.ValidationError: empty, blank or more than six selections,
            or ``window_days < 1``.
        StoreFetchError: propagated from the store.
        SupersededRequestError: a newer request started for the token's key.
    """
    view = view_config(sport, view_name)
    if view is None:
        logger.warning("Unknown view", pipeline=_PIPELINE, sport=str(sport), view=view_name)
        return None

    request = SkillMapRequest(sport=view.sport, view_name=view.name, selections=list(selections),
                              window_days=window_days, )
    date_from, date_to = window_bounds(request.window_days, today)
    logger.info("Computing skill map", sport=view.sport.value, view=view.name, window_days=window_days,
                selections=len(request.selections), )

    occurrences = fetch_occurrences(store, user_id, view.sport, pipeline=_PIPELINE,
                                    exercise_type=view.exercise_type_restriction, date_from=date_from,
                                    date_to=date_to, token=token, timeout=timeout, )

    # Only the sets of occurrences some selection actually matches
    matched = [o for o in occurrences if any(matches(o.name, s, MatchMode.STRICT) for s in request.selections)]
    sets = fetch_sets(store, matched, pipeline=_PIPELINE, token=token, timeout=timeout)

    raw = [_raw_value(view.calculation_type, s, matched, sets) for s in request.selections]

    entries, highest = normalize_entries(raw)

    if token is not None:
        token.ensure_current()

    logger.info("Skill map computed", sport=view.sport.value, view=view.name, highest_value=highest)
    return SkillMapResult(sport=view.sport, view_name=view.name, window_days=window_days, entries=entries,
                          highest_value=highest, )
