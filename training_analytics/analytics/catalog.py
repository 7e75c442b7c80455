"""
Exercise catalog — which exercise names a user has logged.

- :func:`list_available_exercises` feeds the exercise picker of a view:
  every name ever logged with the view's exercise type, near-duplicate
  spellings folded together, sorted.
- :func:`most_logged_exercises` ranks exercises by how often they were
  logged in a trailing window (all exercise types).  Names are grouped
  with the strict matcher and each group is reported under its longest
  spelling.
"""

from __future__ import annotations

import datetime
from typing import Optional, Sequence

from training_analytics.analytics.buckets import window_bounds
from training_analytics.analytics.fetch import fetch_occurrences
from training_analytics.analytics.matching import MatchMode, group_names, matches, names_similar
from training_analytics.analytics.requests import RequestToken
from training_analytics.analytics.store import TrainingStore
from training_analytics.analytics.views import view_config
from training_analytics.core.config import settings
from training_analytics.core.logging import get_logger
from training_analytics.schemas.catalog import LoggedExerciseSummary
from training_analytics.schemas.enums import SportMode
from training_analytics.schemas.training_log import ExerciseOccurrence

logger = get_logger(__name__)


# ======================================================================
# Name folding
# ======================================================================


def fold_similar_names(names: Sequence[str]) -> list[str]:
    """Unique names with near-duplicate spellings folded, sorted.

    When two spellings are similar the longer one is kept.
    """
    kept: list[str] = []
    for raw in names:
        name = (raw or "").strip()
        if not name:
            continue
        for i, existing in enumerate(kept):
            if names_similar(name, existing):
                if len(name) > len(existing):
                    kept[i] = name
                break
        else:
            kept.append(name)
    return sorted(kept)


def _rank(occurrences: Sequence[ExerciseOccurrence], sport: SportMode) -> list[LoggedExerciseSummary]:
    named = [o for o in occurrences if o.name and o.name.strip()]
    groups = group_names([o.name for o in named])

    summaries: list[LoggedExerciseSummary] = []
    for canonical, members in groups.items():
        hits = [o for o in named if any(matches(o.name, m, MatchMode.STRICT) for m in members)]
        if not hits:
            continue
        summaries.append(LoggedExerciseSummary(exercise_name=canonical.strip(), count=len(hits), sport=sport,
                                               last_logged=max(o.performed_on for o in hits), ))

    # count desc, then most recently logged, then name
    summaries.sort(key=lambda s: s.exercise_name)
    summaries.sort(key=lambda s: (s.count, s.last_logged or datetime.date.min), reverse=True)
    return summaries


# ======================================================================
# Main entry points
# ======================================================================


def list_available_exercises(store: TrainingStore, user_id: str, sport: SportMode | str, view_name: str,
                             search: Optional[str] = None, token: Optional[RequestToken] = None,
                             timeout: Optional[float] = None, ) -> Optional[list[str]]:
    """Exercise names the user can pick for a view.

    Args:
        search: Optional free-text filter (loose matching).

    Returns:
        Sorted names, or ``None`` if the view is unknown.
    """
    view = view_config(sport, view_name)
    if view is None:
        logger.warning("Unknown view", pipeline="available_exercises", sport=str(sport), view=view_name)
        return None

    occurrences = fetch_occurrences(store, user_id, view.sport, pipeline="available_exercises",
                                    exercise_type=view.exercise_type_restriction, token=token, timeout=timeout, )
    names = fold_similar_names([o.name for o in occurrences])
    if search and search.strip():
        names = [n for n in names if matches(n, search.strip(), MatchMode.LOOSE)]

    if token is not None:
        token.ensure_current()
    return names


def most_logged_exercises(store: TrainingStore, user_id: str, sport: SportMode | str, window_days: int,
                          limit: Optional[int] = None, today: Optional[datetime.date] = None,
                          token: Optional[RequestToken] = None,
                          timeout: Optional[float] = None, ) -> list[LoggedExerciseSummary]:
    """Top exercises by number of times logged in the trailing window.

    Raises:
        ValueError: unknown sport or ``window_days < 1``.
    """
    mode = SportMode.from_key(sport)
    date_from, date_to = window_bounds(window_days, today)
    limit = settings.MOST_LOGGED_LIMIT if limit is None else limit

    occurrences = fetch_occurrences(store, user_id, mode, pipeline="most_logged", date_from=date_from,
                                    date_to=date_to, token=token, timeout=timeout, )
    ranked = _rank(occurrences, mode)

    if token is not None:
        token.ensure_current()

    logger.info("Most logged exercises computed", sport=mode.value, window_days=window_days, groups=len(ranked))
    return ranked[:max(limit, 0)]
