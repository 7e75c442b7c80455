"""
Progress analytics service.

Single entry point for calling layers.  Binds a training store, an
exercise-type classifier and a request tracker, and forwards to the
analytics pipelines:

- ``views_for``            views of a sport (selection controls),
- ``trend``                bucketed progress graph,
- ``compare``              skill map over up to six exercises,
- ``best_ever``            all-time personal records,
- ``available_exercises``  exercise picker of a view,
- ``search_exercises``     exercise picker filtered by free text,
- ``most_logged``          most frequently logged exercises.

Passing ``request_key`` makes a call supersede any earlier call with the
same key that is still running; the earlier call then raises
:class:`SupersededRequestError` instead of returning a stale result.
"""

import datetime
from typing import Optional, Sequence

from sqlmodel import Session

from training_analytics.analytics.catalog import list_available_exercises, most_logged_exercises
from training_analytics.analytics.classifier import StoreBackedClassifier
from training_analytics.analytics.matching import MatchMode
from training_analytics.analytics.progress import compute_trend
from training_analytics.analytics.records import compute_personal_records
from training_analytics.analytics.requests import RequestToken, RequestTracker
from training_analytics.analytics.skill_map import compute_skill_map
from training_analytics.analytics.store import ExerciseTypeClassifier, TrainingStore
from training_analytics.analytics.views import views_for
from training_analytics.core.config import Settings, settings as default_settings
from training_analytics.core.exceptions import SupersededRequestError
from training_analytics.core.logging import get_logger
from training_analytics.db.repositories.training_log import SqlTrainingStore
from training_analytics.schemas.catalog import LoggedExerciseSummary
from training_analytics.schemas.enums import SportMode
from training_analytics.schemas.personal_record import PersonalRecord
from training_analytics.schemas.progress import TrendResult
from training_analytics.schemas.skill_map import SkillMapResult
from training_analytics.schemas.view import View

logger = get_logger(__name__)


class ProgressAnalyticsService:
    """Service for progress, comparison and record analytics."""

    def __init__(self, store: TrainingStore, classifier: Optional[ExerciseTypeClassifier] = None,
                 tracker: Optional[RequestTracker] = None, settings: Optional[Settings] = None, ):
        self.store = store
        self.classifier = classifier
        self.tracker = tracker or RequestTracker()
        self.settings = settings or default_settings

    @classmethod
    def from_session(cls, session: Session, **kwargs) -> "ProgressAnalyticsService":
        """Service reading the training log through a database session."""
        return cls(SqlTrainingStore(session), **kwargs)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _token(self, request_key: Optional[str]) -> Optional[RequestToken]:
        return self.tracker.begin(request_key) if request_key else None

    def _timeout(self, timeout: Optional[float]) -> Optional[float]:
        return timeout if timeout is not None else self.settings.STORE_TIMEOUT_SECONDS

    def _classifier_for(self, user_id: str, timeout: Optional[float],
                        token: Optional[RequestToken]) -> ExerciseTypeClassifier:
        if self.classifier is not None:
            return self.classifier
        return StoreBackedClassifier(self.store, user_id, timeout=timeout, token=token)

    @staticmethod
    def _superseded(operation: str, error: SupersededRequestError) -> None:
        logger.info("Request superseded", operation=operation, request_key=error.key, generation=error.generation,
                    current=error.current, )

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def views_for(self, sport: SportMode | str) -> list[View]:
        return views_for(sport)

    # ------------------------------------------------------------------
    # Trend / compare / records
    # ------------------------------------------------------------------

    def trend(self, user_id: str, sport: SportMode | str, view_name: str, window_days: int,
              exercise_query: Optional[str] = None, match_mode: MatchMode = MatchMode.LOOSE,
              today: Optional[datetime.date] = None, request_key: Optional[str] = None,
              timeout: Optional[float] = None, ) -> Optional[TrendResult]:
        token = self._token(request_key)
        try:
            return compute_trend(self.store, user_id, sport, view_name, window_days, exercise_query=exercise_query,
                                 match_mode=match_mode, today=today, token=token,
                                 timeout=self._timeout(timeout), )
        except SupersededRequestError as e:
            self._superseded("trend", e)
            raise

    def compare(self, user_id: str, sport: SportMode | str, view_name: str, selections: Sequence[str],
                window_days: int, today: Optional[datetime.date] = None, request_key: Optional[str] = None,
                timeout: Optional[float] = None, ) -> Optional[SkillMapResult]:
        token = self._token(request_key)
        try:
            return compute_skill_map(self.store, user_id, sport, view_name, selections, window_days, today=today,
                                     token=token, timeout=self._timeout(timeout), )
        except SupersededRequestError as e:
            self._superseded("compare", e)
            raise

    def best_ever(self, user_id: str, exercise_name: str, sport: SportMode | str, request_key: Optional[str] = None,
                  timeout: Optional[float] = None, ) -> Optional[PersonalRecord]:
        token = self._token(request_key)
        timeout = self._timeout(timeout)
        try:
            return compute_personal_records(self.store, self._classifier_for(user_id, timeout, token), user_id,
                                            exercise_name, sport, token=token, timeout=timeout, )
        except SupersededRequestError as e:
            self._superseded("best_ever", e)
            raise

    # ------------------------------------------------------------------
    # Exercise catalog
    # ------------------------------------------------------------------

    def available_exercises(self, user_id: str, sport: SportMode | str, view_name: str,
                            request_key: Optional[str] = None, timeout: Optional[float] = None, ) -> list[str]:
        """Exercise names for a view's picker (empty for an unknown view)."""
        return self.search_exercises(user_id, sport, view_name, None, request_key=request_key, timeout=timeout)

    def search_exercises(self, user_id: str, sport: SportMode | str, view_name: str, query: Optional[str],
                         request_key: Optional[str] = None, timeout: Optional[float] = None, ) -> list[str]:
        token = self._token(request_key)
        try:
            names = list_available_exercises(self.store, user_id, sport, view_name, search=query, token=token,
                                             timeout=self._timeout(timeout), )
        except SupersededRequestError as e:
            self._superseded("search_exercises", e)
            raise
        return names or []

    def most_logged(self, user_id: str, sport: SportMode | str, window_days: int, limit: Optional[int] = None,
                    today: Optional[datetime.date] = None, request_key: Optional[str] = None,
                    timeout: Optional[float] = None, ) -> list[LoggedExerciseSummary]:
        token = self._token(request_key)
        try:
            return most_logged_exercises(self.store, user_id, sport, window_days,
                                         limit=limit if limit is not None else self.settings.MOST_LOGGED_LIMIT,
                                         today=today, token=token, timeout=self._timeout(timeout), )
        except SupersededRequestError as e:
            self._superseded("most_logged", e)
            raise
