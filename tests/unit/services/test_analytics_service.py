"""Tests for the progress analytics service facade."""

import datetime

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from training_analytics.analytics.requests import RequestTracker
from training_analytics.core.config import Settings
from training_analytics.core.exceptions import SupersededRequestError
from training_analytics.models.training_log import Workout, WorkoutExercise, WorkoutSet
from training_analytics.schemas.enums import ExerciseType, RecordMetric, SportMode
from training_analytics.services.analytics_service import ProgressAnalyticsService


def _days_ago(today, days):
    return today - datetime.timedelta(days=days)


@pytest.fixture
def service(store):
    return ProgressAnalyticsService(store)


# ======================================================================
# Forwarding
# ======================================================================


class TestServiceForwarding:
    def test_views_for(self, service):
        assert [v.name for v in service.views_for("tennis")] == ["Performance", "Tonnage", "Drill", "Rally"]

    def test_trend(self, service, store, user_id, today):
        store.log(_days_ago(today, 1), "Bench Press", [{"reps": 5, "weight": 100}])
        result = service.trend(user_id, SportMode.LIFTING, "Performance", 30, today=today)
        assert result.max_value == 500

    def test_compare(self, service, store, user_id, today):
        store.log(_days_ago(today, 1), "Bench Press", [{"reps": 5, "weight": 100}])
        result = service.compare(user_id, SportMode.LIFTING, "Performance", ["Bench Press", "Squat"], 30,
                                 today=today)
        assert [e.percentage for e in result.entries] == [100, 0]

    def test_best_ever_uses_store_classifier(self, service, store, user_id, today):
        store.log(_days_ago(today, 1), "Free Throw", [{"attempted": 10, "made": 9}], sport=SportMode.BASKETBALL,
                  exercise_type=ExerciseType.SHOOTING)
        result = service.best_ever(user_id, "Free Throw", SportMode.BASKETBALL)
        assert result.exercise_type is ExerciseType.SHOOTING
        assert result.best(RecordMetric.SHOOTING_PERCENTAGE) == 90

    def test_available_and_search(self, service, store, user_id, today):
        store.log(_days_ago(today, 1), "Incline Bench Press")
        store.log(_days_ago(today, 1), "Squat")
        assert service.available_exercises(user_id, SportMode.LIFTING, "Performance") == [
            "Incline Bench Press", "Squat",
        ]
        assert service.search_exercises(user_id, SportMode.LIFTING, "Performance", "squat") == ["Squat"]

    def test_search_unknown_view_is_empty(self, service, user_id):
        assert service.search_exercises(user_id, SportMode.LIFTING, "Rally", "squat") == []

    def test_most_logged_default_limit(self, store, user_id, today):
        for name in ["Squat", "Row", "Curl"]:
            store.log(_days_ago(today, 1), name)
        service = ProgressAnalyticsService(store, settings=Settings(MOST_LOGGED_LIMIT=2))
        assert len(service.most_logged(user_id, SportMode.LIFTING, 30, today=today)) == 2


# ======================================================================
# Boundary settings
# ======================================================================


class TestServiceBoundary:
    def test_default_timeout_from_settings(self, store, user_id, today):
        service = ProgressAnalyticsService(store, settings=Settings(STORE_TIMEOUT_SECONDS=4.0))
        service.trend(user_id, SportMode.LIFTING, "Performance", 30, today=today)
        assert {timeout for _, timeout in store.calls} == {4.0}

    def test_explicit_timeout_wins(self, store, user_id, today):
        service = ProgressAnalyticsService(store, settings=Settings(STORE_TIMEOUT_SECONDS=4.0))
        service.trend(user_id, SportMode.LIFTING, "Performance", 30, today=today, timeout=1.0)
        assert {timeout for _, timeout in store.calls} == {1.0}

    def test_newer_request_supersedes_running_one(self, store, user_id, today):
        store.log(_days_ago(today, 1), "Bench Press", [{"reps": 5, "weight": 100}])
        tracker = RequestTracker()
        service = ProgressAnalyticsService(store, tracker=tracker)

        def _user_switched_view(method):
            if method == "list_sessions":
                tracker.begin("graph")

        store.after_fetch = _user_switched_view
        with pytest.raises(SupersededRequestError):
            service.trend(user_id, SportMode.LIFTING, "Performance", 30, today=today, request_key="graph")

        store.after_fetch = None
        result = service.trend(user_id, SportMode.LIFTING, "Tonnage", 30, today=today, request_key="graph")
        assert result.max_value == 500

    def test_superseded_best_ever_stops_during_classification(self, store, user_id, today):
        store.log(_days_ago(today, 1), "Squat", [{"reps": 5, "weight": 100}])
        tracker = RequestTracker()
        service = ProgressAnalyticsService(store, tracker=tracker)

        def _newer_lookup(method):
            if method == "list_sessions":
                tracker.begin("records")

        store.after_fetch = _newer_lookup
        with pytest.raises(SupersededRequestError):
            service.best_ever(user_id, "Squat", SportMode.LIFTING, request_key="records")
        assert store.methods_called() == ["list_sessions"]

    def test_without_request_key_never_superseded(self, service, store, user_id, today):
        store.log(_days_ago(today, 1), "Bench Press", [{"reps": 5, "weight": 100}])
        service.tracker.begin("graph")
        assert service.trend(user_id, SportMode.LIFTING, "Performance", 30, today=today) is not None


class TestServiceFromSession:
    def test_reads_database(self, today):
        engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
        SQLModel.metadata.create_all(engine)
        with Session(engine) as session:
            session.add(Workout(id="w1", user_id="user-1", mode="workout", performed_at=_days_ago(today, 2)))
            session.add(WorkoutExercise(id="e1", workout_id="w1", name="Deadlift", exercise_type="exercise"))
            session.add(WorkoutSet(id="s1", workout_exercise_id="e1", set_index=0, reps=3, weight=180))
            session.commit()

            service = ProgressAnalyticsService.from_session(session)
            result = service.trend("user-1", "workout", "Performance", 7, exercise_query="deadlift", today=today)

        assert result.max_value == 540
        engine.dispose()
