"""Tests for the SQL training store against an in-memory SQLite database."""

import datetime

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from training_analytics.core.exceptions import StoreFetchError
from training_analytics.db.repositories.training_log import SqlTrainingStore
from training_analytics.models.training_log import Workout, WorkoutExercise, WorkoutSet
from training_analytics.schemas.enums import ExerciseType, SportMode

USER_ID = "user-1"
DAY = datetime.date(2025, 6, 1)


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def sql_store(session):
    return SqlTrainingStore(session)


def _seed(session):
    session.add_all([
        Workout(id="w1", user_id=USER_ID, mode="workout", performed_at=DAY),
        Workout(id="w2", user_id=USER_ID, mode="lifting", performed_at=DAY + datetime.timedelta(days=2)),
        Workout(id="w3", user_id=USER_ID, mode="basketball", performed_at=DAY + datetime.timedelta(days=1)),
        Workout(id="w4", user_id="someone-else", mode="workout", performed_at=DAY),
    ])
    session.add_all([
        WorkoutExercise(id="e1", workout_id="w1", name="Bench Press", exercise_type="exercise"),
        WorkoutExercise(id="e2", workout_id="w3", name="Free Throw", exercise_type="shooting"),
        WorkoutExercise(id="e3", workout_id="w3", name="Mystery", exercise_type="yoga"),
        WorkoutExercise(id="e4", workout_id="w3", name=None, exercise_type="drill"),
    ])
    session.add_all([
        WorkoutSet(id="s2", workout_exercise_id="e1", set_index=1, reps=8, weight=60),
        WorkoutSet(id="s1", workout_exercise_id="e1", set_index=0, reps=10, weight=50),
        WorkoutSet(id="s3", workout_exercise_id="e4", set_index=0, reps=10, completed=True),
        WorkoutSet(id="s4", workout_exercise_id="e4", set_index=1, reps=10, completed=False),
        WorkoutSet(id="s5", workout_exercise_id="e4", set_index=2, reps=10, completed=7),
    ])
    session.commit()


# ======================================================================
# Sessions
# ======================================================================


class TestListSessions:
    def test_lifting_includes_legacy_mode(self, session, sql_store):
        _seed(session)
        sessions = sql_store.list_sessions(USER_ID, SportMode.LIFTING)
        assert [s.id for s in sessions] == ["w1", "w2"]

    def test_other_sport(self, session, sql_store):
        _seed(session)
        assert [s.id for s in sql_store.list_sessions(USER_ID, SportMode.BASKETBALL)] == ["w3"]

    def test_date_bounds_inclusive(self, session, sql_store):
        _seed(session)
        sessions = sql_store.list_sessions(USER_ID, SportMode.LIFTING, date_from=DAY + datetime.timedelta(days=2),
                                           date_to=DAY + datetime.timedelta(days=2))
        assert [s.id for s in sessions] == ["w2"]
        assert sessions[0].performed_on == DAY + datetime.timedelta(days=2)

    def test_timeout_ignored_on_sqlite(self, session, sql_store):
        _seed(session)
        assert len(sql_store.list_sessions(USER_ID, SportMode.LIFTING, timeout=0.5)) == 2


# ======================================================================
# Occurrences
# ======================================================================


class TestListOccurrences:
    def test_carries_workout_date(self, session, sql_store):
        _seed(session)
        occurrences = sql_store.list_occurrences(["w1"])
        assert len(occurrences) == 1
        assert occurrences[0].name == "Bench Press"
        assert occurrences[0].performed_on == DAY
        assert occurrences[0].session_id == "w1"

    def test_type_filter(self, session, sql_store):
        _seed(session)
        occurrences = sql_store.list_occurrences(["w3"], ExerciseType.SHOOTING)
        assert [o.id for o in occurrences] == ["e2"]

    def test_unknown_type_skipped_and_blank_name(self, session, sql_store):
        _seed(session)
        occurrences = sql_store.list_occurrences(["w3"])
        assert {o.id for o in occurrences} == {"e2", "e4"}
        assert next(o for o in occurrences if o.id == "e4").name == ""

    def test_empty_ids(self, sql_store):
        assert sql_store.list_occurrences([]) == []


# ======================================================================
# Sets
# ======================================================================


class TestListSets:
    def test_ordered_by_index(self, session, sql_store):
        _seed(session)
        sets = sql_store.list_sets(["e1"])
        assert [s.id for s in sets] == ["s1", "s2"]
        assert sets[0].reps == 10 and sets[0].weight == 50

    def test_completed_normalised(self, session, sql_store):
        _seed(session)
        sets = sql_store.list_sets(["e4"])
        assert [s.completed_count for s in sets] == [10, 0, 7]

    def test_empty_ids(self, sql_store):
        assert sql_store.list_sets([]) == []


class TestStoreErrors:
    def test_database_error_wrapped(self):
        engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
        with Session(engine) as session:
            with pytest.raises(StoreFetchError) as exc_info:
                SqlTrainingStore(session).list_sessions(USER_ID, SportMode.LIFTING)
        assert exc_info.value.operation == "list_sessions"
        engine.dispose()
