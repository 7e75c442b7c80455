"""Shared fixtures: an in-memory training store and a fixed reference day."""

import datetime
import itertools
from typing import Callable, Optional, Sequence

import pytest

from training_analytics.analytics.store import TrainingStore
from training_analytics.core.exceptions import StoreFetchError
from training_analytics.schemas.enums import ExerciseType, SportMode
from training_analytics.schemas.training_log import ExerciseOccurrence, SetRecord, TrainingSessionRecord

TODAY = datetime.date(2025, 6, 30)
USER_ID = "user-1"


class InMemoryTrainingStore(TrainingStore):
    """Store over plain lists.  Records every call for assertions."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.sessions: list[tuple[str, SportMode, TrainingSessionRecord]] = []
        self.occurrences: list[ExerciseOccurrence] = []
        self.sets: list[SetRecord] = []
        self.calls: list[tuple[str, Optional[float]]] = []
        self.fail_on: set[str] = set()
        self.after_fetch: Optional[Callable[[str], None]] = None

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def add_session(self, performed_on: datetime.date, sport: SportMode = SportMode.LIFTING,
                    user_id: str = USER_ID) -> str:
        session_id = f"s{next(self._ids)}"
        self.sessions.append((user_id, sport, TrainingSessionRecord(id=session_id, performed_on=performed_on)))
        return session_id

    def add_occurrence(self, session_id: str, name: str,
                       exercise_type: ExerciseType = ExerciseType.EXERCISE) -> str:
        performed_on = next(s.performed_on for _, _, s in self.sessions if s.id == session_id)
        occurrence_id = f"o{next(self._ids)}"
        self.occurrences.append(ExerciseOccurrence(id=occurrence_id, session_id=session_id, name=name,
                                                   exercise_type=exercise_type, performed_on=performed_on))
        return occurrence_id

    def add_sets(self, occurrence_id: str, *fields: dict) -> None:
        for index, values in enumerate(fields):
            self.sets.append(SetRecord.model_validate(
                {"id": f"x{next(self._ids)}", "occurrence_id": occurrence_id, "index": index, **values}))

    def log(self, performed_on: datetime.date, name: str, sets: Sequence[dict] = (),
            sport: SportMode = SportMode.LIFTING, exercise_type: ExerciseType = ExerciseType.EXERCISE,
            user_id: str = USER_ID) -> str:
        """One session holding one exercise with *sets*.  Returns the occurrence id."""
        session_id = self.add_session(performed_on, sport, user_id)
        occurrence_id = self.add_occurrence(session_id, name, exercise_type)
        self.add_sets(occurrence_id, *sets)
        return occurrence_id

    # ------------------------------------------------------------------
    # Store contract
    # ------------------------------------------------------------------

    def _record(self, method: str, timeout: Optional[float]) -> None:
        self.calls.append((method, timeout))
        if method in self.fail_on:
            raise StoreFetchError(method, "simulated outage")

    def _done(self, method: str) -> None:
        if self.after_fetch is not None:
            self.after_fetch(method)

    def list_sessions(self, user_id, sport, date_from=None, date_to=None, timeout=None):
        self._record("list_sessions", timeout)
        result = [
            s for uid, sp, s in self.sessions
            if uid == user_id and sp == sport and (date_from is None or s.performed_on >= date_from) and (
                        date_to is None or s.performed_on <= date_to)
        ]
        self._done("list_sessions")
        return result

    def list_occurrences(self, session_ids, exercise_type=None, timeout=None):
        self._record("list_occurrences", timeout)
        ids = set(session_ids)
        result = [o for o in self.occurrences if
                  o.session_id in ids and (exercise_type is None or o.exercise_type == exercise_type)]
        self._done("list_occurrences")
        return result

    def list_sets(self, occurrence_ids, timeout=None):
        self._record("list_sets", timeout)
        ids = set(occurrence_ids)
        result = sorted((s for s in self.sets if s.occurrence_id in ids), key=lambda s: s.index)
        self._done("list_sets")
        return result

    def methods_called(self) -> list[str]:
        return [method for method, _ in self.calls]


@pytest.fixture
def store() -> InMemoryTrainingStore:
    return InMemoryTrainingStore()


@pytest.fixture
def today() -> datetime.date:
    return TODAY


@pytest.fixture
def user_id() -> str:
    return USER_ID
