"""Tests for the exercise catalog (picker names and most-logged ranking)."""

import datetime

import pytest

from training_analytics.analytics.catalog import fold_similar_names, list_available_exercises, most_logged_exercises
from training_analytics.schemas.enums import ExerciseType, SportMode


def _days_ago(today, days):
    return today - datetime.timedelta(days=days)


# ======================================================================
# Name folding
# ======================================================================


class TestFoldSimilarNames:
    def test_folds_spacing_and_suffix_variants(self):
        assert fold_similar_names(["Bench Press", "benchpress", "Squat", "squats"]) == ["Bench Press", "squats"]

    def test_keeps_longer_spelling(self):
        assert fold_similar_names(["Bench Pres", "Bench Press"]) == ["Bench Press"]

    def test_blank_names_dropped(self):
        assert fold_similar_names(["", "  ", None, "Row"]) == ["Row"]

    def test_sorted(self):
        assert fold_similar_names(["Squat", "Deadlift", "Bench Press"]) == ["Bench Press", "Deadlift", "Squat"]


# ======================================================================
# Available exercises
# ======================================================================


class TestListAvailableExercises:
    def test_names_for_view(self, store, user_id, today):
        store.log(_days_ago(today, 400), "Squat")
        store.log(_days_ago(today, 3), "Bench Press")
        store.log(_days_ago(today, 2), "Bench Pres")

        names = list_available_exercises(store, user_id, SportMode.LIFTING, "Performance")

        assert names == ["Bench Press", "Squat"]

    def test_restricted_to_view_type(self, store, user_id, today):
        store.log(_days_ago(today, 1), "Free Throw", sport=SportMode.BASKETBALL, exercise_type=ExerciseType.SHOOTING)
        store.log(_days_ago(today, 1), "Ball Handling", sport=SportMode.BASKETBALL, exercise_type=ExerciseType.DRILL)

        assert list_available_exercises(store, user_id, SportMode.BASKETBALL, "Shooting %") == ["Free Throw"]
        assert list_available_exercises(store, user_id, SportMode.BASKETBALL, "Drill") == ["Ball Handling"]

    def test_search(self, store, user_id, today):
        store.log(_days_ago(today, 1), "Incline Bench Press")
        store.log(_days_ago(today, 1), "Back Squat")

        assert list_available_exercises(store, user_id, SportMode.LIFTING, "Tonnage", search="bench") == [
            "Incline Bench Press"
        ]

    def test_blank_search_returns_everything(self, store, user_id, today):
        store.log(_days_ago(today, 1), "Row")
        assert list_available_exercises(store, user_id, SportMode.LIFTING, "Tonnage", search="  ") == ["Row"]

    def test_nothing_logged(self, store, user_id):
        assert list_available_exercises(store, user_id, SportMode.LIFTING, "Performance") == []

    def test_unknown_view(self, store, user_id):
        assert list_available_exercises(store, user_id, SportMode.LIFTING, "Rally") is None
        assert store.calls == []


# ======================================================================
# Most logged
# ======================================================================


class TestMostLoggedExercises:
    def test_ranked_by_count(self, store, user_id, today):
        for days, name in [(1, "Bench Press"), (2, "Squat"), (3, "bench press"), (4, "Bench Press"), (5, "Squat"),
                           (6, "Deadlift")]:
            store.log(_days_ago(today, days), name)

        ranked = most_logged_exercises(store, user_id, SportMode.LIFTING, 30, today=today)

        assert [(r.exercise_name, r.count) for r in ranked] == [("Bench Press", 3), ("Squat", 2), ("Deadlift", 1)]
        assert ranked[0].last_logged == _days_ago(today, 1)
        assert all(r.sport is SportMode.LIFTING for r in ranked)

    def test_longest_spelling_is_canonical(self, store, user_id, today):
        store.log(_days_ago(today, 1), "Row")
        store.log(_days_ago(today, 2), "Rows")

        ranked = most_logged_exercises(store, user_id, SportMode.LIFTING, 30, today=today)

        assert [(r.exercise_name, r.count) for r in ranked] == [("Rows", 2)]

    def test_tie_broken_by_recency_then_name(self, store, user_id, today):
        store.log(_days_ago(today, 9), "Curl")
        store.log(_days_ago(today, 1), "Lunge")
        store.log(_days_ago(today, 9), "Arnold Press")

        ranked = most_logged_exercises(store, user_id, SportMode.LIFTING, 30, today=today)

        assert [r.exercise_name for r in ranked] == ["Lunge", "Arnold Press", "Curl"]

    def test_all_exercise_types_counted(self, store, user_id, today):
        store.log(_days_ago(today, 1), "Free Throw", sport=SportMode.BASKETBALL, exercise_type=ExerciseType.SHOOTING)
        store.log(_days_ago(today, 1), "Squat", sport=SportMode.BASKETBALL)

        ranked = most_logged_exercises(store, user_id, SportMode.BASKETBALL, 30, today=today)

        assert {r.exercise_name for r in ranked} == {"Free Throw", "Squat"}

    def test_window_applied(self, store, user_id, today):
        store.log(_days_ago(today, 31), "Squat")
        store.log(_days_ago(today, 5), "Row")
        ranked = most_logged_exercises(store, user_id, SportMode.LIFTING, 30, today=today)
        assert [r.exercise_name for r in ranked] == ["Row"]

    def test_unnamed_occurrences_ignored(self, store, user_id, today):
        store.log(_days_ago(today, 1), "")
        assert most_logged_exercises(store, user_id, SportMode.LIFTING, 30, today=today) == []

    @pytest.mark.parametrize("limit,expected", [(1, 1), (2, 2), (10, 3), (0, 0)])
    def test_limit(self, store, user_id, today, limit, expected):
        for name in ["Squat", "Row", "Curl"]:
            store.log(_days_ago(today, 1), name)
        assert len(most_logged_exercises(store, user_id, SportMode.LIFTING, 30, limit=limit, today=today)) == expected

    def test_legacy_sport_key(self, store, user_id, today):
        store.log(_days_ago(today, 1), "Squat")
        ranked = most_logged_exercises(store, user_id, "workout", 30, today=today)
        assert [r.exercise_name for r in ranked] == ["Squat"]

    def test_unknown_sport(self, store, user_id, today):
        with pytest.raises(ValueError):
            most_logged_exercises(store, user_id, "curling", 30, today=today)

    def test_invalid_window(self, store, user_id, today):
        with pytest.raises(ValueError):
            most_logged_exercises(store, user_id, SportMode.LIFTING, 0, today=today)
