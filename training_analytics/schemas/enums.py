"""
Closed enumerations shared by every component.
"""

from __future__ import annotations

from enum import Enum


class SportMode(str, Enum):
    """Sport a training session was logged under."""

    LIFTING = "lifting"
    BASKETBALL = "basketball"
    FOOTBALL = "football"
    BASEBALL = "baseball"
    SOCCER = "soccer"
    HOCKEY = "hockey"
    TENNIS = "tennis"
    RUNNING = "running"

    @classmethod
    def from_key(cls, key: str | SportMode) -> SportMode:
        """Resolve a sport key, accepting the legacy ``workout`` storage key.

        Raises :class:`ValueError` for unknown keys.
        """
        if isinstance(key, SportMode):
            return key
        normalized = key.strip().lower()
        if normalized == LEGACY_LIFTING_KEY:
            return cls.LIFTING
        return cls(normalized)

    @property
    def storage_key(self) -> str:
        """Key under which sessions of this sport are stored."""
        return LEGACY_LIFTING_KEY if self is SportMode.LIFTING else self.value


# Lifting sessions are stored under the historical "workout" mode.
LEGACY_LIFTING_KEY = "workout"


class ExerciseType(str, Enum):
    """Kind of logged exercise, which decides which set fields are filled."""

    EXERCISE = "exercise"  # reps, weight
    SHOOTING = "shooting"  # attempted, made (basketball) / reps, distance
    DRILL = "drill"  # reps, time_minutes or reps, completed_count
    SPRINTS = "sprints"  # reps, distance, avg_time_seconds
    HITTING = "hitting"  # reps, distance (average)
    FIELDING = "fielding"  # reps, distance
    RALLY = "rally"  # points, time_minutes


class CalculationType(str, Enum):
    """Aggregation formula a view applies to matched occurrences and sets."""

    PERFORMANCE = "performance"
    TONNAGE = "tonnage"
    SHOOTING_PERCENTAGE = "shooting_percentage"
    JUMPSHOT = "jumpshot"
    JUMPSHOT_PER_SQUARE = "jumpshot_per_square"
    DRILL = "drill"
    SPRINTS = "sprints"
    HITS = "hits"
    SHOTS = "shots"
    FIELDING_REPS = "fielding_reps"
    COMPLETION = "completion"
    SPEED = "speed"
    DISTANCE = "distance"
    SHOT_DISTANCE = "shot_distance"
    FIELDING_DISTANCE = "fielding_distance"
    FIELDING = "fielding"
    RALLY = "rally"


class RecordMetric(str, Enum):
    """Per-set metric tracked by personal records."""

    REPS_X_WEIGHT = "reps_x_weight"
    REPS = "reps"
    WEIGHT = "weight"
    SHOOTING_PERCENTAGE = "shooting_percentage"
    ATTEMPTED = "attempted"
    MADE = "made"
    DISTANCE = "distance"
    TIME = "time"
    COMPLETION_PERCENTAGE = "completion_percentage"
    REPS_PER_MINUTE = "reps_per_minute"
    SPEED = "speed"
    AVG_DISTANCE = "avg_distance"
    REPS_X_DISTANCE = "reps_x_distance"
    POINTS = "points"
