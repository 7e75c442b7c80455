"""SQLModel database models."""

from training_analytics.models.training_log import Workout, WorkoutExercise, WorkoutSet

__all__ = [
    "Workout",
    "WorkoutExercise",
    "WorkoutSet",
]
