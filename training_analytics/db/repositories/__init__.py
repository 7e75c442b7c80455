"""Database repositories."""

from training_analytics.db.repositories.training_log import SqlTrainingStore

__all__ = [
    "SqlTrainingStore",
]
