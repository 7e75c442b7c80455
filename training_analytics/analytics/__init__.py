"""Analytics core — view registry, bucketing, matching, metrics, trends, skill map, records."""

from training_analytics.analytics.buckets import BucketConfig, compute_buckets
from training_analytics.analytics.catalog import list_available_exercises, most_logged_exercises
from training_analytics.analytics.classifier import StoreBackedClassifier
from training_analytics.analytics.matching import MatchMode, matches
from training_analytics.analytics.progress import compute_trend
from training_analytics.analytics.records import compute_personal_records
from training_analytics.analytics.requests import RequestToken, RequestTracker
from training_analytics.analytics.skill_map import compute_skill_map
from training_analytics.analytics.store import ExerciseTypeClassifier, TrainingStore
from training_analytics.analytics.views import view_config, views_for

__all__ = [
    "BucketConfig",
    "compute_buckets",
    "list_available_exercises",
    "most_logged_exercises",
    "StoreBackedClassifier",
    "MatchMode",
    "matches",
    "compute_trend",
    "compute_personal_records",
    "RequestToken",
    "RequestTracker",
    "compute_skill_map",
    "ExerciseTypeClassifier",
    "TrainingStore",
    "view_config",
    "views_for",
]
