"""Business logic services."""

from training_analytics.services.analytics_service import ProgressAnalyticsService

__all__ = [
    "ProgressAnalyticsService",
]
