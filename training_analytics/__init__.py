"""Multi-sport training analytics: progress trends, skill maps and personal records."""

from training_analytics.core.config import settings

__version__ = settings.VERSION
