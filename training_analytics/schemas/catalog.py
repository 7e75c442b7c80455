"""
Exercise catalog schemas (most-logged ranking).
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from training_analytics.schemas.enums import SportMode


class LoggedExerciseSummary(BaseModel):
    """How often one (fuzzy-grouped) exercise was logged in a window."""

    exercise_name: str
    count: int = Field(..., ge=1)
    sport: SportMode
    last_logged: Optional[datetime.date] = None
