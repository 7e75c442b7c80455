"""
Progress view schema.

A view is a named, sport-scoped lens: it looks only at occurrences of one
exercise type and reduces them with one calculation formula.
"""

from typing import Optional

from pydantic import BaseModel, Field

from training_analytics.schemas.enums import CalculationType, ExerciseType, SportMode


class View(BaseModel):
    """Static configuration of one progress view."""

    name: str = Field(..., description="Display name, unique within a sport, e.g. 'Tonnage'")
    sport: SportMode
    exercise_type_restriction: ExerciseType = Field(
        ..., description="Only occurrences of this exercise type are examined"
    )
    calculation_type: CalculationType
    description: Optional[str] = None
