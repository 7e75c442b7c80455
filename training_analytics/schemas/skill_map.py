"""
Skill-map (relative comparison) schemas.
"""

from pydantic import BaseModel, Field, field_validator

from training_analytics.core.config import settings
from training_analytics.schemas.enums import SportMode


class SkillMapRequest(BaseModel):
    """Validated input of a skill-map comparison."""

    sport: SportMode
    view_name: str = Field(..., min_length=1)
    selections: list[str] = Field(..., min_length=1, max_length=settings.SKILL_MAP_MAX_SELECTIONS)
    window_days: int = Field(..., ge=1)

    @field_validator("selections")
    @classmethod
    def _selections_not_blank(cls, value: list[str]) -> list[str]:
        for name in value:
            if not name or not name.strip():
                raise ValueError("Exercise selections must not be blank")
        return value


class SkillMapEntry(BaseModel):
    """One selection's whole-interval value relative to the highest one."""

    exercise_name: str
    raw_value: float = Field(0.0, ge=0.0)
    percentage: float = Field(0.0, ge=0.0, le=100.0)
    is_highest: bool = False


class SkillMapResult(BaseModel):
    """Entries in selection order (never sorted by magnitude)."""

    sport: SportMode
    view_name: str
    window_days: int
    entries: list[SkillMapEntry]
    highest_value: float = 0.0
