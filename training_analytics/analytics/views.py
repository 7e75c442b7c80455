"""
Progress view registry.

Static table mapping ``(sport, view name)`` to the exercise type the view
looks at and the formula it applies.  Adding a sport or a view is a
change to ``_VIEW_TABLE`` only; nothing else dispatches on view names.

Lookups never raise: unknown pairs return ``None`` (or an empty list).
Use :func:`view_config_or_raise` when the caller wants an exception.
"""

from __future__ import annotations

from typing import Optional

from training_analytics.core.exceptions import ConfigurationError
from training_analytics.schemas.enums import CalculationType, ExerciseType, SportMode
from training_analytics.schemas.view import View

# ======================================================================
# Helpers
# ======================================================================

# Aliases for brevity in the table below
EX = ExerciseType.EXERCISE
SH = ExerciseType.SHOOTING
DR = ExerciseType.DRILL
SP = ExerciseType.SPRINTS
HI = ExerciseType.HITTING
FI = ExerciseType.FIELDING
RA = ExerciseType.RALLY

CT = CalculationType

# (name, restriction, calculation, description)
_STRENGTH_VIEWS: list[tuple[str, ExerciseType, CalculationType, str]] = [
    ("Performance", EX, CT.PERFORMANCE, "Highest single set (reps × weight)"),
    ("Tonnage", EX, CT.TONNAGE, "Average (reps × weight × sets) per exercise square"),
]

# ======================================================================
# View table
# ======================================================================

_VIEW_TABLE: dict[SportMode, list[tuple[str, ExerciseType, CalculationType, str]]] = {
    SportMode.LIFTING: [
        *_STRENGTH_VIEWS,
    ],
    SportMode.BASKETBALL: [
        *_STRENGTH_VIEWS,
        ("Shooting %", SH, CT.SHOOTING_PERCENTAGE, "Average percentage per set"),
        ("Jumpshot", SH, CT.JUMPSHOT, "Total shots attempted"),
        ("Jumpshot Average", SH, CT.JUMPSHOT_PER_SQUARE, "Average attempted per shooting square"),
        ("Drill", DR, CT.DRILL, "Total reps logged for all drill squares"),
    ],
    SportMode.FOOTBALL: [
        *_STRENGTH_VIEWS,
        ("Completion", DR, CT.COMPLETION, "Average completion % per set"),
        ("Speed", SP, CT.SPEED, "Highest single set (distance / avg time)"),
        ("Sprints", SP, CT.SPRINTS, "Total reps logged for all sprint squares"),
    ],
    SportMode.BASEBALL: [
        *_STRENGTH_VIEWS,
        ("Hits", HI, CT.HITS, "Total reps logged for all hitting squares"),
        ("Distance", HI, CT.DISTANCE, "Average distance per set"),
        ("Fielding", FI, CT.FIELDING, "Average (reps × distance) / sets per fielding square"),
        ("Fielding Reps", FI, CT.FIELDING_REPS, "Total reps logged for all fielding squares"),
        ("Fielding Distance", FI, CT.FIELDING_DISTANCE, "Average distance per fielding set"),
    ],
    SportMode.SOCCER: [
        *_STRENGTH_VIEWS,
        ("Drill", DR, CT.DRILL, "Total reps logged for all drill squares"),
        ("Shots", SH, CT.SHOTS, "Total reps logged for all shooting squares"),
        ("Shot Distance", SH, CT.SHOT_DISTANCE, "Average distance per set"),
    ],
    SportMode.HOCKEY: [
        *_STRENGTH_VIEWS,
        ("Drill", DR, CT.DRILL, "Total reps logged for all drill squares"),
        ("Shots", SH, CT.SHOTS, "Total reps logged for all shooting squares"),
        ("Shot Distance", SH, CT.SHOT_DISTANCE, "Average distance per set"),
    ],
    SportMode.TENNIS: [
        *_STRENGTH_VIEWS,
        ("Drill", DR, CT.DRILL, "Total reps logged for all drill squares"),
        ("Rally", RA, CT.RALLY, "Average points per set"),
    ],
    # Running has no progress views
    SportMode.RUNNING: [],
}

# ======================================================================
# Registry storage
# ======================================================================

VIEW_REGISTRY: dict[SportMode, list[View]] = {
    sport: [
        View(name=name, sport=sport, exercise_type_restriction=restriction, calculation_type=calculation,
             description=description, )
        for name, restriction, calculation, description in rows
    ]
    for sport, rows in _VIEW_TABLE.items()
}


def _coerce_sport(sport: SportMode | str) -> Optional[SportMode]:
    try:
        return SportMode.from_key(sport)
    except ValueError:
        return None


# ======================================================================
# Lookups
# ======================================================================


def views_for(sport: SportMode | str) -> list[View]:
    """All views available for *sport*, in display order."""
    mode = _coerce_sport(sport)
    if mode is None:
        return []
    return list(VIEW_REGISTRY.get(mode, []))


def view_names_for(sport: SportMode | str) -> list[str]:
    """View names for *sport* (for selection controls)."""
    return [v.name for v in views_for(sport)]


def view_config(sport: SportMode | str, view_name: str) -> Optional[View]:
    """Look up a view by sport and name.  Returns ``None`` if not found."""
    for view in views_for(sport):
        if view.name == view_name:
            return view
    return None


def view_config_or_raise(sport: SportMode | str, view_name: str) -> View:
    """Look up a view by sport and name.

    Raises :class:`ConfigurationError` if not found.
    """
    view = view_config(sport, view_name)
    if view is None:
        raise ConfigurationError(
            f"View '{view_name}' not found for sport '{sport}'. "
            f"Available: {view_names_for(sport)}"
        )
    return view


def calculation_type_for(sport: SportMode | str, view_name: str) -> Optional[CalculationType]:
    view = view_config(sport, view_name)
    return view.calculation_type if view else None


def restriction_for(sport: SportMode | str, view_name: str) -> Optional[ExerciseType]:
    view = view_config(sport, view_name)
    return view.exercise_type_restriction if view else None


def can_view_display(sport: SportMode | str, view_name: str, exercise_type: ExerciseType) -> bool:
    """Whether the view examines occurrences of *exercise_type*."""
    return restriction_for(sport, view_name) == exercise_type
