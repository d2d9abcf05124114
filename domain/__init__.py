"""
Domain layer for the workout program editing engine.

This package contains pure domain models and the in-memory editing engine.
Nothing here performs I/O; persistence is reached through
``application.ports.ProgramStore``.
"""

from domain.models import (
    Exercise,
    ExerciseSet,
    SessionTarget,
    SetGroup,
    WorkoutDay,
    WorkoutProgram,
    WorkoutWeek,
)

__all__ = [
    "WorkoutProgram",
    "WorkoutWeek",
    "WorkoutDay",
    "Exercise",
    "SetGroup",
    "ExerciseSet",
    "SessionTarget",
]
