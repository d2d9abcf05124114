"""
Domain models for the workout program editing engine.

These models represent the core business concepts:
- WorkoutProgram: The aggregate root (program -> weeks -> days -> exercises)
- SetGroup / ExerciseSet: Repeated-set templates and their expanded sets
- SessionTarget / ExerciseNameTarget: Addresses into a program
- *Update / New*: Validated change payloads for each entity level

Usage:
    >>> from domain.models import WorkoutProgram, SessionTarget, SetGroupUpdate

    >>> program = WorkoutProgram.model_validate(document)
    >>> target = SessionTarget(week_number=1, day_number=1, exercise_index=0)
    >>> update = SetGroupUpdate.model_validate({"count": 5, "reps": 6})

    >>> # Serialize back to the camelCase document
    >>> data = program.model_dump(by_alias=True, mode="json")
"""

from domain.models.program import (
    Difficulty,
    Exercise,
    ExerciseSet,
    ProgramStatus,
    SetGroup,
    WorkoutDay,
    WorkoutProgram,
    WorkoutWeek,
)
from domain.models.targets import (
    ExerciseNameTarget,
    SessionTarget,
    Target,
    parse_target,
)
from domain.models.updates import (
    BatchOperation,
    DayUpdate,
    ExerciseUpdate,
    NewExercise,
    NewSetGroup,
    SetFieldUpdate,
    SetGroupUpdate,
    WeekUpdate,
)

__all__ = [
    # Program document
    "WorkoutProgram",
    "WorkoutWeek",
    "WorkoutDay",
    "Exercise",
    "SetGroup",
    "ExerciseSet",
    # Enums
    "Difficulty",
    "ProgramStatus",
    # Addressing
    "SessionTarget",
    "ExerciseNameTarget",
    "Target",
    "parse_target",
    # Change payloads
    "SetFieldUpdate",
    "SetGroupUpdate",
    "ExerciseUpdate",
    "DayUpdate",
    "WeekUpdate",
    "NewSetGroup",
    "NewExercise",
    "BatchOperation",
]
