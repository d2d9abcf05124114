"""
Address resolution.

Turns a ``SessionTarget`` or ``ExerciseNameTarget`` into direct references to
the week, day, exercise, set-group and set it designates. Resolution never
mutates the program. Because structural edits shift positions, callers resolve
again before every mutation (the batch runner does this per operation).
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from rapidfuzz import fuzz, process, utils

from domain.editing.errors import AddressingError, AddressSegment, EditValidationError
from domain.models import (
    Exercise,
    ExerciseNameTarget,
    ExerciseSet,
    SessionTarget,
    SetGroup,
    Target,
    WorkoutDay,
    WorkoutProgram,
    WorkoutWeek,
)

logger = logging.getLogger(__name__)

SUGGESTION_LIMIT = 3
SUGGESTION_SCORE_CUTOFF = 50


@dataclass
class ResolvedTarget:
    """
    References into a program for one resolved address.

    Segments beyond the depth of the address are None. The ``require_*``
    helpers turn a too-shallow address into a validation error.
    """

    week: WorkoutWeek
    week_index: int
    day: Optional[WorkoutDay] = None
    day_index: Optional[int] = None
    exercise: Optional[Exercise] = None
    exercise_index: Optional[int] = None
    set_group: Optional[SetGroup] = None
    set_group_index: Optional[int] = None
    set: Optional[ExerciseSet] = None
    set_index: Optional[int] = None

    def require_day(self) -> WorkoutDay:
        if self.day is None:
            raise EditValidationError("Target must include dayNumber")
        return self.day

    def require_exercise(self) -> Exercise:
        if self.exercise is None:
            raise EditValidationError("Target must include dayNumber and exerciseIndex")
        return self.exercise

    def require_set_group(self) -> SetGroup:
        if self.set_group is None:
            raise EditValidationError("Target must include setGroupIndex")
        return self.set_group

    def require_set(self) -> ExerciseSet:
        if self.set is None:
            raise EditValidationError("Target must include setGroupIndex and setIndex")
        return self.set

    def describe(self) -> str:
        """Human-readable location, e.g. 'Week 1, Day 2, Exercise 0 "Squat"'."""
        parts = [f"Week {self.week.week_number}"]
        if self.day is not None:
            parts.append(f"Day {self.day.day_number}")
        if self.exercise is not None:
            parts.append(f'Exercise {self.exercise_index} "{self.exercise.name}"')
        if self.set_group is not None:
            parts.append(f"SetGroup {self.set_group_index}")
        if self.set is not None:
            parts.append(f"Set {self.set_index}")
        return ", ".join(parts)


def find_week(program: WorkoutProgram, week_number: int) -> Tuple[int, WorkoutWeek]:
    """Locate a week by its ``week_number`` value (not its position)."""
    for index, week in enumerate(program.weeks):
        if week.week_number == week_number:
            return index, week
    raise AddressingError(f"Week {week_number} not found", segment=AddressSegment.WEEK)


def find_day(week: WorkoutWeek, day_number: int) -> Tuple[int, WorkoutDay]:
    """Locate a day by its ``day_number`` value within a week."""
    for index, day in enumerate(week.days):
        if day.day_number == day_number:
            return index, day
    raise AddressingError(
        f"Day {day_number} not found in Week {week.week_number}",
        segment=AddressSegment.DAY,
    )


def resolve_target(program: WorkoutProgram, target: Target) -> ResolvedTarget:
    """
    Resolve an address against a program.

    Raises:
        AddressingError: Naming the first segment that does not exist.
    """
    if isinstance(target, ExerciseNameTarget):
        resolved = find_exercise_by_name(
            program,
            target.exercise_name,
            week_number=target.week_number,
            day_number=target.day_number,
        )
        return _resolve_within_exercise(resolved, target.set_group_index, target.set_index)

    week_index, week = find_week(program, target.week_number)
    resolved = ResolvedTarget(week=week, week_index=week_index)
    if target.day_number is None:
        return resolved

    resolved.day_index, resolved.day = find_day(week, target.day_number)
    if target.exercise_index is None:
        return resolved

    exercises = resolved.day.exercises
    if target.exercise_index >= len(exercises):
        raise AddressingError(
            f"Exercise index {target.exercise_index} out of bounds: "
            f"Week {week.week_number}, Day {resolved.day.day_number} has "
            f"{len(exercises)} exercise(s)",
            segment=AddressSegment.EXERCISE,
        )
    resolved.exercise_index = target.exercise_index
    resolved.exercise = exercises[target.exercise_index]
    return _resolve_within_exercise(resolved, target.set_group_index, target.set_index)


def _resolve_within_exercise(
    resolved: ResolvedTarget,
    set_group_index: Optional[int],
    set_index: Optional[int],
) -> ResolvedTarget:
    if set_group_index is None:
        return resolved

    groups = resolved.exercise.set_groups
    if set_group_index >= len(groups):
        raise AddressingError(
            f"Set-group index {set_group_index} out of bounds: "
            f'"{resolved.exercise.name}" has {len(groups)} set-group(s)',
            segment=AddressSegment.SET_GROUP,
        )
    resolved.set_group_index = set_group_index
    resolved.set_group = groups[set_group_index]
    if set_index is None:
        return resolved

    sets = resolved.set_group.sets
    if set_index >= len(sets):
        raise AddressingError(
            f"Set index {set_index} out of bounds: set-group {set_group_index} of "
            f'"{resolved.exercise.name}" has {len(sets)} set(s)',
            segment=AddressSegment.SET,
        )
    resolved.set_index = set_index
    resolved.set = sets[set_index]
    return resolved


def find_exercise_by_name(
    program: WorkoutProgram,
    name: str,
    *,
    week_number: Optional[int] = None,
    day_number: Optional[int] = None,
) -> ResolvedTarget:
    """
    Find the first exercise whose name contains ``name`` (case-insensitive).

    The scan runs in week/day/exercise order, optionally restricted to one
    week and/or day. Several matches are not reported as ambiguous.

    Raises:
        AddressingError: With up to three similar names as suggestions.
    """
    needle = name.strip().lower()
    for week_index, week in enumerate(program.weeks):
        if week_number is not None and week.week_number != week_number:
            continue
        for day_index, day in enumerate(week.days):
            if day_number is not None and day.day_number != day_number:
                continue
            for exercise_index, exercise in enumerate(day.exercises):
                if needle in exercise.name.lower():
                    logger.debug(
                        f'Name "{name}" matched "{exercise.name}" at Week '
                        f"{week.week_number}, Day {day.day_number}, Exercise {exercise_index}"
                    )
                    return ResolvedTarget(
                        week=week,
                        week_index=week_index,
                        day=day,
                        day_index=day_index,
                        exercise=exercise,
                        exercise_index=exercise_index,
                    )

    message = f'Exercise "{name}" not found'
    if week_number is not None or day_number is not None:
        scope = [
            label
            for label in (
                f"Week {week_number}" if week_number is not None else None,
                f"Day {day_number}" if day_number is not None else None,
            )
            if label
        ]
        message = f"{message} in {', '.join(scope)}"
    suggestions = suggest_exercise_names(program, name)
    if suggestions:
        message = f"{message}. Did you mean: {', '.join(suggestions)}?"
    raise AddressingError(message, segment=AddressSegment.EXERCISE_NAME)


def suggest_exercise_names(
    program: WorkoutProgram,
    name: str,
    limit: int = SUGGESTION_LIMIT,
) -> List[str]:
    """Closest exercise names in the program, best first."""
    choices = list(dict.fromkeys(exercise.name for _, _, _, exercise in program.iter_exercises()))
    if not choices or not name.strip():
        return []
    matches = process.extract(
        name,
        choices,
        scorer=fuzz.token_set_ratio,
        processor=utils.default_process,
        limit=limit,
        score_cutoff=SUGGESTION_SCORE_CUTOFF,
    )
    return [choice for choice, _score, _index in matches]
