"""
Structural mutations: operations that change the shape of an exercise or day
rather than field values.

Like the patcher, every function works in place on entities the caller has
already cloned.
"""

import logging
import uuid
from typing import List, Optional, Tuple

from domain.editing.errors import AddressingError, AddressSegment, InvariantViolationError
from domain.editing.patcher import apply_set_changes
from domain.editing.resolver import ResolvedTarget, find_exercise_by_name
from domain.models import (
    Exercise,
    ExerciseSet,
    NewExercise,
    NewSetGroup,
    SetFieldUpdate,
    SetGroup,
    WorkoutDay,
    WorkoutProgram,
)
from domain.models.program import DEFAULT_REST_SECONDS

logger = logging.getLogger(__name__)

DEFAULT_SET_GROUP_COUNT = 3
DEFAULT_REPS = 10


def new_id() -> str:
    return str(uuid.uuid4())


def build_base_set(
    base: Optional[SetFieldUpdate] = None,
    one_rep_max: Optional[float] = None,
) -> ExerciseSet:
    """
    Create a base set from optional overrides.

    Defaults: 90 s rest, 10 reps unless reps or a duration is given.
    """
    changes = base.changes() if base is not None else {}
    base_set = ExerciseSet(rest=DEFAULT_REST_SECONDS)
    if changes.get("reps") is None and changes.get("duration") is None:
        base_set.reps = DEFAULT_REPS
    apply_set_changes(base_set, changes, one_rep_max)
    return base_set


def build_set_group(spec: Optional[NewSetGroup] = None, one_rep_max: Optional[float] = None) -> SetGroup:
    """Create a set-group with a fresh id and ``count`` expanded sets."""
    spec = spec or NewSetGroup(count=DEFAULT_SET_GROUP_COUNT)
    group = SetGroup(
        id=new_id(),
        count=spec.count,
        base_set=build_base_set(spec.base_set, one_rep_max),
    )
    group.resize(spec.count)
    return group


def add_set_group(
    exercise: Exercise,
    spec: Optional[NewSetGroup] = None,
    one_rep_max: Optional[float] = None,
) -> int:
    """Append a new set-group to an exercise. Returns its index."""
    exercise.set_groups.append(build_set_group(spec, one_rep_max))
    return len(exercise.set_groups) - 1


def remove_set_group(exercise: Exercise, index: int) -> SetGroup:
    """
    Remove the set-group at ``index``.

    Raises:
        InvariantViolationError: If it is the exercise's only set-group.
    """
    if len(exercise.set_groups) <= 1:
        raise InvariantViolationError(
            f'Cannot remove the last set-group of "{exercise.name}": '
            "an exercise needs at least one"
        )
    _check_set_group_index(exercise, index)
    return exercise.set_groups.pop(index)


def duplicate_set_group(exercise: Exercise, index: int) -> int:
    """
    Deep-copy the set-group at ``index`` (sets included) and insert the copy
    right after it. Returns the copy's index.
    """
    _check_set_group_index(exercise, index)
    clone = exercise.set_groups[index].model_copy(deep=True)
    clone.id = new_id()
    exercise.set_groups.insert(index + 1, clone)
    return index + 1


def _check_set_group_index(exercise: Exercise, index: int) -> None:
    if not 0 <= index < len(exercise.set_groups):
        raise AddressingError(
            f"Set-group index {index} out of bounds: "
            f'"{exercise.name}" has {len(exercise.set_groups)} set-group(s)',
            segment=AddressSegment.SET_GROUP,
        )


def apply_count_pattern(exercise: Exercise, counts: List[int]) -> None:
    """
    Give ``exercise`` exactly ``len(counts)`` set-groups with these counts.

    Existing groups are resized, extra groups dropped, missing groups cloned
    from the last existing one so loads are kept.
    """
    if not counts:
        raise InvariantViolationError("A progression pattern needs at least one set-group")

    groups = exercise.set_groups
    if not groups:
        groups.append(build_set_group(NewSetGroup(count=counts[0])))
    del groups[len(counts):]
    while len(groups) < len(counts):
        clone = groups[-1].model_copy(deep=True)
        clone.id = new_id()
        groups.append(clone)
    for group, count in zip(groups, counts):
        group.resize(count)


def copy_progression_pattern(
    program: WorkoutProgram,
    source_name: str,
    target_name: str,
) -> Tuple[ResolvedTarget, ResolvedTarget, List[int]]:
    """
    Copy the set-count sequence of one exercise onto another.

    Both exercises are found by fuzzy name across the whole program (first
    occurrence each). Weights and other fields of the target are untouched.

    Returns:
        Tuple of (source, target, counts applied)
    """
    source = find_exercise_by_name(program, source_name)
    target = find_exercise_by_name(program, target_name)
    counts = source.exercise.set_counts
    if not counts:
        raise InvariantViolationError(
            f'"{source.exercise.name}" has no set-groups to copy'
        )
    apply_count_pattern(target.exercise, counts)
    logger.debug(
        f'Copied pattern {counts} from "{source.exercise.name}" to "{target.exercise.name}"'
    )
    return source, target, counts


def build_exercise(spec: NewExercise, one_rep_max: Optional[float] = None) -> Exercise:
    """Create an exercise from a ``NewExercise`` specification."""
    return Exercise(
        id=new_id(),
        name=spec.name.strip(),
        description=spec.description,
        notes=spec.notes,
        type_label=spec.type_label,
        rep_range=spec.rep_range,
        form_cues=list(spec.form_cues),
        equipment=list(spec.equipment),
        video_url=str(spec.video_url) if spec.video_url is not None else None,
        set_groups=[build_set_group(group, one_rep_max) for group in spec.as_set_groups()],
    )


def add_exercise(
    day: WorkoutDay,
    spec: NewExercise,
    index: Optional[int] = None,
    one_rep_max: Optional[float] = None,
) -> int:
    """
    Insert a new exercise into a day, at ``index`` or at the end.

    Returns the index of the inserted exercise.
    """
    if index is None:
        index = len(day.exercises)
    if not 0 <= index <= len(day.exercises):
        raise AddressingError(
            f"Exercise index {index} out of bounds for insertion: "
            f"Day {day.day_number} has {len(day.exercises)} exercise(s)",
            segment=AddressSegment.EXERCISE,
        )
    day.exercises.insert(index, build_exercise(spec, one_rep_max))
    return index


def remove_exercise(day: WorkoutDay, index: int) -> Exercise:
    """Remove and return the exercise at ``index``."""
    if not 0 <= index < len(day.exercises):
        raise AddressingError(
            f"Exercise index {index} out of bounds: "
            f"Day {day.day_number} has {len(day.exercises)} exercise(s)",
            segment=AddressSegment.EXERCISE,
        )
    return day.exercises.pop(index)
