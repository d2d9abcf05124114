"""
Caller-facing granular editing operations.

One function per operation. Each takes a program (model or raw document),
validates its other inputs, works on a deep copy and returns an
``EditResult``. Expected failures (bad address, invariant, validation) are
returned, never raised.

Usage:
    >>> from domain.editing import granular

    >>> result = granular.update_set_group(
    ...     program,
    ...     {"weekNumber": 1, "dayNumber": 1, "exerciseIndex": 0, "setGroupIndex": 0},
    ...     {"count": 5, "reps": 6},
    ... )
    >>> if result.success:
    ...     program = result.program
    ... else:
    ...     print(result.error.message)
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from domain.editing.batch import apply_operations, with_default_set_group
from domain.editing.errors import EditingError, EditValidationError
from domain.editing.mutator import (
    add_set_group as _add_set_group,
    copy_progression_pattern as _copy_progression_pattern,
    duplicate_set_group as _duplicate_set_group,
    remove_set_group as _remove_set_group,
)
from domain.editing.normalizer import normalize_program
from domain.editing.patcher import (
    apply_day_update,
    apply_exercise_update,
    apply_set_group_update,
    apply_set_update,
    apply_week_update,
    check_one_rep_max,
)
from domain.editing.resolver import resolve_target
from domain.editing.results import EditResult
from domain.models import (
    BatchOperation,
    DayUpdate,
    ExerciseUpdate,
    NewSetGroup,
    SessionTarget,
    SetFieldUpdate,
    SetGroupUpdate,
    Target,
    WeekUpdate,
    WorkoutProgram,
    parse_target,
)

logger = logging.getLogger(__name__)

ProgramInput = Union[WorkoutProgram, Dict[str, Any]]
TargetInput = Union[Target, Dict[str, Any]]
M = TypeVar("M", bound=BaseModel)


# =============================================================================
# Boundary helpers
# =============================================================================


def parse_payload(model_cls: Type[M], raw: Union[M, Dict[str, Any], None], context: str) -> M:
    """Validate a change payload, turning pydantic errors into validation errors."""
    if isinstance(raw, model_cls):
        return raw
    try:
        return model_cls.model_validate(raw if raw is not None else {})
    except ValidationError as e:
        raise EditValidationError.from_pydantic(e, context) from e


def parse_target_input(raw: TargetInput) -> Target:
    """Validate a target given as a model or a dict."""
    if not isinstance(raw, (dict, BaseModel)):
        raise EditValidationError(f"Invalid target: expected an object, got {type(raw).__name__}")
    try:
        return parse_target(raw)
    except ValidationError as e:
        raise EditValidationError.from_pydantic(e, "target") from e


def _run(action: str, program: ProgramInput, edit: Callable[[WorkoutProgram], EditResult]) -> EditResult:
    try:
        working = normalize_program(program)
        result = edit(working)
    except EditingError as e:
        error = e.to_error()
        logger.warning(f"{action} rejected: {error.message}")
        return EditResult.failure(error)

    logger.info(f"{action}: {result.message}")
    return result


# =============================================================================
# Field updates
# =============================================================================


def update_set_group(
    program: ProgramInput,
    target: TargetInput,
    update: Union[SetGroupUpdate, Dict[str, Any]],
    one_rep_max: Optional[float] = None,
) -> EditResult:
    """
    Update a set-group: set count, reps, load, intensity, RPE, rest.

    ``setGroupIndex`` defaults to 0. With ``one_rep_max`` weight and intensity
    are derived from each other; pounds always follow kilograms.
    """

    def edit(working: WorkoutProgram) -> EditResult:
        parsed_target = parse_target_input(target)
        changes = parse_payload(SetGroupUpdate, update, "set-group update")
        orm = check_one_rep_max(one_rep_max)

        resolved = resolve_target(working, with_default_set_group(parsed_target))
        resolved.require_exercise()
        apply_set_group_update(resolved.require_set_group(), changes, orm)
        return EditResult.ok(
            working,
            f"Updated {resolved.describe()}",
            modified_fields=changes.changed_fields(),
        )

    return _run("update_set_group", program, edit)


def update_individual_set(
    program: ProgramInput,
    target: TargetInput,
    update: Union[SetFieldUpdate, Dict[str, Any]],
    one_rep_max: Optional[float] = None,
) -> EditResult:
    """
    Update one set inside a set-group (pyramids, drop sets, back-off sets).

    The target must include ``setGroupIndex`` and ``setIndex``. The group's
    base set and count are left alone.
    """

    def edit(working: WorkoutProgram) -> EditResult:
        parsed_target = parse_target_input(target)
        changes = parse_payload(SetFieldUpdate, update, "set update")
        orm = check_one_rep_max(one_rep_max)

        resolved = resolve_target(working, parsed_target)
        resolved.require_exercise()
        apply_set_update(resolved.require_set(), changes, orm)
        return EditResult.ok(
            working,
            f"Updated {resolved.describe()}",
            modified_fields=changes.changed_fields(),
        )

    return _run("update_individual_set", program, edit)


def update_exercise(
    program: ProgramInput,
    target: TargetInput,
    update: Union[ExerciseUpdate, Dict[str, Any]],
) -> EditResult:
    """Update exercise-level fields (name, notes, cues, equipment, video)."""

    def edit(working: WorkoutProgram) -> EditResult:
        parsed_target = parse_target_input(target)
        changes = parse_payload(ExerciseUpdate, update, "exercise update")

        resolved = resolve_target(working, parsed_target)
        exercise = resolved.require_exercise()
        location = resolved.describe()
        apply_exercise_update(exercise, changes)
        return EditResult.ok(
            working,
            f"Updated {location}",
            modified_fields=changes.changed_fields(),
        )

    return _run("update_exercise", program, edit)


def update_day(
    program: ProgramInput,
    week_number: int,
    day_number: int,
    update: Union[DayUpdate, Dict[str, Any]],
) -> EditResult:
    """Update day-level fields (name, notes, warmup, cooldown, duration, muscles)."""

    def edit(working: WorkoutProgram) -> EditResult:
        parsed_target = parse_payload(
            SessionTarget, {"week_number": week_number, "day_number": day_number}, "target"
        )
        changes = parse_payload(DayUpdate, update, "day update")

        resolved = resolve_target(working, parsed_target)
        apply_day_update(resolved.require_day(), changes)
        return EditResult.ok(
            working,
            f"Updated Day {day_number} in Week {week_number}",
            modified_fields=changes.changed_fields(),
        )

    return _run("update_day", program, edit)


def update_week(
    program: ProgramInput,
    week_number: int,
    update: Union[WeekUpdate, Dict[str, Any]],
) -> EditResult:
    """Update week-level fields (focus, notes)."""

    def edit(working: WorkoutProgram) -> EditResult:
        parsed_target = parse_payload(SessionTarget, {"week_number": week_number}, "target")
        changes = parse_payload(WeekUpdate, update, "week update")

        resolved = resolve_target(working, parsed_target)
        apply_week_update(resolved.week, changes)
        return EditResult.ok(
            working,
            f"Updated Week {week_number}",
            modified_fields=changes.changed_fields(),
        )

    return _run("update_week", program, edit)


# =============================================================================
# Batch
# =============================================================================


def batch_update(
    program: ProgramInput,
    operations: Sequence[Union[BatchOperation, Dict[str, Any]]],
    one_rep_max: Optional[float] = None,
) -> EditResult:
    """
    Apply several operations atomically.

    All operations run in order on one copy of the program. If any fails the
    copy is discarded and the error names the failing operation's index;
    the caller's program is never touched.
    """

    def edit(working: WorkoutProgram) -> EditResult:
        orm = check_one_rep_max(one_rep_max)
        labels = apply_operations(working, operations, orm)
        return EditResult.ok(
            working,
            f"Applied {len(labels)} updates successfully",
            modified_targets=labels,
        )

    return _run("batch_update", program, edit)


# =============================================================================
# Structural operations
# =============================================================================


def add_set_group(
    program: ProgramInput,
    target: TargetInput,
    set_group: Union[NewSetGroup, Dict[str, Any], None] = None,
    one_rep_max: Optional[float] = None,
) -> EditResult:
    """Append a set-group (default 3 sets, 10 reps, 90 s rest) to an exercise."""

    def edit(working: WorkoutProgram) -> EditResult:
        parsed_target = parse_target_input(target)
        spec = parse_payload(NewSetGroup, set_group, "set-group")
        orm = check_one_rep_max(one_rep_max)

        resolved = resolve_target(working, parsed_target)
        index = _add_set_group(resolved.require_exercise(), spec, orm)
        return EditResult.ok(
            working,
            f"Added SetGroup {index} ({spec.count} sets) to {resolved.describe()}",
        )

    return _run("add_set_group", program, edit)


def remove_set_group(program: ProgramInput, target: TargetInput) -> EditResult:
    """Remove a set-group. The last remaining set-group cannot be removed."""

    def edit(working: WorkoutProgram) -> EditResult:
        parsed_target = parse_target_input(target)
        if parsed_target.set_group_index is None:
            raise EditValidationError("Target must include setGroupIndex")

        resolved = resolve_target(working, parsed_target)
        location = resolved.describe()
        _remove_set_group(resolved.require_exercise(), parsed_target.set_group_index)
        return EditResult.ok(working, f"Removed {location}")

    return _run("remove_set_group", program, edit)


def duplicate_set_group(program: ProgramInput, target: TargetInput) -> EditResult:
    """Copy a set-group (with all its sets) right after the original."""

    def edit(working: WorkoutProgram) -> EditResult:
        parsed_target = parse_target_input(target)
        if parsed_target.set_group_index is None:
            raise EditValidationError("Target must include setGroupIndex")

        resolved = resolve_target(working, parsed_target)
        location = resolved.describe()
        index = _duplicate_set_group(resolved.require_exercise(), parsed_target.set_group_index)
        return EditResult.ok(working, f"Duplicated {location} as SetGroup {index}")

    return _run("duplicate_set_group", program, edit)


def copy_progression_pattern(
    program: ProgramInput,
    source_exercise_name: str,
    target_exercise_name: str,
) -> EditResult:
    """
    Give the target exercise the same sequence of set counts as the source.

    Both names are matched fuzzily across the whole program (first
    occurrence). The target's loads are not changed.
    """

    def edit(working: WorkoutProgram) -> EditResult:
        for label, name in (("source", source_exercise_name), ("target", target_exercise_name)):
            if not isinstance(name, str) or not name.strip():
                raise EditValidationError(f"A {label} exercise name is required")

        source, target, counts = _copy_progression_pattern(
            working, source_exercise_name, target_exercise_name
        )
        return EditResult.ok(
            working,
            f'Copied progression pattern {counts} from "{source.exercise.name}" '
            f'to "{target.exercise.name}"',
            modified_targets=[target.describe()],
        )

    return _run("copy_progression_pattern", program, edit)


__all__: List[str] = [
    "update_set_group",
    "update_individual_set",
    "update_exercise",
    "update_day",
    "update_week",
    "batch_update",
    "add_set_group",
    "remove_set_group",
    "duplicate_set_group",
    "copy_progression_pattern",
    "parse_payload",
    "parse_target_input",
]
