"""
ApplyModification Use Case.

Diff-based editing of a stored program: the caller sends an action, a target
and a small changeset instead of the whole program.

Workflow:
1. Fetch the program via the store
2. Normalize it and resolve the target against the fresh copy
3. Apply exactly one change in place
4. Persist only the week sequence (all other columns stay untouched)
5. Return a summary string plus the program ID
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from application.ports import ProgramStore
from domain.editing import mutator
from domain.editing.batch import with_default_set_group
from domain.editing.errors import EditError, EditingError, EditValidationError, ProgramNotFoundError
from domain.editing.granular import TargetInput, parse_payload, parse_target_input
from domain.editing.normalizer import normalize_program
from domain.editing.patcher import apply_exercise_update, apply_set_group_update, check_one_rep_max
from domain.editing.resolver import resolve_target
from domain.models import (
    ExerciseNameTarget,
    ExerciseUpdate,
    NewExercise,
    NewSetGroup,
    SessionTarget,
    SetGroupUpdate,
    Target,
    WorkoutDay,
    WorkoutProgram,
)
from domain.models.updates import ChangeModel

logger = logging.getLogger(__name__)


def _require_changes(update: ChangeModel, context: str) -> None:
    if not update.changes():
        raise EditValidationError(f"Invalid {context}: no fields to change")


class ModificationAction(str, Enum):
    """Changes the diff-based path supports."""

    UPDATE_SETGROUP = "update_setgroup"
    ADD_SETGROUP = "add_setgroup"
    REMOVE_SETGROUP = "remove_setgroup"
    UPDATE_EXERCISE = "update_exercise"
    ADD_EXERCISE = "add_exercise"
    REMOVE_EXERCISE = "remove_exercise"


@dataclass
class ApplyModificationResult:
    """Result of the ApplyModification use case execution."""

    success: bool
    program_id: str
    message: Optional[str] = None
    error: Optional[EditError] = None


class ApplyModificationUseCase:
    """
    Use case for applying one change to a stored program.

    Domain failures (unknown program, bad address, invariant, validation)
    come back as an unsuccessful result. ``PersistenceError`` from the store
    propagates to the caller.

    Usage:
        >>> use_case = ApplyModificationUseCase(program_store=store)
        >>> result = use_case.execute(
        ...     program_id="p-123",
        ...     action="update_setgroup",
        ...     target={"exerciseName": "bench", "weekNumber": 1},
        ...     changes={"reps": 6},
        ... )
        >>> print(result.message)
    """

    def __init__(self, program_store: ProgramStore) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            program_store: Store used to fetch the program and persist its weeks
        """
        self._program_store = program_store

    def execute(
        self,
        program_id: str,
        action: Union[ModificationAction, str],
        target: TargetInput,
        changes: Optional[Dict[str, Any]] = None,
        one_rep_max: Optional[float] = None,
    ) -> ApplyModificationResult:
        """
        Execute the diff-based modification workflow.

        Args:
            program_id: ID of the stored program
            action: One of ``ModificationAction``
            target: Index-based or exercise-name target
            changes: Changeset (update actions) or new-entity payload (add actions)
            one_rep_max: Optional 1RM used to derive weight/intensity

        Returns:
            ApplyModificationResult with a summary message or an error

        Raises:
            PersistenceError: If the store fails to fetch or persist
        """
        try:
            action = self._parse_action(action)
            parsed_target = parse_target_input(target)
            orm = check_one_rep_max(one_rep_max)

            # Step 1: Fetch program via store
            document = self._program_store.fetch_program_by_id(program_id)
            if document is None:
                raise ProgramNotFoundError(f"Program {program_id} not found")

            # Steps 2-3: Resolve and apply in place
            program = normalize_program(document)
            message = self._apply(program, action, parsed_target, changes, orm)

            # Step 4: Persist the week sequence only
            updated = self._program_store.persist_weeks(program_id, program.weeks_payload())
            if updated is None:
                raise ProgramNotFoundError(f"Program {program_id} not found")

        except EditingError as e:
            error = e.to_error()
            logger.warning(f"Modification of program {program_id} rejected: {error.message}")
            return ApplyModificationResult(
                success=False,
                program_id=program_id,
                message=error.message,
                error=error,
            )

        logger.info(f"Modified program {program_id}: {message}")
        return ApplyModificationResult(success=True, program_id=program_id, message=message)

    @staticmethod
    def _parse_action(action: Union[ModificationAction, str]) -> ModificationAction:
        try:
            return ModificationAction(action)
        except ValueError:
            valid = ", ".join(a.value for a in ModificationAction)
            raise EditValidationError(f"Unknown action '{action}'. Valid actions: {valid}")

    def _apply(
        self,
        program: WorkoutProgram,
        action: ModificationAction,
        target: Target,
        changes: Optional[Dict[str, Any]],
        one_rep_max: Optional[float],
    ) -> str:
        if action == ModificationAction.UPDATE_SETGROUP:
            update = parse_payload(SetGroupUpdate, changes, "set-group update")
            _require_changes(update, "set-group update")
            resolved = resolve_target(program, with_default_set_group(target))
            resolved.require_exercise()
            apply_set_group_update(resolved.require_set_group(), update, one_rep_max)
            return f"Updated {resolved.describe()} ({', '.join(update.changed_fields())})"

        if action == ModificationAction.ADD_SETGROUP:
            spec = parse_payload(NewSetGroup, changes, "set-group")
            resolved = resolve_target(program, target)
            index = mutator.add_set_group(resolved.require_exercise(), spec, one_rep_max)
            return f"Added SetGroup {index} ({spec.count} sets) to {resolved.describe()}"

        if action == ModificationAction.REMOVE_SETGROUP:
            if target.set_group_index is None:
                raise EditValidationError("Target must include setGroupIndex")
            resolved = resolve_target(program, target)
            location = resolved.describe()
            mutator.remove_set_group(resolved.require_exercise(), target.set_group_index)
            return f"Removed {location}"

        if action == ModificationAction.UPDATE_EXERCISE:
            update = parse_payload(ExerciseUpdate, changes, "exercise update")
            _require_changes(update, "exercise update")
            resolved = resolve_target(program, target)
            exercise = resolved.require_exercise()
            location = resolved.describe()
            apply_exercise_update(exercise, update)
            return f"Updated {location} ({', '.join(update.changed_fields())})"

        if action == ModificationAction.ADD_EXERCISE:
            spec = parse_payload(NewExercise, changes, "exercise")
            day, position = self._insertion_point(program, target)
            index = mutator.add_exercise(day, spec, position, one_rep_max)
            return f'Added exercise "{spec.name.strip()}" at Day {day.day_number}, Exercise {index}'

        # REMOVE_EXERCISE
        resolved = resolve_target(program, target)
        resolved.require_exercise()
        removed = mutator.remove_exercise(resolved.day, resolved.exercise_index)
        return (
            f'Removed exercise "{removed.name}" from Week {resolved.week.week_number}, '
            f"Day {resolved.day.day_number}"
        )

    @staticmethod
    def _insertion_point(program: WorkoutProgram, target: Target) -> Tuple[WorkoutDay, Optional[int]]:
        """
        Day and position for a new exercise.

        An index target inserts at ``exerciseIndex`` (appends when omitted);
        a name target inserts right after the matched exercise.
        """
        if isinstance(target, ExerciseNameTarget):
            resolved = resolve_target(
                program, target.model_copy(update={"set_group_index": None, "set_index": None})
            )
            return resolved.day, resolved.exercise_index + 1

        day_target = SessionTarget(week_number=target.week_number, day_number=target.day_number)
        resolved = resolve_target(program, day_target)
        return resolved.require_day(), target.exercise_index
