"""
Batch application of heterogeneous operations.

``apply_operations`` runs every operation in order against one working copy
and stops at the first failure, tagging the error with the operation index.
Atomicity comes from the caller passing a clone and discarding it on failure;
there is no transactional machinery and no index rebasing between operations.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError

from domain.editing.errors import EditingError, EditValidationError
from domain.editing.mutator import add_set_group, duplicate_set_group, remove_set_group
from domain.editing.patcher import (
    apply_day_update,
    apply_exercise_update,
    apply_set_group_update,
    apply_set_update,
    apply_week_update,
)
from domain.editing.resolver import resolve_target
from domain.models import BatchOperation, SessionTarget, Target, WorkoutProgram

logger = logging.getLogger(__name__)


def with_default_set_group(target: Target) -> Target:
    """Address set-group 0 when a set-group level target omits the index."""
    if target.set_group_index is not None:
        return target
    if isinstance(target, SessionTarget) and target.exercise_index is None:
        return target
    return target.model_copy(update={"set_group_index": 0})


def apply_operation(
    program: WorkoutProgram,
    operation: BatchOperation,
    one_rep_max: Optional[float] = None,
) -> str:
    """
    Apply one batch operation in place.

    Returns:
        A label describing what was modified.
    """
    kind = operation.kind
    target = operation.target

    if kind == "week_update":
        resolved = resolve_target(program, target)
        apply_week_update(resolved.week, operation.week_update)
        return f"Week {resolved.week.week_number}"

    if kind == "day_update":
        resolved = resolve_target(program, target)
        apply_day_update(resolved.require_day(), operation.day_update)
        return f"Week {resolved.week.week_number}, Day {resolved.day.day_number}"

    if kind == "exercise_update":
        resolved = resolve_target(program, target)
        apply_exercise_update(resolved.require_exercise(), operation.exercise_update)
        return resolved.describe()

    if kind == "set_group_update":
        resolved = resolve_target(program, with_default_set_group(target))
        resolved.require_exercise()
        apply_set_group_update(resolved.require_set_group(), operation.set_group_update, one_rep_max)
        return resolved.describe()

    if kind == "set_update":
        resolved = resolve_target(program, target)
        apply_set_update(resolved.require_set(), operation.set_update, one_rep_max)
        return resolved.describe()

    if kind == "add_set_group":
        resolved = resolve_target(program, target)
        index = add_set_group(resolved.require_exercise(), operation.add_set_group, one_rep_max)
        return f"{resolved.describe()}, new SetGroup {index}"

    if kind == "remove_set_group":
        resolved = resolve_target(program, target)
        remove_set_group(resolved.require_exercise(), _required_set_group_index(target))
        return f"{resolved.describe()} (removed)"

    if kind == "duplicate_set_group":
        resolved = resolve_target(program, target)
        index = duplicate_set_group(resolved.require_exercise(), _required_set_group_index(target))
        return f"{resolved.describe()}, copy at SetGroup {index}"

    raise EditValidationError(f"Unsupported operation: {kind}")


def _required_set_group_index(target: Target) -> int:
    if target.set_group_index is None:
        raise EditValidationError("Target must include setGroupIndex")
    return target.set_group_index


def parse_operation(raw: Union[BatchOperation, Dict[str, Any]]) -> BatchOperation:
    if isinstance(raw, BatchOperation):
        return raw
    try:
        return BatchOperation.model_validate(raw)
    except ValidationError as e:
        raise EditValidationError.from_pydantic(e, "operation") from e


def apply_operations(
    program: WorkoutProgram,
    operations: Sequence[Union[BatchOperation, Dict[str, Any]]],
    one_rep_max: Optional[float] = None,
) -> List[str]:
    """
    Apply operations in array order, in place.

    Each operation is validated and its target resolved right before it is
    applied, so it sees the effect of every earlier operation.

    Raises:
        EditingError: From the first failing operation, with
            ``operation_index`` set.
    """
    if not operations:
        raise EditValidationError("A batch needs at least one operation")

    labels = []
    for index, raw in enumerate(operations):
        try:
            operation = parse_operation(raw)
            labels.append(apply_operation(program, operation, one_rep_max))
        except EditingError as e:
            logger.debug(f"Batch operation {index} failed: {e.message}")
            raise e.at_operation(index)
    return labels
