"""
Field patching.

Merges a validated partial change into a set, set-group, exercise, day or
week, in place. Callers own cloning: the caller-facing functions deep-copy the
program before handing entities to this module.

Load normalization rules for set-level changes:

1. Plain fields (reps, duration, rest, rpe, ranges, intensity) are copied.
2. ``weight`` with a one-rep-max recomputes ``intensity_percent``.
3. ``weight_lbs`` without ``weight`` is converted to kg, then as (2).
4. ``intensity_percent`` without a weight and with a one-rep-max derives
   ``weight`` and ``weight_lbs``.
5. ``weight`` and ``intensity_percent`` together without a one-rep-max are
   stored as given; they are not reconciled.

Every touched set with a ``weight`` finally has ``weight_lbs`` re-derived from
it. A set stored with pounds only keeps them.
"""

import logging
from typing import Any, Dict, Optional

from domain.editing.errors import EditValidationError
from domain.editing.units import (
    intensity_to_weight,
    kg_to_lbs,
    lbs_to_kg,
    round_load,
    weight_to_intensity,
)
from domain.models import (
    DayUpdate,
    Exercise,
    ExerciseSet,
    ExerciseUpdate,
    SetFieldUpdate,
    SetGroup,
    SetGroupUpdate,
    WeekUpdate,
    WorkoutDay,
    WorkoutWeek,
)

logger = logging.getLogger(__name__)

DIRECT_SET_FIELDS = (
    "reps",
    "reps_max",
    "duration",
    "weight_max",
    "intensity_percent",
    "intensity_percent_max",
    "rpe",
    "rpe_max",
    "rest",
)


def check_one_rep_max(one_rep_max: Optional[float]) -> Optional[float]:
    """Validate an optional one-rep-max supplied alongside a change."""
    if one_rep_max is None:
        return None
    if isinstance(one_rep_max, bool) or not isinstance(one_rep_max, (int, float)):
        raise EditValidationError(f"oneRepMax must be a number, got {one_rep_max!r}")
    if one_rep_max <= 0:
        raise EditValidationError(f"oneRepMax must be positive, got {one_rep_max}")
    return float(one_rep_max)


def apply_set_changes(
    target: ExerciseSet,
    changes: Dict[str, Any],
    one_rep_max: Optional[float] = None,
) -> None:
    """Apply a dict of set-field changes (python names) to one set."""
    for name in DIRECT_SET_FIELDS:
        if name in changes:
            setattr(target, name, changes[name])

    if "weight" in changes:
        _set_weight(target, changes["weight"], one_rep_max)
    elif "weight_lbs" in changes:
        lbs = changes["weight_lbs"]
        _set_weight(target, round_load(lbs_to_kg(lbs)) if lbs is not None else None, one_rep_max)
        target.weight_lbs = lbs
    elif (
        "intensity_percent" in changes
        and changes["intensity_percent"] is not None
        and one_rep_max is not None
    ):
        weight = round_load(intensity_to_weight(changes["intensity_percent"], one_rep_max))
        target.weight = weight

    sync_weight_lbs(target)


def sync_weight_lbs(target: ExerciseSet) -> None:
    """
    Re-derive pounds from kilograms so both describe the same load.

    Pounds that already convert to the stored kilograms are kept as written.
    A set without ``weight`` keeps its pounds; only an explicit ``weight``
    change to None clears them.
    """
    if target.weight is None:
        return
    if target.weight_lbs is not None and round_load(lbs_to_kg(target.weight_lbs)) == target.weight:
        return
    target.weight_lbs = round_load(kg_to_lbs(target.weight))


def _set_weight(target: ExerciseSet, weight: Optional[float], one_rep_max: Optional[float]) -> None:
    target.weight = weight
    if weight is None:
        target.weight_lbs = None
    elif one_rep_max is not None:
        target.intensity_percent = round_load(weight_to_intensity(weight, one_rep_max))


def apply_set_update(
    target: ExerciseSet,
    update: SetFieldUpdate,
    one_rep_max: Optional[float] = None,
) -> None:
    """Patch a single set."""
    apply_set_changes(target, update.changes(), one_rep_max)


def apply_set_group_update(
    group: SetGroup,
    update: SetGroupUpdate,
    one_rep_max: Optional[float] = None,
) -> None:
    """
    Patch a set-group.

    Field changes go to ``base_set`` and to every expanded set. A ``count``
    change then resizes ``sets``; new sets are copies of the updated base set.
    """
    changes = update.changes()
    count = changes.pop("count", None)

    if changes:
        apply_set_changes(group.base_set, changes, one_rep_max)
        for expanded in group.sets:
            apply_set_changes(expanded, changes, one_rep_max)

    if count is not None:
        previous = group.count
        group.resize(count)
        logger.debug(f"Resized set-group from {previous} to {count} sets")

    sync_weight_lbs(group.base_set)
    for expanded in group.sets:
        sync_weight_lbs(expanded)


def _merge_fields(entity, changes: Dict[str, Any]) -> None:
    for name, value in changes.items():
        if isinstance(value, list):
            value = list(value)
        setattr(entity, name, value)


def apply_exercise_update(exercise: Exercise, update: ExerciseUpdate) -> None:
    """Shallow merge of exercise-level fields."""
    _merge_fields(exercise, update.changes())


def apply_day_update(day: WorkoutDay, update: DayUpdate) -> None:
    """Shallow merge of day-level fields."""
    _merge_fields(day, update.changes())


def apply_week_update(week: WorkoutWeek, update: WeekUpdate) -> None:
    """Shallow merge of week-level fields."""
    _merge_fields(week, update.changes())
