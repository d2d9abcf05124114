"""
Normalization of loosely shaped program documents.

Programs arrive from AI tool calls and from older stored documents with
missing metadata and inconsistent set-groups. ``normalize_program`` fills the
required metadata, coerces the difficulty, validates the structure and then
repairs every set-group so the engine can rely on its invariants.
"""

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Union

from pydantic import ValidationError

from domain.editing.errors import EditValidationError
from domain.editing.patcher import sync_weight_lbs
from domain.editing.units import lbs_to_kg, round_load
from domain.models import Difficulty, ProgramStatus, SetGroup, WorkoutProgram

logger = logging.getLogger(__name__)

TEMP_PROGRAM_ID = "temp-program"
DEFAULT_PROGRAM_NAME = "Untitled Program"
VALID_DIFFICULTIES = frozenset(d.value for d in Difficulty)
VALID_STATUSES = frozenset(s.value for s in ProgramStatus)


def _first_key(data: Dict[str, Any], *keys: str) -> str:
    """Return whichever spelling of a key is present (camelCase wins)."""
    for key in keys:
        if key in data:
            return key
    return keys[0]


def _fill(data: Dict[str, Any], camel: str, snake: str, value: Any) -> None:
    key = _first_key(data, camel, snake)
    if data.get(key) is None:
        data[key] = value


def normalize_program(data: Union[WorkoutProgram, Dict[str, Any]]) -> WorkoutProgram:
    """
    Build a valid ``WorkoutProgram`` from a raw document.

    - Missing ``id``/``status``/``goals``/timestamps get defaults.
    - An unknown ``difficulty`` becomes ADVANCED (case-insensitive match).
    - Set-groups are repaired, see ``repair_set_group``.

    The input is never modified; a ``WorkoutProgram`` is deep-copied and
    repaired.

    Raises:
        EditValidationError: If the document cannot be validated.
    """
    if isinstance(data, WorkoutProgram):
        program = data.model_copy(deep=True)
        repair_program(program)
        return program
    if not isinstance(data, dict):
        raise EditValidationError(
            f"Invalid program: expected an object, got {type(data).__name__}"
        )

    raw = copy.deepcopy(data)
    now = datetime.now(timezone.utc).isoformat()

    _fill(raw, "id", "id", TEMP_PROGRAM_ID)
    _fill(raw, "name", "name", DEFAULT_PROGRAM_NAME)
    _fill(raw, "goals", "goals", [])
    _fill(raw, "weeks", "weeks", [])
    _fill(raw, "createdAt", "created_at", now)
    _fill(raw, "updatedAt", "updated_at", now)

    difficulty = raw.get("difficulty")
    if isinstance(difficulty, str) and difficulty.upper() in VALID_DIFFICULTIES:
        raw["difficulty"] = difficulty.upper()
    else:
        raw["difficulty"] = Difficulty.ADVANCED.value

    status = raw.get("status")
    if isinstance(status, str) and status.upper() in VALID_STATUSES:
        raw["status"] = status.upper()
    else:
        raw["status"] = ProgramStatus.ACTIVE.value

    try:
        program = WorkoutProgram.model_validate(raw)
    except ValidationError as e:
        raise EditValidationError.from_pydantic(e, "program") from e

    repair_program(program)
    return program


def repair_program(program: WorkoutProgram) -> None:
    """Repair every set-group of the program in place."""
    repaired = 0
    for _week, _day, _index, exercise in program.iter_exercises():
        for group in exercise.set_groups:
            if repair_set_group(group):
                repaired += 1
    if repaired:
        logger.info(f"Repaired {repaired} set-group(s) in program {program.id}")


def repair_set_group(group: SetGroup) -> bool:
    """
    Restore the set-group invariants in place.

    - Without an explicit ``baseSet`` the first expanded set is used.
    - Without an explicit ``count`` the number of sets is used (or 1).
    - Empty ``sets`` are expanded from the base set; non-empty ``sets`` of the
      wrong length win over ``count`` so no per-set data is lost.
    - ``weightLbs`` is derived wherever ``weight`` is present without it, and
      ``weight`` from ``weightLbs`` for sets stored in pounds only.

    Returns:
        True if the group's shape was changed.
    """
    changed = False
    if "base_set" not in group.model_fields_set and group.sets:
        group.base_set = group.sets[0].model_copy(deep=True)
        changed = True
    if "count" not in group.model_fields_set:
        group.count = len(group.sets) or 1
        changed = True
    if not group.sets:
        group.resize(group.count)
        changed = True
    elif len(group.sets) != group.count:
        group.count = len(group.sets)
        changed = True

    for item in (group.base_set, *group.sets):
        if item.weight is None and item.weight_lbs is not None:
            item.weight = round_load(lbs_to_kg(item.weight_lbs))
        elif item.weight is not None and item.weight_lbs is None:
            sync_weight_lbs(item)
    return changed
