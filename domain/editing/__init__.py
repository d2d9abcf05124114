"""
In-memory editing engine for workout programs.

Modules:
- units: kg/lbs and weight/intensity conversions
- resolver: addresses -> references into a program
- patcher: field-level merges with derived-value rules
- mutator: add/remove/duplicate set-groups, exercises, progression patterns
- batch: ordered, all-or-nothing application of many operations
- normalizer: repair of loosely shaped program documents
- granular: caller-facing operations returning ``EditResult``
"""

from domain.editing.errors import (
    AddressingError,
    AddressSegment,
    EditError,
    EditingError,
    EditValidationError,
    ErrorKind,
    InvariantViolationError,
    ProgramNotFoundError,
)
from domain.editing.granular import (
    add_set_group,
    batch_update,
    copy_progression_pattern,
    duplicate_set_group,
    remove_set_group,
    update_day,
    update_exercise,
    update_individual_set,
    update_set_group,
    update_week,
)
from domain.editing.normalizer import normalize_program
from domain.editing.results import EditResult

__all__ = [
    # Results and errors
    "EditResult",
    "EditError",
    "ErrorKind",
    "AddressSegment",
    "EditingError",
    "AddressingError",
    "InvariantViolationError",
    "EditValidationError",
    "ProgramNotFoundError",
    # Operations
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
    "normalize_program",
]
