"""
Result values returned by the caller-facing editing functions.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from domain.editing.errors import EditError
from domain.models import WorkoutProgram


@dataclass
class EditResult:
    """
    Tagged success/failure of an in-memory edit.

    On success ``program`` is the edited copy; the input program is never
    modified. On failure ``error`` explains why and ``program`` is None.
    """

    success: bool
    program: Optional[WorkoutProgram] = None
    error: Optional[EditError] = None
    message: Optional[str] = None
    modified_fields: List[str] = field(default_factory=list)
    modified_targets: List[str] = field(default_factory=list)

    @classmethod
    def ok(
        cls,
        program: WorkoutProgram,
        message: str,
        *,
        modified_fields: Optional[List[str]] = None,
        modified_targets: Optional[List[str]] = None,
    ) -> "EditResult":
        return cls(
            success=True,
            program=program,
            message=message,
            modified_fields=modified_fields or [],
            modified_targets=modified_targets or [],
        )

    @classmethod
    def failure(cls, error: EditError) -> "EditResult":
        return cls(success=False, error=error, message=error.message)
