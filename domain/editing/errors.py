"""
Error taxonomy of the editing engine.

Inside the engine, expected domain failures are raised as ``EditingError``
subclasses. The caller-facing functions catch them and return an
``EditResult`` carrying an ``EditError``, so callers branch on ``kind`` and
render ``message`` without handling exceptions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pydantic import ValidationError


class ErrorKind(str, Enum):
    """Machine-checkable discriminant of an editing failure."""

    ADDRESSING = "addressing"
    INVARIANT = "invariant"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"


class AddressSegment(str, Enum):
    """The part of an address that failed to resolve."""

    WEEK = "week"
    DAY = "day"
    EXERCISE = "exercise"
    SET_GROUP = "set_group"
    SET = "set"
    EXERCISE_NAME = "exercise_name"


@dataclass
class EditError:
    """A failed edit, ready to be shown to a user or an AI caller."""

    kind: ErrorKind
    message: str
    segment: Optional[AddressSegment] = None
    operation_index: Optional[int] = None
    details: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return self.message


class EditingError(Exception):
    """Base class for expected domain failures."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        segment: Optional[AddressSegment] = None,
        details: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.segment = segment
        self.details = details or []
        self.operation_index: Optional[int] = None

    def at_operation(self, index: int) -> "EditingError":
        """Tag the error with the batch position that raised it."""
        self.operation_index = index
        return self

    def to_error(self) -> EditError:
        message = self.message
        if self.operation_index is not None:
            message = f"Operation {self.operation_index} failed: {message}"
        return EditError(
            kind=self.kind,
            message=message,
            segment=self.segment,
            operation_index=self.operation_index,
            details=list(self.details),
        )


class AddressingError(EditingError):
    """Week, day, exercise, set-group or set could not be located."""

    kind = ErrorKind.ADDRESSING


class InvariantViolationError(EditingError):
    """The change would break a structural invariant."""

    kind = ErrorKind.INVARIANT


class EditValidationError(EditingError):
    """Malformed or out-of-range input, rejected before anything is merged."""

    kind = ErrorKind.VALIDATION

    @classmethod
    def from_pydantic(cls, exc: ValidationError, context: str) -> "EditValidationError":
        """Flatten a pydantic error into a readable message."""
        details = []
        for err in exc.errors():
            location = ".".join(str(part) for part in err.get("loc", ()))
            text = err.get("msg", "invalid value")
            details.append(f"{location}: {text}" if location else text)
        summary = details[0] if details else str(exc)
        if len(details) > 1:
            summary = f"{summary} (+{len(details) - 1} more)"
        return cls(f"Invalid {context}: {summary}", details=details)


class ProgramNotFoundError(EditingError):
    """No stored program exists for the requested ID."""

    kind = ErrorKind.NOT_FOUND
