"""
Application Use Cases for the workout program editor.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and store ports
- Dependencies are injected via constructors for testability
- Use cases return result dataclasses, not API responses

Usage:
    from application.use_cases import ApplyModificationUseCase

    use_case = ApplyModificationUseCase(program_store=store)
    result = use_case.execute(
        program_id="p-123",
        action="add_setgroup",
        target={"weekNumber": 1, "dayNumber": 2, "exerciseIndex": 0},
        changes={"count": 2, "baseSet": {"reps": 12}},
    )
"""

from application.use_cases.apply_modification import (
    ApplyModificationResult,
    ApplyModificationUseCase,
    ModificationAction,
)

__all__ = [
    "ApplyModificationUseCase",
    "ApplyModificationResult",
    "ModificationAction",
]
