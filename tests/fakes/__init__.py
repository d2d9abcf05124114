"""
Fake Store Implementations for Testing.

This package provides in-memory fake implementations of store interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- Fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeProgramStore, create_program_store

    # Direct instantiation
    store = FakeProgramStore()
    store.seed([{"id": "p1", "name": "Test", "weeks": []}])

    # Factory function with pre-populated data
    store = create_program_store(num_programs=2)
"""
from typing import Any, Dict, List, Optional
import uuid
from datetime import datetime, timezone

from tests.fakes.program_store import FakeProgramStore


# =============================================================================
# Factory Functions
# =============================================================================


def create_program_store(
    *,
    programs: Optional[List[Dict[str, Any]]] = None,
    user_id: str = "test_user",
    num_programs: int = 0,
) -> FakeProgramStore:
    """
    Create a FakeProgramStore with optional pre-populated programs.

    Args:
        programs: Explicit program documents to seed
        user_id: Owner of generated programs
        num_programs: Number of sample one-week programs to generate

    Returns:
        Pre-populated FakeProgramStore
    """
    store = FakeProgramStore()
    if programs:
        store.seed(programs)

    generated = []
    for i in range(num_programs):
        generated.append({
            "id": str(uuid.uuid4()),
            "user_id": user_id,
            "name": f"Test Program {i + 1}",
            "status": "ACTIVE",
            "difficulty": "INTERMEDIATE",
            "goals": ["strength"],
            "weeks": [
                {
                    "weekNumber": 1,
                    "days": [
                        {
                            "dayNumber": 1,
                            "name": "Full Body",
                            "exercises": [
                                {
                                    "name": "Back Squat",
                                    "setGroups": [
                                        {"count": 3, "baseSet": {"reps": 5, "weight": 100, "rest": 180}},
                                    ],
                                },
                            ],
                        },
                    ],
                },
            ],
            "created_at": datetime.now(timezone.utc).isoformat(),
        })
    if generated:
        store.seed(generated)

    return store


__all__ = [
    "FakeProgramStore",
    "create_program_store",
]
