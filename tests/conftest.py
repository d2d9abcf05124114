"""
Shared fixtures for the workout program editor tests.

Program documents are plain camelCase dicts, the shape a tool-calling layer
or the programs table hands to the engine.
"""

import copy

import pytest

from tests.fakes import FakeProgramStore


def _sets(count, **fields):
    base = {"rest": 90, **fields}
    return {"count": count, "baseSet": dict(base), "sets": [dict(base) for _ in range(count)]}


BENCH_PROGRAM = {
    "id": "program-bench",
    "userId": "user-1",
    "name": "Bench Specialization",
    "difficulty": "INTERMEDIATE",
    "status": "ACTIVE",
    "goals": ["strength"],
    "weeks": [
        {
            "weekNumber": 1,
            "days": [
                {
                    "dayNumber": 1,
                    "name": "Push",
                    "exercises": [
                        {
                            "id": "ex-bench",
                            "name": "Bench Press",
                            "setGroups": [
                                {"id": "sg-bench-0", **_sets(4, reps=8, weight=60)},
                            ],
                        },
                    ],
                },
            ],
        },
    ],
}

BLOCK_PROGRAM = {
    "id": "program-block",
    "userId": "user-1",
    "name": "Lower Body Block",
    "description": "Two-week squat block",
    "difficulty": "ADVANCED",
    "status": "ACTIVE",
    "goals": ["strength", "hypertrophy"],
    "coachNotes": "kept verbatim",
    # Stored out of order on purpose: weeks are addressed by number.
    "weeks": [
        {
            "weekNumber": 2,
            "focus": "Intensity",
            "days": [
                {
                    "dayNumber": 1,
                    "name": "Squat Day",
                    "exercises": [
                        {
                            "id": "ex-w2-squat",
                            "name": "Box Squat",
                            "setGroups": [{"id": "sg-w2-squat", **_sets(3, reps=3, weight=140)}],
                        },
                    ],
                },
            ],
        },
        {
            "weekNumber": 1,
            "focus": "Volume",
            "days": [
                {
                    "dayNumber": 1,
                    "name": "Squat Day",
                    "exercises": [
                        {
                            "id": "ex-squat",
                            "name": "Back Squat",
                            "setGroups": [
                                {"id": "sg-squat-0", **_sets(5, reps=5, weight=120)},
                                {"id": "sg-squat-1", **_sets(5, reps=5, weight=125)},
                                {"id": "sg-squat-2", **_sets(3, reps=3, weight=130)},
                            ],
                        },
                        {
                            "id": "ex-leg-press",
                            "name": "Leg Press",
                            "setGroups": [{"id": "sg-lp-0", **_sets(2, reps=12, weight=200)}],
                        },
                    ],
                },
                {
                    "dayNumber": 3,
                    "name": "Accessory Day",
                    "exercises": [
                        {
                            "id": "ex-rdl",
                            "name": "Romanian Deadlift",
                            "setGroups": [{"id": "sg-rdl-0", **_sets(3, reps=8, weight=90)}],
                        },
                        {
                            "id": "ex-curl",
                            "name": "Leg Curl",
                            "setGroups": [{"id": "sg-curl-0", **_sets(3, reps=12, weight=40)}],
                        },
                    ],
                },
            ],
        },
    ],
}


POUNDS_PROGRAM = {
    "id": "program-pounds",
    "name": "Garage Gym",
    "weeks": [
        {
            "weekNumber": 1,
            "days": [
                {
                    "dayNumber": 1,
                    "exercises": [
                        {
                            "id": "ex-row",
                            "name": "Barbell Row",
                            # Logged in pounds only, sets not expanded yet.
                            "setGroups": [{"count": 2, "baseSet": {"reps": 5, "weightLbs": 135, "rest": 90}}],
                        },
                    ],
                },
            ],
        },
    ],
}


@pytest.fixture
def bench_program():
    """One week, one day, Bench Press with a single 4 x 8 @ 60 kg set-group."""
    return copy.deepcopy(BENCH_PROGRAM)


@pytest.fixture
def block_program():
    """Two weeks stored as [2, 1]; Week 1 squat counts are [5, 5, 3]."""
    return copy.deepcopy(BLOCK_PROGRAM)


@pytest.fixture
def pounds_program():
    """Barbell Row 2 x 5 stored with weightLbs 135 and no kg weight."""
    return copy.deepcopy(POUNDS_PROGRAM)


@pytest.fixture
def program_store(block_program, bench_program, pounds_program):
    """FakeProgramStore seeded with the sample programs."""
    store = FakeProgramStore()
    store.seed([block_program, bench_program, pounds_program])
    return store
