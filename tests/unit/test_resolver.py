"""
Unit tests for domain/editing/resolver.py

Tests for:
- Resolving numeric targets by week/day number and positional indices
- Bounds errors naming the failing segment
- Name-based lookup (substring, case-insensitive, first match, scoping)
- Did-you-mean suggestions
"""

import pytest

from domain.editing.errors import AddressingError, AddressSegment, EditValidationError
from domain.editing.normalizer import normalize_program
from domain.editing.resolver import (
    find_exercise_by_name,
    resolve_target,
    suggest_exercise_names,
)
from domain.models import ExerciseNameTarget, SessionTarget

pytestmark = pytest.mark.unit


@pytest.fixture
def program(block_program):
    return normalize_program(block_program)


class TestResolveSessionTarget:
    """Tests for numeric addressing."""

    def test_week_matched_by_number_not_position(self, program):
        """Weeks stored as [2, 1]: weekNumber 1 lives at index 1."""
        resolved = resolve_target(program, SessionTarget(week_number=1))
        assert resolved.week_index == 1
        assert resolved.week.week_number == 1
        assert resolved.day is None

    def test_day_matched_by_number(self, program):
        resolved = resolve_target(program, SessionTarget(week_number=1, day_number=3))
        assert resolved.day_index == 1
        assert resolved.day.name == "Accessory Day"

    def test_full_depth(self, program):
        target = SessionTarget(
            week_number=1, day_number=1, exercise_index=0, set_group_index=2, set_index=1
        )
        resolved = resolve_target(program, target)
        assert resolved.exercise.name == "Back Squat"
        assert resolved.set_group.id == "sg-squat-2"
        assert resolved.set is resolved.set_group.sets[1]
        assert resolved.set.weight == 130

    def test_resolution_returns_live_references(self, program):
        target = SessionTarget(week_number=1, day_number=1, exercise_index=1)
        resolved = resolve_target(program, target)
        assert resolved.exercise is program.weeks[1].days[0].exercises[1]

    def test_missing_week(self, program):
        with pytest.raises(AddressingError, match="Week 7 not found") as exc_info:
            resolve_target(program, SessionTarget(week_number=7))
        assert exc_info.value.segment == AddressSegment.WEEK

    def test_missing_day(self, program):
        with pytest.raises(AddressingError, match="Day 2 not found in Week 1") as exc_info:
            resolve_target(program, SessionTarget(week_number=1, day_number=2))
        assert exc_info.value.segment == AddressSegment.DAY

    def test_exercise_out_of_bounds(self, program):
        target = SessionTarget(week_number=1, day_number=1, exercise_index=5)
        with pytest.raises(AddressingError, match="Exercise index 5 out of bounds") as exc_info:
            resolve_target(program, target)
        assert exc_info.value.segment == AddressSegment.EXERCISE
        assert "2 exercise(s)" in exc_info.value.message

    def test_set_group_out_of_bounds(self, program):
        target = SessionTarget(week_number=1, day_number=1, exercise_index=1, set_group_index=1)
        with pytest.raises(AddressingError, match="Set-group index 1 out of bounds") as exc_info:
            resolve_target(program, target)
        assert exc_info.value.segment == AddressSegment.SET_GROUP

    def test_set_out_of_bounds(self, program):
        target = SessionTarget(
            week_number=1, day_number=1, exercise_index=0, set_group_index=2, set_index=3
        )
        with pytest.raises(AddressingError, match="Set index 3 out of bounds") as exc_info:
            resolve_target(program, target)
        assert exc_info.value.segment == AddressSegment.SET

    def test_resolution_does_not_mutate(self, program):
        before = program.model_dump()
        resolve_target(program, SessionTarget(week_number=1, day_number=1, exercise_index=0))
        assert program.model_dump() == before


class TestResolvedTargetRequirements:
    """Tests for the require_* helpers."""

    def test_require_exercise_on_day_target(self, program):
        resolved = resolve_target(program, SessionTarget(week_number=1, day_number=1))
        with pytest.raises(EditValidationError, match="exerciseIndex"):
            resolved.require_exercise()

    def test_require_set_on_set_group_target(self, program):
        target = SessionTarget(week_number=1, day_number=1, exercise_index=0, set_group_index=0)
        resolved = resolve_target(program, target)
        with pytest.raises(EditValidationError, match="setIndex"):
            resolved.require_set()

    def test_describe(self, program):
        target = SessionTarget(week_number=1, day_number=1, exercise_index=0, set_group_index=1)
        resolved = resolve_target(program, target)
        assert resolved.describe() == 'Week 1, Day 1, Exercise 0 "Back Squat", SetGroup 1'


class TestFindExerciseByName:
    """Tests for name-based addressing."""

    def test_case_insensitive_substring(self, program):
        resolved = find_exercise_by_name(program, "leg PRESS")
        assert resolved.exercise.name == "Leg Press"
        assert resolved.exercise_index == 1

    def test_first_match_in_document_order(self, program):
        """"Squat" matches Box Squat (week 2, stored first) before Back Squat."""
        resolved = find_exercise_by_name(program, "squat")
        assert resolved.week.week_number == 2
        assert resolved.exercise.id == "ex-w2-squat"

    def test_partial_name_matches_first_candidate(self, program):
        """"Leg" matches Leg Press before Leg Curl."""
        resolved = find_exercise_by_name(program, "leg")
        assert resolved.exercise.name == "Leg Press"

    def test_scoped_by_week(self, program):
        resolved = find_exercise_by_name(program, "squat", week_number=1)
        assert resolved.exercise.id == "ex-squat"

    def test_scoped_by_day(self, program):
        resolved = find_exercise_by_name(program, "leg", week_number=1, day_number=3)
        assert resolved.exercise.name == "Leg Curl"

    def test_not_found_names_the_exercise(self, program):
        with pytest.raises(AddressingError, match='Exercise "Overhead Press" not found') as exc_info:
            find_exercise_by_name(program, "Overhead Press")
        assert exc_info.value.segment == AddressSegment.EXERCISE_NAME

    def test_not_found_in_scope(self, program):
        with pytest.raises(AddressingError, match='not found in Week 2, Day 1'):
            find_exercise_by_name(program, "Leg Press", week_number=2, day_number=1)

    def test_not_found_suggests_close_names(self, program):
        with pytest.raises(AddressingError) as exc_info:
            find_exercise_by_name(program, "Romanian Deadlifts")
        assert "Did you mean: Romanian Deadlift" in exc_info.value.message

    def test_resolve_name_target_with_set_group(self, program):
        target = ExerciseNameTarget(exercise_name="squat", week_number=1, set_group_index=2)
        resolved = resolve_target(program, target)
        assert resolved.set_group.id == "sg-squat-2"


class TestSuggestExerciseNames:
    """Tests for fuzzy suggestions."""

    def test_returns_unique_names_best_first(self, program):
        suggestions = suggest_exercise_names(program, "back squats")
        assert suggestions[0] == "Back Squat"
        assert suggestions.count("Back Squat") == 1

    def test_unrelated_name_has_no_suggestions(self, program):
        assert suggest_exercise_names(program, "zzzz") == []

    def test_blank_name(self, program):
        assert suggest_exercise_names(program, "   ") == []
