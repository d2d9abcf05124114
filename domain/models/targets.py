"""
Addresses into a workout program.

A target is built per call, resolved once and discarded. Two shapes exist:

- ``SessionTarget``: numeric addressing. Weeks and days are matched by their
  ``weekNumber``/``dayNumber`` value, exercises, set-groups and sets by 0-based
  position.
- ``ExerciseNameTarget``: case-insensitive substring match on the exercise
  name, optionally scoped to a week and/or day. The first match in document
  order wins.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel


TARGET_MODEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "extra": "forbid",
}


class SessionTarget(BaseModel):
    """
    Numeric location inside a program.

    Only ``week_number`` is mandatory; deeper segments are optional so the same
    type addresses a week, a day, an exercise, a set-group or a single set.

    Examples:
        >>> SessionTarget(week_number=1, day_number=1, exercise_index=0).describe()
        'Week 1, Day 1, Exercise 0'
    """

    week_number: int = Field(..., ge=1, description="Week number (1-based)")
    day_number: Optional[int] = Field(
        default=None, ge=1, description="Day number within the week (1-based)"
    )
    exercise_index: Optional[int] = Field(
        default=None, ge=0, description="Exercise index (0-based)"
    )
    set_group_index: Optional[int] = Field(
        default=None, ge=0, description="SetGroup index (0-based)"
    )
    set_index: Optional[int] = Field(
        default=None, ge=0, description="Set index within the group (0-based)"
    )

    model_config = TARGET_MODEL_CONFIG

    @model_validator(mode="after")
    def validate_segments(self) -> "SessionTarget":
        """A deeper segment needs every segment above it."""
        if self.exercise_index is not None and self.day_number is None:
            raise ValueError("exerciseIndex requires dayNumber")
        if self.set_group_index is not None and self.exercise_index is None:
            raise ValueError("setGroupIndex requires exerciseIndex")
        if self.set_index is not None and self.set_group_index is None:
            raise ValueError("setIndex requires setGroupIndex")
        return self

    def describe(self) -> str:
        parts = [f"Week {self.week_number}"]
        if self.day_number is not None:
            parts.append(f"Day {self.day_number}")
        if self.exercise_index is not None:
            parts.append(f"Exercise {self.exercise_index}")
        if self.set_group_index is not None:
            parts.append(f"SetGroup {self.set_group_index}")
        if self.set_index is not None:
            parts.append(f"Set {self.set_index}")
        return ", ".join(parts)


class ExerciseNameTarget(BaseModel):
    """
    Fuzzy location of an exercise by name.

    Duplicate names across days are not reported as ambiguous: the first
    occurrence in week/day/exercise order is used.
    """

    exercise_name: str = Field(..., min_length=1)
    week_number: Optional[int] = Field(default=None, ge=1)
    day_number: Optional[int] = Field(default=None, ge=1)
    set_group_index: Optional[int] = Field(default=None, ge=0)
    set_index: Optional[int] = Field(default=None, ge=0)

    model_config = TARGET_MODEL_CONFIG

    @model_validator(mode="after")
    def validate_segments(self) -> "ExerciseNameTarget":
        if not self.exercise_name.strip():
            raise ValueError("exerciseName cannot be blank")
        if self.set_index is not None and self.set_group_index is None:
            raise ValueError("setIndex requires setGroupIndex")
        return self

    def describe(self) -> str:
        scope = []
        if self.week_number is not None:
            scope.append(f"Week {self.week_number}")
        if self.day_number is not None:
            scope.append(f"Day {self.day_number}")
        label = f'"{self.exercise_name}"'
        if scope:
            label = f"{label} in {', '.join(scope)}"
        if self.set_group_index is not None:
            label = f"{label}, SetGroup {self.set_group_index}"
        if self.set_index is not None:
            label = f"{label}, Set {self.set_index}"
        return label


Target = Union[SessionTarget, ExerciseNameTarget]

NAME_KEYS = ("exerciseName", "exercise_name")


def parse_target(raw: Union[Target, Dict[str, Any]]) -> Target:
    """
    Build a target from a model or a raw dict.

    A dict carrying ``exerciseName`` is a name target, anything else a
    numeric one. Raises pydantic ``ValidationError`` on malformed input.
    """
    if isinstance(raw, (SessionTarget, ExerciseNameTarget)):
        return raw
    if any(key in raw for key in NAME_KEYS):
        return ExerciseNameTarget.model_validate(raw)
    return SessionTarget.model_validate(raw)
