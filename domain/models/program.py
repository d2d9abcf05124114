"""
Workout program document - the aggregate edited by the granular engine.

A program is a nested JSON document:

    program -> weeks -> days -> exercises -> setGroups -> sets

Field names are snake_case in Python and camelCase on the wire
(``weekNumber``, ``setGroups``, ``baseSet``, ``weightLbs``). Both spellings are
accepted on input. Keys the models do not declare are kept (``extra="allow"``)
so that writing the weeks back never drops data owned by other parts of the
platform (catalog ids, muscle groups, variations, ...).
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


PROGRAM_MODEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "extra": "allow",
}

DEFAULT_REST_SECONDS = 90


class Difficulty(str, Enum):
    """Program difficulty levels."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class ProgramStatus(str, Enum):
    """Lifecycle status of a stored program."""

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class ExerciseSet(BaseModel):
    """
    A single prescribed set.

    ``weight`` is always kilograms; ``weight_lbs`` mirrors it in pounds and is
    kept in sync by the editing engine. ``intensity_percent`` is a percentage
    of one-rep-max. The ``*_max`` fields turn a value into a range
    (e.g. 8-10 reps, RPE 7-8).
    """

    reps: Optional[int] = Field(default=None, description="Repetitions")
    reps_max: Optional[int] = Field(default=None, description="Upper bound of a rep range")
    duration: Optional[float] = Field(
        default=None, description="Duration in seconds for time-based work"
    )
    weight: Optional[float] = Field(default=None, description="Weight in kg")
    weight_max: Optional[float] = Field(
        default=None, description="Upper bound of a weight range in kg"
    )
    weight_lbs: Optional[float] = Field(default=None, description="Weight in lbs")
    intensity_percent: Optional[float] = Field(
        default=None, description="Intensity as % of 1RM"
    )
    intensity_percent_max: Optional[float] = Field(
        default=None, description="Upper bound of an intensity range"
    )
    rpe: Optional[float] = Field(default=None, description="Rate of perceived exertion")
    rpe_max: Optional[float] = Field(default=None, description="Upper bound of an RPE range")
    rest: int = Field(default=DEFAULT_REST_SECONDS, description="Rest after the set in seconds")

    model_config = PROGRAM_MODEL_CONFIG

    @field_validator("rest", mode="before")
    @classmethod
    def default_null_rest(cls, v):
        """Stored documents may carry ``rest: null``; treat it as the default rest."""
        return DEFAULT_REST_SECONDS if v is None else v


class SetGroup(BaseModel):
    """
    A template for ``count`` identical sets.

    ``base_set`` holds the canonical values and ``sets`` the expanded per-set
    records. The invariant ``len(sets) == count`` is maintained by ``resize``.
    """

    id: Optional[str] = None
    count: int = Field(default=1, ge=1, description="Number of sets in the group")
    base_set: ExerciseSet = Field(default_factory=ExerciseSet)
    sets: List[ExerciseSet] = Field(default_factory=list)

    model_config = PROGRAM_MODEL_CONFIG

    def resize(self, count: int) -> None:
        """
        Set the number of sets, truncating from the end or appending copies
        of ``base_set``.
        """
        if count < 1:
            raise ValueError("Set-group count must be at least 1")
        if len(self.sets) > count:
            del self.sets[count:]
        while len(self.sets) < count:
            self.sets.append(self.base_set.model_copy(deep=True))
        self.count = count


class Exercise(BaseModel):
    """An exercise within a training day."""

    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    notes: Optional[str] = None
    type_label: Optional[str] = None
    rep_range: Optional[str] = None
    form_cues: List[str] = Field(default_factory=list)
    equipment: List[str] = Field(default_factory=list)
    video_url: Optional[str] = None
    set_groups: List[SetGroup] = Field(default_factory=list)

    model_config = PROGRAM_MODEL_CONFIG

    @property
    def set_counts(self) -> List[int]:
        """Sequence of set-group counts (the exercise's progression pattern)."""
        return [group.count for group in self.set_groups]

    @property
    def total_sets(self) -> int:
        return sum(self.set_counts)


class WorkoutDay(BaseModel):
    """A training day within a week."""

    day_number: int = Field(..., ge=1)
    name: Optional[str] = None
    notes: Optional[str] = None
    warmup: Optional[str] = None
    cooldown: Optional[str] = None
    total_duration: Optional[float] = Field(
        default=None, description="Estimated duration in minutes"
    )
    target_muscles: List[str] = Field(default_factory=list)
    exercises: List[Exercise] = Field(default_factory=list)

    model_config = PROGRAM_MODEL_CONFIG


class WorkoutWeek(BaseModel):
    """A week of the program."""

    week_number: int = Field(..., ge=1)
    focus: Optional[str] = None
    notes: Optional[str] = None
    days: List[WorkoutDay] = Field(default_factory=list)

    model_config = PROGRAM_MODEL_CONFIG

    @field_validator("days")
    @classmethod
    def validate_unique_day_numbers(cls, v: List[WorkoutDay]) -> List[WorkoutDay]:
        """Day numbers must be unique within a week."""
        numbers = [day.day_number for day in v]
        if len(numbers) != len(set(numbers)):
            raise ValueError(f"Duplicate day numbers in week: {sorted(numbers)}")
        return v


class WorkoutProgram(BaseModel):
    """
    Aggregate root for a multi-week workout program.

    Examples:
        >>> program = WorkoutProgram.model_validate({
        ...     "name": "Strength Block",
        ...     "difficulty": "INTERMEDIATE",
        ...     "durationWeeks": 1,
        ...     "weeks": [{"weekNumber": 1, "days": []}],
        ... })
        >>> program.weeks[0].week_number
        1
    """

    id: Optional[str] = None
    user_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    difficulty: Difficulty = Difficulty.ADVANCED
    duration_weeks: Optional[int] = Field(default=None, ge=1)
    status: ProgramStatus = ProgramStatus.ACTIVE
    goals: List[str] = Field(default_factory=list)
    weeks: List[WorkoutWeek] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = PROGRAM_MODEL_CONFIG

    @field_validator("weeks")
    @classmethod
    def validate_unique_week_numbers(cls, v: List[WorkoutWeek]) -> List[WorkoutWeek]:
        """Week numbers must be unique within a program."""
        numbers = [week.week_number for week in v]
        if len(numbers) != len(set(numbers)):
            raise ValueError(f"Duplicate week numbers in program: {sorted(numbers)}")
        return v

    def iter_exercises(self):
        """Yield ``(week, day, exercise_index, exercise)`` in document order."""
        for week in self.weeks:
            for day in week.days:
                for index, exercise in enumerate(day.exercises):
                    yield week, day, index, exercise

    def weeks_payload(self) -> List[dict]:
        """Serialize the week sequence for a partial (weeks-only) persist."""
        return [week.model_dump(by_alias=True, mode="json") for week in self.weeks]
