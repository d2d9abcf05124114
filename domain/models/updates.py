"""
Change payloads accepted by the editing engine.

Each entity level has its own set of permitted fields, so a loosely typed
change bag (e.g. the arguments of an AI tool call) is validated here, before it
reaches the patcher. Only the fields a caller actually sent are applied
(``model_dump(exclude_unset=True)``), which is what makes partial updates work.
"""

from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, HttpUrl, model_validator
from pydantic.alias_generators import to_camel

from domain.models.targets import Target


UPDATE_MODEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "extra": "forbid",
}

# (minimum, maximum) field pairs checked when both arrive in one change
RANGE_PAIRS = (
    ("reps", "reps_max"),
    ("weight", "weight_max"),
    ("intensity_percent", "intensity_percent_max"),
    ("rpe", "rpe_max"),
)


def _reject_explicit_nulls(model: BaseModel, fields: tuple) -> None:
    for name in fields:
        if name in model.model_fields_set and getattr(model, name) is None:
            raise ValueError(f"{to_camel(name)} cannot be null")


class ChangeModel(BaseModel):
    """Base class for partial updates."""

    model_config = UPDATE_MODEL_CONFIG

    # Fields that may be omitted but never cleared
    NON_NULLABLE: ClassVar[Tuple[str, ...]] = ()

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly present in the change, keyed by python name."""
        return self.model_dump(exclude_unset=True)

    def changed_fields(self) -> List[str]:
        """Wire names of the fields present in the change."""
        return list(self.model_dump(exclude_unset=True, by_alias=True).keys())

    @model_validator(mode="after")
    def validate_nulls(self):
        _reject_explicit_nulls(self, self.NON_NULLABLE)
        return self


class SetFieldUpdate(ChangeModel):
    """Granular field updates for a set (or a set-group's base set)."""

    reps: Optional[int] = Field(default=None, gt=0, description="Number of repetitions")
    reps_max: Optional[int] = Field(default=None, gt=0, description="Maximum reps (ranges)")
    duration: Optional[float] = Field(
        default=None, gt=0, description="Duration in seconds (time-based exercises)"
    )
    weight: Optional[float] = Field(default=None, ge=0, description="Weight in kg")
    weight_max: Optional[float] = Field(
        default=None, ge=0, description="Maximum weight in kg (ranges)"
    )
    weight_lbs: Optional[float] = Field(
        default=None,
        ge=0,
        description="Weight in lbs (derived from weight when weight is sent)",
    )
    intensity_percent: Optional[float] = Field(
        default=None, ge=0, le=100, description="Intensity as % of 1RM"
    )
    intensity_percent_max: Optional[float] = Field(
        default=None, ge=0, le=100, description="Maximum intensity % (ranges)"
    )
    rpe: Optional[float] = Field(default=None, ge=1, le=10, description="RPE (1-10)")
    rpe_max: Optional[float] = Field(default=None, ge=1, le=10, description="Maximum RPE")
    rest: Optional[int] = Field(default=None, gt=0, description="Rest time in seconds")

    NON_NULLABLE: ClassVar[Tuple[str, ...]] = ("rest",)

    @model_validator(mode="after")
    def validate_ranges(self) -> "SetFieldUpdate":
        """A range's maximum cannot be below its minimum."""
        for low, high in RANGE_PAIRS:
            low_value = getattr(self, low)
            high_value = getattr(self, high)
            if low_value is not None and high_value is not None and high_value < low_value:
                raise ValueError(
                    f"{to_camel(high)} ({high_value}) cannot be lower than "
                    f"{to_camel(low)} ({low_value})"
                )
        return self


class SetGroupUpdate(SetFieldUpdate):
    """Set fields plus the number of sets in the group."""

    count: Optional[int] = Field(default=None, gt=0, description="Number of sets in the group")

    NON_NULLABLE: ClassVar[Tuple[str, ...]] = ("rest", "count")


class ExerciseUpdate(ChangeModel):
    """Exercise-level fields."""

    name: Optional[str] = Field(default=None, min_length=1, description="Exercise name")
    description: Optional[str] = None
    notes: Optional[str] = None
    type_label: Optional[str] = Field(
        default=None, description='Type label (e.g. "Compound", "Isolation")'
    )
    rep_range: Optional[str] = Field(default=None, description='Rep range display (e.g. "8-12")')
    form_cues: Optional[List[str]] = None
    equipment: Optional[List[str]] = None
    video_url: Optional[HttpUrl] = None

    NON_NULLABLE: ClassVar[Tuple[str, ...]] = ("name",)

    def changes(self) -> Dict[str, Any]:
        data = super().changes()
        if data.get("video_url") is not None:
            data["video_url"] = str(data["video_url"])
        return data


class DayUpdate(ChangeModel):
    """Day-level fields."""

    name: Optional[str] = None
    notes: Optional[str] = None
    warmup: Optional[str] = None
    cooldown: Optional[str] = None
    total_duration: Optional[float] = Field(
        default=None, gt=0, description="Total duration in minutes"
    )
    target_muscles: Optional[List[str]] = None


class WeekUpdate(ChangeModel):
    """Week-level fields."""

    focus: Optional[str] = Field(default=None, description='Week focus (e.g. "Volume", "Deload")')
    notes: Optional[str] = None


class NewSetGroup(BaseModel):
    """Specification of a set-group to create."""

    count: int = Field(default=3, gt=0)
    base_set: Optional[SetFieldUpdate] = None

    model_config = UPDATE_MODEL_CONFIG


class NewExercise(BaseModel):
    """
    Specification of an exercise to insert into a day.

    Either pass explicit ``set_groups`` or the shorthand prescription
    (``sets`` x ``reps`` @ ``weight`` ...) which becomes a single set-group.
    """

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    notes: Optional[str] = None
    type_label: Optional[str] = None
    rep_range: Optional[str] = None
    form_cues: List[str] = Field(default_factory=list)
    equipment: List[str] = Field(default_factory=list)
    video_url: Optional[HttpUrl] = None
    set_groups: Optional[List[NewSetGroup]] = Field(default=None, min_length=1)

    # Shorthand prescription
    sets: Optional[int] = Field(default=None, gt=0)
    reps: Optional[int] = Field(default=None, gt=0)
    duration: Optional[float] = Field(default=None, gt=0)
    weight: Optional[float] = Field(default=None, ge=0)
    intensity_percent: Optional[float] = Field(default=None, ge=0, le=100)
    rpe: Optional[float] = Field(default=None, ge=1, le=10)
    rest: Optional[int] = Field(default=None, gt=0)

    model_config = UPDATE_MODEL_CONFIG

    SHORTHAND_FIELDS: ClassVar[Tuple[str, ...]] = (
        "sets", "reps", "duration", "weight", "intensity_percent", "rpe", "rest",
    )

    @model_validator(mode="after")
    def validate_prescription(self) -> "NewExercise":
        if not self.name.strip():
            raise ValueError("Exercise name cannot be blank")
        shorthand = [f for f in self.SHORTHAND_FIELDS if getattr(self, f) is not None]
        if self.set_groups is not None and shorthand:
            raise ValueError(
                "Use either setGroups or the shorthand prescription, not both "
                f"(got {', '.join(to_camel(f) for f in shorthand)})"
            )
        return self

    def as_set_groups(self) -> List[NewSetGroup]:
        """The set-groups to create, expanding the shorthand if needed."""
        if self.set_groups is not None:
            return self.set_groups
        base = {
            name: getattr(self, name)
            for name in ("reps", "duration", "weight", "intensity_percent", "rpe", "rest")
            if getattr(self, name) is not None
        }
        return [
            NewSetGroup(
                count=self.sets or 3,
                base_set=SetFieldUpdate(**base) if base else None,
            )
        ]


class BatchOperation(BaseModel):
    """
    One item of a batch: a target plus exactly one change.

    Structural items (add/remove/duplicate set-group) shift set-group indices
    for later items that address the same exercise; nothing is rebased.
    """

    target: Target
    set_group_update: Optional[SetGroupUpdate] = None
    set_update: Optional[SetFieldUpdate] = None
    exercise_update: Optional[ExerciseUpdate] = None
    day_update: Optional[DayUpdate] = None
    week_update: Optional[WeekUpdate] = None
    add_set_group: Optional[NewSetGroup] = None
    remove_set_group: bool = False
    duplicate_set_group: bool = False

    model_config = UPDATE_MODEL_CONFIG

    PAYLOAD_FIELDS: ClassVar[Tuple[str, ...]] = (
        "set_group_update",
        "set_update",
        "exercise_update",
        "day_update",
        "week_update",
        "add_set_group",
    )
    FLAG_FIELDS: ClassVar[Tuple[str, ...]] = ("remove_set_group", "duplicate_set_group")

    @model_validator(mode="after")
    def validate_single_change(self) -> "BatchOperation":
        """Exactly one change per operation."""
        present = self._present()
        if len(present) != 1:
            names = ", ".join(to_camel(f) for f in self.PAYLOAD_FIELDS + self.FLAG_FIELDS)
            raise ValueError(
                f"Each operation needs exactly one of: {names} "
                f"(got {len(present)})"
            )
        return self

    def _present(self) -> List[str]:
        present = [f for f in self.PAYLOAD_FIELDS if getattr(self, f) is not None]
        present.extend(f for f in self.FLAG_FIELDS if getattr(self, f))
        return present

    @property
    def kind(self) -> str:
        """Name of the change this operation carries."""
        return self._present()[0]
