"""User profile and coach identity schemas."""

from enum import Enum
from typing import Dict, Optional, Type

from pydantic import AliasChoices, BaseModel, Field, field_validator

from .enums import CoachIntensity, ExperienceLevel, GoalType


def _lenient_enum(enum_cls: Type[Enum], value):
    """Map unknown enum values to None instead of rejecting the whole profile."""
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


class Goals(BaseModel):
    """Numeric and categorical goals set during onboarding."""
    goal_type: Optional[GoalType] = Field(None, description="Primary goal type")
    calorie_limit: Optional[float] = Field(None, description="Daily calorie limit")
    protein_goal: Optional[float] = Field(None, description="Daily protein target in grams")
    carb_goal: Optional[float] = Field(None, description="Daily carb target in grams")
    fat_goal: Optional[float] = Field(None, description="Daily fat target in grams")
    workout_sessions_per_week: Optional[float] = Field(None, description="Workout sessions per week")
    cardio_sessions_per_week: Optional[float] = Field(None, description="Cardio sessions per week")
    water_goal: Optional[float] = Field(None, description="Water target in liters per day")
    starting_weight: Optional[float] = Field(None, description="Starting weight in kg")

    @field_validator("goal_type", mode="before")
    @classmethod
    def _coerce_goal_type(cls, value):
        return _lenient_enum(GoalType, value)


class UserProfile(BaseModel):
    """User profile document (users collection)."""
    name: Optional[str] = Field(None, description="Display name")
    goals: Goals = Field(default_factory=Goals, description="User goals")
    experience_level: Optional[ExperienceLevel] = Field(None, description="Training experience level")
    coach_intensity: Optional[CoachIntensity] = Field(None, description="Preferred coach intensity")
    coach_id: Optional[str] = Field(None, description="Assigned coach identifier")
    skip_coach_reason: Optional[str] = Field(None, description="Set when the user opted out of a coach")

    @field_validator("goals", mode="before")
    @classmethod
    def _coerce_goals(cls, value):
        return value if value is not None else {}

    @field_validator("experience_level", mode="before")
    @classmethod
    def _coerce_experience(cls, value):
        return _lenient_enum(ExperienceLevel, value)

    @field_validator("coach_intensity", mode="before")
    @classmethod
    def _coerce_intensity(cls, value):
        return _lenient_enum(CoachIntensity, value)

    @property
    def has_coach(self) -> bool:
        return bool(self.coach_id and self.coach_id.strip()) and not self.skip_coach_reason


class CoachIdentity(BaseModel):
    """Coach document (coaches, user_coaches or community_coaches)."""
    coach_name: Optional[str] = Field(None, description="Coach display name")
    coach_persona: str = Field("", description="Free-text persona the coach adopts")
    intensity_levels: Optional[Dict[str, str]] = Field(
        None,
        validation_alias=AliasChoices("intensity_levels", "intensityLevels"),
        description="Optional per-intensity instruction overrides keyed by Low/Medium/High/Extreme",
    )
