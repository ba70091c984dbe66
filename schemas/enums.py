"""Enums for profile and log fields."""

from enum import Enum


class GoalType(str, Enum):
    """User goal type enum."""
    LOSE_WEIGHT = "Lose Weight"
    GAIN_WEIGHT = "Gain Weight"
    GAIN_STRENGTH = "Gain Strength"
    MAINTAIN = "Maintain"


class ExperienceLevel(str, Enum):
    """Training experience level enum."""
    NOVICE = "Novice"
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class CoachIntensity(str, Enum):
    """Coach tone intensity enum."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    EXTREME = "Extreme"


class SessionStatus(str, Enum):
    """Workout session status enum."""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"
