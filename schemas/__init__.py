"""Collection schemas organized by collection type."""

from schemas.enums import CoachIntensity, ExperienceLevel, GoalType, SessionStatus
from schemas.user import CoachIdentity, Goals, UserProfile
from schemas.daily_logs import DailyCheckin, FoodDiary, WaterLog
from schemas.workout import CardioLog, WorkoutLog
from schemas.weekly_checkin import WeeklyCheckin
from schemas.coaching import (
    CoachingMessage,
    CurrentWeekProgress,
    DailyMessageData,
    GoalProgression,
    WeeklyData,
)
from schemas.api import (
    DailyMessageRequest,
    DailyMessageResponse,
    WeeklyMessageRequest,
    WeeklyMessageResponse,
)

__all__ = [
    "CoachIntensity",
    "ExperienceLevel",
    "GoalType",
    "SessionStatus",
    "CoachIdentity",
    "Goals",
    "UserProfile",
    "DailyCheckin",
    "FoodDiary",
    "WaterLog",
    "CardioLog",
    "WorkoutLog",
    "WeeklyCheckin",
    "CoachingMessage",
    "CurrentWeekProgress",
    "DailyMessageData",
    "GoalProgression",
    "WeeklyData",
    "DailyMessageRequest",
    "DailyMessageResponse",
    "WeeklyMessageRequest",
    "WeeklyMessageResponse",
]
