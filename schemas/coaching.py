"""Aggregated coaching data and generated message schemas."""

from typing import List, Optional
from pydantic import BaseModel, Field

from .daily_logs import DailyCheckin, FoodDiary, WaterLog
from .user import UserProfile
from .weekly_checkin import WeeklyCheckin
from .workout import CardioLog, WorkoutLog


class CoachingMessage(BaseModel):
    """Generated weekly coaching message."""
    subject: str = Field(..., description="Message subject line")
    body: str = Field(..., description="Message body")


class WeeklyData(BaseModel):
    """Raw records for one Monday-to-Sunday week."""
    user_id: str
    week_start_date: str
    week_dates: List[str] = Field(default_factory=list)
    weekly_checkin: Optional[WeeklyCheckin] = None
    daily_checkins: List[DailyCheckin] = Field(default_factory=list)
    food_diaries: List[FoodDiary] = Field(default_factory=list)
    workout_logs: List[WorkoutLog] = Field(default_factory=list)
    cardio_logs: List[CardioLog] = Field(default_factory=list)
    water_logs: List[WaterLog] = Field(default_factory=list)
    user_profile: Optional[UserProfile] = None
    previous_message: Optional[CoachingMessage] = None


class CurrentWeekProgress(BaseModel):
    """Records from the start of the current week through today."""
    daily_checkins: List[DailyCheckin] = Field(default_factory=list)
    food_diaries: List[FoodDiary] = Field(default_factory=list)
    workout_logs: List[WorkoutLog] = Field(default_factory=list)
    cardio_logs: List[CardioLog] = Field(default_factory=list)
    water_logs: List[WaterLog] = Field(default_factory=list)
    days_into_week: int = Field(..., ge=1, le=7, description="Days of the week elapsed, today included")


class GoalProgression(BaseModel):
    """Achieved-to-target ratios; 0 when the goal is unset, never clamped."""
    workout_progress: float = 0.0
    cardio_progress: float = 0.0
    calorie_progress: float = 0.0
    protein_progress: float = 0.0


class DailyMessageData(BaseModel):
    """Inputs for the daily coach message."""
    user_id: str
    date: str
    week_start_date: str
    current_week_progress: CurrentWeekProgress
    last_week_checkin: Optional[WeeklyCheckin] = None
    user_profile: Optional[UserProfile] = None
    goal_progression: GoalProgression = Field(default_factory=GoalProgression)
