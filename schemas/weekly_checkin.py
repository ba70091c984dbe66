"""Weekly checkin schema."""

from typing import Optional, Union
from pydantic import BaseModel, Field


class WeeklyCheckin(BaseModel):
    """Weekly checkin document (weekly_checkins/{user_id}_{week_start_date})."""
    week_start_date: Optional[str] = Field(None, description="Monday of the reviewed week")
    average_weight: Optional[float] = Field(None, description="Average weight for the week in kg")
    average_steps: Optional[float] = Field(None, description="Average daily steps")
    average_sleep: Optional[float] = Field(None, description="Average nightly sleep in hours")
    workout_goal_achieved: Optional[Union[bool, str]] = Field(None, description="Workout goal achieved")
    cardio_goal_achieved: Optional[Union[bool, str]] = Field(None, description="Cardio goal achieved")
    appetite: Optional[str] = Field(None, description="Appetite reflection")
    energy_levels: Optional[str] = Field(None, description="Energy level reflection")
    workouts: Optional[str] = Field(None, description="Workout reflection")
    digestion: Optional[str] = Field(None, description="Digestion reflection")
    proud_achievement: Optional[str] = Field(None, description="Achievement the user is proud of")
    hardest_part: Optional[str] = Field(None, description="Hardest part of the week")
    social_events: Optional[str] = Field(None, description="Social events during the week")
    confidence_next_week: Optional[str] = Field(None, description="Confidence for next week")
    schedule_next_week: Optional[str] = Field(None, description="Schedule for next week")
    habit_to_improve: Optional[str] = Field(None, description="Habit to improve")
