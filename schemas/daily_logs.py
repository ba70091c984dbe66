"""Per-day log schemas: daily checkins, food diaries and water logs."""

from typing import Optional

from pydantic import BaseModel, Field


class DailyCheckin(BaseModel):
    """Daily checkin document (daily_checkins/{user_id}_{date})."""
    date: str = Field(..., description="Checkin date (YYYY-MM-DD)")
    current_weight: Optional[float] = Field(None, description="Body weight in kg")
    step_count: Optional[float] = Field(None, description="Steps walked")
    sleep_hours: Optional[float] = Field(None, description="Hours slept")
    trained_today: Optional[bool] = Field(None, description="Whether a workout was done")
    cardio_today: Optional[bool] = Field(None, description="Whether cardio was done")
    calorie_goal_met: Optional[bool] = Field(None, description="Whether the calorie goal was met")


class FoodDiary(BaseModel):
    """Food diary totals document (food_diary/{user_id}_{date})."""
    date: str = Field(..., description="Diary date (YYYY-MM-DD)")
    total_calories: Optional[float] = Field(None, description="Total calories eaten")
    total_protein: Optional[float] = Field(None, description="Total protein in grams")
    total_carbs: Optional[float] = Field(None, description="Total carbs in grams")
    total_fat: Optional[float] = Field(None, description="Total fat in grams")


class WaterLog(BaseModel):
    """Water log document (water_log/{user_id}_{date})."""
    date: str = Field(..., description="Log date (YYYY-MM-DD)")
    total_ml: Optional[float] = Field(None, description="Total water in milliliters")
