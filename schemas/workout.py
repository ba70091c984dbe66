"""Session log schemas for workout and cardio logs."""

from typing import Optional
from pydantic import BaseModel, Field


class WorkoutLog(BaseModel):
    """Workout logs collection model."""
    id: Optional[str] = Field(None, description="Document identifier")
    date: str = Field(..., description="Workout date (YYYY-MM-DD)")
    routine_name: Optional[str] = Field(None, description="Name of the routine performed")
    status: Optional[str] = Field(None, description="Session status, e.g. completed")


class CardioLog(BaseModel):
    """Cardio log collection model."""
    id: Optional[str] = Field(None, description="Document identifier")
    date: str = Field(..., description="Cardio date (YYYY-MM-DD)")
    name: Optional[str] = Field(None, description="Cardio activity name")
    time: Optional[float] = Field(None, description="Duration in minutes")
    calories: Optional[float] = Field(None, description="Calories burned")
    avg_heart_rate: Optional[float] = Field(None, description="Average heart rate in bpm")
