"""Request and response schemas for the coaching API."""

from typing import Optional
from pydantic import BaseModel, Field


class WeeklyMessageRequest(BaseModel):
    """Request to generate the weekly coaching message."""
    user_id: str = Field(..., min_length=1, description="User identifier")
    week_start_date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$", description="Monday of the week (YYYY-MM-DD)")


class WeeklyMessageResponse(BaseModel):
    """Saved weekly coaching message."""
    success: bool = True
    message_id: str
    subject: str
    body: str
    coach_name: str
    request_id: str


class DailyMessageRequest(BaseModel):
    """Request to generate the daily coach message."""
    user_id: str = Field(..., min_length=1, description="User identifier")
    date: Optional[str] = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$", description="Target date, defaults to today")


class DailyMessageResponse(BaseModel):
    """Saved daily coach message."""
    success: bool = True
    message: str
    date: str
    coach_name: str
    request_id: str
