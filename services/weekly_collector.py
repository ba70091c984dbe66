"""Collects all of a user's records for one Monday-to-Sunday week."""

import asyncio
from typing import Optional

from models.database import (
    CARDIO_LOG,
    DAILY_CHECKINS,
    FOOD_DIARY,
    MESSAGES,
    USERS,
    WATER_LOG,
    WEEKLY_CHECKINS,
    WORKOUT_LOGS,
)
from schemas import (
    CardioLog,
    CoachingMessage,
    DailyCheckin,
    FoodDiary,
    UserProfile,
    WaterLog,
    WeeklyCheckin,
    WeeklyData,
    WorkoutLog,
)
from services.record_fetch import fetch_doc, fetch_query, present
from services.record_store import MongoRecordStore, RecordStore
from utils.helpers import DateLike, doc_id, format_date, parse_date, previous_week_start, week_dates
from utils.logger import setup_logger

logger = setup_logger(__name__)


async def _collect_day(store: RecordStore, user_id: str, day: str):
    """Fetch every per-date collection for one day concurrently."""
    key = doc_id(user_id, day)
    session_filter = {"user_id": user_id, "date": day}
    return await asyncio.gather(
        fetch_doc(store, DAILY_CHECKINS, key, DailyCheckin, date=day),
        fetch_doc(store, FOOD_DIARY, key, FoodDiary, date=day),
        fetch_doc(store, WATER_LOG, key, WaterLog, date=day),
        fetch_query(store, WORKOUT_LOGS, session_filter, WorkoutLog, date=day),
        fetch_query(store, CARDIO_LOG, session_filter, CardioLog, date=day),
    )


async def collect_weekly_data(
    user_id: str,
    week_start_date: DateLike,
    store: Optional[RecordStore] = None,
) -> WeeklyData:
    """Collect all user data for the week starting at week_start_date.

    Args:
        user_id: User identifier
        week_start_date: Monday of the week (YYYY-MM-DD)
        store: Record store to read from (defaults to MongoDB)

    Returns:
        WeeklyData with the records present in the 7-day range, in date order.
        Missing days are omitted; a failed fetch is treated as missing.

    Raises:
        ValueError: If week_start_date is not a Monday
    """
    start = parse_date(week_start_date)
    if start.weekday() != 0:
        raise ValueError(f"week_start_date must be a Monday, got {format_date(start)}")
    store = store or MongoRecordStore()
    week_start = format_date(start)
    dates = week_dates(start)

    days, week_docs = await asyncio.gather(
        asyncio.gather(*(_collect_day(store, user_id, day) for day in dates)),
        asyncio.gather(
            fetch_doc(store, WEEKLY_CHECKINS, doc_id(user_id, week_start), WeeklyCheckin,
                      week_start_date=week_start),
            fetch_doc(store, USERS, user_id, UserProfile),
            fetch_doc(store, MESSAGES, doc_id(user_id, previous_week_start(start)), CoachingMessage),
        ),
    )
    weekly_checkin, user_profile, previous_message = week_docs

    data = WeeklyData(
        user_id=user_id,
        week_start_date=week_start,
        week_dates=dates,
        weekly_checkin=weekly_checkin,
        daily_checkins=present([day[0] for day in days]),
        food_diaries=present([day[1] for day in days]),
        water_logs=present([day[2] for day in days]),
        workout_logs=[log for day in days for log in day[3]],
        cardio_logs=[log for day in days for log in day[4]],
        user_profile=user_profile,
        previous_message=previous_message,
    )
    logger.info(
        "Collected week %s for user %s: %d checkins, %d diaries, %d workouts, %d cardio, %d water logs",
        week_start,
        user_id,
        len(data.daily_checkins),
        len(data.food_diaries),
        len(data.workout_logs),
        len(data.cardio_logs),
        len(data.water_logs),
    )
    return data
