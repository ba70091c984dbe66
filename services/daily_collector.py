"""Collects current-week progress for the daily coach message."""

import asyncio
from datetime import datetime
from typing import List, Optional

from models.database import (
    CARDIO_LOG,
    DAILY_CHECKINS,
    FOOD_DIARY,
    USERS,
    WATER_LOG,
    WEEKLY_CHECKINS,
    WORKOUT_LOGS,
)
from schemas import (
    CardioLog,
    CurrentWeekProgress,
    DailyCheckin,
    DailyMessageData,
    FoodDiary,
    GoalProgression,
    SessionStatus,
    UserProfile,
    WaterLog,
    WeeklyCheckin,
    WorkoutLog,
)
from services.record_fetch import fetch_doc, fetch_query, present
from services.record_store import MongoRecordStore, RecordStore
from utils.helpers import DateLike, dates_between, doc_id, format_date, previous_week_start, week_start_of
from utils.logger import setup_logger

logger = setup_logger(__name__)


def _ratio(achieved: float, goal: Optional[float]) -> float:
    """achieved / goal, or 0 when the goal is unset or not positive."""
    if not goal or goal <= 0:
        return 0.0
    return achieved / goal


def _average(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def compute_goal_progression(
    profile: Optional[UserProfile],
    workout_logs: List[WorkoutLog],
    cardio_logs: List[CardioLog],
    food_diaries: List[FoodDiary],
) -> GoalProgression:
    """Ratios of progress so far against weekly and daily goals.

    Averages are taken over the diary entries present, so days without a
    diary do not count as zero. Ratios are not clamped to 1.
    """
    goals = profile.goals if profile else None
    if goals is None:
        return GoalProgression()
    avg_calories = _average([diary.total_calories or 0 for diary in food_diaries])
    avg_protein = _average([diary.total_protein or 0 for diary in food_diaries])
    return GoalProgression(
        workout_progress=_ratio(len(workout_logs), goals.workout_sessions_per_week),
        cardio_progress=_ratio(len(cardio_logs), goals.cardio_sessions_per_week),
        calorie_progress=_ratio(avg_calories, goals.calorie_limit),
        protein_progress=_ratio(avg_protein, goals.protein_goal),
    )


async def _collect_day(store: RecordStore, user_id: str, day: str):
    key = doc_id(user_id, day)
    return await asyncio.gather(
        fetch_doc(store, DAILY_CHECKINS, key, DailyCheckin, date=day),
        fetch_doc(store, FOOD_DIARY, key, FoodDiary, date=day),
        fetch_doc(store, WATER_LOG, key, WaterLog, date=day),
        fetch_query(
            store,
            WORKOUT_LOGS,
            {"user_id": user_id, "date": day, "status": SessionStatus.COMPLETED.value},
            WorkoutLog,
            date=day,
        ),
        fetch_query(store, CARDIO_LOG, {"user_id": user_id, "date": day}, CardioLog, date=day),
    )


async def collect_daily_message_data(
    user_id: str,
    date: Optional[DateLike] = None,
    store: Optional[RecordStore] = None,
) -> DailyMessageData:
    """Collect the data needed for the daily coach message.

    Covers the current week from Monday through ``date`` (today by default),
    plus last week's weekly checkin and the user's goal progression.
    """
    store = store or MongoRecordStore()
    today = format_date(date if date is not None else datetime.now().date())
    week_start = format_date(week_start_of(today))
    dates = dates_between(week_start, today)
    last_week_start = previous_week_start(week_start)

    days, (user_profile, last_week_checkin) = await asyncio.gather(
        asyncio.gather(*(_collect_day(store, user_id, day) for day in dates)),
        asyncio.gather(
            fetch_doc(store, USERS, user_id, UserProfile),
            fetch_doc(store, WEEKLY_CHECKINS, doc_id(user_id, last_week_start), WeeklyCheckin,
                      week_start_date=last_week_start),
        ),
    )

    progress = CurrentWeekProgress(
        daily_checkins=present([day[0] for day in days]),
        food_diaries=present([day[1] for day in days]),
        water_logs=present([day[2] for day in days]),
        workout_logs=[log for day in days for log in day[3]],
        cardio_logs=[log for day in days for log in day[4]],
        days_into_week=len(dates),
    )
    goal_progression = compute_goal_progression(
        user_profile, progress.workout_logs, progress.cardio_logs, progress.food_diaries
    )
    logger.info(
        "Collected day %d of week %s for user %s (workouts %.2f, cardio %.2f of goal)",
        progress.days_into_week,
        week_start,
        user_id,
        goal_progression.workout_progress,
        goal_progression.cardio_progress,
    )
    return DailyMessageData(
        user_id=user_id,
        date=today,
        week_start_date=week_start,
        current_week_progress=progress,
        last_week_checkin=last_week_checkin,
        user_profile=user_profile,
        goal_progression=goal_progression,
    )
