"""Coaching service: collects data, resolves the coach, generates and saves messages."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional

from models.database import (
    COACHES,
    COMMUNITY_COACHES,
    DAILY_COACH_MESSAGES,
    MESSAGES,
    USER_COACHES,
)
from schemas import CoachIdentity
from services.coaching_flows import generate_coaching_message, generate_daily_coach_message
from services.daily_collector import collect_daily_message_data
from services.generation_client import GenerationClient
from services.record_store import MongoRecordStore, RecordStore
from services.weekly_collector import collect_weekly_data
from utils.helpers import DateLike, doc_id, format_date
from utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_COACH = "AI Coach"


class CoachingRequestError(Exception):
    """A coaching request that cannot be served with the user's current data."""


class ProfileNotFound(CoachingRequestError):
    def __init__(self, user_id: str):
        super().__init__("User profile not found")
        self.user_id = user_id


class WeeklyCheckinNotFound(CoachingRequestError):
    def __init__(self, user_id: str, week_start_date: str):
        super().__init__("Weekly checkin not found for the specified week")
        self.user_id = user_id
        self.week_start_date = week_start_date


class CoachNotSelected(CoachingRequestError):
    def __init__(self, user_id: str):
        super().__init__("Please select an AI coach to receive daily messages")
        self.user_id = user_id


@dataclass
class ResolvedCoach:
    coach_id: str
    coach_name: str = DEFAULT_COACH
    coach_persona: str = ""
    intensity_overrides: Optional[Dict[str, str]] = None


@dataclass
class WeeklyMessageResult:
    message_id: str
    subject: str
    body: str
    coach_name: str


@dataclass
class DailyMessageResult:
    message: str
    date: str
    coach_name: str
    existing: bool = False


class CoachingService:
    """Runs the weekly and daily coaching pipelines for one user at a time.

    Generation clients are built per pipeline on demand unless injected.
    """

    def __init__(
        self,
        store: Optional[RecordStore] = None,
        weekly_client: Optional[GenerationClient] = None,
        daily_client: Optional[GenerationClient] = None,
    ):
        self.store = store or MongoRecordStore()
        self.weekly_client = weekly_client
        self.daily_client = daily_client

    async def resolve_coach(self, coach_id: Optional[str]) -> ResolvedCoach:
        """Look the coach up in coaches, then user_coaches, then community_coaches.

        Only user-created and community coaches carry intensity overrides.
        Unknown ids keep the default name; a failed lookup uses the id itself.
        """
        coach_id = (coach_id or "").strip() or DEFAULT_COACH
        resolved = ResolvedCoach(coach_id=coach_id)
        if coach_id == DEFAULT_COACH:
            return resolved

        try:
            for collection in (COACHES, USER_COACHES, COMMUNITY_COACHES):
                raw = await self.store.get_doc(collection, coach_id)
                if raw is None:
                    continue
                coach = CoachIdentity.model_validate(
                    {k: v for k, v in raw.items() if v is not None}
                )
                resolved.coach_name = coach.coach_name or coach_id
                resolved.coach_persona = coach.coach_persona
                if collection != COACHES:
                    resolved.intensity_overrides = coach.intensity_levels
                logger.info("Resolved coach %s from %s as %r", coach_id, collection, resolved.coach_name)
                return resolved
        except Exception as e:
            logger.error("Error fetching coach data for %s: %s", coach_id, e)
            resolved.coach_name = coach_id
            return resolved

        logger.warning("Coach %s not found in any coach collection", coach_id)
        return resolved

    async def create_weekly_message(self, user_id: str, week_start_date: DateLike) -> WeeklyMessageResult:
        """Generate and save the weekly coaching message.

        Raises:
            ValueError: week_start_date is not a Monday
            WeeklyCheckinNotFound: the user has not submitted the weekly checkin
            GenerationError: the text service failed
        """
        weekly_data = await collect_weekly_data(user_id, week_start_date, store=self.store)
        if weekly_data.weekly_checkin is None:
            raise WeeklyCheckinNotFound(user_id, weekly_data.week_start_date)

        profile = weekly_data.user_profile
        coach = await self.resolve_coach(profile.coach_id if profile else None)
        message = await generate_coaching_message(
            weekly_data,
            coach_name=coach.coach_name,
            coach_persona=coach.coach_persona,
            custom_intensity_overrides=coach.intensity_overrides,
            client=self.weekly_client,
        )

        message_id = doc_id(user_id, weekly_data.week_start_date)
        await self.store.set_doc(
            MESSAGES,
            message_id,
            {
                "user_id": user_id,
                "week_start_date": weekly_data.week_start_date,
                "subject": message.subject,
                "body": message.body,
                "coach_id": coach.coach_id,
                "coach_name": coach.coach_name,
                "read": False,
                "created_at": datetime.now(timezone.utc),
            },
        )
        logger.info("Saved weekly message %s for user %s", message_id, user_id)
        return WeeklyMessageResult(
            message_id=message_id,
            subject=message.subject,
            body=message.body,
            coach_name=coach.coach_name,
        )

    async def create_daily_message(self, user_id: str, date: Optional[DateLike] = None) -> DailyMessageResult:
        """Generate and save the daily coach message, at most once per user per date.

        A message already saved for the date is returned without collecting
        data or calling the text service.

        Raises:
            ProfileNotFound: no users document for user_id
            CoachNotSelected: the user has no coach or opted out of one
            GenerationError: the text service failed
        """
        day = format_date(date if date is not None else datetime.now().date())
        message_id = doc_id(user_id, day)

        existing = await self.store.get_doc(DAILY_COACH_MESSAGES, message_id)
        if existing is not None:
            logger.info("Daily message already exists for user %s on %s", user_id, day)
            return DailyMessageResult(
                message=existing.get("message") or "",
                date=day,
                coach_name=existing.get("coach_name") or DEFAULT_COACH,
                existing=True,
            )

        daily_data = await collect_daily_message_data(user_id, day, store=self.store)
        profile = daily_data.user_profile
        if profile is None:
            raise ProfileNotFound(user_id)
        if not profile.has_coach:
            logger.info("User %s has not selected a coach, skipping daily message", user_id)
            raise CoachNotSelected(user_id)

        coach = await self.resolve_coach(profile.coach_id)
        message = await generate_daily_coach_message(
            daily_data,
            coach_name=coach.coach_name,
            coach_persona=coach.coach_persona,
            custom_intensity_overrides=coach.intensity_overrides,
            client=self.daily_client,
        )

        await self.store.set_doc(
            DAILY_COACH_MESSAGES,
            message_id,
            {
                "user_id": user_id,
                "message": message,
                "date": day,
                "coach_id": coach.coach_id,
                "coach_name": coach.coach_name,
                "created_at": datetime.now(timezone.utc),
            },
        )
        logger.info("Saved daily message %s for user %s", message_id, user_id)
        return DailyMessageResult(message=message, date=day, coach_name=coach.coach_name)
