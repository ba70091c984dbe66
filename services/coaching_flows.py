"""Weekly and daily coaching message pipelines: compose, generate, parse."""

from typing import Optional

from schemas import CoachingMessage, DailyMessageData, WeeklyData
from services.generation_client import GenerationClient
from services.llm_factory import get_generation_client
from services.prompt_composer import IntensityOverrides, compose_daily_prompt, compose_weekly_prompt
from services.response_parser import parse_daily_response, parse_weekly_response
from utils.logger import setup_logger

logger = setup_logger(__name__)


async def generate_coaching_message(
    weekly_data: WeeklyData,
    coach_name: str = "AI Coach",
    coach_persona: str = "",
    custom_intensity_overrides: Optional[IntensityOverrides] = None,
    client: Optional[GenerationClient] = None,
) -> CoachingMessage:
    """Generate the weekly coaching message (subject + multi-section body).

    Raises:
        RateLimitExceeded, AuthenticationFailed, UnknownGenerationError
    """
    prompt = compose_weekly_prompt(
        weekly_data,
        coach_name=coach_name,
        coach_persona=coach_persona,
        custom_intensity_overrides=custom_intensity_overrides,
    )
    client = client or get_generation_client("weekly_coach")

    logger.info(
        "Generating weekly message for user %s, week %s (prompt %d chars)",
        weekly_data.user_id,
        weekly_data.week_start_date,
        len(prompt),
    )
    raw_text = await client.generate(prompt)
    message = parse_weekly_response(raw_text)
    logger.info("Weekly message generated for user %s: %r", weekly_data.user_id, message.subject)
    return message


async def generate_daily_coach_message(
    daily_data: DailyMessageData,
    coach_name: str = "AI Coach",
    coach_persona: str = "",
    custom_intensity_overrides: Optional[IntensityOverrides] = None,
    client: Optional[GenerationClient] = None,
) -> str:
    """Generate the short plain-text daily coach message."""
    prompt = compose_daily_prompt(
        daily_data,
        coach_name=coach_name,
        coach_persona=coach_persona,
        custom_intensity_overrides=custom_intensity_overrides,
    )
    client = client or get_generation_client("daily_coach")

    logger.info("Generating daily message for user %s on %s", daily_data.user_id, daily_data.date)
    raw_text = await client.generate(prompt)
    return parse_daily_response(raw_text)
