"""Prompts for the coaching message pipelines."""

from prompts.coach_tone_prompt import (
    CONTINUITY_INSTRUCTION,
    EXPERIENCE_INSTRUCTIONS,
    INTENSITY_INSTRUCTIONS,
    PERSONA_INSTRUCTION,
)
from prompts.daily_coach_prompt import DAILY_COACH_PROMPT
from prompts.weekly_coach_prompt import WEEKLY_COACH_PROMPT, WEEKLY_SECTIONS

__all__ = [
    "CONTINUITY_INSTRUCTION",
    "EXPERIENCE_INSTRUCTIONS",
    "INTENSITY_INSTRUCTIONS",
    "PERSONA_INSTRUCTION",
    "DAILY_COACH_PROMPT",
    "WEEKLY_COACH_PROMPT",
    "WEEKLY_SECTIONS",
]
