"""Turns raw model output into coaching messages. Never raises."""

import json
import re
from typing import Any, Dict, Optional

from schemas import CoachingMessage
from utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_SUBJECT = "Your Weekly Coaching Update"
MAX_SUBJECT_LENGTH = 60

_OPENING_FENCE = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"\n?```\s*$")
_HEADING_MARKERS = re.compile(r"^#+\s*")


def strip_code_fences(raw_text: Optional[str]) -> str:
    """Remove a leading ```json / ``` fence and a trailing ``` fence."""
    text = (raw_text or "").strip()
    text = _OPENING_FENCE.sub("", text, count=1)
    text = _CLOSING_FENCE.sub("", text, count=1)
    return text.strip()


def _load_json_object(text: str) -> Optional[Dict[str, Any]]:
    """The whole text as a JSON object, or None."""
    # ValueError also covers oversized integer literals, not just JSONDecodeError
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def _text_field(payload: Dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _subject_from_first_line(text: str) -> str:
    first_line = text.split("\n", 1)[0].strip()
    candidate = _HEADING_MARKERS.sub("", first_line).strip()
    if candidate and len(candidate) <= MAX_SUBJECT_LENGTH:
        return candidate
    return DEFAULT_SUBJECT


def parse_weekly_response(raw_text: Optional[str]) -> CoachingMessage:
    """Parse the weekly response into a subject and body.

    JSON output supplies both fields; missing fields fall back to the default
    subject and the full text. Non-JSON output takes its subject from a short
    first line and keeps the whole text as the body.
    """
    text = strip_code_fences(raw_text)
    payload = _load_json_object(text)
    if payload is not None:
        return CoachingMessage(
            subject=_text_field(payload, "subject").strip() or DEFAULT_SUBJECT,
            body=_text_field(payload, "body") or text,
        )

    logger.warning("Weekly coaching response was not JSON; deriving subject from first line")
    return CoachingMessage(subject=_subject_from_first_line(text), body=text)


def parse_daily_response(raw_text: Optional[str]) -> str:
    """Daily responses are plain text: strip fences and whitespace only."""
    return strip_code_fences(raw_text)
