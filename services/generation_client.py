"""Resilient wrapper around the generative text service.

Rate-limit failures are retried with exponential backoff; every other
failure is classified once and surfaced as a terminal GenerationError.
"""

import asyncio
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Protocol

from langchain_core.language_models.chat_models import BaseChatModel

from utils.logger import setup_logger

logger = setup_logger(__name__)

RATE_LIMIT_PATTERN = re.compile(r"\b429\b|rate limit|resource_exhausted|too many requests")
AUTH_MARKERS = ("forbidden", "permission denied", "api key", "authentication")


class GenerationError(RuntimeError):
    """Base class for terminal generation failures."""


class RateLimitExceeded(GenerationError):
    def __init__(self, attempts: int):
        super().__init__(
            "Rate limit exceeded. Please try again in a few minutes; "
            "the AI service is temporarily limiting requests."
        )
        self.attempts = attempts


class AuthenticationFailed(GenerationError):
    def __init__(self, api_key_configured: bool):
        detail = "an API key is configured" if api_key_configured else "no API key is configured"
        super().__init__(f"AI service rejected the credentials ({detail}).")
        self.api_key_configured = api_key_configured


class UnknownGenerationError(GenerationError):
    def __init__(self, original_message: str):
        super().__init__(f"Failed to generate coaching message: {original_message or 'Unknown error'}")
        self.original_message = original_message


class ErrorKind(str, Enum):
    RATE_LIMIT = "rate_limit"
    AUTHENTICATION = "authentication"
    UNKNOWN = "unknown"


def _status_code(exc: BaseException) -> Optional[int]:
    """HTTP status carried by SDK (status_code / status / code) or httpx-style errors."""
    for attr in ("status_code", "status", "code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    return value if isinstance(value, int) else None


def classify_error(exc: BaseException) -> ErrorKind:
    """Classify a service failure: rate limit first, then auth, else unknown."""
    status = _status_code(exc)
    code = getattr(exc, "code", None)
    text = f"{exc} {code if isinstance(code, str) else ''}".lower()
    if status == 429 or RATE_LIMIT_PATTERN.search(text):
        return ErrorKind.RATE_LIMIT
    if status in (401, 403) or any(marker in text for marker in AUTH_MARKERS):
        return ErrorKind.AUTHENTICATION
    return ErrorKind.UNKNOWN


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff for retryable failures.

    Attempt ``n`` (0-based) that fails retryably waits ``base_delay * 2 ** n``
    seconds before the next attempt.
    """

    max_attempts: int = 3
    base_delay: float = 2.0
    classifier: Callable[[BaseException], ErrorKind] = field(default=classify_error)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must not be negative")

    def delay_for(self, attempt: int) -> float:
        return self.base_delay * (2 ** attempt)

    def is_retryable(self, exc: BaseException) -> bool:
        return self.classifier(exc) is ErrorKind.RATE_LIMIT


@dataclass
class GenerationResult:
    """Result from the text service."""
    text: str


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> GenerationResult:
        ...


def _message_text(content: Any) -> str:
    """Flatten LangChain message content (str or list of parts) to text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and isinstance(part.get("text"), str):
                parts.append(part["text"])
        return "".join(parts)
    return "" if content is None else str(content)


class LangChainTextGenerator:
    """TextGenerator backed by a LangChain chat model."""

    def __init__(self, llm: BaseChatModel):
        self.llm = llm

    async def generate(self, prompt: str) -> GenerationResult:
        message = await self.llm.ainvoke(prompt)
        return GenerationResult(text=_message_text(getattr(message, "content", message)))


class GenerationClient:
    """Invokes the text service once per attempt, retrying only rate limits.

    States: attempting -> success | retryable failure -> attempting (while
    attempts remain) | terminal failure.
    """

    def __init__(
        self,
        generator: TextGenerator,
        policy: Optional[RetryPolicy] = None,
        api_key_configured: bool = True,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.generator = generator
        self.policy = policy or RetryPolicy()
        self.api_key_configured = api_key_configured
        self._sleep = sleep

    async def generate(self, prompt: str) -> str:
        """Return the raw response text.

        Raises:
            RateLimitExceeded: Still rate limited after max_attempts attempts
            AuthenticationFailed: Credentials missing or rejected
            UnknownGenerationError: Any other failure, wrapping its message
        """
        max_attempts = self.policy.max_attempts
        for attempt in range(max_attempts):
            try:
                result = await self.generator.generate(prompt)
                return result.text or ""
            except Exception as e:
                if self.policy.is_retryable(e):
                    if attempt < max_attempts - 1:
                        delay = self.policy.delay_for(attempt)
                        logger.warning(
                            "Rate limited (attempt %d/%d), retrying in %.1fs: %s",
                            attempt + 1, max_attempts, delay, e,
                        )
                        await self._sleep(delay)
                        continue
                    logger.error("Rate limited on all %d attempts: %s", max_attempts, e)
                    raise RateLimitExceeded(attempts=max_attempts) from e
                if self.policy.classifier(e) is ErrorKind.AUTHENTICATION:
                    logger.error(
                        "Generation authentication failed (api key configured: %s): %s",
                        self.api_key_configured, e,
                    )
                    raise AuthenticationFailed(api_key_configured=self.api_key_configured) from e
                logger.error("Generation failed: %s", e, exc_info=True)
                raise UnknownGenerationError(str(e)) from e
