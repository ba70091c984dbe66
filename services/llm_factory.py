"""Utility helpers for creating chat models with fallbacks."""

from typing import Optional

from config.agent_config import AGENT_CONFIG
from config.settings import settings
from langchain_anthropic import ChatAnthropic
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_openai import ChatOpenAI
from services.generation_client import (
    AuthenticationFailed,
    GenerationClient,
    LangChainTextGenerator,
    RetryPolicy,
)
from utils.logger import setup_logger

logger = setup_logger(__name__)


def _agent_config(agent_name: str) -> dict:
    config = AGENT_CONFIG.get(agent_name)
    if not config:
        raise ValueError(f"No agent configuration found for '{agent_name}'")
    return config


def get_llm(agent_name: str) -> BaseChatModel:
    """Create a chat model for a coaching pipeline with optional fallback.

    The function tries to create an OpenAI chat model first.
    If an Anthropic API key plus fallback model are available,
    it creates a Claude model as a fallback and wraps it using
    LangChain's `with_fallbacks` helper.
    """
    config = _agent_config(agent_name)

    temperature = config.get("temperature", 0.7)
    primary_model_name = config.get("model") or settings.openai_model
    fallback_model_name = config.get("fallback_model")

    primary_llm: Optional[BaseChatModel] = None
    fallback_llm: Optional[BaseChatModel] = None

    if settings.openai_api_key and primary_model_name:
        try:
            primary_llm = ChatOpenAI(
                model=primary_model_name,
                temperature=temperature,
                api_key=settings.openai_api_key,
                max_retries=0,
            )
        except Exception as e:
            logger.warning(
                "Failed to initialize OpenAI model '%s' for %s: %s",
                primary_model_name,
                agent_name,
                e,
            )

    if settings.anthropic_api_key and fallback_model_name:
        try:
            fallback_llm = ChatAnthropic(
                model=fallback_model_name,
                temperature=temperature,
                anthropic_api_key=settings.anthropic_api_key,
                max_retries=0,
            )
        except Exception as e:
            logger.warning(
                "Failed to initialize Anthropic fallback model '%s' for %s: %s",
                fallback_model_name,
                agent_name,
                e,
            )

    if primary_llm and fallback_llm:
        logger.info(
            "Configured OpenAI model '%s' with Claude fallback '%s' for %s",
            primary_model_name,
            fallback_model_name,
            agent_name,
        )
        return primary_llm.with_fallbacks([fallback_llm])

    if primary_llm:
        logger.info(
            "Configured OpenAI model '%s' for %s (no fallback available)",
            primary_model_name,
            agent_name,
        )
        return primary_llm

    if fallback_llm:
        logger.info(
            "Using Claude fallback model '%s' as primary for %s",
            fallback_model_name,
            agent_name,
        )
        return fallback_llm

    raise RuntimeError(
        f"Unable to configure chat model for '{agent_name}'. "
        "Ensure OpenAI or Anthropic credentials are provided."
    )


def get_retry_policy(agent_name: str) -> RetryPolicy:
    config = _agent_config(agent_name)
    return RetryPolicy(
        max_attempts=config.get("max_attempts", 3),
        base_delay=config.get("base_delay", 2.0),
    )


def get_generation_client(agent_name: str) -> GenerationClient:
    """Build a retrying GenerationClient for a coaching pipeline.

    Raises:
        AuthenticationFailed: No usable credentials are configured
    """
    api_key_configured = bool(settings.openai_api_key or settings.anthropic_api_key)
    try:
        llm = get_llm(agent_name)
    except RuntimeError as e:
        logger.error("No chat model available for %s: %s", agent_name, e)
        raise AuthenticationFailed(api_key_configured=api_key_configured) from e

    return GenerationClient(
        LangChainTextGenerator(llm),
        policy=get_retry_policy(agent_name),
        api_key_configured=api_key_configured,
    )
