"""Coaching message routes."""

import uuid
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from redis.exceptions import RedisError
from config.settings import settings
from models.database import get_redis
from schemas import (
    DailyMessageRequest,
    DailyMessageResponse,
    WeeklyMessageRequest,
    WeeklyMessageResponse,
)
from services.coaching_service import (
    CoachingService,
    CoachingRequestError,
    ProfileNotFound,
    WeeklyCheckinNotFound,
)
from services.generation_client import GenerationError, RateLimitExceeded
from services.rate_limiter import SlidingWindowRateLimiter
from utils.logger import RequestLogger, setup_logger

logger = setup_logger(__name__)

RATE_LIMIT_RETRY_AFTER = 60  # seconds


async def limit_request_body(request: Request):
    """Reject request bodies larger than max_request_body_bytes with 413."""
    limit = settings.max_request_body_bytes
    content_length = request.headers.get("content-length")
    if content_length is not None and content_length.isdigit():
        size = int(content_length)
    else:
        size = len(await request.body())
    if size > limit:
        logger.warning("Rejected %s %s: body of %d bytes exceeds %d", request.method, request.url.path, size, limit)
        raise HTTPException(
            status_code=413,
            detail={"error": "Request body too large", "max_bytes": limit},
        )


router = APIRouter(
    prefix="/api/v1/coaching",
    tags=["coaching"],
    dependencies=[Depends(limit_request_body)],
)


def get_coaching_service() -> CoachingService:
    """Dependency providing the Mongo-backed coaching service."""
    return CoachingService()


def get_rate_limiter() -> Optional[SlidingWindowRateLimiter]:
    """Dependency providing the daily message rate limiter, or None when it cannot run."""
    if not settings.rate_limit_enabled:
        return None
    redis_client = get_redis()
    if redis_client is None:
        logger.warning("Redis unavailable, skipping rate limit check")
        return None
    return SlidingWindowRateLimiter(
        redis_client,
        limit=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
        prefix="rate_limit:daily",
    )


async def _enforce_rate_limit(
    limiter: Optional[SlidingWindowRateLimiter],
    user_id: str,
    request_id: str,
    response: Response,
    log: RequestLogger,
):
    """Count the request against the user's window; 429 when it is full."""
    if limiter is None:
        return
    try:
        result = await limiter.hit(user_id)
    except RedisError as e:
        log.warning("Rate limit check failed, allowing request: %s", e)
        return

    if not result.allowed:
        log.warning("User %s exceeded %d daily message requests", user_id, result.limit)
        raise HTTPException(
            status_code=429,
            detail={
                "error": "Rate limit exceeded",
                "message": f"Too many requests. Limit: {result.limit} per {limiter.window_seconds} seconds",
                "retry_after": result.retry_after,
                "request_id": request_id,
            },
            headers={
                **result.headers(),
                "Retry-After": str(result.retry_after),
                "X-Request-ID": request_id,
            },
        )
    response.headers.update(result.headers())


def _request_error_status(error: CoachingRequestError) -> int:
    if isinstance(error, (ProfileNotFound, WeeklyCheckinNotFound)):
        return 404
    # CoachNotSelected and any other unservable request
    return 400


def _raise_for(error: Exception, request_id: str, failure: str, log: RequestLogger):
    """Translate service and generation errors into HTTP errors."""
    if isinstance(error, CoachingRequestError):
        log.info("Request rejected: %s", error)
        raise HTTPException(
            status_code=_request_error_status(error),
            detail={"error": str(error), "request_id": request_id},
        )
    if isinstance(error, RateLimitExceeded):
        log.warning("AI service rate limit after %d attempts", error.attempts)
        raise HTTPException(
            status_code=429,
            detail={
                "error": "Rate limit exceeded",
                "message": str(error),
                "retry_after": RATE_LIMIT_RETRY_AFTER,
                "request_id": request_id,
            },
            headers={"Retry-After": str(RATE_LIMIT_RETRY_AFTER), "X-Request-ID": request_id},
        )
    if isinstance(error, ValueError):
        log.info("Invalid request: %s", error)
        raise HTTPException(status_code=400, detail={"error": str(error), "request_id": request_id})
    if isinstance(error, GenerationError):
        log.error("%s: %s", failure, error)
    else:
        log.error("%s: %s", failure, error, exc_info=True)
    raise HTTPException(
        status_code=500,
        detail={"error": failure, "details": str(error), "request_id": request_id},
        headers={"X-Request-ID": request_id},
    )


@router.post("/weekly", response_model=WeeklyMessageResponse)
async def create_weekly_message(
    request: WeeklyMessageRequest,
    response: Response,
    service: CoachingService = Depends(get_coaching_service),
):
    """Generate and save the weekly coaching message for a submitted weekly checkin."""
    request_id = str(uuid.uuid4())
    log = RequestLogger(logger, request_id)
    response.headers["X-Request-ID"] = request_id
    log.info("Weekly message requested for user %s, week %s", request.user_id, request.week_start_date)

    try:
        result = await service.create_weekly_message(request.user_id, request.week_start_date)
    except Exception as e:
        _raise_for(e, request_id, "Failed to generate coaching message", log)

    log.info("Weekly message %s generated", result.message_id)
    return WeeklyMessageResponse(
        message_id=result.message_id,
        subject=result.subject,
        body=result.body,
        coach_name=result.coach_name,
        request_id=request_id,
    )


@router.post("/daily", response_model=DailyMessageResponse)
async def create_daily_message(
    request: DailyMessageRequest,
    response: Response,
    service: CoachingService = Depends(get_coaching_service),
    limiter: Optional[SlidingWindowRateLimiter] = Depends(get_rate_limiter),
):
    """Generate and save the daily coach message for a date (today by default)."""
    request_id = str(uuid.uuid4())
    log = RequestLogger(logger, request_id)
    response.headers["X-Request-ID"] = request_id
    log.info("Daily message requested for user %s, date %s", request.user_id, request.date or "today")
    await _enforce_rate_limit(limiter, request.user_id, request_id, response, log)

    try:
        result = await service.create_daily_message(request.user_id, request.date)
    except Exception as e:
        _raise_for(e, request_id, "Failed to generate daily coach message", log)

    if result.existing:
        log.info("Daily message for %s already saved, returning it", result.date)
    else:
        log.info("Daily message for %s generated", result.date)
    return DailyMessageResponse(
        message=result.message,
        date=result.date,
        coach_name=result.coach_name,
        request_id=request_id,
    )
