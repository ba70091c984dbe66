"""Per-user sliding-window rate limiting backed by a Redis sorted set.

Each accepted request is a member scored by its timestamp; members older than
the window are dropped before counting.
"""

import math
import time
import uuid
from dataclasses import dataclass
from typing import Callable

import redis.asyncio as aioredis

from utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset: int  # epoch seconds when the oldest counted request leaves the window
    retry_after: int = 0

    def headers(self) -> dict:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset),
        }


class SlidingWindowRateLimiter:
    """Allows ``limit`` hits per key within any ``window_seconds`` span."""

    def __init__(
        self,
        redis: aioredis.Redis,
        limit: int,
        window_seconds: int,
        prefix: str = "rate_limit",
        clock: Callable[[], float] = time.time,
    ):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be at least 1")
        self.redis = redis
        self.limit = limit
        self.window_seconds = window_seconds
        self.prefix = prefix
        self.clock = clock

    def key_for(self, identifier: str) -> str:
        return f"{self.prefix}:{identifier}"

    async def hit(self, identifier: str) -> RateLimitResult:
        """Record one request for ``identifier`` unless it would exceed the limit.

        Raises:
            redis.exceptions.RedisError: the Redis call failed
        """
        key = self.key_for(identifier)
        now = self.clock()
        member = f"{now}:{uuid.uuid4().hex}"

        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.zremrangebyscore(key, 0, now - self.window_seconds)
            pipe.zadd(key, {member: now})
            pipe.zcard(key)
            pipe.zrange(key, 0, 0, withscores=True)
            pipe.expire(key, self.window_seconds)
            _, _, count, oldest, _ = await pipe.execute()

        oldest_score = oldest[0][1] if oldest else now
        reset = math.ceil(oldest_score + self.window_seconds)

        if count > self.limit:
            # Rejected requests do not occupy the window
            await self.redis.zrem(key, member)
            logger.info("Rate limit reached for %s (%d per %ds)", key, self.limit, self.window_seconds)
            return RateLimitResult(
                allowed=False,
                limit=self.limit,
                remaining=0,
                reset=reset,
                retry_after=max(1, math.ceil(reset - now)),
            )

        return RateLimitResult(
            allowed=True,
            limit=self.limit,
            remaining=self.limit - count,
            reset=reset,
        )
