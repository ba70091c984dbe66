"""Database connection setup."""

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from pymongo.uri_parser import parse_uri
import redis.asyncio as aioredis
from typing import Optional
from config.settings import settings
from utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_DATABASE_NAME = "fitness_coach"

# Collections read by the coaching pipeline
USERS = "users"
COACHES = "coaches"
USER_COACHES = "user_coaches"
COMMUNITY_COACHES = "community_coaches"
DAILY_CHECKINS = "daily_checkins"
FOOD_DIARY = "food_diary"
WATER_LOG = "water_log"
WORKOUT_LOGS = "workout_logs"
CARDIO_LOG = "cardio_log"
WEEKLY_CHECKINS = "weekly_checkins"
# Collections written by the coaching service
MESSAGES = "messages"
DAILY_COACH_MESSAGES = "daily_coach_messages"


class Database:
    """Database connection manager."""

    client: Optional[AsyncIOMotorClient] = None
    redis_client: Optional[aioredis.Redis] = None


db = Database()


async def connect_to_mongo():
    """Create database connection."""
    db.client = AsyncIOMotorClient(settings.mongodb_url)
    logger.info("Connected to MongoDB database '%s'", database_name())


async def close_mongo_connection():
    """Close database connection."""
    if db.client:
        db.client.close()
        db.client = None
        logger.info("Disconnected from MongoDB")


async def connect_to_redis():
    """Create Redis connection."""
    db.redis_client = aioredis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True
    )
    logger.info("Connected to Redis: %s", settings.redis_url)


async def close_redis_connection():
    """Close Redis connection."""
    if db.redis_client:
        await db.redis_client.aclose()
        db.redis_client = None
        logger.info("Disconnected from Redis")


async def init_mongo():
    """Initialize MongoDB connection and the session log indexes."""
    await connect_to_mongo()
    database = get_database()

    # Session logs are queried by user and date (and status for workouts)
    await database[WORKOUT_LOGS].create_index(
        [("user_id", ASCENDING), ("date", ASCENDING), ("status", ASCENDING)]
    )
    await database[CARDIO_LOG].create_index([("user_id", ASCENDING), ("date", ASCENDING)])

    logger.info("MongoDB initialized: session log indexes ensured")


def database_name() -> str:
    """Database named in the connection URL path, or the default when it names none."""
    return parse_uri(settings.mongodb_url).get("database") or DEFAULT_DATABASE_NAME


def get_database():
    """Get database instance."""
    if db.client is None:
        raise RuntimeError("MongoDB client is not connected; call connect_to_mongo() first")
    return db.client[database_name()]


def get_redis() -> Optional[aioredis.Redis]:
    """Get Redis client, or None before connect_to_redis()."""
    return db.redis_client
