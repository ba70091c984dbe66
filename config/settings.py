"""Application settings using Pydantic Settings."""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenAI Configuration
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Anthropic Configuration (Optional fallback)
    anthropic_api_key: str = ""

    # Database Configuration
    mongodb_url: str = "mongodb://localhost:27017/fitness_coach"

    # Redis Configuration (rate limiting)
    redis_url: str = "redis://localhost:6379"

    # Rate Limiting (daily messages, per user)
    rate_limit_enabled: bool = True
    rate_limit_requests: int = 10
    rate_limit_window_seconds: int = 3600

    # Request Limits
    max_request_body_bytes: int = 1024 * 1024

    # Application Configuration
    app_name: str = "Fitness Coach Messages"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS Configuration
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
