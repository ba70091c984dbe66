"""Per-pipeline model and retry configuration."""

from typing import Dict, Any

# Model settings for each coaching message pipeline.
# base_delay is in seconds; retries back off as base_delay * 2 ** attempt.
AGENT_CONFIG: Dict[str, Any] = {
    "weekly_coach": {
        "model": "gpt-4o-mini",
        "fallback_model": "claude-3-haiku-20240307",
        "temperature": 0.7,
        "max_attempts": 3,
        "base_delay": 2.0,
    },
    "daily_coach": {
        "model": "gpt-4o-mini",
        "fallback_model": "claude-3-haiku-20240307",
        "temperature": 0.8,
        "max_attempts": 3,
        "base_delay": 1.0,
    },
}
