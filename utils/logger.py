"""Logging configuration."""

import logging
import sys
import uuid
from typing import Optional
from config.settings import settings


def setup_logger(name: str = __name__) -> logging.Logger:
    """Set up logger with configuration."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, settings.log_level.upper()))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(getattr(logging, settings.log_level.upper()))

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


class RequestLogger(logging.LoggerAdapter):
    """Logger adapter that prefixes every record with a request id."""

    def __init__(self, logger: logging.Logger, request_id: Optional[str] = None):
        self.request_id = request_id or str(uuid.uuid4())
        super().__init__(logger, {"request_id": self.request_id})

    def process(self, msg, kwargs):
        return f"[{self.request_id}] {msg}", kwargs
