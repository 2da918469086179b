"""
Configuration and application state management.
"""

import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from .exceptions import AppError

if TYPE_CHECKING:
    from apscheduler.schedulers.base import BaseScheduler

    from .database import Database
    from .read_logger import ReadLogger
    from .rate_limit import ReadRateLimiter

# Load environment variables
load_dotenv()


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


class Config:
    """Application configuration from environment."""
    # "production" hides tracebacks from the server log
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    DB_PATH: Path = Path(os.getenv("DB_PATH", "./data/newsdesk.db"))
    PORT: int = int(os.getenv("PORT", "8000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Token signing
    JWT_SECRET: str = os.getenv("JWT_SECRET", "newsdesk-development-secret-change-me")
    JWT_EXPIRES_IN: str = os.getenv("JWT_EXPIRES_IN", "24h")

    # Read tracking
    READ_LOG_WINDOW_SECONDS: float = float(os.getenv("READ_LOG_WINDOW_SECONDS", "30"))
    READ_LOG_CLEANUP_SECONDS: float = float(os.getenv("READ_LOG_CLEANUP_SECONDS", "60"))

    # Analytics aggregation
    AGGREGATION_TIMEOUT_SECONDS: float = float(os.getenv("AGGREGATION_TIMEOUT_SECONDS", "300"))
    SCHEDULER_ENABLED: bool = _parse_bool(os.getenv("SCHEDULER_ENABLED"), default=True)

    # Global per-IP request limit, 0 disables
    RATE_LIMIT_PER_MINUTE: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "120"))

    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    def jobstore_url(self) -> str:
        """SQLAlchemy URL for the scheduler job store (same file as the app data)."""
        return f"sqlite:///{self.DB_PATH}"


config = Config()


class AppState:
    """Shared application state."""
    db: "Database | None" = None
    read_limiter: "ReadRateLimiter | None" = None
    read_logger: "ReadLogger | None" = None
    scheduler: "BaseScheduler | None" = None


state = AppState()


def get_db() -> "Database":
    """Dependency to get database instance."""
    if state.db is None:
        raise AppError("Database not initialized", 500)
    return state.db


def get_read_limiter() -> "ReadRateLimiter":
    """Dependency to get the process-wide read limiter."""
    if state.read_limiter is None:
        raise AppError("Read limiter not initialized", 500)
    return state.read_limiter


def get_read_logger() -> "ReadLogger":
    """Dependency to get the read logger."""
    if state.read_logger is None:
        raise AppError("Read logger not initialized", 500)
    return state.read_logger
