"""
Database module - SQLite operations for users, articles and read analytics.

Uses repository pattern for better separation of concerns.
"""

from .connection import DatabaseConnection
from .models import (
    DBArticle,
    DBDailyAnalytics,
    DBDashboardEntry,
    DBReadGroup,
    DBReadLog,
    DBUser,
)
from .user_repository import DuplicateEmailError, UserRepository
from .article_repository import ArticleRepository
from .read_log_repository import ReadLogRepository
from .analytics_repository import AnalyticsRepository
from .database import Database

__all__ = [
    "Database",
    "DatabaseConnection",
    "DBArticle",
    "DBDailyAnalytics",
    "DBDashboardEntry",
    "DBReadGroup",
    "DBReadLog",
    "DBUser",
    "DuplicateEmailError",
    "UserRepository",
    "ArticleRepository",
    "ReadLogRepository",
    "AnalyticsRepository",
]
