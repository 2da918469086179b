"""
Database facade - provides unified access to all repositories.

Routes and services talk to this class; it delegates to the specialized
repositories internally.
"""

from datetime import date, datetime
from pathlib import Path

from .connection import DatabaseConnection
from .user_repository import UserRepository
from .article_repository import ArticleRepository
from .read_log_repository import ReadLogRepository
from .analytics_repository import AnalyticsRepository
from .models import DBArticle, DBDailyAnalytics, DBReadGroup, DBReadLog, DBUser


class Database:
    """
    Unified database access facade.

    Repositories are also reachable directly as attributes.
    """

    def __init__(self, db_path: Path):
        self._connection = DatabaseConnection(db_path)

        # Initialize repositories
        self.users = UserRepository(self._connection)
        self.articles = ArticleRepository(self._connection)
        self.read_logs = ReadLogRepository(self._connection)
        self.analytics = AnalyticsRepository(self._connection)

    @property
    def path(self) -> Path:
        return self._connection.db_path

    # ─────────────────────────────────────────────────────────────
    # User operations (delegated to UserRepository)
    # ─────────────────────────────────────────────────────────────

    def add_user(self, name: str, email: str, password_digest: str, role: str) -> DBUser:
        return self.users.add(name, email, password_digest, role)

    def get_user_by_email(self, email: str) -> DBUser | None:
        return self.users.get_by_email(email)

    # ─────────────────────────────────────────────────────────────
    # Article operations (delegated to ArticleRepository)
    # ─────────────────────────────────────────────────────────────

    def add_article(
        self,
        author_id: str,
        title: str,
        content: str,
        category: str,
        status: str = "Draft",
    ) -> DBArticle:
        return self.articles.add(author_id, title, content, category, status)

    def get_article(self, article_id: str) -> DBArticle | None:
        return self.articles.get(article_id)

    def update_article(self, article_id: str, fields: dict) -> DBArticle | None:
        return self.articles.update(article_id, fields)

    def soft_delete_article(self, article_id: str) -> bool:
        return self.articles.soft_delete(article_id)

    def get_author_articles(
        self,
        author_id: str,
        include_deleted: bool = False,
        limit: int = 10,
        offset: int = 0
    ) -> tuple[list[DBArticle], int]:
        return self.articles.get_by_author(author_id, include_deleted, limit, offset)

    def get_published_articles(
        self,
        category: str | None = None,
        author: str | None = None,
        query: str | None = None,
        limit: int = 10,
        offset: int = 0
    ) -> tuple[list[DBArticle], int]:
        return self.articles.get_published(category, author, query, limit, offset)

    # ─────────────────────────────────────────────────────────────
    # Read log operations (delegated to ReadLogRepository)
    # ─────────────────────────────────────────────────────────────

    def add_read_log(
        self,
        article_id: str,
        reader_id: str | None = None,
        read_at: datetime | None = None
    ) -> str:
        return self.read_logs.add(article_id, reader_id, read_at)

    def get_read_logs(self, article_id: str) -> list[DBReadLog]:
        return self.read_logs.get_for_article(article_id)

    def count_read_logs(self, article_id: str | None = None) -> int:
        return self.read_logs.count(article_id)

    def group_read_logs_by_day(self) -> list[DBReadGroup]:
        return self.read_logs.group_by_article_day()

    # ─────────────────────────────────────────────────────────────
    # Analytics operations (delegated to AnalyticsRepository)
    # ─────────────────────────────────────────────────────────────

    def upsert_daily_analytics(self, article_id: str, day: date, view_count: int):
        return self.analytics.upsert_daily(article_id, day, view_count)

    def get_daily_analytics(self, article_id: str | None = None) -> list[DBDailyAnalytics]:
        if article_id is None:
            return self.analytics.get_all()
        return self.analytics.get_for_article(article_id)

    def sum_article_views(self, article_ids: list[str]) -> dict[str, int]:
        return self.analytics.sum_views(article_ids)
