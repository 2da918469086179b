"""
Database models - dataclasses for database entities.
"""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass
class DBUser:
    id: str
    name: str
    email: str
    password: str  # argon2 digest, never the plaintext
    role: str  # author, reader
    created_at: datetime
    updated_at: datetime


@dataclass
class DBArticle:
    id: str
    author_id: str
    title: str
    content: str
    category: str
    status: str  # Draft, Published
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    # Joined from users when the query asks for it
    author_name: str | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass
class DBReadLog:
    id: str
    article_id: str
    reader_id: str | None
    read_at: datetime


@dataclass
class DBDailyAnalytics:
    id: str
    article_id: str
    date: date
    view_count: int
    created_at: datetime
    updated_at: datetime


@dataclass
class DBReadGroup:
    """COUNT(*) of read logs for one article on one UTC day."""
    article_id: str
    date: date
    view_count: int


@dataclass
class DBDashboardEntry:
    id: str
    title: str
    category: str
    status: str
    created_at: datetime
    total_views: int = 0
