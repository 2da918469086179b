"""
Database row converters - convert SQLite rows to dataclasses.
"""

import sqlite3
from datetime import date, datetime, timezone

from .models import DBArticle, DBDailyAnalytics, DBReadGroup, DBReadLog, DBUser


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a stored ISO timestamp; naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _required_timestamp(value: str | None) -> datetime:
    return parse_timestamp(value) or datetime.now(timezone.utc)


def row_to_user(row: sqlite3.Row) -> DBUser:
    """Convert a database row to a DBUser."""
    return DBUser(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        password=row["password"],
        role=row["role"],
        created_at=_required_timestamp(row["created_at"]),
        updated_at=_required_timestamp(row["updated_at"]),
    )


def row_to_article(row: sqlite3.Row) -> DBArticle:
    """Convert a database row to a DBArticle."""
    # author_name only exists when the query joins users
    try:
        author_name = row["author_name"]
    except (IndexError, KeyError):
        author_name = None

    return DBArticle(
        id=row["id"],
        author_id=row["author_id"],
        title=row["title"],
        content=row["content"],
        category=row["category"],
        status=row["status"],
        created_at=_required_timestamp(row["created_at"]),
        updated_at=_required_timestamp(row["updated_at"]),
        deleted_at=parse_timestamp(row["deleted_at"]),
        author_name=author_name,
    )


def row_to_read_log(row: sqlite3.Row) -> DBReadLog:
    return DBReadLog(
        id=row["id"],
        article_id=row["article_id"],
        reader_id=row["reader_id"],
        read_at=_required_timestamp(row["read_at"]),
    )


def row_to_daily_analytics(row: sqlite3.Row) -> DBDailyAnalytics:
    return DBDailyAnalytics(
        id=row["id"],
        article_id=row["article_id"],
        date=date.fromisoformat(row["date"]),
        view_count=int(row["view_count"]),
        created_at=_required_timestamp(row["created_at"]),
        updated_at=_required_timestamp(row["updated_at"]),
    )


def row_to_read_group(row: sqlite3.Row) -> DBReadGroup:
    return DBReadGroup(
        article_id=row["article_id"],
        date=date.fromisoformat(row["read_date"]),
        view_count=int(row["view_count"]),
    )
