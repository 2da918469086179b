"""
Database connection management and schema initialization.
"""

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

# Seconds a writer waits on a locked database before failing
BUSY_TIMEOUT = 10.0


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string, the storage format for timestamps."""
    return datetime.now(timezone.utc).isoformat()


class DatabaseConnection:
    """Manages database connection and schema."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    @contextmanager
    def conn(self) -> Iterator[sqlite3.Connection]:
        """Get database connection with row factory.

        Each context is one transaction: committed on clean exit, rolled
        back when the block raises.
        """
        connection = sqlite3.connect(self.db_path, timeout=BUSY_TIMEOUT)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        try:
            yield connection
            connection.commit()
        except Exception:
            connection.rollback()
            raise
        finally:
            connection.close()

    def _init_schema(self):
        """Initialize database schema."""
        with self.conn() as connection:
            connection.executescript("""
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    email TEXT UNIQUE NOT NULL,
                    password TEXT NOT NULL,
                    role TEXT NOT NULL CHECK(role IN ('author', 'reader')),
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                );

                CREATE TABLE IF NOT EXISTS articles (
                    id TEXT PRIMARY KEY,
                    author_id TEXT NOT NULL REFERENCES users(id) ON UPDATE CASCADE ON DELETE CASCADE,
                    title TEXT NOT NULL CHECK(length(title) BETWEEN 1 AND 150),
                    content TEXT NOT NULL CHECK(length(content) >= 50),
                    category TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'Draft' CHECK(status IN ('Draft', 'Published')),
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP NOT NULL,
                    deleted_at TIMESTAMP
                );

                CREATE TABLE IF NOT EXISTS read_logs (
                    id TEXT PRIMARY KEY,
                    article_id TEXT NOT NULL REFERENCES articles(id) ON UPDATE CASCADE ON DELETE CASCADE,
                    reader_id TEXT REFERENCES users(id) ON UPDATE CASCADE ON DELETE SET NULL,
                    read_at TIMESTAMP NOT NULL
                );

                CREATE TABLE IF NOT EXISTS daily_analytics (
                    id TEXT PRIMARY KEY,
                    article_id TEXT NOT NULL REFERENCES articles(id) ON UPDATE CASCADE ON DELETE CASCADE,
                    date TEXT NOT NULL,
                    view_count INTEGER NOT NULL DEFAULT 0,
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                );

                CREATE UNIQUE INDEX IF NOT EXISTS unique_article_date
                    ON daily_analytics(article_id, date);
                CREATE INDEX IF NOT EXISTS idx_articles_author ON articles(author_id, created_at DESC);
                CREATE INDEX IF NOT EXISTS idx_articles_feed ON articles(status, deleted_at, created_at DESC);
                CREATE INDEX IF NOT EXISTS idx_read_logs_article ON read_logs(article_id, read_at);
            """)
