"""
Read log repository - append-only read events.
"""

import uuid
from datetime import datetime, timezone

from .connection import DatabaseConnection
from .converters import row_to_read_group, row_to_read_log
from .models import DBReadGroup, DBReadLog


class ReadLogRepository:
    """Repository for raw read events. Rows are never updated or deleted here."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def add(
        self,
        article_id: str,
        reader_id: str | None = None,
        read_at: datetime | None = None
    ) -> str:
        """Append a read event. Returns the new row ID."""
        log_id = str(uuid.uuid4())
        read_at = read_at or datetime.now(timezone.utc)
        if read_at.tzinfo is None:
            read_at = read_at.replace(tzinfo=timezone.utc)
        with self._db.conn() as conn:
            conn.execute(
                "INSERT INTO read_logs (id, article_id, reader_id, read_at) VALUES (?, ?, ?, ?)",
                (log_id, article_id, reader_id, read_at.astimezone(timezone.utc).isoformat())
            )
        return log_id

    def get_for_article(self, article_id: str) -> list[DBReadLog]:
        with self._db.conn() as conn:
            rows = conn.execute(
                "SELECT * FROM read_logs WHERE article_id = ? ORDER BY read_at",
                (article_id,)
            ).fetchall()
            return [row_to_read_log(row) for row in rows]

    def count(self, article_id: str | None = None) -> int:
        query = "SELECT COUNT(*) AS cnt FROM read_logs"
        params: tuple = ()
        if article_id is not None:
            query += " WHERE article_id = ?"
            params = (article_id,)
        with self._db.conn() as conn:
            return conn.execute(query, params).fetchone()["cnt"]

    def group_by_article_day(self) -> list[DBReadGroup]:
        """
        Count every read event per (article, UTC calendar day).

        read_at is stored in UTC, so DATE() yields the UTC day.
        """
        with self._db.conn() as conn:
            rows = conn.execute("""
                SELECT article_id, DATE(read_at) AS read_date, COUNT(*) AS view_count
                FROM read_logs
                GROUP BY article_id, DATE(read_at)
                ORDER BY read_date, article_id
            """).fetchall()
            return [row_to_read_group(row) for row in rows]
