"""
Analytics repository - the per-day view count rollup.
"""

import uuid
from datetime import date

from .connection import DatabaseConnection, utc_now
from .converters import row_to_daily_analytics
from .models import DBDailyAnalytics


class AnalyticsRepository:
    """Repository for the daily_analytics rollup table."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def upsert_daily(self, article_id: str, day: date, view_count: int):
        """
        Set the view count for one (article, day) pair.

        Inserts the row if absent, otherwise overwrites view_count. Runs in its
        own transaction, so a single pair is never half-written.
        """
        now = utc_now()
        with self._db.conn() as conn:
            conn.execute(
                """
                INSERT INTO daily_analytics (id, article_id, date, view_count, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(article_id, date) DO UPDATE SET
                    view_count = excluded.view_count,
                    updated_at = excluded.updated_at
                """,
                (str(uuid.uuid4()), article_id, day.isoformat(), view_count, now, now)
            )

    def get_for_article(self, article_id: str) -> list[DBDailyAnalytics]:
        with self._db.conn() as conn:
            rows = conn.execute(
                "SELECT * FROM daily_analytics WHERE article_id = ? ORDER BY date",
                (article_id,)
            ).fetchall()
            return [row_to_daily_analytics(row) for row in rows]

    def get_all(self) -> list[DBDailyAnalytics]:
        with self._db.conn() as conn:
            rows = conn.execute(
                "SELECT * FROM daily_analytics ORDER BY date, article_id"
            ).fetchall()
            return [row_to_daily_analytics(row) for row in rows]

    def sum_views(self, article_ids: list[str]) -> dict[str, int]:
        """Total view count per article. Articles without rollup rows are absent."""
        if not article_ids:
            return {}
        placeholders = ",".join("?" * len(article_ids))
        with self._db.conn() as conn:
            rows = conn.execute(
                f"""SELECT article_id, COALESCE(SUM(view_count), 0) AS total_views
                    FROM daily_analytics
                    WHERE article_id IN ({placeholders})
                    GROUP BY article_id""",
                article_ids
            ).fetchall()
            return {row["article_id"]: int(row["total_views"]) for row in rows}
