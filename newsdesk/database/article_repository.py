"""
Article repository - CRUD operations for articles.
"""

import uuid

from .connection import DatabaseConnection, utc_now
from .converters import row_to_article
from .models import DBArticle

# Columns an update may touch
UPDATABLE_FIELDS = ("title", "content", "category", "status")

_SELECT_WITH_AUTHOR = """
    SELECT a.*, u.name AS author_name
    FROM articles a
    JOIN users u ON u.id = a.author_id
"""


def _like_pattern(term: str) -> str:
    """Build a substring LIKE pattern with wildcards in the term escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ArticleRepository:
    """Repository for article operations."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def add(
        self,
        author_id: str,
        title: str,
        content: str,
        category: str,
        status: str = "Draft",
    ) -> DBArticle:
        """Add a new article and return it."""
        article_id = str(uuid.uuid4())
        now = utc_now()
        with self._db.conn() as conn:
            conn.execute(
                """INSERT INTO articles
                   (id, author_id, title, content, category, status, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (article_id, author_id, title, content, category, status, now, now)
            )
        return self.get(article_id)

    def get(self, article_id: str) -> DBArticle | None:
        """Get single article by ID, soft-deleted ones included."""
        with self._db.conn() as conn:
            row = conn.execute(
                _SELECT_WITH_AUTHOR + " WHERE a.id = ?", (article_id,)
            ).fetchone()
            return row_to_article(row) if row else None

    def update(self, article_id: str, fields: dict) -> DBArticle | None:
        """Apply a partial update. Unknown keys are ignored."""
        changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if changes:
            assignments = ", ".join(f"{column} = ?" for column in changes)
            with self._db.conn() as conn:
                conn.execute(
                    f"UPDATE articles SET {assignments}, updated_at = ? WHERE id = ?",
                    (*changes.values(), utc_now(), article_id)
                )
        return self.get(article_id)

    def soft_delete(self, article_id: str) -> bool:
        """Mark an article deleted. Returns False if it was already deleted or missing."""
        now = utc_now()
        with self._db.conn() as conn:
            cursor = conn.execute(
                "UPDATE articles SET deleted_at = ?, updated_at = ? WHERE id = ? AND deleted_at IS NULL",
                (now, now, article_id)
            )
            return cursor.rowcount > 0

    def get_by_author(
        self,
        author_id: str,
        include_deleted: bool = False,
        limit: int = 10,
        offset: int = 0
    ) -> tuple[list[DBArticle], int]:
        """Get one page of an author's articles, newest first, plus the total count."""
        where = "WHERE a.author_id = ?"
        params: list = [author_id]
        if not include_deleted:
            where += " AND a.deleted_at IS NULL"

        with self._db.conn() as conn:
            total = conn.execute(
                f"SELECT COUNT(*) AS cnt FROM articles a {where}", params
            ).fetchone()["cnt"]
            rows = conn.execute(
                f"{_SELECT_WITH_AUTHOR} {where} ORDER BY a.created_at DESC, a.rowid DESC LIMIT ? OFFSET ?",
                [*params, limit, offset]
            ).fetchall()
            return [row_to_article(row) for row in rows], total

    def get_published(
        self,
        category: str | None = None,
        author: str | None = None,
        query: str | None = None,
        limit: int = 10,
        offset: int = 0
    ) -> tuple[list[DBArticle], int]:
        """
        Get one page of the public feed plus the total count.

        Args:
            category: Exact category match
            author: Case-insensitive substring of the author's name
            query: Case-insensitive substring of title or content
        """
        where = "WHERE a.status = 'Published' AND a.deleted_at IS NULL"
        params: list = []

        if category:
            where += " AND a.category = ?"
            params.append(category)
        if author:
            where += " AND u.name LIKE ? ESCAPE '\\'"
            params.append(_like_pattern(author))
        if query:
            where += " AND (a.title LIKE ? ESCAPE '\\' OR a.content LIKE ? ESCAPE '\\')"
            params.extend([_like_pattern(query), _like_pattern(query)])

        with self._db.conn() as conn:
            total = conn.execute(
                f"SELECT COUNT(*) AS cnt FROM articles a JOIN users u ON u.id = a.author_id {where}",
                params
            ).fetchone()["cnt"]
            rows = conn.execute(
                f"{_SELECT_WITH_AUTHOR} {where} ORDER BY a.created_at DESC, a.rowid DESC LIMIT ? OFFSET ?",
                [*params, limit, offset]
            ).fetchall()
            return [row_to_article(row) for row in rows], total
