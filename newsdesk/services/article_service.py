"""
Article service: business logic for article operations.

Handles authoring (create, update, soft delete), the author's own listing,
the public feed, and single-article lookup.
"""

from ..database import Database
from ..database.models import DBArticle
from ..exceptions import AppError, require_article


class ArticleService:
    """Service for article-related business logic."""

    def __init__(self, db: Database):
        self.db = db

    # ─────────────────────────────────────────────────────────────
    # Authoring
    # ─────────────────────────────────────────────────────────────

    def create(
        self,
        author_id: str,
        title: str,
        content: str,
        category: str,
        status: str = "Draft",
    ) -> DBArticle:
        return self.db.add_article(author_id, title, content, category, status)

    def _get_owned(self, article_id: str, author_id: str, action: str) -> DBArticle:
        article = self.db.get_article(article_id)
        # A soft-deleted article can no longer be edited or deleted
        if article is None or article.is_deleted:
            raise AppError.not_found("Article not found")
        if article.author_id != author_id:
            raise AppError.forbidden(f"You can only {action} your own articles")
        return article

    def update(self, article_id: str, author_id: str, changes: dict) -> DBArticle:
        """
        Apply a partial update.

        Raises:
            AppError: 404 if missing or deleted, 403 if not the owner
        """
        self._get_owned(article_id, author_id, "edit")
        return require_article(self.db.update_article(article_id, changes))

    def soft_delete(self, article_id: str, author_id: str):
        """
        Mark an article deleted; the row and its read history are kept.

        Raises:
            AppError: 404 if missing or already deleted, 403 if not the owner
        """
        self._get_owned(article_id, author_id, "delete")
        if not self.db.soft_delete_article(article_id):
            raise AppError.not_found("Article not found")

    # ─────────────────────────────────────────────────────────────
    # Listing
    # ─────────────────────────────────────────────────────────────

    def list_mine(
        self,
        author_id: str,
        page: int,
        size: int,
        include_deleted: bool = False,
    ) -> tuple[list[DBArticle], int]:
        return self.db.get_author_articles(
            author_id,
            include_deleted=include_deleted,
            limit=size,
            offset=(page - 1) * size,
        )

    def public_feed(
        self,
        page: int,
        size: int,
        category: str | None = None,
        author: str | None = None,
        q: str | None = None,
    ) -> tuple[list[DBArticle], int]:
        """Published, non-deleted articles with optional filters."""
        return self.db.get_published_articles(
            category=category or None,
            author=author or None,
            query=q or None,
            limit=size,
            offset=(page - 1) * size,
        )

    # ─────────────────────────────────────────────────────────────
    # Lookup
    # ─────────────────────────────────────────────────────────────

    def find_by_id(self, article_id: str) -> DBArticle:
        """
        Get an article for reading.

        Raises:
            AppError: 404 "Article not found" if it never existed,
                      404 "News article no longer available" if soft-deleted
        """
        article = require_article(self.db.get_article(article_id))
        if article.is_deleted:
            raise AppError.not_found("News article no longer available")
        return article
