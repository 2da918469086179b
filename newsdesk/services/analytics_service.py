"""
Analytics service: the author dashboard.

Totals come from the daily_analytics rollup only, so they trail live reads
until the next aggregation run.
"""

from ..database import Database, DBDashboardEntry
from ..validators import MAX_PAGE, MAX_PAGE_SIZE


class AnalyticsService:
    """Per-article view totals for an author."""

    def __init__(self, db: Database):
        self.db = db

    def get_author_dashboard(
        self,
        author_id: str,
        page: int,
        page_size: int,
    ) -> tuple[list[DBDashboardEntry], int]:
        """
        One page of the author's live articles with their total views.

        Three plain queries instead of one grouped join: the article page,
        the view sums for just those ids, and a separate article count.
        Articles without rollup rows get 0.

        Returns:
            (entries newest first, number of matching articles)
        """
        page = max(1, min(MAX_PAGE, page))
        page_size = max(1, min(MAX_PAGE_SIZE, page_size))

        articles, total = self.db.get_author_articles(
            author_id,
            include_deleted=False,
            limit=page_size,
            offset=(page - 1) * page_size,
        )
        views = self.db.sum_article_views([a.id for a in articles])

        entries = [
            DBDashboardEntry(
                id=article.id,
                title=article.title,
                category=article.category,
                status=article.status,
                created_at=article.created_at,
                total_views=views.get(article.id, 0),
            )
            for article in articles
        ]
        return entries, total
