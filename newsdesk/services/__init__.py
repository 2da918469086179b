"""
Services: authoring rules, credential checks and dashboard assembly.

Routes only parse input and shape the envelope; each service is built per
request around the shared Database.

Usage in routes:
    from ..services import ArticleServiceDep

    @router.get("")
    async def public_feed(service: ArticleServiceDep):
        articles, total = service.public_feed(page=1, size=10)
"""

from typing import Annotated

from fastapi import Depends

from ..config import get_db
from ..database import Database

from .analytics_service import AnalyticsService
from .article_service import ArticleService
from .auth_service import AuthService

__all__ = [
    # Services
    "AnalyticsService",
    "ArticleService",
    "AuthService",
    # Dependency factories
    "get_analytics_service",
    "get_article_service",
    "get_auth_service",
    # Type aliases for dependency injection
    "AnalyticsServiceDep",
    "ArticleServiceDep",
    "AuthServiceDep",
]


def get_article_service(db: Annotated[Database, Depends(get_db)]) -> ArticleService:
    """Dependency to get ArticleService instance."""
    return ArticleService(db=db)


def get_auth_service(db: Annotated[Database, Depends(get_db)]) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(db=db)


def get_analytics_service(db: Annotated[Database, Depends(get_db)]) -> AnalyticsService:
    """Dependency to get AnalyticsService instance."""
    return AnalyticsService(db=db)


# Re-export the service factories for convenience
ArticleServiceDep = Annotated[ArticleService, Depends(get_article_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
AnalyticsServiceDep = Annotated[AnalyticsService, Depends(get_analytics_service)]
