"""
Article routes: public feed, authoring, and the tracked detail view.
"""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request
from fastapi.responses import JSONResponse

from ..auth import AuthUser, get_optional_user, require_author
from ..config import get_read_limiter, get_read_logger
from ..rate_limit import ReadRateLimiter, resolve_identifier
from ..read_logger import ReadLogger
from ..responses import paginated_response, success_response
from ..schemas import ArticleCreateRequest, ArticleResponse, ArticleUpdateRequest
from ..services import ArticleServiceDep
from ..validators import parse_flag, parse_page, parse_page_size

router = APIRouter(
    prefix="/articles",
    tags=["articles"],
)


# ─────────────────────────────────────────────────────────────
# Listings (static paths first)
# ─────────────────────────────────────────────────────────────

@router.get("")
async def public_feed(
    service: ArticleServiceDep,
    page: str | None = None,
    size: str | None = None,
    page_size: str | None = Query(default=None, alias="pageSize"),
    category: str | None = None,
    author: str | None = None,
    q: str | None = None,
) -> JSONResponse:
    """Published articles, newest first.

    Args:
        category: Exact category
        author: Substring of the author's name, case-insensitive
        q: Substring of title or content, case-insensitive
    """
    page_number = parse_page(page)
    page_limit = parse_page_size(size if size is not None else page_size)

    articles, total = service.public_feed(
        page_number, page_limit, category=category, author=author, q=q
    )
    return paginated_response(
        "Articles retrieved successfully",
        [ArticleResponse.from_db(a) for a in articles],
        page_number,
        page_limit,
        total,
    )


@router.get("/me")
async def list_my_articles(
    service: ArticleServiceDep,
    user: Annotated[AuthUser, Depends(require_author)],
    page: str | None = None,
    size: str | None = None,
    page_size: str | None = Query(default=None, alias="pageSize"),
    include_deleted: str | None = Query(default=None, alias="includeDeleted"),
) -> JSONResponse:
    """The caller's own articles, drafts included. Deleted ones only on request."""
    page_number = parse_page(page)
    page_limit = parse_page_size(size if size is not None else page_size)

    articles, total = service.list_mine(
        user.id, page_number, page_limit, include_deleted=parse_flag(include_deleted)
    )
    return paginated_response(
        "Articles retrieved successfully",
        [ArticleResponse.from_db(a) for a in articles],
        page_number,
        page_limit,
        total,
    )


# ─────────────────────────────────────────────────────────────
# Authoring
# ─────────────────────────────────────────────────────────────

@router.post("")
async def create_article(
    request: ArticleCreateRequest,
    service: ArticleServiceDep,
    user: Annotated[AuthUser, Depends(require_author)],
) -> JSONResponse:
    article = service.create(
        user.id,
        title=request.title,
        content=request.content,
        category=request.category,
        status=request.status,
    )
    return success_response(
        "Article created successfully", ArticleResponse.from_db(article), status_code=201
    )


@router.put("/{article_id}")
async def update_article(
    article_id: str,
    request: ArticleUpdateRequest,
    service: ArticleServiceDep,
    user: Annotated[AuthUser, Depends(require_author)],
) -> JSONResponse:
    article = service.update(article_id, user.id, request.changes())
    return success_response("Article updated successfully", ArticleResponse.from_db(article))


@router.delete("/{article_id}")
async def delete_article(
    article_id: str,
    service: ArticleServiceDep,
    user: Annotated[AuthUser, Depends(require_author)],
) -> JSONResponse:
    service.soft_delete(article_id, user.id)
    return success_response("Article deleted successfully")


# ─────────────────────────────────────────────────────────────
# Single Article (parameterized paths last)
# ─────────────────────────────────────────────────────────────

@router.get("/{article_id}")
async def get_article(
    article_id: str,
    request: Request,
    background_tasks: BackgroundTasks,
    service: ArticleServiceDep,
    read_limiter: Annotated[ReadRateLimiter, Depends(get_read_limiter)],
    read_logger: Annotated[ReadLogger, Depends(get_read_logger)],
    user: Annotated[AuthUser | None, Depends(get_optional_user)],
) -> JSONResponse:
    """Get an article and, at most once per window per reader, record the read.

    The read is written by a background task after the response is sent.
    """
    article = service.find_by_id(article_id)

    reader_id = user.id if user else None
    identifier = resolve_identifier(reader_id, request.client.host if request.client else None)
    if read_limiter.should_log(identifier, article.id):
        background_tasks.add_task(read_logger.log_read, article.id, reader_id)

    return success_response("Article retrieved successfully", ArticleResponse.from_db(article))
