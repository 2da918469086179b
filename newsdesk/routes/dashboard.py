"""
Author dashboard route.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ..auth import AuthUser, require_author
from ..responses import paginated_response
from ..schemas import DashboardEntryResponse
from ..services import AnalyticsServiceDep
from ..validators import parse_page, parse_page_size

router = APIRouter(prefix="/author", tags=["analytics"])


@router.get("/dashboard")
async def author_dashboard(
    service: AnalyticsServiceDep,
    user: Annotated[AuthUser, Depends(require_author)],
    page: str | None = None,
    size: str | None = None,
    page_size: str | None = Query(default=None, alias="pageSize"),
) -> JSONResponse:
    """
    The caller's articles with TotalViews, newest first.

    Counts reflect the last aggregation run, not live reads.
    """
    page_number = parse_page(page)
    page_limit = parse_page_size(size if size is not None else page_size)

    entries, total = service.get_author_dashboard(user.id, page_number, page_limit)
    return paginated_response(
        "Dashboard retrieved successfully",
        [DashboardEntryResponse.from_db(e) for e in entries],
        page_number,
        page_limit,
        total,
    )
