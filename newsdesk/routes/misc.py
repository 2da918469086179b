"""
Miscellaneous routes: health check.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import state
from ..responses import success_response

router = APIRouter(tags=["misc"])


@router.get("/status")
async def health_check() -> JSONResponse:
    """API health check."""
    return success_response("OK", {
        "status": "ok",
        "version": __version__,
        "scheduler_running": bool(state.scheduler and state.scheduler.running),
        "tracked_read_keys": len(state.read_limiter) if state.read_limiter is not None else 0,
    })
