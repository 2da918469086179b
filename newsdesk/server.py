"""
Newsdesk API Server

FastAPI application providing endpoints for:
- Signup and login
- Article authoring and the public feed
- Read tracking on article views
- The author analytics dashboard
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import config, state
from .database import Database
from .exceptions import AppError
from .jobs import shutdown_scheduler, start_scheduler
from .rate_limit import ReadRateLimiter, setup_rate_limiting
from .read_logger import ReadLogger
from .responses import error_response
from .routes import (
    articles_router,
    auth_router,
    dashboard_router,
    misc_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup application resources."""
    # Startup - skip whatever is already initialized (e.g., by tests)
    if state.db is None:
        state.db = Database(config.DB_PATH)
    if state.read_limiter is None:
        state.read_limiter = ReadRateLimiter(
            window_seconds=config.READ_LOG_WINDOW_SECONDS,
            cleanup_interval_seconds=config.READ_LOG_CLEANUP_SECONDS,
        )
    if state.read_logger is None:
        state.read_logger = ReadLogger(state.db)

    await state.read_limiter.start()

    if config.SCHEDULER_ENABLED and state.scheduler is None:
        try:
            start_scheduler()
        except Exception as e:
            logger.exception(f"Could not start aggregation scheduler: {e}")

    yield

    # Shutdown
    shutdown_scheduler()
    if state.read_limiter is not None:
        await state.read_limiter.stop()


# ─────────────────────────────────────────────────────────────
# Error boundary
# ─────────────────────────────────────────────────────────────

def _validation_message(error: dict) -> str:
    field = str(error["loc"][-1]) if error.get("loc") else "Request"
    if error.get("type") == "missing":
        return f"{field} is required"
    ctx_error = (error.get("ctx") or {}).get("error")
    if isinstance(ctx_error, Exception):
        return str(ctx_error)
    return f"{field}: {error.get('msg', 'is invalid')}"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc.message, exc.errors, status_code=exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [_validation_message(e) for e in exc.errors()]
    return error_response("Validation failed", errors or ["Invalid request"], status_code=400)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(message, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if config.is_production():
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {type(exc).__name__}")
    else:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(
        "Internal server error",
        ["An unexpected error occurred"],
        status_code=500,
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Newsdesk API",
        version=__version__,
        lifespan=lifespan
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    setup_rate_limiting(app)

    # Include routers
    app.include_router(misc_router)
    app.include_router(auth_router)
    app.include_router(articles_router)
    app.include_router(dashboard_router)
    return app


app = create_app()


def main():
    import uvicorn

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)


if __name__ == "__main__":
    main()
