"""
Rate limiting.

Two independent limiters live here:

- ReadRateLimiter decides whether a request for an article may record a new
  read event. It never blocks the request itself; a denied call only means
  the read is not logged again.
- A slowapi Limiter applies a coarse per-IP request budget to the whole API.
"""

import asyncio
import logging
import threading
import time
from typing import Callable

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from fastapi import Request
from fastapi.responses import JSONResponse

from .config import config
from .responses import error_response

logger = logging.getLogger(__name__)

# Bucket shared by callers with neither a user id nor a network address
UNKNOWN_IDENTIFIER = "unknown"


def resolve_identifier(user_id: str | None, client_host: str | None) -> str:
    """Pick the read-tracking identity: user, then address, then the shared bucket."""
    return user_id or client_host or UNKNOWN_IDENTIFIER


class ReadRateLimiter:
    """
    Sliding-window gate for read events, keyed by identifier and article.

    A key is accepted when it has no entry or its last accepted timestamp is
    at least one window old. Denials leave the stored timestamp alone.
    """

    def __init__(
        self,
        window_seconds: float = 30.0,
        cleanup_interval_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.window_seconds = window_seconds
        self.cleanup_interval_seconds = cleanup_interval_seconds
        self._clock = clock
        self._last_accepted: dict[str, float] = {}
        self._lock = threading.Lock()
        self._task: asyncio.Task | None = None

    @staticmethod
    def make_key(identifier: str | None, article_id: str) -> str:
        return f"{identifier or UNKNOWN_IDENTIFIER}:{article_id}"

    def should_log(self, identifier: str | None, article_id: str, now: float | None = None) -> bool:
        """Return True, and start a new window, if this read may be logged."""
        if now is None:
            now = self._clock()
        key = self.make_key(identifier, article_id)

        with self._lock:
            last = self._last_accepted.get(key)
            if last is not None and now - last < self.window_seconds:
                return False
            self._last_accepted[key] = now
            return True

    def evict_expired(self, now: float | None = None) -> int:
        """Drop entries older than the window. Returns how many were removed."""
        if now is None:
            now = self._clock()

        with self._lock:
            expired = [
                key for key, accepted_at in self._last_accepted.items()
                if now - accepted_at > self.window_seconds
            ]
            for key in expired:
                del self._last_accepted[key]

        if expired:
            logger.debug(f"Evicted {len(expired)} expired read-limiter entries")
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._last_accepted)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self):
        """Start the background reaper."""
        if self.running:
            return
        self._task = asyncio.create_task(self._reap_loop())
        logger.info(
            f"Read limiter started (window: {self.window_seconds}s, "
            f"cleanup every {self.cleanup_interval_seconds}s)"
        )

    async def stop(self):
        """Stop the background reaper."""
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info("Read limiter stopped")

    async def _reap_loop(self):
        while True:
            await asyncio.sleep(self.cleanup_interval_seconds)
            try:
                self.evict_expired()
            except Exception as e:
                logger.exception(f"Error evicting read-limiter entries: {e}")


# ─────────────────────────────────────────────────────────────
# Global request limiter (slowapi)
# ─────────────────────────────────────────────────────────────

def get_rate_limit() -> str:
    """Get rate limit from config. Read on every request so tests can change it."""
    limit = config.RATE_LIMIT_PER_MINUTE
    if limit <= 0:
        # Rate limiting disabled
        return "1000000/minute"  # Effectively unlimited
    return f"{limit}/minute"


# Create limiter with IP-based key
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[get_rate_limit],
    storage_uri="memory://",  # In-memory storage (resets on restart)
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Custom handler for rate limit exceeded errors."""
    retry_after = getattr(exc, "retry_after", 60)
    return error_response(
        "Too many requests",
        [f"Rate limit exceeded: {exc.detail}"],
        status_code=429,
        headers={"Retry-After": str(retry_after)},
    )


def setup_rate_limiting(app):
    """
    Configure rate limiting for a FastAPI app.

    Call this while building the app to enable rate limiting.
    """
    # Add rate limiter state to app
    app.state.limiter = limiter

    # Add middleware
    app.add_middleware(SlowAPIMiddleware)

    # Add exception handler
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
