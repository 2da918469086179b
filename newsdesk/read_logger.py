"""
Best-effort read event logging.

Routes hand ReadLogger.log_read to FastAPI's BackgroundTasks, so the insert
runs after the article response has been sent. Failures go to the error sink
and are never raised back to the caller or retried: under a storage outage a
read event may be lost.
"""

import logging
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .database import Database

logger = logging.getLogger(__name__)


def _log_failure(error: Exception, article_id: str, reader_id: str | None):
    logger.error(
        f"Failed to log read for article {article_id} (reader: {reader_id or 'guest'})",
        exc_info=error,
    )


class ReadLogger:
    """Appends ReadLog rows; swallows and reports any failure."""

    def __init__(
        self,
        db: "Database",
        error_sink: Callable[[Exception, str, str | None], None] = _log_failure,
    ):
        self.db = db
        self.error_sink = error_sink

    def log_read(self, article_id: str, reader_id: str | None = None) -> bool:
        """Insert one read event. Returns True if the row was written."""
        try:
            self.db.add_read_log(article_id, reader_id)
            return True
        except Exception as e:
            try:
                self.error_sink(e, article_id, reader_id)
            except Exception:
                logger.exception("Read log error sink failed")
            return False
