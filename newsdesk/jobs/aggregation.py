"""
Daily analytics aggregation.

Rolls the raw read_logs table into daily_analytics: one row per
(article, UTC day) holding COUNT(*) of the reads on that day. Every run
recomputes from the full read history and overwrites the counts it touches,
so re-running is harmless and an interrupted run is repaired by the next one.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from ..config import config, state
from ..database import Database

logger = logging.getLogger(__name__)

JOB_NAME = "daily-analytics-aggregation"


class AggregationTimeoutError(Exception):
    """The run passed its deadline. Rows written before that are kept."""


@dataclass
class AggregationResult:
    groups: int
    upserted: int
    started_at: datetime
    finished_at: datetime

    @property
    def duration_seconds(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()


class AggregationJob:
    """
    Recompute daily_analytics from read_logs.

    Each (article, day) upsert commits on its own; no lock is held across
    the batch, so request traffic keeps writing read logs while this runs.
    """

    def __init__(
        self,
        db: Database,
        timeout_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.db = db
        self.timeout_seconds = timeout_seconds
        self._clock = clock

    def run(self) -> AggregationResult:
        """
        Run one full aggregation pass.

        The deadline is checked before every upsert, the first check coming
        right after the grouped read, so time spent in the GROUP BY counts
        against the timeout. The query itself is not interrupted.

        Raises:
            AggregationTimeoutError: If the deadline passes mid-run
            Exception: Any storage error aborts the run unchanged
        """
        started_at = datetime.now(timezone.utc)
        deadline = self._clock() + self.timeout_seconds
        logger.info("Starting daily analytics aggregation")

        groups = self.db.group_read_logs_by_day()
        upserted = 0
        for group in groups:
            if self._clock() >= deadline:
                raise AggregationTimeoutError(
                    f"Aggregation timed out after {self.timeout_seconds}s "
                    f"({upserted} of {len(groups)} article-date pairs written)"
                )
            self.db.upsert_daily_analytics(group.article_id, group.date, group.view_count)
            upserted += 1

        result = AggregationResult(
            groups=len(groups),
            upserted=upserted,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
        )
        logger.info(
            f"Analytics aggregation complete. Processed {result.groups} "
            f"article-date combinations in {result.duration_seconds:.2f}s"
        )
        return result


def run_scheduled_aggregation():
    """
    Scheduler entry point.

    Uses the process database if one is set up, otherwise opens DB_PATH
    (the standalone worker case). Errors are logged; the next scheduled run
    reconciles whatever this one left behind.
    """
    db = state.db or Database(config.DB_PATH)
    job = AggregationJob(db, timeout_seconds=config.AGGREGATION_TIMEOUT_SECONDS)
    try:
        return job.run()
    except AggregationTimeoutError as e:
        logger.warning(str(e))
    except Exception as e:
        logger.exception(f"Analytics aggregation failed: {e}")
    return None
