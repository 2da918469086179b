"""
Durable cron scheduling for the aggregation job.

The schedule lives in an APScheduler SQLAlchemy job store inside the
application database, keyed by job id. Registration replaces any existing
entry with that id, so restarting the process any number of times leaves
exactly one schedule.
"""

import datetime as dt
import logging

from apscheduler.job import Job
from apscheduler.jobstores.sqlalchemy import SQLAlchemyJobStore
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.cron import CronTrigger

from ..config import config, state
from .aggregation import JOB_NAME, run_scheduled_aggregation

logger = logging.getLogger(__name__)

# Midnight UTC, every day
AGGREGATION_CRON = "0 0 * * *"


def create_scheduler(
    jobstore_url: str | None = None,
    scheduler_cls: type[BaseScheduler] = AsyncIOScheduler,
) -> BaseScheduler:
    """Build a scheduler whose default job store is the persistent one."""
    return scheduler_cls(
        jobstores={"default": SQLAlchemyJobStore(url=jobstore_url or config.jobstore_url())},
        timezone=dt.timezone.utc,
    )


def register_aggregation_job(scheduler: BaseScheduler) -> Job:
    """Add or replace the daily aggregation schedule."""
    return scheduler.add_job(
        run_scheduled_aggregation,
        CronTrigger.from_crontab(AGGREGATION_CRON, timezone=dt.timezone.utc),
        id=JOB_NAME,
        name="Daily analytics aggregation",
        replace_existing=True,
        coalesce=True,
        max_instances=1,
        misfire_grace_time=3600,
    )


def start_scheduler() -> BaseScheduler:
    """Start the in-process scheduler (API server case)."""
    scheduler = create_scheduler()
    register_aggregation_job(scheduler)
    scheduler.start()
    state.scheduler = scheduler
    logger.info(f"Daily analytics aggregation scheduled ({AGGREGATION_CRON} UTC)")
    return scheduler


def shutdown_scheduler():
    if state.scheduler and state.scheduler.running:
        state.scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
    state.scheduler = None
