"""
Standalone aggregation worker.

    python -m newsdesk.jobs          # run the daily schedule until interrupted
    python -m newsdesk.jobs --once   # aggregate now and exit

Run the API with SCHEDULER_ENABLED=false when this worker owns the schedule.
"""

import argparse
import logging
import sys

from apscheduler.schedulers.blocking import BlockingScheduler

from ..config import config, state
from ..database import Database
from .aggregation import AggregationJob, AggregationTimeoutError
from .scheduler import AGGREGATION_CRON, create_scheduler, register_aggregation_job

logger = logging.getLogger("newsdesk.jobs")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Newsdesk analytics aggregation worker")
    parser.add_argument("--once", action="store_true", help="run one aggregation pass and exit")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    state.db = Database(config.DB_PATH)

    if args.once:
        job = AggregationJob(state.db, timeout_seconds=config.AGGREGATION_TIMEOUT_SECONDS)
        try:
            result = job.run()
        except AggregationTimeoutError as e:
            logger.error(str(e))
            return 1
        print(f"Aggregated {result.groups} article-date pairs in {result.duration_seconds:.2f}s")
        return 0

    scheduler = create_scheduler(scheduler_cls=BlockingScheduler)
    register_aggregation_job(scheduler)
    logger.info(f"Aggregation worker running ({AGGREGATION_CRON} UTC), Ctrl+C to stop")
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Aggregation worker stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
