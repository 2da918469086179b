"""
Background jobs: analytics aggregation and its schedule.
"""

from .aggregation import (
    JOB_NAME,
    AggregationJob,
    AggregationResult,
    AggregationTimeoutError,
    run_scheduled_aggregation,
)
from .scheduler import (
    AGGREGATION_CRON,
    create_scheduler,
    register_aggregation_job,
    shutdown_scheduler,
    start_scheduler,
)

__all__ = [
    "JOB_NAME",
    "AGGREGATION_CRON",
    "AggregationJob",
    "AggregationResult",
    "AggregationTimeoutError",
    "run_scheduled_aggregation",
    "create_scheduler",
    "register_aggregation_job",
    "start_scheduler",
    "shutdown_scheduler",
]
