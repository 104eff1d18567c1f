"""Background worker entry point: ``python -m career_coach.jobs``."""

import asyncio
import logging
import sys

from career_coach.jobs.scheduler import get_scheduler
from career_coach.shared.database import shutdown, startup
from career_coach.shared.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def run_worker() -> int:
    """Start the scheduler and keep running until cancelled.

    Returns:
        Exit status: 1 when background jobs are disabled, so the worker
        does not sit idle
    """
    await startup()

    scheduler = get_scheduler()
    scheduler.schedule_all_default_jobs()
    scheduler.start()

    try:
        if not scheduler.is_running:
            logger.error("Background jobs are disabled; set FF_ENABLE_BACKGROUND_JOBS=true to run the worker")
            return 1
        await asyncio.Event().wait()
    finally:
        scheduler.shutdown(wait=False)
        await shutdown()
    return 0


def main() -> None:
    setup_logging()
    try:
        sys.exit(asyncio.run(run_worker()))
    except KeyboardInterrupt:
        logger.info("Worker stopped")


if __name__ == "__main__":
    main()
