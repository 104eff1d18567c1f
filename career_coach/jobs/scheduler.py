"""Background job scheduler for the career coach services.

Currently runs the weekly industry insight refresh. The scheduler uses
APScheduler with AsyncIO support for non-blocking execution.
"""

import logging
from functools import lru_cache
from typing import Any, Callable, Optional

from apscheduler.executors.asyncio import AsyncIOExecutor
from apscheduler.jobstores.base import JobLookupError
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from career_coach.shared.config import get_settings
from career_coach.shared.feature_flags import FeatureFlags, get_feature_flags

logger = logging.getLogger(__name__)


class JobScheduler:
    """Centralized background job scheduler.

    Usage:
        scheduler = JobScheduler()
        scheduler.schedule_all_default_jobs()
        scheduler.start()

        # Or schedule custom tasks
        scheduler.add_job(my_async_func, hours=1, job_id="my-task")
    """

    def __init__(self):
        """Initialize the job scheduler."""
        self._scheduler: Optional[AsyncIOScheduler] = None
        self._is_running = False
        self._settings = get_settings()
        self._flags = get_feature_flags()

    @property
    def scheduler(self) -> AsyncIOScheduler:
        """Get or create the APScheduler instance."""
        if self._scheduler is None:
            jobstores = {
                'default': MemoryJobStore()
            }
            executors = {
                'default': AsyncIOExecutor()
            }
            job_defaults = {
                'coalesce': True,  # Combine missed executions
                'max_instances': 1,  # Prevent concurrent runs of same job
                'misfire_grace_time': 60 * 60,  # 1 hour grace for misfires
            }

            self._scheduler = AsyncIOScheduler(
                jobstores=jobstores,
                executors=executors,
                job_defaults=job_defaults,
                timezone='UTC',
            )
        return self._scheduler

    @property
    def is_running(self) -> bool:
        """Check if the scheduler is currently running."""
        return self._is_running and self._scheduler is not None

    def start(self) -> None:
        """Start the background scheduler.

        Only starts if the FF_ENABLE_BACKGROUND_JOBS feature flag is enabled.
        """
        if not self._flags.is_enabled(FeatureFlags.ENABLE_BACKGROUND_JOBS):
            logger.info("Background jobs disabled by feature flag")
            return

        if self._is_running:
            logger.warning("Scheduler already running")
            return

        try:
            self.scheduler.start()
            self._is_running = True
            logger.info("Background job scheduler started")
        except Exception as e:
            logger.error(f"Failed to start scheduler: {e}")
            raise

    def shutdown(self, wait: bool = True) -> None:
        """Shutdown the scheduler gracefully.

        Args:
            wait: If True, wait for running jobs to complete.
        """
        if not self._is_running or self._scheduler is None:
            return

        try:
            self._scheduler.shutdown(wait=wait)
            self._is_running = False
            logger.info("Background job scheduler stopped")
        except Exception as e:
            logger.error(f"Error shutting down scheduler: {e}")
            raise

    def add_job(
        self,
        func: Callable,
        *,
        hours: Optional[float] = None,
        minutes: Optional[float] = None,
        cron: Optional[str] = None,
        job_id: Optional[str] = None,
        replace_existing: bool = True,
        **kwargs: Any,
    ) -> str:
        """Add a job to the scheduler.

        Args:
            func: The async function to execute.
            hours: Interval in hours.
            minutes: Interval in minutes.
            cron: Cron expression (e.g., "0 0 * * sun" for Sundays at midnight).
            job_id: Unique identifier for the job.
            replace_existing: Replace if job_id already exists.
            **kwargs: Additional arguments passed to the job function.

        Returns:
            The job ID.

        Raises:
            ValueError: If no schedule is specified.
        """
        if cron:
            trigger = CronTrigger.from_crontab(cron, timezone='UTC')
        elif hours or minutes:
            trigger = IntervalTrigger(hours=hours or 0, minutes=minutes or 0)
        else:
            raise ValueError("Must specify cron, hours, or minutes")

        job_id = job_id or f"{func.__module__}.{func.__name__}"

        job = self.scheduler.add_job(
            func,
            trigger=trigger,
            id=job_id,
            replace_existing=replace_existing,
            kwargs=kwargs,
        )

        logger.info(f"Scheduled job '{job_id}' with trigger: {trigger}")
        return job.id

    def remove_job(self, job_id: str) -> bool:
        """Remove a job from the scheduler.

        Returns:
            True if job was removed, False if not found.
        """
        try:
            self.scheduler.remove_job(job_id)
            logger.info(f"Removed job '{job_id}'")
            return True
        except JobLookupError:
            logger.warning(f"Job '{job_id}' not found")
            return False

    def get_jobs(self) -> list[dict[str, Any]]:
        """Get information about all scheduled jobs."""
        jobs = []
        for job in self.scheduler.get_jobs():
            next_run = getattr(job, "next_run_time", None)
            jobs.append({
                'id': job.id,
                'name': job.name,
                'next_run': next_run.isoformat() if next_run else None,
                'trigger': str(job.trigger),
            })
        return jobs

    def schedule_insight_refresh(
        self,
        cron: Optional[str] = None,
        job_id: str = "insight-refresh",
    ) -> str:
        """Schedule the periodic industry insight refresh.

        Regenerates the stored insights of every industry users have chosen.

        Args:
            cron: Cron expression (defaults to settings.insight_refresh_cron,
                Sundays at midnight UTC).
            job_id: Unique identifier for this job.

        Returns:
            The job ID.
        """
        from career_coach.jobs.tasks import run_insight_refresh

        return self.add_job(
            run_insight_refresh,
            cron=cron or self._settings.insight_refresh_cron,
            job_id=job_id,
        )

    def schedule_all_default_jobs(self) -> list[str]:
        """Schedule all default background jobs.

        Returns:
            List of scheduled job IDs.
        """
        job_ids = [self.schedule_insight_refresh()]

        logger.info(f"Scheduled {len(job_ids)} default background jobs")
        return job_ids


# Singleton instance
_scheduler_instance: Optional[JobScheduler] = None


@lru_cache(maxsize=1)
def get_scheduler() -> JobScheduler:
    """Get the singleton scheduler instance."""
    global _scheduler_instance
    if _scheduler_instance is None:
        _scheduler_instance = JobScheduler()
    return _scheduler_instance


def reset_scheduler() -> None:
    """Reset the scheduler instance (for testing)."""
    global _scheduler_instance
    if _scheduler_instance is not None:
        if _scheduler_instance.is_running:
            _scheduler_instance.shutdown(wait=False)
        _scheduler_instance = None
    get_scheduler.cache_clear()
