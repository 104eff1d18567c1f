"""Scheduled task definitions for background jobs.

Each task is an async function executed by the JobScheduler and returns a
summary dict that is logged and handy in tests.
"""

import logging
from typing import Any

from career_coach.shared.datetime_utils import utc_now

logger = logging.getLogger(__name__)


async def run_insight_refresh() -> dict[str, Any]:
    """Regenerate insights for every stored industry.

    One industry failing is recorded in ``errors`` and does not stop the
    others.

    Returns:
        Summary of refresh results.
    """
    logger.info("Starting industry insight refresh task")
    start_time = utc_now()
    results: dict[str, Any] = {
        'started_at': start_time.isoformat(),
        'industries_refreshed': 0,
        'errors': [],
    }

    from career_coach.modules.insights import get_insight_service

    summary = await get_insight_service().refresh_all()
    results['industries_refreshed'] = len(summary.refreshed)
    results['errors'] = [
        f"Error refreshing {industry}: {message}"
        for industry, message in summary.failed.items()
    ]

    completed_at = utc_now()
    results['completed_at'] = completed_at.isoformat()
    results['duration_seconds'] = (completed_at - start_time).total_seconds()

    logger.info(
        f"Insight refresh completed: {results['industries_refreshed']} refreshed, "
        f"{len(results['errors'])} failed"
    )
    return results
