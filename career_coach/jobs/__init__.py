"""Background jobs package.

Scheduled task execution for the career coach services, currently the
weekly industry insight refresh.
"""

from career_coach.jobs.scheduler import JobScheduler, get_scheduler

__all__ = ["JobScheduler", "get_scheduler"]
