"""Unit tests for background job scheduler."""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from datetime import datetime, timezone

from apscheduler.jobstores.base import JobLookupError

from career_coach.jobs.scheduler import JobScheduler, get_scheduler, reset_scheduler
from career_coach.modules.insights import RefreshSummary


class TestJobScheduler:
    """Tests for JobScheduler class."""

    @pytest.fixture(autouse=True)
    def reset_singleton(self):
        """Reset scheduler singleton before each test."""
        reset_scheduler()
        yield
        reset_scheduler()

    @pytest.fixture
    def mock_feature_flags(self):
        """Mock feature flags to enable background jobs."""
        with patch("career_coach.jobs.scheduler.get_feature_flags") as mock:
            flags = MagicMock()
            flags.is_enabled.return_value = True
            mock.return_value = flags
            yield flags

    def test_scheduler_initialization(self, mock_feature_flags):
        """Test scheduler initializes correctly."""
        scheduler = JobScheduler()
        assert scheduler is not None
        assert not scheduler.is_running

    def test_scheduler_singleton(self, mock_feature_flags):
        """Test get_scheduler returns singleton."""
        assert get_scheduler() is get_scheduler()

    def test_start_with_feature_enabled(self, mock_feature_flags):
        """Test scheduler starts when feature flag is enabled."""
        scheduler = JobScheduler()

        with patch.object(scheduler.scheduler, "start") as mock_start:
            scheduler.start()
            mock_start.assert_called_once()
            assert scheduler.is_running

    def test_start_with_feature_disabled(self):
        """Test scheduler does not start when feature flag is disabled."""
        with patch("career_coach.jobs.scheduler.get_feature_flags") as mock:
            flags = MagicMock()
            flags.is_enabled.return_value = False
            mock.return_value = flags

            scheduler = JobScheduler()
            scheduler.start()

            assert not scheduler.is_running

    def test_shutdown(self, mock_feature_flags):
        """Test scheduler shutdown."""
        scheduler = JobScheduler()

        with patch.object(scheduler.scheduler, "start"):
            scheduler.start()

        with patch.object(scheduler.scheduler, "shutdown") as mock_shutdown:
            scheduler.shutdown()
            mock_shutdown.assert_called_once_with(wait=True)
            assert not scheduler.is_running

    def test_add_job_with_cron(self, mock_feature_flags):
        """Test adding a job with cron expression."""
        scheduler = JobScheduler()

        async def test_task():
            pass

        with patch.object(scheduler.scheduler, "add_job") as mock_add:
            mock_add.return_value = MagicMock(id="cron-job")
            job_id = scheduler.add_job(test_task, cron="0 0 * * sun", job_id="cron-job")

            assert job_id == "cron-job"
            trigger = mock_add.call_args.kwargs["trigger"]
            assert "day_of_week='sun'" in str(trigger)

    def test_add_job_with_hours(self, mock_feature_flags):
        """Test adding a job with hour interval."""
        scheduler = JobScheduler()

        async def test_task():
            pass

        with patch.object(scheduler.scheduler, "add_job") as mock_add:
            mock_add.return_value = MagicMock(id="test-job")
            assert scheduler.add_job(test_task, hours=6, job_id="test-job") == "test-job"

    def test_add_job_requires_schedule(self, mock_feature_flags):
        """Test that add_job raises error without schedule."""
        scheduler = JobScheduler()

        async def test_task():
            pass

        with pytest.raises(ValueError, match="Must specify"):
            scheduler.add_job(test_task, job_id="no-schedule")

    def test_remove_nonexistent_job(self, mock_feature_flags):
        """Test removing a job that doesn't exist."""
        scheduler = JobScheduler()

        with patch.object(scheduler.scheduler, "remove_job") as mock_remove:
            mock_remove.side_effect = JobLookupError("nonexistent")
            assert scheduler.remove_job("nonexistent") is False

    def test_get_jobs(self, mock_feature_flags):
        """Test getting job list."""
        scheduler = JobScheduler()

        mock_job = MagicMock()
        mock_job.id = "insight-refresh"
        mock_job.name = "run_insight_refresh"
        mock_job.next_run_time = datetime.now(timezone.utc)

        with patch.object(scheduler.scheduler, "get_jobs", return_value=[mock_job]):
            jobs = scheduler.get_jobs()
            assert len(jobs) == 1
            assert jobs[0]["id"] == "insight-refresh"

    def test_schedule_insight_refresh_defaults_to_weekly(self, mock_feature_flags):
        """Test the insight refresh runs Sundays at midnight by default."""
        scheduler = JobScheduler()

        with patch.object(scheduler, "add_job") as mock_add:
            mock_add.return_value = "insight-refresh"
            job_id = scheduler.schedule_insight_refresh()

            assert job_id == "insight-refresh"
            assert mock_add.call_args.kwargs["cron"] == "0 0 * * sun"
            assert mock_add.call_args.kwargs["job_id"] == "insight-refresh"

    def test_schedule_all_default_jobs(self, mock_feature_flags):
        """Test scheduling all default jobs."""
        scheduler = JobScheduler()

        with patch.object(scheduler, "add_job") as mock_add:
            mock_add.return_value = "job"
            job_ids = scheduler.schedule_all_default_jobs()

            assert job_ids == ["job"]
            assert mock_add.call_count == 1


class TestScheduledTasks:
    """Tests for scheduled task functions."""

    async def test_run_insight_refresh(self):
        """Test insight refresh task summarizes results."""
        from career_coach.jobs.tasks import run_insight_refresh

        insight_service = MagicMock()
        insight_service.refresh_all = AsyncMock(return_value=RefreshSummary(
            refreshed=["Finance", "Retail"],
            failed={"Healthcare": "Failed to generate industry insights"},
        ))

        with patch("career_coach.modules.insights.get_insight_service", return_value=insight_service):
            result = await run_insight_refresh()

        assert result["industries_refreshed"] == 2
        assert result["errors"] == ["Error refreshing Healthcare: Failed to generate industry insights"]
        assert "completed_at" in result
        assert result["duration_seconds"] >= 0


class TestWorker:
    """Tests for the worker entry point."""

    async def test_exits_when_background_jobs_disabled(self):
        from career_coach.jobs import __main__ as worker

        scheduler = MagicMock(is_running=False)

        with patch.object(worker, "startup", AsyncMock()), \
             patch.object(worker, "shutdown", AsyncMock()) as mock_shutdown, \
             patch.object(worker, "get_scheduler", return_value=scheduler):
            status = await asyncio.wait_for(worker.run_worker(), timeout=1)

        assert status == 1
        scheduler.schedule_all_default_jobs.assert_called_once()
        scheduler.shutdown.assert_called_once_with(wait=False)
        mock_shutdown.assert_awaited_once()

    def test_main_exit_status(self):
        from career_coach.jobs import __main__ as worker

        with patch.object(worker, "setup_logging"), \
             patch.object(worker, "run_worker", AsyncMock(return_value=1)):
            with pytest.raises(SystemExit) as exc_info:
                worker.main()

        assert exc_info.value.code == 1
