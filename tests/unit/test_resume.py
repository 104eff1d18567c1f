"""Unit tests for resume markdown and the resume service."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from conftest import make_llm_response
from career_coach.modules.resume import ResumeEntry, ResumeModel, ResumeService, entries_to_markdown
from career_coach.shared.datetime_utils import utc_now
from career_coach.shared.exceptions import (
    GenerationError,
    LLMServiceError,
    PersistenceError,
    ProfileNotFoundError,
    UnauthorizedError,
)


class TestEntriesToMarkdown:
    """Tests for entries_to_markdown."""

    def test_empty(self):
        assert entries_to_markdown([], "Work Experience") == ""
        assert entries_to_markdown(None, "Work Experience") == ""

    def test_single_entry(self):
        entry = ResumeEntry(
            title="Engineer",
            organization="Acme",
            start_date="Jan 2020",
            end_date="Dec 2022",
            description="Built things.",
        )

        assert entries_to_markdown([entry], "Work Experience") == (
            "## Work Experience\n\n### Engineer @ Acme\nJan 2020 - Dec 2022\n\nBuilt things."
        )

    def test_current_entry_and_separator(self):
        entries = [
            ResumeEntry("Lead", "Globex", "Mar 2023", None, "Leads a team.", current=True),
            ResumeEntry("Engineer", "Acme", "Jan 2020", "Dec 2022", "Built things."),
        ]

        markdown = entries_to_markdown(entries, "Experience")

        assert markdown == (
            "## Experience\n\n"
            "### Lead @ Globex\nMar 2023 - Present\n\nLeads a team.\n\n"
            "### Engineer @ Acme\nJan 2020 - Dec 2022\n\nBuilt things."
        )


def scalar_result(value):
    return MagicMock(scalar_one_or_none=MagicMock(return_value=value))


class TestResumeService:
    """Tests for ResumeService."""

    @pytest.fixture
    def service(self, mock_llm_service, mock_profile_provider, session_factory):
        return ResumeService(
            llm_service=mock_llm_service,
            profile_provider=mock_profile_provider,
            session_factory=session_factory,
        )

    async def test_save_creates_resume(self, service, mock_db_session, sample_user_id):
        mock_db_session.execute.return_value = scalar_result(None)

        resume = await service.save_resume(sample_user_id, "# Ada")

        mock_db_session.add.assert_called_once()
        assert resume.user_id == sample_user_id
        assert resume.content == "# Ada"
        assert resume.id is not None

    async def test_save_updates_existing(self, service, mock_db_session, sample_user_id):
        existing = ResumeModel(
            user_id=sample_user_id, content="old", created_at=utc_now(), updated_at=utc_now()
        )
        mock_db_session.execute.return_value = scalar_result(existing)

        resume = await service.save_resume(sample_user_id, "new")

        mock_db_session.add.assert_not_called()
        assert existing.content == "new"
        assert resume.content == "new"

    async def test_save_failure(self, service, mock_db_session, sample_user_id):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(PersistenceError):
            await service.save_resume(sample_user_id, "x")

    async def test_get_resume_missing(self, service, mock_db_session, sample_user_id):
        mock_db_session.execute.return_value = scalar_result(None)
        assert await service.get_resume(sample_user_id) is None

    async def test_requires_identity(self, service):
        with pytest.raises(UnauthorizedError):
            await service.save_resume(None, "x")
        with pytest.raises(UnauthorizedError):
            await service.get_resume(None)

    async def test_improve_with_ai(self, service, mock_llm_service, sample_user_id):
        mock_llm_service.complete.return_value = make_llm_response("  Spearheaded a migration.  \n")

        improved = await service.improve_with_ai(sample_user_id, "did a migration", "experience")

        assert improved == "Spearheaded a migration."
        prompt = mock_llm_service.complete.call_args.kwargs["prompt"]
        assert "experience description for a Software Engineering professional" in prompt
        assert '"did a migration"' in prompt

    async def test_improve_with_ai_failure(self, service, mock_llm_service, sample_user_id):
        mock_llm_service.complete.side_effect = LLMServiceError("overloaded")

        with pytest.raises(GenerationError) as exc_info:
            await service.improve_with_ai(sample_user_id, "x", "project")

        assert exc_info.value.message == "Failed to generate improved content"

    async def test_improve_with_ai_needs_profile(self, service, mock_profile_provider, sample_user_id):
        mock_profile_provider.get_profile.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.improve_with_ai(sample_user_id, "x", "project")
