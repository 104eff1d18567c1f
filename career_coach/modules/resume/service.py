"""Resume Service - stores the user's resume and rewrites entries with AI."""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from career_coach.modules.llm import TextCompletionService, get_llm_service, load_prompt_template
from career_coach.modules.resume.interface import Resume
from career_coach.modules.resume.models import ResumeModel
from career_coach.modules.user.interface import IProfileProvider
from career_coach.shared.database import DbSessionFactory, get_db_session
from career_coach.shared.datetime_utils import ensure_utc, utc_now
from career_coach.shared.exceptions import (
    GenerationError,
    LLMServiceError,
    PersistenceError,
    ProfileNotFoundError,
)
from career_coach.shared.identity import require_user_id

logger = logging.getLogger(__name__)


class ResumeService:
    """Database-backed resume service."""

    def __init__(
        self,
        llm_service: TextCompletionService | None = None,
        profile_provider: IProfileProvider | None = None,
        session_factory: DbSessionFactory = get_db_session,
    ) -> None:
        self._llm = llm_service or get_llm_service()
        self._profile_provider = profile_provider
        self._session_factory = session_factory

    @property
    def profiles(self) -> IProfileProvider:
        if self._profile_provider is None:
            from career_coach.modules.user.service import get_user_service

            self._profile_provider = get_user_service()
        return self._profile_provider

    def _model_to_resume(self, model: ResumeModel) -> Resume:
        return Resume(
            id=model.id,
            user_id=model.user_id,
            content=model.content,
            ats_score=model.ats_score,
            feedback=model.feedback,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )

    async def save_resume(self, user_id: UUID | None, content: str) -> Resume:
        """Create the user's resume or replace its content.

        Raises:
            UnauthorizedError: If no user is signed in
            PersistenceError: If the write fails
        """
        user_id = require_user_id(user_id)

        try:
            async with self._session_factory() as db:
                result = await db.execute(
                    select(ResumeModel).where(ResumeModel.user_id == user_id)
                )
                model = result.scalar_one_or_none()
                now = utc_now()

                if model is None:
                    model = ResumeModel(
                        id=uuid4(),
                        user_id=user_id,
                        content=content,
                        created_at=now,
                        updated_at=now,
                    )
                    db.add(model)
                else:
                    model.content = content
                    model.updated_at = now

                await db.flush()
                return self._model_to_resume(model)
        except SQLAlchemyError as e:
            logger.error(f"Error saving resume for user {user_id}: {e}")
            raise PersistenceError("save resume") from e

    async def get_resume(self, user_id: UUID | None) -> Resume | None:
        """Get the user's resume, or None if they have not saved one."""
        user_id = require_user_id(user_id)

        async with self._session_factory() as db:
            result = await db.execute(
                select(ResumeModel).where(ResumeModel.user_id == user_id)
            )
            model = result.scalar_one_or_none()
            return self._model_to_resume(model) if model else None

    async def improve_with_ai(self, user_id: UUID | None, current: str, entry_type: str) -> str:
        """Rewrite a resume entry description for the user's industry.

        Args:
            user_id: Signed-in user
            current: The description as the user wrote it
            entry_type: What the entry is, e.g. "experience" or "project"

        Returns:
            The rewritten description as a single trimmed paragraph

        Raises:
            UnauthorizedError: If no user is signed in
            ProfileNotFoundError: If the user has no profile or no industry
            GenerationError: If the rewrite could not be produced
        """
        user_id = require_user_id(user_id)
        profile = await self.profiles.get_profile(user_id)
        if profile is None or not profile.industry:
            raise ProfileNotFoundError(user_id)

        template = load_prompt_template("resume/improve_entry")
        system_prompt, user_prompt = template.format(
            entry_type=entry_type,
            industry=profile.industry,
            current=current,
        )

        try:
            response = await self._llm.complete(prompt=user_prompt, system_prompt=system_prompt)
        except LLMServiceError as e:
            logger.error(f"Error improving content with AI: {e.details}")
            raise GenerationError("improved content", "the AI service is unavailable") from e

        improved = response.content.strip()
        if not improved:
            raise GenerationError("improved content", "the AI service returned no text")
        return improved


# Singleton instance
_resume_service: ResumeService | None = None


def get_resume_service() -> ResumeService:
    """Get resume service singleton."""
    global _resume_service
    if _resume_service is None:
        _resume_service = ResumeService()
    return _resume_service
