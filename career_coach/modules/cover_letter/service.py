"""Cover Letter Service - generation and per-user management."""

import logging
from uuid import UUID, uuid4

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from career_coach.modules.cover_letter.interface import CoverLetter, CoverLetterRequest
from career_coach.modules.cover_letter.models import CoverLetterModel
from career_coach.modules.llm import TextCompletionService, get_llm_service, load_prompt_template
from career_coach.modules.user.interface import IProfileProvider
from career_coach.shared.constants import COVER_LETTER_STATUS_COMPLETED
from career_coach.shared.database import DbSessionFactory, get_db_session
from career_coach.shared.datetime_utils import ensure_utc, utc_now
from career_coach.shared.exceptions import (
    CoverLetterNotFoundError,
    GenerationError,
    LLMServiceError,
    PersistenceError,
    ProfileNotFoundError,
)
from career_coach.shared.identity import require_user_id

logger = logging.getLogger(__name__)


class CoverLetterService:
    """Database-backed cover letter service."""

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

    def _model_to_cover_letter(self, model: CoverLetterModel) -> CoverLetter:
        return CoverLetter(
            id=model.id,
            user_id=model.user_id,
            content=model.content,
            job_title=model.job_title,
            company_name=model.company_name,
            job_description=model.job_description,
            status=model.status,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )

    async def generate(self, user_id: UUID | None, request: CoverLetterRequest) -> CoverLetter:
        """Write a cover letter for a job from the user's profile and store it.

        Raises:
            UnauthorizedError: If no user is signed in
            ProfileNotFoundError: If the user does not exist
            GenerationError: If the letter could not be generated
            PersistenceError: If the letter could not be stored
        """
        user_id = require_user_id(user_id)
        profile = await self.profiles.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)

        template = load_prompt_template("cover_letter/generate")
        system_prompt, user_prompt = template.format(
            job_title=request.job_title,
            company_name=request.company_name,
            industry=profile.industry or "Not specified",
            experience=profile.experience if profile.experience is not None else "Not specified",
            skills=", ".join(profile.skills) or "Not specified",
            bio=profile.bio or "Not specified",
            job_description=request.job_description,
        )

        try:
            response = await self._llm.complete(prompt=user_prompt, system_prompt=system_prompt)
        except LLMServiceError as e:
            logger.error(f"Error generating cover letter: {e.details}")
            raise GenerationError("cover letter", "the AI service is unavailable") from e

        content = response.content.strip()
        if not content:
            raise GenerationError("cover letter", "the AI service returned no text")

        now = utc_now()
        model = CoverLetterModel(
            id=uuid4(),
            user_id=user_id,
            content=content,
            job_description=request.job_description,
            company_name=request.company_name,
            job_title=request.job_title,
            status=COVER_LETTER_STATUS_COMPLETED,
            created_at=now,
            updated_at=now,
        )

        try:
            async with self._session_factory() as db:
                db.add(model)
                await db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Error saving cover letter for user {user_id}: {e}")
            raise PersistenceError("save cover letter") from e

        logger.info(f"Generated cover letter {model.id} for {request.job_title} at {request.company_name}")
        return self._model_to_cover_letter(model)

    async def list_cover_letters(self, user_id: UUID | None) -> list[CoverLetter]:
        """The user's cover letters, newest first."""
        user_id = require_user_id(user_id)

        async with self._session_factory() as db:
            result = await db.execute(
                select(CoverLetterModel)
                .where(CoverLetterModel.user_id == user_id)
                .order_by(CoverLetterModel.created_at.desc())
            )
            return [self._model_to_cover_letter(m) for m in result.scalars().all()]

    async def get_cover_letter(self, user_id: UUID | None, cover_letter_id: UUID) -> CoverLetter | None:
        """One of the user's cover letters, or None if it does not exist or is not theirs."""
        user_id = require_user_id(user_id)

        async with self._session_factory() as db:
            result = await db.execute(
                select(CoverLetterModel).where(
                    CoverLetterModel.id == cover_letter_id,
                    CoverLetterModel.user_id == user_id,
                )
            )
            model = result.scalar_one_or_none()
            return self._model_to_cover_letter(model) if model else None

    async def delete_cover_letter(self, user_id: UUID | None, cover_letter_id: UUID) -> None:
        """Delete one of the user's cover letters.

        Raises:
            CoverLetterNotFoundError: If it does not exist or is not theirs
        """
        user_id = require_user_id(user_id)

        async with self._session_factory() as db:
            result = await db.execute(
                delete(CoverLetterModel).where(
                    CoverLetterModel.id == cover_letter_id,
                    CoverLetterModel.user_id == user_id,
                )
            )
            if result.rowcount == 0:
                raise CoverLetterNotFoundError(cover_letter_id)

        logger.info(f"Deleted cover letter {cover_letter_id}")


# Singleton instance
_cover_letter_service: CoverLetterService | None = None


def get_cover_letter_service() -> CoverLetterService:
    """Get cover letter service singleton."""
    global _cover_letter_service
    if _cover_letter_service is None:
        _cover_letter_service = CoverLetterService()
    return _cover_letter_service
