"""User Service - profile lookup, onboarding and profile updates."""

import asyncio
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError

from career_coach.modules.user.interface import IdentityClaims, ProfileUpdate, UserProfile
from career_coach.modules.user.models import UserModel
from career_coach.shared.config import get_settings
from career_coach.shared.database import DbSessionFactory, get_db_session
from career_coach.shared.exceptions import PersistenceError, ProfileNotFoundError
from career_coach.shared.identity import require_user_id

logger = logging.getLogger(__name__)


class UserService:
    """User profile service implementation.

    Owns the users table: mapping identity-provider subjects to local users,
    reading career profiles, and applying onboarding/profile edits.
    """

    def __init__(
        self,
        insight_service=None,
        session_factory: DbSessionFactory = get_db_session,
    ) -> None:
        self._insight_service = insight_service
        self._session_factory = session_factory
        self._settings = get_settings()

    @property
    def insights(self):
        if self._insight_service is None:
            from career_coach.modules.insights.service import get_insight_service

            self._insight_service = get_insight_service()
        return self._insight_service

    # ===================
    # Model Conversions
    # ===================

    def _model_to_profile(self, user_model: UserModel) -> UserProfile:
        """Convert UserModel to UserProfile interface object."""
        return UserProfile(
            user_id=user_model.id,
            industry=user_model.industry,
            skills=list(user_model.skills or []),
            experience=user_model.experience,
            bio=user_model.bio,
            updated_at=user_model.updated_at,
        )

    # ===================
    # Profile Methods
    # ===================

    async def ensure_user(self, claims: IdentityClaims) -> UserProfile:
        """Find the local user for an identity-provider subject, creating it on first sight.

        Args:
            claims: Identity provider claims for the signed-in user

        Returns:
            The user's (possibly empty) profile
        """
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserModel).where(UserModel.external_id == claims.external_id)
            )
            user_model = result.scalar_one_or_none()

            if user_model is None:
                user_model = UserModel(
                    external_id=claims.external_id,
                    email=claims.email,
                    name=claims.name,
                    image_url=claims.image_url,
                    skills=[],
                )
                session.add(user_model)
                await session.flush()
                await session.refresh(user_model)
                logger.info(f"Created user {user_model.id} for new identity")

            return self._model_to_profile(user_model)

    async def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Get user's profile.

        Args:
            user_id: User's UUID

        Returns:
            UserProfile if the user exists, None otherwise
        """
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserModel).where(UserModel.id == user_id)
            )
            user_model = result.scalar_one_or_none()

            if user_model is None:
                return None

            return self._model_to_profile(user_model)

    async def get_onboarding_status(self, user_id: UUID | None) -> bool:
        """Check whether the user has completed onboarding (has an industry).

        Raises:
            UnauthorizedError: If no user is signed in
            ProfileNotFoundError: If the user does not exist
        """
        user_id = require_user_id(user_id)
        profile = await self.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile.is_onboarded

    async def update_profile(self, user_id: UUID | None, update: ProfileUpdate) -> UserProfile:
        """Apply an onboarding/profile edit.

        Makes sure insights exist for the chosen industry and updates the
        profile in the same transaction, bounded by
        ``settings.profile_update_timeout_seconds``.

        Raises:
            UnauthorizedError: If no user is signed in
            ProfileNotFoundError: If the user does not exist
            PersistenceError: If the transaction fails or times out
        """
        user_id = require_user_id(user_id)

        try:
            return await asyncio.wait_for(
                self._update_in_transaction(user_id, update),
                timeout=self._settings.profile_update_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Profile update for user {user_id} timed out")
            raise PersistenceError("update profile", "the request timed out") from e
        except IntegrityError as e:
            logger.error(f"Error updating user and industry: {e}. Please check for duplicate entries.")
            raise PersistenceError("update profile", "duplicate entry found") from e
        except NoResultFound as e:
            raise ProfileNotFoundError(user_id) from e
        except SQLAlchemyError as e:
            logger.error(f"Error updating user and industry: {e}")
            raise PersistenceError("update profile") from e

    async def _update_in_transaction(self, user_id: UUID, update: ProfileUpdate) -> UserProfile:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserModel).where(UserModel.id == user_id)
            )
            user_model = result.scalar_one()

            await self.insights.ensure_insight(session, update.industry)

            user_model.industry = update.industry
            user_model.experience = update.experience
            user_model.bio = update.bio
            user_model.skills = list(update.skills)
            await session.flush()
            await session.refresh(user_model)

            logger.info(f"Updated profile for user {user_id} (industry={update.industry})")
            return self._model_to_profile(user_model)


# Singleton instance
_user_service: UserService | None = None


def get_user_service() -> UserService:
    """Get user service singleton."""
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service
