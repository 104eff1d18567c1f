"""Insight Service - cached industry insights with weekly refresh.

Insights are generated once per industry the first time any user picks it,
then refreshed in the background by the scheduled refresh job.
"""

import logging
from dataclasses import asdict
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from career_coach.modules.insights.generator import InsightGenerator
from career_coach.modules.insights.interface import (
    DemandLevel,
    IInsightGenerator,
    IndustryInsight,
    InsightContent,
    MarketOutlook,
    RefreshSummary,
    SalaryRange,
)
from career_coach.modules.insights.models import IndustryInsightModel
from career_coach.modules.llm import TextCompletionService
from career_coach.modules.user.interface import IProfileProvider
from career_coach.shared.config import get_settings
from career_coach.shared.database import DbSessionFactory, get_db_session
from career_coach.shared.datetime_utils import days_from_now, ensure_utc, utc_now
from career_coach.shared.exceptions import (
    CareerCoachException,
    PersistenceError,
    ProfileNotFoundError,
)
from career_coach.shared.identity import require_user_id

logger = logging.getLogger(__name__)


class InsightService:
    """Database-backed industry insight cache."""

    def __init__(
        self,
        llm_service: TextCompletionService | None = None,
        generator: IInsightGenerator | None = None,
        profile_provider: IProfileProvider | None = None,
        session_factory: DbSessionFactory = get_db_session,
    ) -> None:
        self._generator = generator or InsightGenerator(llm_service)
        self._profile_provider = profile_provider
        self._session_factory = session_factory
        self._settings = get_settings()

    @property
    def profiles(self) -> IProfileProvider:
        if self._profile_provider is None:
            from career_coach.modules.user.service import get_user_service

            self._profile_provider = get_user_service()
        return self._profile_provider

    # ===================
    # Model Conversions
    # ===================

    def _model_to_insight(self, model: IndustryInsightModel) -> IndustryInsight:
        return IndustryInsight(
            id=model.id,
            industry=model.industry,
            salary_ranges=[SalaryRange(**r) for r in model.salary_ranges or []],
            growth_rate=model.growth_rate,
            demand_level=DemandLevel(model.demand_level),
            top_skills=list(model.top_skills or []),
            market_outlook=MarketOutlook(model.market_outlook),
            key_trends=list(model.key_trends or []),
            recommended_skills=list(model.recommended_skills or []),
            last_updated=ensure_utc(model.last_updated),
            next_update=ensure_utc(model.next_update),
        )

    def _apply_content(self, model: IndustryInsightModel, content: InsightContent) -> None:
        now = utc_now()
        model.salary_ranges = [asdict(r) for r in content.salary_ranges]
        model.growth_rate = content.growth_rate
        model.demand_level = content.demand_level.value
        model.top_skills = list(content.top_skills)
        model.market_outlook = content.market_outlook.value
        model.key_trends = list(content.key_trends)
        model.recommended_skills = list(content.recommended_skills)
        model.last_updated = now
        model.next_update = days_from_now(self._settings.insight_refresh_days, now=now)

    # ===================
    # Lookup
    # ===================

    async def ensure_insight(self, db: AsyncSession, industry: str) -> IndustryInsight:
        """Return the insight for an industry, generating and inserting it if missing.

        Runs inside the caller's transaction so a profile update and the
        insight it depends on are committed together.
        """
        result = await db.execute(
            select(IndustryInsightModel).where(IndustryInsightModel.industry == industry)
        )
        model = result.scalar_one_or_none()

        if model is None:
            content = await self._generator.generate(industry)
            model = IndustryInsightModel(industry=industry)
            self._apply_content(model, content)
            db.add(model)
            await db.flush()
            logger.info(f"Generated insights for new industry {industry!r}")

        return self._model_to_insight(model)

    async def get_or_create(self, industry: str) -> IndustryInsight:
        """Get the cached insight for an industry, generating it on first request."""
        try:
            async with self._session_factory() as db:
                return await self.ensure_insight(db, industry)
        except SQLAlchemyError as e:
            logger.error(f"Failed to store insights for {industry!r}: {e}")
            raise PersistenceError("save industry insights") from e

    async def get_for_user(self, user_id: UUID | None) -> IndustryInsight:
        """Get insights for the signed-in user's industry.

        Raises:
            UnauthorizedError: If no user is signed in
            ProfileNotFoundError: If the user has no profile or no industry yet
        """
        user_id = require_user_id(user_id)
        profile = await self.profiles.get_profile(user_id)
        if profile is None or not profile.industry:
            raise ProfileNotFoundError(user_id)

        return await self.get_or_create(profile.industry)

    # ===================
    # Refresh
    # ===================

    async def list_industries(self) -> list[str]:
        """All industries that currently have a stored insight."""
        async with self._session_factory() as db:
            result = await db.execute(
                select(IndustryInsightModel.industry).order_by(IndustryInsightModel.industry)
            )
            return list(result.scalars().all())

    async def refresh_industry(self, industry: str) -> IndustryInsight:
        """Regenerate and overwrite the stored insight for one industry.

        Generation happens before the transaction opens so no connection is
        held while waiting on the model.
        """
        content = await self._generator.generate(industry)

        try:
            async with self._session_factory() as db:
                result = await db.execute(
                    select(IndustryInsightModel).where(IndustryInsightModel.industry == industry)
                )
                model = result.scalar_one_or_none()
                if model is None:
                    model = IndustryInsightModel(industry=industry)
                    db.add(model)

                self._apply_content(model, content)
                await db.flush()
                return self._model_to_insight(model)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update insights for {industry!r}: {e}")
            raise PersistenceError("update industry insights") from e

    async def refresh_all(self) -> RefreshSummary:
        """Refresh every stored industry; one failure does not stop the rest."""
        summary = RefreshSummary()

        for industry in await self.list_industries():
            try:
                await self.refresh_industry(industry)
                summary.refreshed.append(industry)
                logger.info(f"Updated insights for {industry}")
            except CareerCoachException as e:
                summary.failed[industry] = e.message
                logger.error(f"Insight refresh failed for {industry}: {e.message} {e.details}")

        return summary


# Singleton instance
_insight_service: InsightService | None = None


def get_insight_service() -> InsightService:
    """Get insight service singleton."""
    global _insight_service
    if _insight_service is None:
        _insight_service = InsightService()
    return _insight_service
