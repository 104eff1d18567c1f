"""Assessment stores - in-memory and PostgreSQL implementations."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from career_coach.modules.interview.interface import AssessmentRecord, QuestionResult
from career_coach.modules.interview.models import AssessmentModel
from career_coach.shared.database import DbSessionFactory, get_db_session
from career_coach.shared.datetime_utils import ensure_utc
from career_coach.shared.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class InMemoryAssessmentStore:
    """Process-local store, used when database persistence is disabled."""

    def __init__(self) -> None:
        self._records: dict[UUID, list[AssessmentRecord]] = {}

    async def create(self, record: AssessmentRecord) -> AssessmentRecord:
        records = self._records.setdefault(record.user_id, [])
        for existing in records:
            if existing.id == record.id:
                return existing
        records.append(record)
        return record

    async def list_by_user(self, user_id: UUID) -> list[AssessmentRecord]:
        return sorted(self._records.get(user_id, []), key=lambda r: r.created_at)


class DatabaseAssessmentStore:
    """Stores assessments in the ``assessments`` table.

    Each create is a single transaction inserting one fully populated row.
    Creating a record whose id is already stored returns the stored row.
    """

    def __init__(self, session_factory: DbSessionFactory = get_db_session) -> None:
        self._session_factory = session_factory

    def _model_to_record(self, model: AssessmentModel) -> AssessmentRecord:
        return AssessmentRecord(
            id=model.id,
            user_id=model.user_id,
            score=model.quiz_score,
            questions=tuple(QuestionResult.from_dict(q) for q in model.questions),
            category=model.category,
            improvement_tip=model.improvement_tip or "",
            created_at=ensure_utc(model.created_at),
        )

    async def create(self, record: AssessmentRecord) -> AssessmentRecord:
        model = AssessmentModel(
            id=record.id,
            user_id=record.user_id,
            quiz_score=record.score,
            questions=[q.to_dict() for q in record.questions],
            category=record.category,
            improvement_tip=record.improvement_tip or None,
            created_at=record.created_at,
        )

        try:
            async with self._session_factory() as db:
                existing = await db.get(AssessmentModel, record.id)
                if existing is not None:
                    logger.info(f"Assessment {record.id} already stored")
                    return self._model_to_record(existing)

                db.add(model)
                await db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to save assessment for user {record.user_id}: {e}")
            raise PersistenceError("save quiz result") from e

        return record

    async def list_by_user(self, user_id: UUID) -> list[AssessmentRecord]:
        try:
            async with self._session_factory() as db:
                result = await db.execute(
                    select(AssessmentModel)
                    .where(AssessmentModel.user_id == user_id)
                    .order_by(AssessmentModel.created_at.asc())
                )
                return [self._model_to_record(m) for m in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Failed to load assessments for user {user_id}: {e}")
            raise PersistenceError("load assessments") from e
