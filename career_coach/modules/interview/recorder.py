"""Assembles and stores the assessment record for a completed quiz."""

import logging
from uuid import UUID, uuid4

from career_coach.modules.interview.interface import (
    AnswerSheet,
    AssessmentRecord,
    IAssessmentStore,
    QuestionSet,
    ScoreResult,
)
from career_coach.modules.interview.scoring import derive_category_label

logger = logging.getLogger(__name__)


class AssessmentRecorder:
    """Creates exactly one new record per completed quiz. Never updates."""

    def __init__(self, store: IAssessmentStore) -> None:
        self._store = store

    async def record(
        self,
        user_id: UUID,
        question_set: QuestionSet,
        answer_sheet: AnswerSheet,
        score_result: ScoreResult,
        improvement_tip: str | None,
        assessment_id: UUID | None = None,
    ) -> AssessmentRecord:
        """Build the record and hand it to the store.

        A record whose ``assessment_id`` is already stored is returned as is.

        Raises:
            PersistenceError: If the store write fails
        """
        record = AssessmentRecord(
            user_id=user_id,
            score=score_result.percentage_correct,
            questions=score_result.per_question,
            category=derive_category_label(q.category for q in question_set),
            improvement_tip=improvement_tip or "",
            id=assessment_id or uuid4(),
        )

        saved = await self._store.create(record)
        logger.info(
            f"Recorded assessment {saved.id} for user {user_id}: "
            f"{saved.score:.0f}% ({score_result.correct_count}/{len(answer_sheet)}) {saved.category}"
        )
        return saved
