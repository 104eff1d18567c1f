"""Interview Service - drives a quiz from generation to a stored assessment.

Flow: QuizGenerator -> QuizSession (answers over several requests) ->
ScoringEngine -> RemediationAdvisor -> AssessmentRecorder.

Sessions live in a session store between requests. A completed session keeps
its questions, answers and tip until the assessment is stored, so a failed
save can be retried without retaking the quiz.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Protocol
from uuid import UUID, uuid4

from career_coach.modules.interview.advisor import RemediationAdvisor
from career_coach.modules.interview.generator import QuizGenerator
from career_coach.modules.interview.interface import (
    AssessmentRecord,
    IAssessmentStore,
    QuizCategory,
    QuizOutcome,
    ScoreResult,
    SessionStatus,
)
from career_coach.modules.interview.recorder import AssessmentRecorder
from career_coach.modules.interview.scoring import ScoringEngine
from career_coach.modules.interview.session import QuizSession
from career_coach.modules.interview.session_store import (
    InMemoryQuizSessionStore,
    RedisQuizSessionStore,
)
from career_coach.modules.interview.store import DatabaseAssessmentStore, InMemoryAssessmentStore
from career_coach.modules.llm import TextCompletionService
from career_coach.modules.user.interface import IProfileProvider
from career_coach.shared.exceptions import (
    AssessmentAlreadySavedError,
    CareerCoachException,
    ProfileNotFoundError,
    QuizSessionNotFoundError,
    RequestInProgressError,
    SessionStateError,
    ValidationError,
)
from career_coach.shared.feature_flags import FeatureFlags, get_feature_flags
from career_coach.shared.identity import require_user_id

logger = logging.getLogger(__name__)


class IQuizSessionStore(Protocol):
    """Where sessions wait between requests."""

    async def get(self, session_id: UUID) -> QuizSession | None:
        ...

    async def save(self, session: QuizSession) -> None:
        ...

    async def delete(self, session_id: UUID) -> bool:
        ...


class InterviewService:
    """Orchestrates quiz sessions for signed-in users.

    Only one long-running request (start, answer, advance, save) may be in
    flight per user; an overlapping one is rejected with
    RequestInProgressError rather than interleaved.
    """

    def __init__(
        self,
        llm_service: TextCompletionService | None = None,
        profile_provider: IProfileProvider | None = None,
        assessment_store: IAssessmentStore | None = None,
        session_store: IQuizSessionStore | None = None,
        generator: QuizGenerator | None = None,
        advisor: RemediationAdvisor | None = None,
        scoring_engine: ScoringEngine | None = None,
    ) -> None:
        self._generator = generator or QuizGenerator(llm_service)
        self._advisor = advisor or RemediationAdvisor(llm_service)
        self._scoring = scoring_engine or ScoringEngine()
        self._assessments = assessment_store or InMemoryAssessmentStore()
        self._recorder = AssessmentRecorder(self._assessments)
        self._sessions = session_store or InMemoryQuizSessionStore()
        self._profile_provider = profile_provider
        self._in_flight: set[UUID] = set()

    @property
    def profiles(self) -> IProfileProvider:
        if self._profile_provider is None:
            from career_coach.modules.user.service import get_user_service

            self._profile_provider = get_user_service()
        return self._profile_provider

    @asynccontextmanager
    async def _exclusive(self, user_id: UUID) -> AsyncGenerator[None, None]:
        """Reject a request if the same user already has one in flight."""
        if user_id in self._in_flight:
            logger.warning(f"Rejected overlapping quiz request for user {user_id}")
            raise RequestInProgressError(user_id)

        self._in_flight.add(user_id)
        try:
            yield
        finally:
            self._in_flight.discard(user_id)

    async def _load(self, user_id: UUID, session_id: UUID) -> QuizSession:
        session = await self._sessions.get(session_id)
        # Other users' sessions are reported as missing
        if session is None or session.user_id != user_id:
            raise QuizSessionNotFoundError(session_id)
        return session

    # ===================
    # Quiz Lifecycle
    # ===================

    async def start_quiz(
        self,
        user_id: UUID | None,
        category: QuizCategory | str = QuizCategory.TECHNICAL,
    ) -> QuizSession:
        """Generate a question set and open a new session on it.

        Raises:
            UnauthorizedError: If no user is signed in
            ProfileNotFoundError: If the user has no profile or no industry
            GenerationError: If the questions could not be generated; no session is created
            LLMServiceError: If the completion service is unavailable
        """
        user_id = require_user_id(user_id)
        try:
            category = QuizCategory(category)
        except ValueError as e:
            raise ValidationError("category", f"unknown quiz category {category!r}") from e

        async with self._exclusive(user_id):
            profile = await self.profiles.get_profile(user_id)
            if profile is None or not profile.industry:
                raise ProfileNotFoundError(user_id)

            question_set = await self._generator.generate(profile, category)

            session = QuizSession(user_id=user_id, industry=profile.industry)
            session.start(question_set)
            await self._sessions.save(session)

            logger.info(
                f"Started {category.value} quiz {session.id} for user {user_id} "
                f"({len(question_set)} questions)"
            )
            return session

    async def get_session(self, user_id: UUID | None, session_id: UUID) -> QuizSession:
        """Load one of the user's sessions, e.g. to resume it."""
        user_id = require_user_id(user_id)
        return await self._load(user_id, session_id)

    async def answer(
        self,
        user_id: UUID | None,
        session_id: UUID,
        index: int,
        option: str,
    ) -> QuizSession:
        """Record the user's selection for question ``index``."""
        user_id = require_user_id(user_id)

        async with self._exclusive(user_id):
            session = await self._load(user_id, session_id)
            session.answer(index, option)
            await self._sessions.save(session)
            return session

    async def advance(
        self,
        user_id: UUID | None,
        session_id: UUID,
    ) -> QuizSession | QuizOutcome:
        """Move to the next question, or finish the quiz at the last one.

        Returns the updated session while questions remain, and a QuizOutcome
        once the quiz has been completed and stored.

        Raises:
            IncompleteAnswerError: If the current question is unanswered
            PersistenceError: If the finished quiz could not be stored; the
                session stays completed and can be saved with save_result
        """
        user_id = require_user_id(user_id)

        async with self._exclusive(user_id):
            session = await self._load(user_id, session_id)
            status = session.advance()
            await self._sessions.save(session)

            if status != SessionStatus.COMPLETED:
                return session

            logger.info(f"Quiz {session.id} completed by user {user_id}")
            return await self._finish(session)

    async def save_result(self, user_id: UUID | None, session_id: UUID) -> QuizOutcome:
        """Store the result of a completed quiz whose earlier save failed.

        The score is recomputed from the retained questions and answers and
        the improvement tip already derived for the session is reused.

        Raises:
            SessionStateError: If the quiz has not been completed
            AssessmentAlreadySavedError: If the result has already been stored
            PersistenceError: If storing fails again
        """
        user_id = require_user_id(user_id)

        async with self._exclusive(user_id):
            session = await self._load(user_id, session_id)
            if not session.is_completed:
                raise SessionStateError("save", session.status.value)
            if session.is_saved:
                raise AssessmentAlreadySavedError(session.id, session.assessment_id)

            return await self._finish(session)

    async def get_score(self, user_id: UUID | None, session_id: UUID) -> ScoreResult:
        """Score a completed session from its questions and answers."""
        user_id = require_user_id(user_id)
        session = await self._load(user_id, session_id)
        if not session.is_completed:
            raise SessionStateError("score", session.status.value)
        return self._scoring.score(session.question_set, session.answers)

    async def get_assessments(self, user_id: UUID | None) -> list[AssessmentRecord]:
        """The user's stored assessments, oldest first."""
        user_id = require_user_id(user_id)
        return await self._assessments.list_by_user(user_id)

    # ===================
    # Completion
    # ===================

    async def _finish(self, session: QuizSession) -> QuizOutcome:
        score = self._scoring.score(session.question_set, session.answers)

        # The tip and the assessment id are fixed before anything is stored;
        # a retry reuses both, and the store returns an already created record
        if session.pending_assessment_id is None:
            if session.improvement_tip is None:
                session.improvement_tip = await self._improvement_tip(session, score)
            session.pending_assessment_id = uuid4()
            await self._sessions.save(session)

        record = await self._recorder.record(
            user_id=session.user_id,
            question_set=session.question_set,
            answer_sheet=session.answers,
            score_result=score,
            improvement_tip=session.improvement_tip,
            assessment_id=session.pending_assessment_id,
        )

        session.assessment_id = record.id
        await self._sessions.save(session)
        return QuizOutcome(session_id=session.id, score=score, assessment=record)

    async def _improvement_tip(self, session: QuizSession, score: ScoreResult) -> str:
        """Best-effort advice; a failure here never blocks saving the result."""
        try:
            return await self._advisor.advise(session.industry or "", score.incorrect)
        except CareerCoachException as e:
            logger.warning(f"Improvement tip unavailable for quiz {session.id}: {e.message} {e.details}")
            return ""


# Singleton instance
_interview_service: InterviewService | None = None


def get_interview_service() -> InterviewService:
    """Get interview service singleton.

    Stores are chosen from the USE_DATABASE_PERSISTENCE and
    USE_REDIS_SESSION_STATE feature flags.
    """
    global _interview_service
    if _interview_service is None:
        flags = get_feature_flags()

        if flags.is_enabled(FeatureFlags.USE_DATABASE_PERSISTENCE):
            assessment_store = DatabaseAssessmentStore()
        else:
            assessment_store = InMemoryAssessmentStore()

        if flags.is_enabled(FeatureFlags.USE_REDIS_SESSION_STATE):
            session_store = RedisQuizSessionStore()
        else:
            session_store = InMemoryQuizSessionStore()

        _interview_service = InterviewService(
            assessment_store=assessment_store,
            session_store=session_store,
        )
    return _interview_service
