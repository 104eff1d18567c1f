"""Interview module - Mock interview quizzes, scoring and improvement tips."""

from career_coach.modules.interview.advisor import RemediationAdvisor
from career_coach.modules.interview.generator import QuizGenerator
from career_coach.modules.interview.interface import (
    AnswerSheet,
    AssessmentRecord,
    IAssessmentStore,
    Question,
    QuestionResult,
    QuestionSet,
    QuizCategory,
    QuizOutcome,
    ScoreResult,
    SessionStatus,
)
from career_coach.modules.interview.models import AssessmentModel
from career_coach.modules.interview.recorder import AssessmentRecorder
from career_coach.modules.interview.scoring import ScoringEngine, derive_category_label
from career_coach.modules.interview.service import InterviewService, get_interview_service
from career_coach.modules.interview.session import QuizSession
from career_coach.modules.interview.session_store import (
    InMemoryQuizSessionStore,
    RedisQuizSessionStore,
)
from career_coach.modules.interview.store import DatabaseAssessmentStore, InMemoryAssessmentStore

__all__ = [
    # Interface
    "AnswerSheet",
    "AssessmentRecord",
    "IAssessmentStore",
    "Question",
    "QuestionResult",
    "QuestionSet",
    "QuizCategory",
    "QuizOutcome",
    "ScoreResult",
    "SessionStatus",
    # Engine
    "AssessmentRecorder",
    "QuizGenerator",
    "QuizSession",
    "RemediationAdvisor",
    "ScoringEngine",
    "derive_category_label",
    # Stores
    "DatabaseAssessmentStore",
    "InMemoryAssessmentStore",
    "InMemoryQuizSessionStore",
    "RedisQuizSessionStore",
    # Service
    "InterviewService",
    "get_interview_service",
    # Models
    "AssessmentModel",
]
