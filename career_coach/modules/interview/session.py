"""Quiz session state machine.

A session walks forward through a fixed QuestionSet, collecting one answer
per question, and ends in COMPLETED when the last question is advanced past.
Sessions are single-use: retaking a quiz means starting a new session.
"""

from typing import Any
from uuid import UUID, uuid4

from career_coach.modules.interview.interface import (
    AnswerSheet,
    Question,
    QuestionSet,
    QuizCategory,
    SessionStatus,
)
from career_coach.shared.exceptions import IncompleteAnswerError, SessionStateError


class QuizSession:
    """One user's attempt at one QuestionSet."""

    def __init__(
        self,
        user_id: UUID,
        industry: str | None = None,
        session_id: UUID | None = None,
    ) -> None:
        self.id = session_id or uuid4()
        self.user_id = user_id
        self.industry = industry
        self.status = SessionStatus.NOT_STARTED
        self.question_set: QuestionSet | None = None
        self.answers: AnswerSheet | None = None
        self.current_index = 0

        # Filled in once the quiz is completed and the result handled
        self.improvement_tip: str | None = None
        # Reserved before the store write; a retried save reuses it
        self.pending_assessment_id: UUID | None = None
        self.assessment_id: UUID | None = None

    # ===================
    # Transitions
    # ===================

    def start(self, question_set: QuestionSet) -> None:
        """NOT_STARTED -> IN_PROGRESS with every slot unanswered."""
        self._require(SessionStatus.NOT_STARTED, "start")
        self.question_set = question_set
        self.answers = AnswerSheet(len(question_set))
        self.current_index = 0
        self.status = SessionStatus.IN_PROGRESS

    def answer(self, index: int, option: str) -> None:
        """Record a selection for any question.

        The option is not checked against the question's choices; an answer
        that matches none of them is simply scored as incorrect.
        """
        self._require(SessionStatus.IN_PROGRESS, "answer")
        if not 0 <= index < len(self.answers):
            raise IndexError(f"Question index {index} out of range")
        self.answers.set(index, option)

    def advance(self) -> SessionStatus:
        """Move past the current question.

        Raises:
            IncompleteAnswerError: If the current question has no answer yet;
                the session is left exactly as it was
        """
        self._require(SessionStatus.IN_PROGRESS, "advance")
        if not self.answers.is_answered(self.current_index):
            raise IncompleteAnswerError(self.current_index)

        if self.current_index < len(self.question_set) - 1:
            self.current_index += 1
        else:
            self.status = SessionStatus.COMPLETED
        return self.status

    def _require(self, status: SessionStatus, operation: str) -> None:
        if self.status != status:
            raise SessionStateError(operation, self.status.value)

    # ===================
    # Queries
    # ===================

    @property
    def is_completed(self) -> bool:
        return self.status == SessionStatus.COMPLETED

    @property
    def is_saved(self) -> bool:
        return self.assessment_id is not None

    @property
    def current_question(self) -> Question | None:
        if self.status != SessionStatus.IN_PROGRESS:
            return None
        return self.question_set[self.current_index]

    # ===================
    # Serialization
    # ===================

    def to_dict(self) -> dict[str, Any]:
        """Snapshot of the session as plain JSON-compatible data.

        Scores are not part of the snapshot; they are recomputed from the
        question set and answers whenever needed.
        """
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "industry": self.industry,
            "status": self.status.value,
            "category": self.question_set.category.value if self.question_set else None,
            "questions": [q.to_dict() for q in self.question_set] if self.question_set else None,
            "answers": self.answers.to_list() if self.answers else None,
            "current_index": self.current_index,
            "improvement_tip": self.improvement_tip,
            "pending_assessment_id": (
                str(self.pending_assessment_id) if self.pending_assessment_id else None
            ),
            "assessment_id": str(self.assessment_id) if self.assessment_id else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuizSession":
        """Restore a session from a ``to_dict`` snapshot."""
        session = cls(
            user_id=UUID(data["user_id"]),
            industry=data.get("industry"),
            session_id=UUID(data["id"]),
        )
        session.status = SessionStatus(data["status"])
        if data.get("questions"):
            session.question_set = QuestionSet(
                questions=tuple(Question.from_dict(q) for q in data["questions"]),
                category=QuizCategory(data["category"]),
            )
        if data.get("answers") is not None:
            session.answers = AnswerSheet.from_list(data["answers"])
        session.current_index = data.get("current_index", 0)
        session.improvement_tip = data.get("improvement_tip")
        if data.get("pending_assessment_id"):
            session.pending_assessment_id = UUID(data["pending_assessment_id"])
        if data.get("assessment_id"):
            session.assessment_id = UUID(data["assessment_id"])
        return session

    def __repr__(self) -> str:
        return f"<QuizSession(id={self.id}, status={self.status.value}, index={self.current_index})>"
