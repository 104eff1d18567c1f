"""Interview Module - Mock interview quizzes, scoring and improvement tips."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterator, Protocol
from uuid import UUID, uuid4

from career_coach.shared.datetime_utils import datetime_to_iso, iso_to_datetime, utc_now


class QuizCategory(str, Enum):
    """What a quiz question is probing for."""

    TECHNICAL = "technical"
    BEHAVIORAL = "behavioral"
    LEADERSHIP = "leadership"

    @property
    def label(self) -> str:
        """Display label, e.g. "Technical"."""
        return self.value.capitalize()


class SessionStatus(str, Enum):
    """Quiz session lifecycle states."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Question:
    """A single generated multiple-choice question."""

    text: str
    options: tuple[str, ...]
    correct_answer: str
    explanation: str
    category: QuizCategory

    def to_dict(self) -> dict[str, Any]:
        return {
            "question": self.text,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
            "explanation": self.explanation,
            "category": self.category.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Question":
        return cls(
            text=data["question"],
            options=tuple(data["options"]),
            correct_answer=data["correctAnswer"],
            explanation=data["explanation"],
            category=QuizCategory(data["category"]),
        )


@dataclass(frozen=True)
class QuestionSet:
    """The fixed, ordered batch of questions for one quiz attempt."""

    questions: tuple[Question, ...]
    category: QuizCategory  # The category that was requested

    def __post_init__(self) -> None:
        if not self.questions:
            raise ValueError("A question set needs at least one question")

    def __len__(self) -> int:
        return len(self.questions)

    def __getitem__(self, index: int) -> Question:
        return self.questions[index]

    def __iter__(self) -> Iterator[Question]:
        return iter(self.questions)


class AnswerSheet:
    """The user's selections, aligned by index to a QuestionSet.

    Every slot starts as ``UNANSWERED``. Any index may be written, so review
    or back-navigation does not need a different structure.
    """

    UNANSWERED = None

    def __init__(self, length: int) -> None:
        if length < 1:
            raise ValueError("An answer sheet needs at least one slot")
        self._answers: list[str | None] = [self.UNANSWERED] * length

    def __len__(self) -> int:
        return len(self._answers)

    def __getitem__(self, index: int) -> str | None:
        return self._answers[index]

    def __iter__(self) -> Iterator[str | None]:
        return iter(self._answers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnswerSheet):
            return NotImplemented
        return self._answers == other._answers

    def set(self, index: int, option: str) -> None:
        """Record the selection for one question."""
        self._answers[index] = option

    def is_answered(self, index: int) -> bool:
        return self._answers[index] is not self.UNANSWERED

    def to_list(self) -> list[str | None]:
        return list(self._answers)

    @classmethod
    def from_list(cls, answers: list[str | None]) -> "AnswerSheet":
        sheet = cls(len(answers))
        sheet._answers = list(answers)
        return sheet


@dataclass(frozen=True)
class QuestionResult:
    """Per-question outcome, denormalized so it can be stored as-is."""

    question: str
    options: tuple[str, ...]
    selected_answer: str | None
    correct_answer: str
    is_correct: bool
    explanation: str
    category: QuizCategory

    def to_dict(self) -> dict[str, Any]:
        return {
            "question": self.question,
            "options": list(self.options),
            "userAnswer": self.selected_answer,
            "answer": self.correct_answer,
            "isCorrect": self.is_correct,
            "explanation": self.explanation,
            "category": self.category.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuestionResult":
        return cls(
            question=data["question"],
            options=tuple(data.get("options") or ()),
            selected_answer=data.get("userAnswer"),
            correct_answer=data["answer"],
            is_correct=bool(data["isCorrect"]),
            explanation=data.get("explanation", ""),
            category=QuizCategory(data["category"]),
        )


@dataclass(frozen=True)
class ScoreResult:
    """Score for a question set and answer sheet. Never stored on its own."""

    percentage_correct: float  # 0-100
    per_question: tuple[QuestionResult, ...]

    @property
    def correct_count(self) -> int:
        return sum(1 for r in self.per_question if r.is_correct)

    @property
    def incorrect(self) -> list[QuestionResult]:
        return [r for r in self.per_question if not r.is_correct]


@dataclass(frozen=True)
class AssessmentRecord:
    """The persisted, immutable record of one completed quiz."""

    user_id: UUID
    score: float
    questions: tuple[QuestionResult, ...]
    category: str  # Derived label, e.g. "Technical & Leadership"
    improvement_tip: str = ""
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "score": self.score,
            "questions": [q.to_dict() for q in self.questions],
            "category": self.category,
            "improvement_tip": self.improvement_tip,
            "created_at": datetime_to_iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AssessmentRecord":
        return cls(
            id=UUID(data["id"]),
            user_id=UUID(data["user_id"]),
            score=float(data["score"]),
            questions=tuple(QuestionResult.from_dict(q) for q in data["questions"]),
            category=data["category"],
            improvement_tip=data.get("improvement_tip") or "",
            created_at=iso_to_datetime(data["created_at"]),
        )


@dataclass(frozen=True)
class QuizOutcome:
    """What the caller gets back after completing a quiz."""

    session_id: UUID
    score: ScoreResult
    assessment: AssessmentRecord


class IAssessmentStore(Protocol):
    """Durable storage for assessment records.

    Records are only ever created and listed; there is no update.
    """

    async def create(self, record: AssessmentRecord) -> AssessmentRecord:
        """Persist a new record.

        If a record with the same id is already stored, that record is
        returned and nothing is written.

        Raises:
            PersistenceError: If the write fails; nothing is stored in that case
        """
        ...

    async def list_by_user(self, user_id: UUID) -> list[AssessmentRecord]:
        """All of a user's records, oldest first."""
        ...
