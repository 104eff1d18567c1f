"""Pydantic schemas for validating model-generated quiz questions."""

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from career_coach.modules.interview.interface import Question, QuizCategory
from career_coach.shared.constants import QUIZ_OPTION_COUNT


class GeneratedQuestion(BaseModel):
    """One question object from the quiz generation response."""

    question: str = Field(..., min_length=1)
    options: list[str] = Field(..., min_length=QUIZ_OPTION_COUNT, max_length=QUIZ_OPTION_COUNT)
    correct_answer: str = Field(..., validation_alias=AliasChoices("correctAnswer", "correct_answer"))
    explanation: str = Field(..., min_length=1)
    # Older prompts called this "type"; absent means "the requested category"
    category: QuizCategory | None = Field(
        default=None,
        validation_alias=AliasChoices("category", "type"),
    )

    @field_validator("question", "explanation")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("options")
    @classmethod
    def distinct_options(cls, value: list[str]) -> list[str]:
        if any(not option.strip() for option in value):
            raise ValueError("options must not be blank")
        if len(set(value)) != len(value):
            raise ValueError("options must be distinct")
        return value

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @model_validator(mode="after")
    def answer_is_an_option(self) -> "GeneratedQuestion":
        if self.correct_answer not in self.options:
            raise ValueError("correctAnswer must be one of the options")
        return self

    def to_question(self, requested: QuizCategory) -> Question:
        return Question(
            text=self.question,
            options=tuple(self.options),
            correct_answer=self.correct_answer,
            explanation=self.explanation,
            category=self.category or requested,
        )


class GeneratedQuiz(BaseModel):
    """The top-level object: ``{"questions": [...]}``."""

    questions: list[GeneratedQuestion] = Field(..., min_length=1)
