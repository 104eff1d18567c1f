"""SQLAlchemy models for the Interview module."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Float, ForeignKey, Text, text
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column

from career_coach.shared.database import Base


class AssessmentModel(Base):
    """Assessment database model.

    Rows are inserted once per completed quiz and never updated.
    """

    __tablename__ = "assessments"

    id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
        server_default=text("uuid_generate_v4()"),
    )
    user_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    quiz_score: Mapped[float] = mapped_column(Float, nullable=False)
    # [{question, options, userAnswer, answer, isCorrect, explanation, category}]
    questions: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    improvement_tip: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    )

    def __repr__(self) -> str:
        return f"<Assessment(id={self.id}, score={self.quiz_score}, category={self.category!r})>"
