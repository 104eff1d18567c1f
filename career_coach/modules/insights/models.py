"""SQLAlchemy models for industry insights."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Float, Text, text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column

from career_coach.shared.database import Base


class IndustryInsightModel(Base):
    """Industry insight database model.

    One row per industry, shared by every user who picked that industry.
    """

    __tablename__ = "industry_insights"

    id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
        server_default=text("uuid_generate_v4()"),
    )
    industry: Mapped[str] = mapped_column(Text, unique=True, nullable=False, index=True)

    # [{role, min, max, median, location}]
    salary_ranges: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False)
    growth_rate: Mapped[float] = mapped_column(Float, nullable=False)
    demand_level: Mapped[str] = mapped_column(Text, nullable=False)
    top_skills: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False)
    market_outlook: Mapped[str] = mapped_column(Text, nullable=False)
    key_trends: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False)
    recommended_skills: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False)

    last_updated: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    )
    next_update: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<IndustryInsight(industry={self.industry!r}, next_update={self.next_update})>"
