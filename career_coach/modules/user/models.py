"""SQLAlchemy models for users and their career profiles."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Integer, Text, func
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID as PostgreSQL_UUID
from sqlalchemy.orm import Mapped, mapped_column

from career_coach.shared.database import Base


class UserModel(Base):
    """User model.

    Maps to the 'users' table. One row per identity-provider subject; the
    career profile fields stay empty until onboarding is completed.
    """

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(
        PostgreSQL_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
        server_default=func.uuid_generate_v4(),
    )

    # Subject identifier issued by the identity provider
    external_id: Mapped[str] = mapped_column(
        Text,
        unique=True,
        nullable=False,
        index=True,
    )

    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Profile fields
    industry: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        index=True,
    )
    experience: Mapped[int | None] = mapped_column(Integer, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    skills: Mapped[list[str]] = mapped_column(
        ARRAY(Text),
        default=list,
        server_default="{}",
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, industry={self.industry!r})>"
