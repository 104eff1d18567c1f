"""User Module - Profile and onboarding management."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol
from uuid import UUID

from career_coach.shared.datetime_utils import utc_now


@dataclass
class IdentityClaims:
    """What the external identity provider tells us about the signed-in user."""

    external_id: str
    email: str
    name: str | None = None
    image_url: str | None = None


@dataclass
class UserProfile:
    """User's career profile."""

    user_id: UUID
    industry: str | None
    skills: list[str] = field(default_factory=list)
    experience: int | None = None  # Years
    bio: str | None = None
    updated_at: datetime = field(default_factory=utc_now)

    @property
    def is_onboarded(self) -> bool:
        return bool(self.industry)


@dataclass
class ProfileUpdate:
    """Fields collected during onboarding or a later profile edit."""

    industry: str
    experience: int | None = None
    bio: str | None = None
    skills: list[str] = field(default_factory=list)


class IProfileProvider(Protocol):
    """The slice of the user service other modules depend on."""

    async def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Get the user's profile, or None if the user does not exist."""
        ...
