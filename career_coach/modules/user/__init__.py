"""User module - Profile and onboarding management."""

from career_coach.modules.user.interface import (
    IdentityClaims,
    IProfileProvider,
    ProfileUpdate,
    UserProfile,
)
from career_coach.modules.user.models import UserModel
from career_coach.modules.user.service import UserService, get_user_service

__all__ = [
    # Interface
    "IdentityClaims",
    "IProfileProvider",
    "ProfileUpdate",
    "UserProfile",
    # Service
    "UserService",
    "get_user_service",
    # Models
    "UserModel",
]
