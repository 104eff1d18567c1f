"""Shared utilities and common code."""

from career_coach.shared.config import Settings, get_settings
from career_coach.shared.database import (
    Base,
    get_db_session,
    get_redis,
    shutdown,
    startup,
)
from career_coach.shared.identity import require_user_id

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Database
    "Base",
    "get_db_session",
    "get_redis",
    "startup",
    "shutdown",
    # Identity
    "require_user_id",
]
