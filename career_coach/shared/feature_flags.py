"""Feature flag management for safe feature rollout.

Usage:
    from career_coach.shared.feature_flags import get_feature_flags, FeatureFlags

    flags = get_feature_flags()
    if flags.is_enabled(FeatureFlags.USE_DATABASE_PERSISTENCE):
        # Use database-backed store
    else:
        # Use in-memory store

Environment Variables:
    FF_USE_DATABASE_PERSISTENCE: Store assessments in PostgreSQL (default: false)
    FF_USE_REDIS_SESSION_STATE: Keep in-progress quiz sessions in Redis (default: false)
    FF_ENABLE_BACKGROUND_JOBS: Enable background job scheduler (default: false)
"""

import logging
import os
from enum import Enum
from functools import lru_cache

logger = logging.getLogger(__name__)


class FeatureFlags(str, Enum):
    """Available feature flags.

    Each flag corresponds to an environment variable with FF_ prefix.
    """

    USE_DATABASE_PERSISTENCE = "use_database_persistence"
    USE_REDIS_SESSION_STATE = "use_redis_session_state"
    ENABLE_BACKGROUND_JOBS = "enable_background_jobs"

    @property
    def env_key(self) -> str:
        """Get the environment variable name for this flag."""
        return f"FF_{self.value.upper()}"


class FeatureFlagManager:
    """Manages feature flags with environment variable and runtime overrides."""

    _instance: "FeatureFlagManager | None" = None

    def __new__(cls) -> "FeatureFlagManager":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        if self._initialized:
            return
        self._overrides: dict[str, bool] = {}
        self._initialized = True
        logger.info("FeatureFlagManager initialized")

    def is_enabled(self, flag: FeatureFlags) -> bool:
        """Check if a feature flag is enabled.

        Priority:
        1. Runtime overrides (set via enable/disable methods)
        2. Environment variables (FF_<FLAG_NAME>=true/false)
        3. Default (false)
        """
        if flag.value in self._overrides:
            return self._overrides[flag.value]

        env_value = os.getenv(flag.env_key, "false").lower()
        return env_value in ("true", "1", "yes", "on")

    def enable(self, flag: FeatureFlags) -> None:
        """Enable a feature flag until disabled or the process restarts."""
        self._overrides[flag.value] = True
        logger.info(f"Feature flag enabled: {flag.value}")

    def disable(self, flag: FeatureFlags) -> None:
        """Disable a feature flag until enabled or the process restarts."""
        self._overrides[flag.value] = False
        logger.info(f"Feature flag disabled: {flag.value}")

    def clear_all_overrides(self) -> None:
        """Clear all runtime overrides, reverting to environment variables."""
        self._overrides.clear()
        logger.info("All feature flag overrides cleared")

    def get_all_states(self) -> dict[str, bool]:
        """Get the current state of all feature flags."""
        return {flag.value: self.is_enabled(flag) for flag in FeatureFlags}

    def __repr__(self) -> str:
        states = self.get_all_states()
        enabled = [k for k, v in states.items() if v]
        return f"FeatureFlagManager(enabled={enabled})"


@lru_cache
def get_feature_flags() -> FeatureFlagManager:
    """Get the singleton FeatureFlagManager instance."""
    return FeatureFlagManager()
