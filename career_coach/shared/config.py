"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # Anthropic
    anthropic_api_key: str

    # PostgreSQL
    database_url: str

    # Redis
    redis_url: str = "redis://localhost:6379"

    # Database Pool Settings
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600  # Recycle connections after 1 hour

    # LLM Settings
    default_model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 4096
    temperature: float = 0.7
    llm_timeout_seconds: float = 60.0

    # Interview quiz
    quiz_question_count: int = 10
    quiz_session_ttl_seconds: int = 60 * 60 * 24

    # Industry insights
    insight_refresh_days: int = 7
    insight_refresh_cron: str = "0 0 * * sun"  # Sundays at midnight UTC

    # Profile updates generate insights inside the transaction, so allow
    # more than the usual statement time
    profile_update_timeout_seconds: float = 10.0

    # Feature Flags (can also be set via FF_* env vars)
    ff_use_database_persistence: bool = False
    ff_use_redis_session_state: bool = False
    ff_enable_background_jobs: bool = False

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def sync_database_url(self) -> str:
        """Get synchronous database URL for migration tooling."""
        return self.database_url.replace("+asyncpg", "")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
