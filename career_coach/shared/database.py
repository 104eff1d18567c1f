"""PostgreSQL and Redis connections shared by every module."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncGenerator, Awaitable, Callable

import redis.asyncio as redis
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from career_coach.shared.config import get_settings
from career_coach.shared.feature_flags import FeatureFlags, get_feature_flags

settings = get_settings()
logger = logging.getLogger(__name__)

# Anything that yields a transactional session; services take one as a
# constructor argument and default to get_db_session
DbSessionFactory = Callable[[], AsyncContextManager[AsyncSession]]

STARTUP_ATTEMPTS = 5
STARTUP_RETRY_DELAY_SECONDS = 2.0


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


# ===================
# PostgreSQL
# ===================

# asyncpg connections are bound to the loop that opened them, so each event
# loop gets its own engine
_engines: dict[int, tuple[AsyncEngine, async_sessionmaker[AsyncSession]]] = {}


def _engine_for_loop() -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    loop_id = id(asyncio.get_running_loop())
    if loop_id not in _engines:
        engine = create_async_engine(
            settings.database_url,
            pool_pre_ping=True,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
        )
        _engines[loop_id] = (engine, async_sessionmaker(engine, expire_on_commit=False))
    return _engines[loop_id]


@asynccontextmanager
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Open a session inside one transaction.

    Commits when the block exits cleanly and rolls back on any exception.

    Usage:
        async with get_db_session() as session:
            result = await session.execute(query)
    """
    _, factory = _engine_for_loop()
    async with factory() as session, session.begin():
        yield session


# ===================
# Redis
# ===================

_redis_pool: redis.ConnectionPool | None = None


async def get_redis() -> redis.Redis:
    """Get a Redis client on the shared connection pool."""
    global _redis_pool
    if _redis_pool is None:
        _redis_pool = redis.ConnectionPool.from_url(settings.redis_url, decode_responses=True)
    return redis.Redis(connection_pool=_redis_pool)


# ===================
# Lifecycle
# ===================

async def _ping_postgres() -> None:
    engine, _ = _engine_for_loop()
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def _ping_redis() -> None:
    client = await get_redis()
    await client.ping()


async def _wait_until_reachable(name: str, ping: Callable[[], Awaitable[None]]) -> None:
    for attempt in range(1, STARTUP_ATTEMPTS + 1):
        try:
            await ping()
            logger.debug(f"{name} is reachable")
            return
        except Exception as e:
            logger.warning(f"{name} health check failed (attempt {attempt}/{STARTUP_ATTEMPTS}): {e}")
            if attempt < STARTUP_ATTEMPTS:
                await asyncio.sleep(STARTUP_RETRY_DELAY_SECONDS)
    raise RuntimeError(f"Failed to connect to {name} after {STARTUP_ATTEMPTS} attempts")


async def startup() -> None:
    """Wait for PostgreSQL, and for Redis when quiz sessions are kept there."""
    await _wait_until_reachable("PostgreSQL", _ping_postgres)

    if get_feature_flags().is_enabled(FeatureFlags.USE_REDIS_SESSION_STATE):
        await _wait_until_reachable("Redis", _ping_redis)

    logger.info("Database connections ready")


async def shutdown() -> None:
    """Dispose every engine and the Redis pool."""
    global _redis_pool
    for engine, _ in _engines.values():
        await engine.dispose()
    _engines.clear()

    if _redis_pool is not None:
        await _redis_pool.aclose()
        _redis_pool = None

    logger.info("Database connections closed")
