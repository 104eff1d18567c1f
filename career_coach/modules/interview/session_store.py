"""Quiz Session Store.

Keeps paused/in-progress quiz sessions between requests, either in process
memory or as JSON snapshots in Redis so any worker can resume them.
"""

import json
import logging
from uuid import UUID

from redis.exceptions import RedisError

from career_coach.modules.interview.session import QuizSession
from career_coach.shared.config import get_settings
from career_coach.shared.constants import QUIZ_SESSION_KEY_PREFIX
from career_coach.shared.database import get_redis
from career_coach.shared.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class InMemoryQuizSessionStore:
    """Process-local session storage.

    Sessions are stored as snapshots rather than live objects so a caller
    holding a session cannot change the stored copy without saving it.
    """

    def __init__(self) -> None:
        self._sessions: dict[UUID, dict] = {}

    async def get(self, session_id: UUID) -> QuizSession | None:
        data = self._sessions.get(session_id)
        if data is None:
            return None
        return QuizSession.from_dict(data)

    async def save(self, session: QuizSession) -> None:
        self._sessions[session.id] = session.to_dict()

    async def delete(self, session_id: UUID) -> bool:
        return self._sessions.pop(session_id, None) is not None


class RedisQuizSessionStore:
    """Redis-backed session storage with TTL for automatic cleanup."""

    KEY_PREFIX = QUIZ_SESSION_KEY_PREFIX

    def __init__(self, ttl_seconds: int | None = None) -> None:
        """Initialize session store.

        Args:
            ttl_seconds: Time-to-live for session snapshots
        """
        self._ttl = ttl_seconds or get_settings().quiz_session_ttl_seconds

    def _key(self, session_id: UUID) -> str:
        return f"{self.KEY_PREFIX}{session_id}"

    async def get(self, session_id: UUID) -> QuizSession | None:
        """Get a quiz session.

        Args:
            session_id: Session UUID

        Returns:
            QuizSession or None if not found or expired

        Raises:
            PersistenceError: If Redis is unavailable
        """
        try:
            redis = await get_redis()
            data = await redis.get(self._key(session_id))
        except RedisError as e:
            logger.error(f"Failed to load quiz session {session_id}: {e}")
            raise PersistenceError("load quiz session") from e

        if data is None:
            return None

        try:
            return QuizSession.from_dict(json.loads(data))
        except (json.JSONDecodeError, KeyError, ValueError) as e:
            logger.error(f"Discarding unreadable quiz session {session_id}: {e}")
            return None

    async def save(self, session: QuizSession) -> None:
        """Store a session snapshot, resetting its TTL.

        Raises:
            PersistenceError: If Redis is unavailable
        """
        try:
            redis = await get_redis()
            await redis.setex(self._key(session.id), self._ttl, json.dumps(session.to_dict()))
        except RedisError as e:
            logger.error(f"Failed to save quiz session {session.id}: {e}")
            raise PersistenceError("save quiz session") from e

    async def delete(self, session_id: UUID) -> bool:
        """Delete a session snapshot.

        Returns:
            True if deleted, False if not found
        """
        redis = await get_redis()
        result = await redis.delete(self._key(session_id))
        return result > 0
