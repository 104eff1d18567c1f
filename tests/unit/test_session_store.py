"""Unit tests for quiz session stores."""

import json
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from career_coach.modules.interview import (
    InMemoryQuizSessionStore,
    Question,
    QuestionSet,
    QuizCategory,
    QuizSession,
    RedisQuizSessionStore,
)
from career_coach.shared.exceptions import PersistenceError


@pytest.fixture
def started_session(sample_user_id):
    session = QuizSession(user_id=sample_user_id, industry="Finance")
    session.start(QuestionSet(
        questions=(Question("Q0", ("A", "B", "C", "D"), "A", "E", QuizCategory.BEHAVIORAL),),
        category=QuizCategory.BEHAVIORAL,
    ))
    return session


class TestInMemoryQuizSessionStore:
    """Tests for InMemoryQuizSessionStore."""

    async def test_save_and_get(self, started_session):
        store = InMemoryQuizSessionStore()
        await store.save(started_session)

        loaded = await store.get(started_session.id)

        assert loaded.id == started_session.id
        assert loaded.question_set == started_session.question_set

    async def test_stored_copy_is_isolated(self, started_session):
        store = InMemoryQuizSessionStore()
        await store.save(started_session)

        started_session.answer(0, "A")

        loaded = await store.get(started_session.id)
        assert loaded.answers[0] is None

    async def test_missing_and_delete(self, started_session):
        store = InMemoryQuizSessionStore()
        assert await store.get(uuid4()) is None

        await store.save(started_session)
        assert await store.delete(started_session.id) is True
        assert await store.delete(started_session.id) is False
        assert await store.get(started_session.id) is None


class TestRedisQuizSessionStore:
    """Tests for RedisQuizSessionStore with a mocked client."""

    @pytest.fixture
    def mock_redis(self):
        redis = AsyncMock()
        with patch(
            "career_coach.modules.interview.session_store.get_redis",
            AsyncMock(return_value=redis),
        ):
            yield redis

    async def test_save_uses_prefixed_key_and_ttl(self, mock_redis, started_session):
        store = RedisQuizSessionStore(ttl_seconds=600)

        await store.save(started_session)

        key, ttl, payload = mock_redis.setex.call_args.args
        assert key == f"quiz:session:{started_session.id}"
        assert ttl == 600
        assert json.loads(payload)["status"] == "in_progress"

    async def test_get_restores_snapshot(self, mock_redis, started_session):
        mock_redis.get.return_value = json.dumps(started_session.to_dict())
        store = RedisQuizSessionStore(ttl_seconds=600)

        loaded = await store.get(started_session.id)

        assert loaded.id == started_session.id
        assert loaded.industry == "Finance"
        mock_redis.get.assert_awaited_once_with(f"quiz:session:{started_session.id}")

    async def test_get_missing(self, mock_redis):
        mock_redis.get.return_value = None
        assert await RedisQuizSessionStore().get(uuid4()) is None

    async def test_get_unreadable_snapshot(self, mock_redis):
        mock_redis.get.return_value = "{not json"
        assert await RedisQuizSessionStore().get(uuid4()) is None

    async def test_delete(self, mock_redis):
        mock_redis.delete.return_value = 1
        assert await RedisQuizSessionStore().delete(uuid4()) is True

    async def test_save_outage_is_persistence_error(self, mock_redis, started_session):
        mock_redis.setex.side_effect = RedisConnectionError("Connection refused")

        with pytest.raises(PersistenceError):
            await RedisQuizSessionStore().save(started_session)

    async def test_get_outage_is_persistence_error(self, mock_redis):
        mock_redis.get.side_effect = RedisConnectionError("Connection refused")

        with pytest.raises(PersistenceError):
            await RedisQuizSessionStore().get(uuid4())

    async def test_pending_assessment_id_survives_round_trip(self, mock_redis, started_session):
        started_session.pending_assessment_id = uuid4()
        mock_redis.get.return_value = json.dumps(started_session.to_dict())

        loaded = await RedisQuizSessionStore().get(started_session.id)

        assert loaded.pending_assessment_id == started_session.pending_assessment_id
        assert not loaded.is_saved
