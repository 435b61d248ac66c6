"""
Shared fixtures: deterministic ids and clock, and topic stores for every backend.
"""

import asyncio
import itertools
from datetime import datetime, timedelta, timezone

import pytest

from src.controllers.TopicController import TopicController
from src.models.TopicRecords import TopicRecord
from src.stores.topicstore.providers.InMemoryTopicStoreProvider import InMemoryTopicStoreProvider
from src.stores.topicstore.providers.SQLTopicStoreProvider import SQLTopicStoreProvider
from src.utils.config import Config

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Clock that advances one second per reading."""

    def __init__(self, start: datetime = BASE_TIME):
        self._ticks = itertools.count()
        self._start = start

    def __call__(self) -> datetime:
        return self._start + timedelta(seconds=next(self._ticks))


class SequentialIds:
    """Id factory producing topic-1, topic-2, ..."""

    def __init__(self, prefix: str = "topic"):
        self._counter = itertools.count(1)
        self._prefix = prefix

    def __call__(self) -> str:
        return f"{self._prefix}-{next(self._counter)}"


def make_topic(topic_id, name=None, content=None, version=1, parent_topic_id=None, offset=0):
    """Build a TopicRecord with timestamps offset seconds after BASE_TIME."""
    timestamp = BASE_TIME + timedelta(seconds=offset)
    return TopicRecord(
        id=topic_id,
        name=name or f"Name {topic_id}",
        content=content or f"Content {topic_id}",
        version=version,
        parent_topic_id=parent_topic_id,
        created_at=timestamp,
        updated_at=timestamp,
    )


def run_with_store(make_store, scenario):
    """Run scenario(store) on a fresh event loop with an initialized store."""

    async def runner():
        store = make_store()
        await store.initialize()
        try:
            await scenario(store)
        finally:
            await store.close()

    asyncio.run(runner())


@pytest.fixture
def sql_config(tmp_path):
    return Config(
        topic_store_type="sql",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'knowledge_base.db'}",
        db_auto_create_tables=True,
    )


@pytest.fixture(params=["memory", "sql"])
def make_store(request, sql_config):
    """Factory for an uninitialized topic store, once per backend."""
    if request.param == "memory":
        return InMemoryTopicStoreProvider
    return lambda: SQLTopicStoreProvider(sql_config)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def controller(clock):
    """TopicController over an in-memory store with sequential ids."""
    return TopicController(
        InMemoryTopicStoreProvider(),
        id_factory=SequentialIds(),
        clock=clock,
    )
