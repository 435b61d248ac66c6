"""
Topic store contract tests, run against the in-memory and the SQL (SQLite) providers.
"""

import pytest
from sqlalchemy import Text

from src.core.exceptions import DuplicateIdError, NotFoundError, StorageError, VersionConflictError
from src.models.TopicRecords import TopicChild, TopicConnections, TopicRecord, TopicVersionRecord
from src.models.db_schemas.knowledge_base.schemas import Topic, TopicVersion
from src.stores.topicstore.providers.SQLTopicStoreProvider import SQLTopicStoreProvider
from tests.conftest import BASE_TIME, make_topic, run_with_store


def test_create_and_get_latest(make_store):
    async def scenario(store):
        topic = make_topic("a", name="Algebra", content="Groups and rings")
        created = await store.create_topic(topic)

        assert created == topic
        assert await store.get_latest_topic("a") == topic
        assert await store.get_topic_versions("a") == []

    run_with_store(make_store, scenario)


def test_get_latest_missing_returns_none(make_store):
    async def scenario(store):
        assert await store.get_latest_topic("missing") is None
        assert await store.get_topic_version("missing") is None
        assert await store.get_topic_version("missing", 1) is None

    run_with_store(make_store, scenario)


def test_create_duplicate_id_raises(make_store):
    async def scenario(store):
        await store.create_topic(make_topic("a", name="Original"))

        with pytest.raises(DuplicateIdError):
            await store.create_topic(make_topic("a", name="Impostor"))

        latest = await store.get_latest_topic("a")
        assert latest.name == "Original"

    run_with_store(make_store, scenario)


def test_update_overwrites_current_and_appends_history(make_store):
    async def scenario(store):
        original = make_topic("a", name="v1 name", content="v1 content", parent_topic_id="root")
        await store.create_topic(original)

        new_state = original.model_copy(update={
            "name": "v2 name",
            "content": "v2 content",
            "version": 2,
            "updated_at": BASE_TIME.replace(hour=13),
        })
        stored = await store.update_topic(new_state, original)

        assert stored == new_state
        assert await store.get_latest_topic("a") == new_state

        versions = await store.get_topic_versions("a")
        assert len(versions) == 1
        snapshot = versions[0]
        assert isinstance(snapshot, TopicVersionRecord)
        assert snapshot.topic_id == "a"
        assert snapshot.name == "v1 name"
        assert snapshot.content == "v1 content"
        assert snapshot.version == 1
        assert snapshot.parent_topic_id == "root"
        assert snapshot.created_at == original.updated_at

    run_with_store(make_store, scenario)


def test_get_topic_version_reads_history_only(make_store):
    async def scenario(store):
        original = make_topic("a")
        await store.create_topic(original)
        new_state = original.model_copy(update={"name": "renamed", "version": 2})
        await store.update_topic(new_state, original)

        snapshot = await store.get_topic_version("a", 1)
        assert snapshot.name == original.name
        assert snapshot.version == 1

        # The current version has not been superseded, so it is not in the history
        assert await store.get_topic_version("a", 2) is None
        assert await store.get_topic_version("a") == new_state

    run_with_store(make_store, scenario)


def test_update_missing_topic_raises_not_found(make_store):
    async def scenario(store):
        ghost = make_topic("ghost")
        with pytest.raises(NotFoundError):
            await store.update_topic(ghost.model_copy(update={"version": 2}), ghost)
        assert await store.get_topic_versions("ghost") == []

    run_with_store(make_store, scenario)


def test_stale_previous_state_is_rejected_without_partial_writes(make_store):
    async def scenario(store):
        v1 = make_topic("a", name="v1")
        await store.create_topic(v1)
        v2 = v1.model_copy(update={"name": "v2", "version": 2})
        await store.update_topic(v2, v1)

        competing = v1.model_copy(update={"name": "lost edit", "version": 2})
        with pytest.raises(VersionConflictError):
            await store.update_topic(competing, v1)

        assert await store.get_latest_topic("a") == v2
        versions = await store.get_topic_versions("a")
        assert [v.version for v in versions] == [1]

    run_with_store(make_store, scenario)


def test_versions_are_newest_first_with_unique_ids(make_store):
    async def scenario(store):
        for topic_id in ("a", "b"):
            current = make_topic(topic_id)
            await store.create_topic(current)
            for version in (2, 3, 4):
                new_state = current.model_copy(update={
                    "name": f"{topic_id} v{version}",
                    "version": version,
                })
                current = await store.update_topic(new_state, current)

        versions_a = await store.get_topic_versions("a")
        versions_b = await store.get_topic_versions("b")

        assert [v.version for v in versions_a] == [3, 2, 1]
        assert [v.version for v in versions_b] == [3, 2, 1]
        all_ids = [v.id for v in versions_a + versions_b]
        assert len(set(all_ids)) == 6

    run_with_store(make_store, scenario)


def test_get_all_topics_in_creation_order(make_store):
    async def scenario(store):
        for offset, topic_id in enumerate(["c", "a", "b"]):
            await store.create_topic(make_topic(topic_id, offset=offset))

        topics = await store.get_all_topics()
        assert [t.id for t in topics] == ["c", "a", "b"]

    run_with_store(make_store, scenario)


def test_children_and_connections(make_store):
    async def scenario(store):
        await store.create_topic(make_topic("root", offset=0))
        await store.create_topic(make_topic("left", parent_topic_id="root", offset=1))
        await store.create_topic(make_topic("right", parent_topic_id="root", offset=2))
        await store.create_topic(make_topic("leaf", parent_topic_id="left", offset=3))

        children = await store.get_topic_children("root")
        assert children == [
            TopicChild(id="left", name="Name left"),
            TopicChild(id="right", name="Name right"),
        ]
        assert await store.get_topic_children("leaf") == []

        assert await store.get_topic_connections("root") == TopicConnections(
            parent_id=None, child_ids=["left", "right"]
        )
        assert await store.get_topic_connections("left") == TopicConnections(
            parent_id="root", child_ids=["leaf"]
        )

    run_with_store(make_store, scenario)


def test_connections_of_unknown_topic_are_empty(make_store):
    async def scenario(store):
        # "orphan" points at a parent that was never created
        await store.create_topic(make_topic("orphan", parent_topic_id="nowhere"))

        assert await store.get_topic_children("nowhere") == [
            TopicChild(id="orphan", name="Name orphan")
        ]
        assert await store.get_topic_connections("nowhere") == TopicConnections()
        assert await store.get_topic_connections("orphan") == TopicConnections(
            parent_id="nowhere", child_ids=[]
        )

    run_with_store(make_store, scenario)


def test_clear_database_removes_topics_and_history(make_store):
    async def scenario(store):
        original = make_topic("a")
        await store.create_topic(original)
        await store.update_topic(original.model_copy(update={"version": 2}), original)
        await store.create_topic(make_topic("b", parent_topic_id="a", offset=1))

        await store.clear_database()

        assert await store.get_all_topics() == []
        assert await store.get_latest_topic("a") is None
        assert await store.get_topic_versions("a") == []
        assert await store.get_topic_children("a") == []

        # Ids are free again after a reset
        await store.create_topic(make_topic("a"))
        assert (await store.get_latest_topic("a")).version == 1

    run_with_store(make_store, scenario)


def test_returned_records_do_not_alias_store_state(make_store):
    async def scenario(store):
        await store.create_topic(make_topic("a", name="stable"))

        fetched = await store.get_latest_topic("a")
        fetched.name = "mutated by caller"

        assert (await store.get_latest_topic("a")).name == "stable"

    run_with_store(make_store, scenario)


def test_creation_order_does_not_depend_on_clock_or_id(make_store):
    async def scenario(store):
        # Same timestamp for every topic, ids deliberately not in alphabetical order
        for topic_id, parent_id in [("root", None), ("zzz", "root"), ("aaa", "root"), ("mmm", None)]:
            await store.create_topic(make_topic(topic_id, parent_topic_id=parent_id))

        children = await store.get_topic_children("root")
        assert [c.id for c in children] == ["zzz", "aaa"]

        connections = await store.get_topic_connections("root")
        assert connections.child_ids == ["zzz", "aaa"]

        topics = await store.get_all_topics()
        assert [t.id for t in topics] == ["root", "zzz", "aaa", "mmm"]

    run_with_store(make_store, scenario)


def test_long_ids_are_stored_intact(make_store):
    async def scenario(store):
        long_id = "t" * 200
        long_parent = "p" * 300
        topic = make_topic(long_id, parent_topic_id=long_parent)
        await store.create_topic(topic)
        await store.update_topic(topic.model_copy(update={"version": 2}), topic)

        assert await store.get_latest_topic(long_id) == topic.model_copy(update={"version": 2})
        assert (await store.get_topic_version(long_id, 1)).parent_topic_id == long_parent
        assert [c.id for c in await store.get_topic_children(long_parent)] == [long_id]

    run_with_store(make_store, scenario)


def test_id_columns_have_no_length_limit():
    assert isinstance(Topic.__table__.c.id.type, Text)
    assert isinstance(Topic.__table__.c.parent_topic_id.type, Text)
    assert isinstance(TopicVersion.__table__.c.topic_id.type, Text)
    assert isinstance(TopicVersion.__table__.c.parent_topic_id.type, Text)


def test_sql_constraint_failure_other_than_duplicate_id_is_storage_error(sql_config):
    async def scenario(store):
        # Bypasses validation to hit the NOT NULL constraint on name
        broken = TopicRecord.model_construct(
            id="a",
            name=None,
            content="content",
            version=1,
            parent_topic_id=None,
            created_at=BASE_TIME,
            updated_at=BASE_TIME,
        )
        with pytest.raises(StorageError) as error:
            await store.create_topic(broken)
        assert not isinstance(error.value, DuplicateIdError)
        assert await store.get_latest_topic("a") is None

    run_with_store(lambda: SQLTopicStoreProvider(sql_config), scenario)
