"""In-process topic store provider"""
import itertools
from typing import Dict, List, Optional

from src.core.exceptions import DuplicateIdError, NotFoundError, StorageError, VersionConflictError
from src.models.TopicRecords import (
    TopicRecord,
    TopicVersionRecord,
    TopicChild,
    TopicConnections,
)
from src.stores.topicstore.TopicStoreInterface import TopicStoreInterface
from src.utils.logger import get_logger

logger = get_logger(__name__)


class InMemoryTopicStoreProvider(TopicStoreInterface):
    """
    Topic store kept in process memory.

    Current records live in a dict keyed by id, history in an append-only
    list with a (topic_id, version) index, and children in a secondary index
    keyed by parent id. Records are copied on the way in and out so callers
    never share state with the store.
    """

    def __init__(self):
        super().__init__()
        self._topics: Dict[str, TopicRecord] = {}
        self._versions: List[TopicVersionRecord] = []
        self._version_index: Dict[tuple[str, int], TopicVersionRecord] = {}
        self._children_index: Dict[str, List[str]] = {}
        self._version_sequence = itertools.count(1)
        logger.info("In-memory topic store initialized")

    async def create_topic(self, topic: TopicRecord) -> TopicRecord:
        if topic.id in self._topics:
            raise DuplicateIdError(topic.id)

        self._topics[topic.id] = topic.model_copy()
        if topic.parent_topic_id is not None:
            self._children_index.setdefault(topic.parent_topic_id, []).append(topic.id)

        logger.debug(f"Topic created | topic_id={topic.id} | parent_topic_id={topic.parent_topic_id}")
        return topic.model_copy()

    async def update_topic(self, new_state: TopicRecord, previous_state: TopicRecord) -> TopicRecord:
        current = self._topics.get(new_state.id)
        if current is None:
            raise NotFoundError(new_state.id)
        if current.version != previous_state.version:
            raise VersionConflictError(new_state.id, previous_state.version, current.version)

        key = (previous_state.id, previous_state.version)
        if key in self._version_index:
            raise StorageError(
                f"Version {previous_state.version} of topic {previous_state.id} is already recorded"
            )

        snapshot = TopicVersionRecord(
            id=next(self._version_sequence),
            topic_id=previous_state.id,
            name=previous_state.name,
            content=previous_state.content,
            version=previous_state.version,
            parent_topic_id=previous_state.parent_topic_id,
            created_at=previous_state.updated_at,
        )
        stored = new_state.model_copy()

        # Nothing below can fail, both writes land together
        self._versions.append(snapshot)
        self._version_index[key] = snapshot
        if stored.parent_topic_id != current.parent_topic_id:
            self._reindex_parent(stored.id, current.parent_topic_id, stored.parent_topic_id)
        self._topics[stored.id] = stored

        logger.debug(f"Topic updated | topic_id={stored.id} | version={stored.version}")
        return stored.model_copy()

    def _reindex_parent(self, topic_id: str, old_parent: Optional[str], new_parent: Optional[str]) -> None:
        if old_parent is not None and topic_id in self._children_index.get(old_parent, []):
            self._children_index[old_parent].remove(topic_id)
        if new_parent is not None:
            self._children_index.setdefault(new_parent, []).append(topic_id)

    async def get_latest_topic(self, topic_id: str) -> Optional[TopicRecord]:
        topic = self._topics.get(topic_id)
        return topic.model_copy() if topic is not None else None

    async def _get_history_entry(self, topic_id: str, version: int) -> Optional[TopicVersionRecord]:
        return self._version_index.get((topic_id, version))

    async def get_topic_versions(self, topic_id: str) -> List[TopicVersionRecord]:
        versions = [v for v in self._versions if v.topic_id == topic_id]
        return sorted(versions, key=lambda v: v.version, reverse=True)

    async def get_all_topics(self) -> List[TopicRecord]:
        return [topic.model_copy() for topic in self._topics.values()]

    async def get_topic_children(self, topic_id: str) -> List[TopicChild]:
        return [
            TopicChild(id=child_id, name=self._topics[child_id].name)
            for child_id in self._children_index.get(topic_id, [])
            if child_id in self._topics
        ]

    async def get_topic_connections(self, topic_id: str) -> TopicConnections:
        topic = self._topics.get(topic_id)
        if topic is None:
            return TopicConnections()
        return TopicConnections(
            parent_id=topic.parent_topic_id,
            child_ids=list(self._children_index.get(topic_id, [])),
        )

    async def clear_database(self) -> None:
        self._topics.clear()
        self._versions.clear()
        self._version_index.clear()
        self._children_index.clear()
        logger.info("In-memory topic store cleared")
