"""Abstract base class for topic store providers"""
import asyncio
import weakref
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from src.models.TopicRecords import (
    TopicRecord,
    TopicVersionRecord,
    TopicChild,
    TopicConnections,
)


class TopicStoreInterface(ABC):
    """
    Abstract base class for topic store providers.

    A topic store keeps one current record per topic id plus an append-only
    history of superseded revisions. Children and connections are derived
    from the current parent_topic_id values.
    """

    def __init__(self):
        self._update_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    @asynccontextmanager
    async def update_lock(self, topic_id: str) -> AsyncIterator[None]:
        """
        Serialize read-modify-write cycles on one topic id within this process.

        Args:
            topic_id: Topic id being updated
        """
        lock = self._update_locks.get(topic_id)
        if lock is None:
            lock = asyncio.Lock()
            self._update_locks[topic_id] = lock
        async with lock:
            yield

    async def initialize(self) -> None:
        """Prepare the backing storage (connections, tables)."""

    async def close(self) -> None:
        """Release backing storage resources."""

    @abstractmethod
    async def create_topic(self, topic: TopicRecord) -> TopicRecord:
        """
        Insert a new current record. No version row is written.

        Args:
            topic: Topic to insert

        Returns:
            The stored topic

        Raises:
            DuplicateIdError: A topic with the same id exists
            StorageError: Backend failure
        """
        pass

    @abstractmethod
    async def update_topic(self, new_state: TopicRecord, previous_state: TopicRecord) -> TopicRecord:
        """
        Atomically overwrite the current record with new_state and append
        previous_state to the version history. Both writes commit or neither.

        Args:
            new_state: New current state
            previous_state: State being superseded

        Returns:
            The stored new state

        Raises:
            NotFoundError: No current record for new_state.id
            VersionConflictError: Current record is no longer previous_state
            StorageError: Backend failure
        """
        pass

    @abstractmethod
    async def get_latest_topic(self, topic_id: str) -> Optional[TopicRecord]:
        """
        Get the current record.

        Returns:
            TopicRecord or None if absent
        """
        pass

    async def get_topic_version(
        self,
        topic_id: str,
        version: Optional[int] = None
    ) -> Optional[TopicRecord | TopicVersionRecord]:
        """
        Get a historical snapshot, or the current record when version is omitted.

        Args:
            topic_id: Topic id
            version: Version number to look up in the history

        Returns:
            TopicVersionRecord, TopicRecord (version omitted) or None
        """
        if version is None:
            return await self.get_latest_topic(topic_id)
        return await self._get_history_entry(topic_id, version)

    @abstractmethod
    async def _get_history_entry(self, topic_id: str, version: int) -> Optional[TopicVersionRecord]:
        pass

    @abstractmethod
    async def get_topic_versions(self, topic_id: str) -> List[TopicVersionRecord]:
        """
        Get all historical snapshots for a topic, newest first.
        The current state is not included.
        """
        pass

    @abstractmethod
    async def get_all_topics(self) -> List[TopicRecord]:
        """Get every topic's current record, in creation order."""
        pass

    @abstractmethod
    async def get_topic_children(self, topic_id: str) -> List[TopicChild]:
        """Get id and name of every topic whose current parent is topic_id."""
        pass

    @abstractmethod
    async def get_topic_connections(self, topic_id: str) -> TopicConnections:
        """
        Get the immediate neighbours of a topic in the parent/child graph.

        Returns:
            TopicConnections; empty when the topic does not exist
        """
        pass

    @abstractmethod
    async def clear_database(self) -> None:
        """Remove all current records and the whole version history."""
        pass
