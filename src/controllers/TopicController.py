"""Topic controller: versioning rules, hierarchy assembly and path search"""
from collections import deque
from datetime import datetime, timedelta
from typing import Callable, Optional

from src.controllers.BaseController import BaseController
from src.core.exceptions import (
    CyclicHierarchyError,
    InvalidArgumentError,
    InvalidTopicDataError,
    TopicNotFoundError,
)
from src.models.TopicRecords import TopicRecord, TopicVersionRecord, TopicHierarchyNode
from src.stores.topicstore.TopicStoreInterface import TopicStoreInterface
from src.utils.logger import get_logger

logger = get_logger(__name__)


class TopicController(BaseController):
    """Business operations over a topic store"""

    def __init__(
        self,
        topic_store: TopicStoreInterface,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize TopicController.

        Args:
            topic_store: Store holding current topics and their history
            id_factory: Source of unique topic ids
            clock: Source of timestamps
        """
        super().__init__(id_factory=id_factory, clock=clock)
        self.topic_store = topic_store

    @staticmethod
    def _validate_topic_data(name: str, content: str) -> None:
        if not isinstance(name, str) or not name.strip():
            raise InvalidTopicDataError("Invalid topic data: name must not be empty")
        if not isinstance(content, str) or not content.strip():
            raise InvalidTopicDataError("Invalid topic data: content must not be empty")

    async def create_topic(
        self,
        name: str,
        content: str,
        parent_topic_id: Optional[str] = None,
    ) -> TopicRecord:
        """
        Create a topic at version 1.

        The parent id is not checked for existence; dangling parents are allowed.

        Args:
            name: Topic name
            content: Topic content
            parent_topic_id: Optional id of the parent topic

        Returns:
            The created topic

        Raises:
            InvalidTopicDataError: name or content is empty
        """
        self._validate_topic_data(name, content)

        timestamp = self.now()
        topic = TopicRecord(
            id=self.generate_id(),
            name=name,
            content=content,
            version=1,
            parent_topic_id=parent_topic_id,
            created_at=timestamp,
            updated_at=timestamp,
        )
        created = await self.topic_store.create_topic(topic)
        logger.info(f"Topic created | topic_id={created.id} | parent_topic_id={parent_topic_id}")
        return created

    async def update_topic(self, topic_id: str, name: str, content: str) -> TopicRecord:
        """
        Write a new version of a topic.

        The previous state goes to the version history, the parent link is
        carried forward unchanged and created_at is preserved.

        Args:
            topic_id: Topic id
            name: New name
            content: New content

        Returns:
            The new current state

        Raises:
            TopicNotFoundError: No topic with this id
            InvalidTopicDataError: name or content is empty
        """
        async with self.topic_store.update_lock(topic_id):
            current = await self.topic_store.get_latest_topic(topic_id)
            if current is None:
                raise TopicNotFoundError(
                    topic_id,
                    f"Cannot update topic with id {topic_id} because it does not exist",
                )
            self._validate_topic_data(name, content)

            # updated_at must move forward even on a coarse clock
            updated_at = self.now()
            if updated_at <= current.updated_at:
                updated_at = current.updated_at + timedelta(microseconds=1)

            new_state = TopicRecord(
                id=current.id,
                name=name,
                content=content,
                version=current.version + 1,
                parent_topic_id=current.parent_topic_id,
                created_at=current.created_at,
                updated_at=updated_at,
            )
            updated = await self.topic_store.update_topic(new_state, current)

        logger.info(f"Topic updated | topic_id={topic_id} | version={updated.version}")
        return updated

    async def get_topics_list(self) -> list[TopicRecord]:
        return await self.topic_store.get_all_topics()

    async def get_latest_topic(self, topic_id: str) -> Optional[TopicRecord]:
        return await self.topic_store.get_latest_topic(topic_id)

    async def get_topic_version(
        self,
        topic_id: str,
        version: Optional[int] = None,
    ) -> Optional[TopicRecord]:
        """
        Get a topic as it was at a given version.

        Args:
            topic_id: Topic id
            version: Version number; the current state when omitted

        Returns:
            TopicRecord, or None when the topic or the version is unknown
        """
        current = await self.topic_store.get_latest_topic(topic_id)
        if version is None or (current is not None and current.version == version):
            return current

        snapshot = await self.topic_store.get_topic_version(topic_id, version)
        if snapshot is None:
            return None
        created_at = current.created_at if current is not None else snapshot.created_at
        return snapshot.to_topic(created_at=created_at)

    async def get_topic_versions(self, topic_id: str) -> list[TopicVersionRecord]:
        """
        Get the version history of a topic, newest first.

        Raises:
            TopicNotFoundError: No topic with this id
        """
        if await self.topic_store.get_latest_topic(topic_id) is None:
            raise TopicNotFoundError(topic_id)
        return await self.topic_store.get_topic_versions(topic_id)

    async def get_topic_hierarchy(self, topic_id: str) -> TopicHierarchyNode:
        """
        Build the tree of a topic and all its descendants.

        The tree is expanded iteratively with a visited set, so arbitrarily
        deep chains do not hit the interpreter recursion limit and cyclic
        parent links are reported instead of looping.

        Args:
            topic_id: Root topic id

        Returns:
            TopicHierarchyNode rooted at topic_id

        Raises:
            InvalidArgumentError: topic_id is empty
            TopicNotFoundError: No topic with this id
            CyclicHierarchyError: A descendant links back into the tree
        """
        if not topic_id:
            raise InvalidArgumentError("Topic ID is required")

        topic = await self.topic_store.get_latest_topic(topic_id)
        if topic is None:
            raise TopicNotFoundError(topic_id)

        root = TopicHierarchyNode(**topic.model_dump())
        visited = {topic_id}
        pending = [root]

        while pending:
            node = pending.pop()
            for child in await self.topic_store.get_topic_children(node.id):
                if child.id in visited:
                    logger.warning(f"Cyclic hierarchy | root_id={topic_id} | topic_id={child.id}")
                    raise CyclicHierarchyError(child.id, topic_id)
                visited.add(child.id)

                child_topic = await self.topic_store.get_latest_topic(child.id)
                if child_topic is None:
                    continue
                child_node = TopicHierarchyNode(**child_topic.model_dump())
                node.children.append(child_node)
                pending.append(child_node)

        logger.debug(f"Hierarchy built | topic_id={topic_id} | size={len(visited)}")
        return root

    async def find_shortest_path(self, start_id: str, end_id: str) -> list[str]:
        """
        Find the shortest chain of topic ids from start_id to end_id.

        Parent/child links are treated as undirected edges. Breadth-first
        search visits child ids before the parent id at each node, and each id
        is enqueued at most once, so malformed cyclic links terminate.

        Args:
            start_id: Topic id to start from
            end_id: Topic id to reach

        Returns:
            List of ids from start_id to end_id, [start_id] when they are
            equal, [] when no path exists
        """
        queue = deque([start_id])
        predecessors: dict[str, Optional[str]] = {start_id: None}

        while queue:
            current_id = queue.popleft()

            if current_id == end_id:
                path = []
                step: Optional[str] = current_id
                while step is not None:
                    path.append(step)
                    step = predecessors[step]
                path.reverse()
                logger.debug(f"Path found | start_id={start_id} | end_id={end_id} | hops={len(path) - 1}")
                return path

            connections = await self.topic_store.get_topic_connections(current_id)
            neighbors = list(connections.child_ids)
            if connections.parent_id:
                neighbors.append(connections.parent_id)

            for neighbor in neighbors:
                if neighbor not in predecessors:
                    predecessors[neighbor] = current_id
                    queue.append(neighbor)

        logger.debug(f"No path | start_id={start_id} | end_id={end_id} | explored={len(predecessors)}")
        return []
