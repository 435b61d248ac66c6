"""SQLAlchemy topic store provider (PostgreSQL in production, SQLite for tests)"""
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.core.exceptions import DuplicateIdError, StorageError
from src.models.TopicModel import TopicModel
from src.models.TopicRecords import (
    TopicRecord,
    TopicVersionRecord,
    TopicChild,
    TopicConnections,
)
from src.models.db_schemas.knowledge_base.schemas.topic import Topic
from src.models.db_schemas.knowledge_base.schemas.topic_version import TopicVersion
from src.stores.topicstore.TopicStoreInterface import TopicStoreInterface
from src.utils.config import Config
from src.utils.database import create_db_engine, create_db_session_factory, create_tables
from src.utils.helpers import ensure_utc
from src.utils.logger import get_logger

logger = get_logger(__name__)


class SQLTopicStoreProvider(TopicStoreInterface):
    """Topic store backed by the topics and topic_versions tables"""

    def __init__(self, config: Config):
        """
        Initialize SQL provider.

        Args:
            config: Application configuration with database_url
        """
        super().__init__()
        self.config = config
        self.engine = create_db_engine(config)
        self.db_client = create_db_session_factory(self.engine)
        self.topic_model = TopicModel(self.db_client)

    async def initialize(self) -> None:
        if self.config.db_auto_create_tables:
            try:
                await create_tables(self.engine)
            except SQLAlchemyError as e:
                raise StorageError(f"Failed to create topic tables: {e}") from e

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("SQL topic store engine disposed")

    @staticmethod
    def _to_record(row: Topic) -> TopicRecord:
        return TopicRecord(
            id=row.id,
            name=row.name,
            content=row.content,
            version=row.version,
            parent_topic_id=row.parent_topic_id,
            created_at=ensure_utc(row.created_at),
            updated_at=ensure_utc(row.updated_at),
        )

    @staticmethod
    def _to_version_record(row: TopicVersion) -> TopicVersionRecord:
        return TopicVersionRecord(
            id=row.id,
            topic_id=row.topic_id,
            name=row.name,
            content=row.content,
            version=row.version,
            parent_topic_id=row.parent_topic_id,
            created_at=ensure_utc(row.created_at),
        )

    async def create_topic(self, topic: TopicRecord) -> TopicRecord:
        row = Topic(
            id=topic.id,
            name=topic.name,
            content=topic.content,
            version=topic.version,
            parent_topic_id=topic.parent_topic_id,
            created_at=topic.created_at,
            updated_at=topic.updated_at,
        )
        try:
            row = await self.topic_model.create_topic(row)
        except IntegrityError as e:
            logger.warning(f"Topic insert rejected | topic_id={topic.id} | error={e.orig}")
            if await self.get_latest_topic(topic.id) is not None:
                raise DuplicateIdError(topic.id) from e
            raise StorageError(f"Failed to create topic {topic.id}: {e.orig}") from e
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to create topic {topic.id}: {e}") from e
        return self._to_record(row)

    async def update_topic(self, new_state: TopicRecord, previous_state: TopicRecord) -> TopicRecord:
        try:
            row = await self.topic_model.update_topic(new_state, previous_state)
        except IntegrityError as e:
            # (topic_id, version) already in history: a concurrent writer won
            raise StorageError(
                f"Version {previous_state.version} of topic {previous_state.id} is already recorded"
            ) from e
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to update topic {new_state.id}: {e}") from e
        return self._to_record(row)

    async def get_latest_topic(self, topic_id: str) -> Optional[TopicRecord]:
        try:
            row = await self.topic_model.get_topic_by_id(topic_id)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read topic {topic_id}: {e}") from e
        return self._to_record(row) if row is not None else None

    async def _get_history_entry(self, topic_id: str, version: int) -> Optional[TopicVersionRecord]:
        try:
            row = await self.topic_model.get_topic_version(topic_id, version)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read version {version} of topic {topic_id}: {e}") from e
        return self._to_version_record(row) if row is not None else None

    async def get_topic_versions(self, topic_id: str) -> List[TopicVersionRecord]:
        try:
            rows = await self.topic_model.get_topic_versions(topic_id)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read versions of topic {topic_id}: {e}") from e
        return [self._to_version_record(row) for row in rows]

    async def get_all_topics(self) -> List[TopicRecord]:
        try:
            rows = await self.topic_model.get_all_topics()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to list topics: {e}") from e
        return [self._to_record(row) for row in rows]

    async def get_topic_children(self, topic_id: str) -> List[TopicChild]:
        try:
            children = await self.topic_model.get_topic_children(topic_id)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read children of topic {topic_id}: {e}") from e
        return [TopicChild(id=child_id, name=name) for child_id, name in children]

    async def get_topic_connections(self, topic_id: str) -> TopicConnections:
        try:
            exists, parent_id = await self.topic_model.get_parent_topic_id(topic_id)
            if not exists:
                return TopicConnections()
            children = await self.topic_model.get_topic_children(topic_id)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read connections of topic {topic_id}: {e}") from e
        return TopicConnections(
            parent_id=parent_id,
            child_ids=[child_id for child_id, _ in children],
        )

    async def clear_database(self) -> None:
        try:
            deleted = await self.topic_model.delete_all()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to clear topic store: {e}") from e
        logger.info(f"SQL topic store cleared | topics_deleted={deleted}")
