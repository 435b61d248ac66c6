"""Topic data model for current topic state and version history data access"""
from sqlalchemy import delete
from sqlalchemy.future import select

from src.core.exceptions import NotFoundError, VersionConflictError
from src.models.BaseDataModel import BaseDataModel
from src.models.TopicRecords import TopicRecord
from src.models.db_schemas.knowledge_base.schemas.topic import Topic
from src.models.db_schemas.knowledge_base.schemas.topic_version import TopicVersion


class TopicModel(BaseDataModel):

    def __init__(self, db_client: object):
        super().__init__(db_client=db_client)

    async def create_topic(self, topic: Topic) -> Topic:
        async with self.db_client() as session:
            session.add(topic)
            await session.commit()
            await session.refresh(topic)
            return topic

    async def get_topic_by_id(self, topic_id: str) -> Topic | None:
        """
        Get current topic row by id.

        Args:
            topic_id: Topic id

        Returns:
            Topic instance or None if not found
        """
        async with self.db_client() as session:
            async with session.begin():
                query = select(Topic).where(Topic.id == topic_id)
                topic = await session.execute(query)
                return topic.scalar_one_or_none()

    async def update_topic(self, new_state: TopicRecord, previous_state: TopicRecord) -> Topic:
        """
        Overwrite the current row and append the previous state to the history
        in a single transaction.

        The current row is locked (SELECT ... FOR UPDATE where the dialect
        supports it) and its version compared with previous_state.version.

        Args:
            new_state: State to write as the current row
            previous_state: State being superseded, appended as a version row

        Returns:
            Updated Topic row

        Raises:
            NotFoundError: No current row for new_state.id
            VersionConflictError: Current row is no longer at previous_state.version
        """
        async with self.db_client() as session:
            async with session.begin():
                query = select(Topic).where(Topic.id == new_state.id).with_for_update()
                result = await session.execute(query)
                current = result.scalar_one_or_none()
                if current is None:
                    raise NotFoundError(new_state.id)
                if current.version != previous_state.version:
                    raise VersionConflictError(
                        new_state.id, previous_state.version, current.version
                    )

                session.add(
                    TopicVersion(
                        topic_id=previous_state.id,
                        name=previous_state.name,
                        content=previous_state.content,
                        version=previous_state.version,
                        parent_topic_id=previous_state.parent_topic_id,
                        created_at=previous_state.updated_at,
                    )
                )

                current.name = new_state.name
                current.content = new_state.content
                current.version = new_state.version
                current.parent_topic_id = new_state.parent_topic_id
                current.updated_at = new_state.updated_at
            return current

    async def get_topic_version(self, topic_id: str, version: int) -> TopicVersion | None:
        async with self.db_client() as session:
            query = select(TopicVersion).where(
                TopicVersion.topic_id == topic_id,
                TopicVersion.version == version,
            )
            result = await session.execute(query)
            return result.scalar_one_or_none()

    async def get_topic_versions(self, topic_id: str) -> list[TopicVersion]:
        """
        Get all history rows for a topic, newest version first.

        Args:
            topic_id: Topic id

        Returns:
            List of TopicVersion rows
        """
        async with self.db_client() as session:
            query = (
                select(TopicVersion)
                .where(TopicVersion.topic_id == topic_id)
                .order_by(TopicVersion.version.desc())
            )
            result = await session.execute(query)
            return list(result.scalars().all())

    async def get_all_topics(self) -> list[Topic]:
        async with self.db_client() as session:
            query = select(Topic).order_by(Topic.seq)
            result = await session.execute(query)
            return list(result.scalars().all())

    async def get_topic_children(self, topic_id: str) -> list[tuple[str, str]]:
        """
        Get (id, name) of every topic whose current parent is topic_id,
        in creation order.

        Args:
            topic_id: Parent topic id

        Returns:
            List of (id, name) tuples
        """
        async with self.db_client() as session:
            query = (
                select(Topic.id, Topic.name)
                .where(Topic.parent_topic_id == topic_id)
                .order_by(Topic.seq)
            )
            result = await session.execute(query)
            return [(row.id, row.name) for row in result.all()]

    async def get_parent_topic_id(self, topic_id: str) -> tuple[bool, str | None]:
        """
        Get the parent link of a topic.

        Returns:
            Tuple of (topic exists, parent_topic_id)
        """
        async with self.db_client() as session:
            query = select(Topic.parent_topic_id).where(Topic.id == topic_id)
            result = await session.execute(query)
            row = result.first()
            if row is None:
                return False, None
            return True, row.parent_topic_id

    async def delete_all(self) -> int:
        """
        Delete every version row and every current row.

        Returns:
            Number of current topic rows deleted
        """
        async with self.db_client() as session:
            async with session.begin():
                await session.execute(delete(TopicVersion))
                result = await session.execute(delete(Topic))
                return result.rowcount
