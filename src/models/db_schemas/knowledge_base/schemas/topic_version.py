from sqlalchemy import Column, Integer, Text, DateTime, Index, UniqueConstraint
from datetime import datetime

from src.models.db_schemas.knowledge_base.kb_base import KnowledgeBaseBase


class TopicVersion(KnowledgeBaseBase):
    """SQLAlchemy model for the topic_versions table (append-only history)"""

    __tablename__ = "topic_versions"

    # Primary key - store-assigned sequence
    id: int = Column(Integer, primary_key=True, autoincrement=True)

    # Snapshot fields
    topic_id: str = Column(Text, nullable=False)
    name: str = Column(Text, nullable=False)
    content: str = Column(Text, nullable=False)
    version: int = Column(Integer, nullable=False)
    parent_topic_id: str | None = Column(Text, nullable=True)

    # When the superseded revision came into being
    created_at: datetime = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("topic_id", "version", name="uq_topic_version_topic_id_version"),
        Index("ix_topic_version_topic_id", "topic_id"),
    )
