from sqlalchemy import Column, Text, Integer, DateTime, Index, UniqueConstraint
from datetime import datetime

from src.models.db_schemas.knowledge_base.kb_base import KnowledgeBaseBase


class Topic(KnowledgeBaseBase):
    """SQLAlchemy model for the topics table (current state of each topic)"""

    __tablename__ = "topics"

    # Primary key - insertion sequence, gives creation order independent of the clock
    seq: int = Column(Integer, primary_key=True, autoincrement=True)

    # Opaque id generated by the application
    id: str = Column(Text, nullable=False)

    # Topic fields
    name: str = Column(Text, nullable=False)
    content: str = Column(Text, nullable=False)
    version: int = Column(Integer, nullable=False, default=1)

    # Parent link is not a foreign key: dangling and cyclic links are allowed
    parent_topic_id: str | None = Column(Text, nullable=True)

    # Timestamps (set by the application clock)
    created_at: datetime = Column(DateTime(timezone=True), nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), nullable=False)

    # Constraints and indexes
    __table_args__ = (
        UniqueConstraint("id", name="uq_topic_id"),
        Index("ix_topic_parent_topic_id", "parent_topic_id"),
        Index("ix_topic_created_at", "created_at"),
    )
