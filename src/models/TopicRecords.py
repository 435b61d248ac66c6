"""Store-independent topic records exchanged between store, controller and routes"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TopicRecord(BaseModel):
    """Current state of a topic"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    content: str
    version: int = Field(default=1, ge=1)
    parent_topic_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TopicVersionRecord(BaseModel):
    """Immutable snapshot of a superseded topic revision"""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    topic_id: str
    name: str
    content: str
    version: int = Field(ge=1)
    parent_topic_id: Optional[str] = None
    created_at: datetime

    def to_topic(self, created_at: datetime) -> TopicRecord:
        """
        Present the snapshot as a topic record.

        Args:
            created_at: Creation time of the topic itself (snapshots only
                carry the time their revision was written)

        Returns:
            TopicRecord with the snapshot's fields
        """
        return TopicRecord(
            id=self.topic_id,
            name=self.name,
            content=self.content,
            version=self.version,
            parent_topic_id=self.parent_topic_id,
            created_at=created_at,
            updated_at=self.created_at,
        )


class TopicChild(BaseModel):
    id: str
    name: str


class TopicConnections(BaseModel):
    """Immediate undirected neighbours of a topic"""

    parent_id: Optional[str] = None
    child_ids: list[str] = Field(default_factory=list)


class TopicHierarchyNode(TopicRecord):
    """A topic with its recursively expanded children"""

    children: list[TopicHierarchyNode] = Field(default_factory=list)


TopicHierarchyNode.model_rebuild()
