# Models package

# Expose base and models for easier imports
from src.models.db_schemas.knowledge_base.kb_base import KnowledgeBaseBase
from src.models.db_schemas.knowledge_base.schemas import Topic, TopicVersion
from src.models.BaseDataModel import BaseDataModel
from src.models.TopicModel import TopicModel
from src.models.TopicRecords import (
    TopicRecord,
    TopicVersionRecord,
    TopicChild,
    TopicConnections,
    TopicHierarchyNode,
)

__all__ = [
    "KnowledgeBaseBase",
    "Topic",
    "TopicVersion",
    "BaseDataModel",
    "TopicModel",
    "TopicRecord",
    "TopicVersionRecord",
    "TopicChild",
    "TopicConnections",
    "TopicHierarchyNode",
]
