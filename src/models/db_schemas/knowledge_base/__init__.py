# Knowledge base database schema package

# Expose base and tables for easier imports
from src.models.db_schemas.knowledge_base.kb_base import KnowledgeBaseBase
from src.models.db_schemas.knowledge_base.schemas import Topic, TopicVersion

__all__ = ["KnowledgeBaseBase", "Topic", "TopicVersion"]
