from sqlalchemy.orm import declarative_base

# Declarative base shared by all knowledge base tables
KnowledgeBaseBase = declarative_base()
