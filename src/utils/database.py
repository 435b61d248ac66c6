"""Database connection utilities"""
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from typing import Callable

from src.models.db_schemas.knowledge_base.kb_base import KnowledgeBaseBase
from src.utils.config import Config
from src.utils.logger import get_logger

logger = get_logger(__name__)


def create_db_engine(config: Config) -> AsyncEngine:
    """
    Create the async SQLAlchemy engine for the configured database.

    Args:
        config: Application configuration with database_url

    Returns:
        AsyncEngine instance
    """
    database_url = config.get_database_url()

    engine_kwargs = {
        "echo": False,  # Set to True for SQL query logging
        "pool_pre_ping": True,  # Verify connections before using
    }
    # SQLite pools do not accept sizing arguments
    if not database_url.startswith("sqlite"):
        engine_kwargs["pool_size"] = config.db_pool_size
        engine_kwargs["max_overflow"] = config.db_max_overflow

    engine = create_async_engine(database_url, **engine_kwargs)

    logger.info(
        f"Database engine created for: "
        f"{database_url.split('@')[-1] if '@' in database_url else engine.url.get_backend_name()}"
    )
    return engine


def create_db_session_factory(engine: AsyncEngine) -> Callable[[], AsyncSession]:
    """
    Create a database session factory.

    Args:
        engine: Async engine the sessions are bound to

    Returns:
        Callable that returns an AsyncSession context manager
    """
    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    def get_session() -> AsyncSession:
        return async_session_maker()

    return get_session


async def create_tables(engine: AsyncEngine) -> None:
    """Create all knowledge base tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(KnowledgeBaseBase.metadata.create_all)
    logger.info("Knowledge base tables created")
