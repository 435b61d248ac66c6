"""FastAPI application factory"""
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI

from src.core.middleware import setup_middleware
from src.routes import base, topics, admin
from src.stores.topicstore.TopicStoreProviderFactory import TopicStoreProviderFactory
from src.utils.config import Config, config as default_config
from src.utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    app_config: Config = app.state.config

    # Startup
    logger.info(f"Starting {app_config.app_name} v{app_config.app_version}")
    logger.info(f"Server running on {app_config.api_host}:{app_config.api_port}")

    # Initialize topic store
    try:
        store_factory = TopicStoreProviderFactory(app_config)
        topic_store = store_factory.create(app_config.topic_store_type)
        await topic_store.initialize()
        app.state.topic_store = topic_store
        logger.info(f"Topic store ({app_config.topic_store_type}) initialized")
    except Exception as e:
        logger.error(f"Failed to initialize topic store: {e}", exc_info=True)
        raise

    yield

    # Shutdown
    logger.info(f"Shutting down {app_config.app_name}")

    try:
        await app.state.topic_store.close()
        logger.info("Topic store closed")
    except Exception as e:
        logger.warning(f"Error closing topic store: {e}")
    app.state.topic_store = None


def create_app(app_config: Optional[Config] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        app_config: Configuration to build the app with (defaults to the
            environment-loaded global config)

    Returns:
        Configured FastAPI application instance
    """
    app_config = app_config or default_config

    app = FastAPI(
        title=app_config.app_name,
        description="Knowledge base of hierarchically organized, versioned topics "
                    "with hierarchy and shortest-path queries over the topic tree.",
        version=app_config.app_version,
        lifespan=lifespan,
    )
    app.state.config = app_config

    # Setup middleware (must be before routers)
    setup_middleware(app, app_config)

    # Include routers
    app.include_router(base.router)
    app.include_router(topics.router)
    app.include_router(admin.router)

    return app
