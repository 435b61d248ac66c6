"""Middleware configuration for FastAPI application"""
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.utils.config import Config
from src.utils.logger import get_logger

logger = get_logger(__name__)


def setup_middleware(app: FastAPI, app_config: Config) -> None:
    """
    Configure all middleware for the FastAPI application.

    Middleware is added in order, but executed in reverse order.
    So the last middleware added will be executed first.

    Args:
        app: FastAPI application instance
        app_config: Configuration holding the CORS origins
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        duration = time.time() - start_time
        logger.debug(
            f"{request.method} {request.url.path} | status={response.status_code} | "
            f"duration={duration:.3f}s"
        )
        return response
