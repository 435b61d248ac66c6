"""Shared route dependencies/helpers (avoid duplication across routes)."""

from typing import Any

from fastapi import HTTPException, Request, status

from src.controllers.TopicController import TopicController
from src.stores.topicstore.TopicStoreInterface import TopicStoreInterface


def _require_app_state(request: Request, attr: str, missing_detail: str) -> Any:
    value = getattr(request.app.state, attr, None)
    if value is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=missing_detail,
        )
    return value


def get_topic_store(request: Request) -> TopicStoreInterface:
    """Get topic store provider from app state."""
    return _require_app_state(request, "topic_store", "Topic store not configured")


def get_topic_controller(request: Request) -> TopicController:
    """Build a TopicController over the application's topic store."""
    return TopicController(get_topic_store(request))
