"""Topic API routes"""
from typing import Optional
from pydantic import BaseModel
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from src.controllers.TopicController import TopicController
from src.core.exceptions import (
    CyclicHierarchyError,
    DuplicateIdError,
    InvalidArgumentError,
    KnowledgeBaseError,
    NotFoundError,
    VersionConflictError,
)
from src.routes.dependencies import get_topic_controller
from src.utils.logger import get_logger

router = APIRouter(
    prefix="/api/v1/topics",
    tags=["api_v1", "topics"],
)

logger = get_logger(__name__)


# Pydantic models for request/response
class CreateTopicRequest(BaseModel):
    """Request model for creating a topic"""
    # Missing or null fields are rejected by the controller with 400, like empty ones
    name: Optional[str] = None
    content: Optional[str] = None
    parent_topic_id: Optional[str] = None


class UpdateTopicRequest(BaseModel):
    """Request model for writing a new topic version"""
    name: Optional[str] = None
    content: Optional[str] = None


def _to_http_exception(error: KnowledgeBaseError) -> HTTPException:
    """Map a knowledge base error to the HTTP status it is reported with"""
    if isinstance(error, InvalidArgumentError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, (DuplicateIdError, VersionConflictError, CyclicHierarchyError)):
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=status_code, detail=str(error))


@router.post("")
async def create_topic(
    create_request: CreateTopicRequest,
    topic_controller: TopicController = Depends(get_topic_controller),
):
    """
    Create a new topic at version 1.

    Args:
        create_request: Name, content and optional parent id

    Returns:
        JSON response with the created topic
    """
    try:
        logger.info(
            f"Create topic request received | name={create_request.name!r} | "
            f"parent_topic_id={create_request.parent_topic_id}"
        )
        topic = await topic_controller.create_topic(
            create_request.name,
            create_request.content,
            create_request.parent_topic_id,
        )
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content={
                "message": "topic_created",
                "topic": topic.model_dump(mode="json"),
            }
        )
    except KnowledgeBaseError as e:
        logger.warning(f"Failed to create topic | error={e}")
        raise _to_http_exception(e)
    except Exception as e:
        logger.error(f"Error creating topic: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create topic: {str(e)}"
        )


@router.get("/list")
async def list_topics(
    topic_controller: TopicController = Depends(get_topic_controller),
):
    """List the current state of every topic"""
    try:
        topics = await topic_controller.get_topics_list()
        logger.info(f"Retrieved topics list | total={len(topics)}")
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={
                "message": "topics_retrieved",
                "topics": [topic.model_dump(mode="json") for topic in topics],
                "total": len(topics),
            }
        )
    except KnowledgeBaseError as e:
        logger.warning(f"Failed to list topics | error={e}")
        raise _to_http_exception(e)
    except Exception as e:
        logger.error(f"Error listing topics: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to list topics: {str(e)}"
        )


@router.put("/{topic_id}")
async def update_topic(
    topic_id: str,
    update_request: UpdateTopicRequest,
    topic_controller: TopicController = Depends(get_topic_controller),
):
    """
    Write a new version of a topic.

    Args:
        topic_id: Topic id
        update_request: New name and content

    Returns:
        JSON response with the new current state
    """
    try:
        logger.info(f"Update topic request received | topic_id={topic_id}")
        topic = await topic_controller.update_topic(
            topic_id,
            update_request.name,
            update_request.content,
        )
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={
                "message": "topic_updated",
                "topic": topic.model_dump(mode="json"),
            }
        )
    except KnowledgeBaseError as e:
        logger.warning(f"Failed to update topic | topic_id={topic_id} | error={e}")
        raise _to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating topic {topic_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update topic: {str(e)}"
        )


@router.get("/{topic_id}")
async def get_topic(
    topic_id: str,
    version: Optional[int] = Query(default=None, ge=1),
    topic_controller: TopicController = Depends(get_topic_controller),
):
    """
    Get a topic, optionally as it was at a given version.

    Args:
        topic_id: Topic id
        version: Optional version number

    Returns:
        JSON response with the topic
    """
    try:
        topic = await topic_controller.get_topic_version(topic_id, version)
    except KnowledgeBaseError as e:
        logger.warning(f"Failed to get topic | topic_id={topic_id} | error={e}")
        raise _to_http_exception(e)
    except Exception as e:
        logger.error(f"Error getting topic {topic_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to get topic: {str(e)}"
        )

    if topic is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Topic not found"
        )
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "message": "topic_retrieved",
            "topic": topic.model_dump(mode="json"),
        }
    )


@router.get("/{topic_id}/versions")
async def get_topic_versions(
    topic_id: str,
    topic_controller: TopicController = Depends(get_topic_controller),
):
    """List the superseded versions of a topic, newest first"""
    try:
        versions = await topic_controller.get_topic_versions(topic_id)
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={
                "message": "topic_versions_retrieved",
                "versions": [v.model_dump(mode="json") for v in versions],
            }
        )
    except KnowledgeBaseError as e:
        logger.warning(f"Failed to get topic versions | topic_id={topic_id} | error={e}")
        raise _to_http_exception(e)
    except Exception as e:
        logger.error(f"Error getting versions of topic {topic_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to get topic versions: {str(e)}"
        )


@router.get("/{topic_id}/hierarchy")
async def get_topic_hierarchy(
    topic_id: str,
    topic_controller: TopicController = Depends(get_topic_controller),
):
    """Get a topic with all of its descendants"""
    try:
        hierarchy = await topic_controller.get_topic_hierarchy(topic_id)
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={
                "message": "topic_hierarchy_retrieved",
                "hierarchy": hierarchy.model_dump(mode="json"),
            }
        )
    except KnowledgeBaseError as e:
        logger.warning(f"Failed to get topic hierarchy | topic_id={topic_id} | error={e}")
        raise _to_http_exception(e)
    except Exception as e:
        logger.error(f"Error getting hierarchy of topic {topic_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to get topic hierarchy: {str(e)}"
        )


@router.get("/{start_id}/path/{end_id}")
async def find_path(
    start_id: str,
    end_id: str,
    topic_controller: TopicController = Depends(get_topic_controller),
):
    """
    Find the shortest chain of topics linking two topics.

    An empty path means the topics are not connected.
    """
    try:
        path = await topic_controller.find_shortest_path(start_id, end_id)
        logger.info(f"Path search | start_id={start_id} | end_id={end_id} | length={len(path)}")
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={
                "message": "topic_path_retrieved" if path else "topic_path_not_found",
                "path": path,
            }
        )
    except KnowledgeBaseError as e:
        logger.warning(f"Failed to find path | start_id={start_id} | end_id={end_id} | error={e}")
        raise _to_http_exception(e)
    except Exception as e:
        logger.error(f"Error finding path from {start_id} to {end_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to find path: {str(e)}"
        )
