"""Administrative API routes"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from src.core.exceptions import StorageError
from src.routes.dependencies import get_topic_store
from src.stores.topicstore.TopicStoreInterface import TopicStoreInterface
from src.utils.logger import get_logger

router = APIRouter(
    prefix="/api/v1/admin",
    tags=["api_v1", "admin"],
)

logger = get_logger(__name__)


@router.post("/reset")
async def reset_store(
    request: Request,
    topic_store: TopicStoreInterface = Depends(get_topic_store),
):
    """
    Remove every topic and the whole version history.

    Disabled unless ALLOW_STORE_RESET is set.
    """
    if not request.app.state.config.allow_store_reset:
        logger.warning("Store reset refused: ALLOW_STORE_RESET is disabled")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Store reset is disabled"
        )

    try:
        await topic_store.clear_database()
    except StorageError as e:
        logger.error(f"Store reset failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to reset store: {str(e)}"
        )

    logger.info("Topic store reset")
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"message": "store_reset"}
    )
