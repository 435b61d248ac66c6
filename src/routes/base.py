from fastapi import APIRouter, Depends, Request
from src.utils.config import Config
from src.utils.logger import get_logger

router = APIRouter(
    prefix="/api/v1",
    tags=["base"],
)

logger = get_logger(__name__)


def get_config(request: Request) -> Config:
    """Dependency to get the configuration the application was built with"""
    return request.app.state.config


@router.get("/")
async def root(config: Config = Depends(get_config)):
    """Service information endpoint"""
    logger.info("Root endpoint accessed")
    return {
        "message": f"{config.app_name} Backend API",
        "status": "running",
        "version": config.app_version,
        "topic_store": config.topic_store_type,
    }


@router.get("/health")
async def health():
    """Health check endpoint"""
    logger.debug("Health check endpoint accessed")
    return {"status": "healthy"}
