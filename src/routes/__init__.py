# Routes package

# Expose routers
from src.routes.base import router as base_router
from src.routes.topics import router as topics_router
from src.routes.admin import router as admin_router

__all__ = ["base_router", "topics_router", "admin_router"]
