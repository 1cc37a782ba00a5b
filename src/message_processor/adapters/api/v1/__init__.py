"""API v1 router configuration.
"""

from fastapi import APIRouter

from .health import router as health_router
from .messages import router as messages_router
from .metrics import router as metrics_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(messages_router, prefix="/message", tags=["messages"])
api_router.include_router(metrics_router, prefix="/metrics", tags=["metrics"])
