"""Health check endpoint"""

from fastapi import APIRouter, Depends

from taskease.api.deps import get_broadcaster
from taskease.services.chat_service import ConnectionManager

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check(broadcaster: ConnectionManager = Depends(get_broadcaster)):
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": "taskease-backend",
        "world_chat_connections": broadcaster.connection_count,
    }
