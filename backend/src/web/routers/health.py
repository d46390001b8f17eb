"""
Health Router - API endpoints for health checks
"""
from fastapi import APIRouter, Depends

from ...services.events import MESSAGE_CREATED, NotificationHub
from ...services.records import RecordStore
from ..dependencies import get_hub, get_store

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/live")
async def health_live():
    """Liveness check: server process is up"""
    return {"status": "live"}


@router.get("/ready")
async def health_ready(
    store: RecordStore = Depends(get_store),
    hub: NotificationHub = Depends(get_hub),
):
    """Readiness check: store sizes and live listeners"""
    return {
        "status": "ready",
        "messages": store.count_messages(),
        "authors": store.count_authors(),
        "subscribers": hub.subscriber_count(MESSAGE_CREATED),
    }
