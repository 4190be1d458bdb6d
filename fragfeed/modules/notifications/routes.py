from fastapi import APIRouter, Depends, Query
from fragfeed.database.supabase_client import get_supabase
from fragfeed.modules.notifications.schemas import NotificationResponse, UnreadCountResponse
from fragfeed.modules.notifications.service import NotificationService
from fragfeed.core.dependencies import get_current_user, get_optional_user
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_notification_service(supabase: Client = Depends(get_supabase)) -> NotificationService:
    return NotificationService(supabase)


@router.get("", response_model=List[NotificationResponse])
async def get_user_notifications(
    limit: int = Query(20, ge=1, le=100),
    user: Optional[Dict] = Depends(get_optional_user),
    service: NotificationService = Depends(get_notification_service)
):
    """Newest notifications for the acting user; empty for anonymous callers"""
    if not user:
        return []
    return service.get_user_notifications(user["id"], limit)


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    user: Optional[Dict] = Depends(get_optional_user),
    service: NotificationService = Depends(get_notification_service)
):
    if not user:
        return UnreadCountResponse(count=0)
    return UnreadCountResponse(count=service.get_unread_count(user["id"]))


@router.post("/read-all", status_code=200)
async def mark_all_as_read(
    user: Dict = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    updated = service.mark_all_as_read(user["id"])
    return {"updated": updated}


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_as_read(
    notification_id: str,
    user: Dict = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    return service.mark_as_read(notification_id, user["id"])
