from supabase import Client
from fragfeed.modules.notifications.schemas import NotificationCreate, NotificationResponse
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

NEW_POST = "new_post"
FOLLOWER_POST = "follower_post"
NEW_FOLLOWER = "new_follower"


class NotificationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create(self, notification: NotificationCreate) -> None:
        self.create_many([notification])

    def create_many(self, notifications: List[NotificationCreate]) -> None:
        """Insert one unread row per notification in a single request"""
        if not notifications:
            return
        rows = [{**n.model_dump(), "read": False} for n in notifications]
        self.supabase.table("notifications").insert(rows).execute()
        logger.debug(f"Inserted {len(rows)} notification(s)")

    def get_user_notifications(self, user_id: str, limit: int = 20) -> List[NotificationResponse]:
        try:
            result = self.supabase.table("notifications")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .limit(limit)\
                .execute()
            return [NotificationResponse(**n) for n in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def mark_as_read(self, notification_id: str, user_id: str) -> NotificationResponse:
        """Mark one notification read; only its addressee may do so"""
        try:
            existing = self.supabase.table("notifications")\
                .select("id, user_id")\
                .eq("id", notification_id)\
                .limit(1)\
                .execute()

            if not existing.data:
                raise HTTPException(status_code=404, detail="Notification not found")
            if existing.data[0]["user_id"] != user_id:
                raise HTTPException(status_code=403, detail="You can't modify this notification")

            result = self.supabase.table("notifications")\
                .update({"read": True})\
                .eq("id", notification_id)\
                .execute()
            return NotificationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def mark_all_as_read(self, user_id: str) -> int:
        try:
            result = self.supabase.table("notifications")\
                .update({"read": True})\
                .eq("user_id", user_id)\
                .eq("read", False)\
                .execute()
            return len(result.data or [])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_unread_count(self, user_id: str) -> int:
        try:
            result = self.supabase.table("notifications")\
                .select("id", count="exact")\
                .eq("user_id", user_id)\
                .eq("read", False)\
                .execute()
            if result.count is not None:
                return result.count
            return len(result.data or [])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
