from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class NotificationCreate(BaseModel):
    user_id: str
    type: str
    title: str
    message: str
    post_id: Optional[str] = None
    subreddit_id: Optional[str] = None
    from_user_id: Optional[str] = None


class NotificationResponse(BaseModel):
    id: str
    user_id: str
    type: str
    title: str
    message: str
    post_id: Optional[str] = None
    subreddit_id: Optional[str] = None
    from_user_id: Optional[str] = None
    read: bool = False
    created_at: datetime

    class Config:
        from_attributes = True


class UnreadCountResponse(BaseModel):
    count: int
