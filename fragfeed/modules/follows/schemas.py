from pydantic import BaseModel
from datetime import datetime


class FollowUser(BaseModel):
    id: str
    username: str


class FollowResponse(BaseModel):
    id: str
    user: FollowUser
    created_at: datetime


class FollowCountResponse(BaseModel):
    count: int
