from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class CommentCreate(BaseModel):
    content: str = Field(min_length=1)
    post_id: str


class CommentAuthor(BaseModel):
    username: Optional[str] = None


class CommentResponse(BaseModel):
    id: str
    content: str
    post_id: str
    author_id: str
    created_at: Optional[datetime] = None
    author: CommentAuthor

    class Config:
        from_attributes = True


class CommentPage(BaseModel):
    items: List[CommentResponse]
    is_done: bool
    next_offset: Optional[int] = None


class CommentCountResponse(BaseModel):
    count: int
