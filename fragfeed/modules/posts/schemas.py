from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class PostCreate(BaseModel):
    subject: str = Field(min_length=1)
    body: str = ""
    subreddit_id: str
    storage_id: Optional[str] = None


class PostCreatedResponse(BaseModel):
    id: str


class PostAuthor(BaseModel):
    username: str


class PostSubreddit(BaseModel):
    id: str
    name: str


class PostResponse(BaseModel):
    id: str
    subject: str
    body: str
    subreddit_id: str
    author_id: str
    image: Optional[str] = None
    created_at: Optional[datetime] = None
    author: Optional[PostAuthor] = None
    subreddit: Optional[PostSubreddit] = None
    image_url: Optional[str] = None

    class Config:
        from_attributes = True


class PostPage(BaseModel):
    items: List[PostResponse]
    is_done: bool
    next_offset: Optional[int] = None


class PostSearchResult(BaseModel):
    id: str
    title: str
    type: str = "post"
    name: str
