import re
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 21
MAX_GUIDELINES = 10


def validate_subreddit_name(name: str) -> str:
    name = name.strip()
    if len(name) < NAME_MIN_LENGTH or len(name) > NAME_MAX_LENGTH:
        raise ValueError("Community name must be between 3 and 21 characters")
    if not NAME_PATTERN.match(name):
        raise ValueError("Community name can only contain letters, numbers and underscores")
    return name


class SubredditCreate(BaseModel):
    name: str
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return validate_subreddit_name(v)


class SubredditNameUpdate(BaseModel):
    new_name: str

    @field_validator("new_name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return validate_subreddit_name(v)


class SubredditBannerUpdate(BaseModel):
    banner_image: Optional[str] = None


class SubredditLogoUpdate(BaseModel):
    logo_image: Optional[str] = None


class SubredditGuidelinesUpdate(BaseModel):
    guidelines: List[str] = Field(default_factory=list)


class SubredditCreatedResponse(BaseModel):
    id: str


class SubredditResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    author_id: str
    guidelines: List[str] = Field(default_factory=list)
    banner_image: Optional[str] = None
    logo_image: Optional[str] = None
    banner_image_url: Optional[str] = None
    logo_image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SubredditSearchResult(SubredditResponse):
    type: str = "community"
    title: str


class MembershipSubredditResponse(SubredditResponse):
    joined_at: datetime
    membership_id: str


class MemberUser(BaseModel):
    id: str
    username: str
    profile_picture_url: Optional[str] = None


class MemberResponse(BaseModel):
    id: str
    user: MemberUser
    joined_at: datetime


class MemberCountResponse(BaseModel):
    count: int
