from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime


class SteamProfile(BaseModel):
    steam_id: str
    username: str
    profile_url: str
    avatar_url: Optional[str] = None
    connected_at: datetime


class RiotProfile(BaseModel):
    riot_id: str
    game_name: str
    tag_line: str
    connected_at: datetime


class EpicProfile(BaseModel):
    epic_id: str
    display_name: str
    connected_at: datetime


class UbisoftProfile(BaseModel):
    ubisoft_id: str
    username: str
    connected_at: datetime


class UserResponse(BaseModel):
    id: str
    username: str
    external_id: str
    profile_picture: Optional[str] = None
    banner_image: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    steam_profile: Optional[SteamProfile] = None
    riot_profile: Optional[RiotProfile] = None
    epic_profile: Optional[EpicProfile] = None
    ubisoft_profile: Optional[UbisoftProfile] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PublicUserResponse(BaseModel):
    id: Optional[str] = None
    posts: int = 0
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    profile_picture_url: Optional[str] = None
    banner_image_url: Optional[str] = None
    steam_profile: Optional[SteamProfile] = None
    riot_profile: Optional[RiotProfile] = None
    epic_profile: Optional[EpicProfile] = None
    ubisoft_profile: Optional[UbisoftProfile] = None


class UserSearchResult(BaseModel):
    id: str
    username: str
    type: str = "user"
    title: str
    profile_picture_url: Optional[str] = None
    bio: Optional[str] = None


class ProfileUpdate(BaseModel):
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    profile_picture: Optional[str] = None
    banner_image: Optional[str] = None


class SteamConnect(BaseModel):
    steam_id: str
    username: str
    profile_url: str
    avatar_url: Optional[str] = None


class RiotConnect(BaseModel):
    riot_id: str
    game_name: str
    tag_line: str


class EpicConnect(BaseModel):
    epic_id: str
    display_name: str


class UbisoftConnect(BaseModel):
    ubisoft_id: str
    username: str


GamingPlatform = Literal["steam", "riot", "epic", "ubisoft"]


class IdentityUserData(BaseModel):
    """User payload pushed by the identity provider"""
    id: str = Field(min_length=1)
    username: Optional[str] = None
    user_metadata: Optional[dict] = None

    def resolved_username(self) -> str:
        if self.username:
            return self.username
        return (self.user_metadata or {}).get("username") or ""
