from fastapi import APIRouter, Depends
from fragfeed.database.supabase_client import get_supabase
from fragfeed.modules.users.schemas import (
    UserResponse, PublicUserResponse, UserSearchResult, ProfileUpdate,
    SteamConnect, RiotConnect, EpicConnect, UbisoftConnect, GamingPlatform
)
from fragfeed.modules.users.service import UserService
from fragfeed.core.dependencies import get_current_user, get_optional_user
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


@router.get("/me", response_model=Optional[UserResponse])
async def current_user(user: Optional[Dict] = Depends(get_optional_user)):
    """Acting user, or null for anonymous callers"""
    return user


@router.get("/search", response_model=List[UserSearchResult])
async def search_users(
    q: str = "",
    service: UserService = Depends(get_user_service)
):
    return service.search_users(q)


@router.get("/{username}/public", response_model=PublicUserResponse)
async def get_public_user(
    username: str,
    service: UserService = Depends(get_user_service)
):
    """Public profile with post count and linked gaming profiles"""
    return service.get_public_user(username)


@router.put("/me/profile", response_model=UserResponse)
async def update_profile(
    profile: ProfileUpdate,
    user: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    return service.update_profile(user["id"], profile)


@router.put("/me/gaming/steam", response_model=UserResponse)
async def connect_steam_profile(
    data: SteamConnect,
    user: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    return service.connect_steam_profile(user["id"], data)


@router.put("/me/gaming/riot", response_model=UserResponse)
async def connect_riot_profile(
    data: RiotConnect,
    user: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    return service.connect_riot_profile(user["id"], data)


@router.put("/me/gaming/epic", response_model=UserResponse)
async def connect_epic_profile(
    data: EpicConnect,
    user: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    return service.connect_epic_profile(user["id"], data)


@router.put("/me/gaming/ubisoft", response_model=UserResponse)
async def connect_ubisoft_profile(
    data: UbisoftConnect,
    user: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    return service.connect_ubisoft_profile(user["id"], data)


@router.delete("/me/gaming/{platform}", response_model=UserResponse)
async def disconnect_gaming_profile(
    platform: GamingPlatform,
    user: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    return service.disconnect_gaming_profile(user["id"], platform)
