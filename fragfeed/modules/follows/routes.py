from fastapi import APIRouter, Depends, Query
from fragfeed.database.supabase_client import get_supabase
from fragfeed.modules.follows.schemas import FollowResponse, FollowCountResponse
from fragfeed.modules.follows.service import FollowService
from fragfeed.core.dependencies import get_current_user, get_optional_user
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/follows", tags=["follows"])


def get_follow_service(supabase: Client = Depends(get_supabase)) -> FollowService:
    return FollowService(supabase)


@router.post("/{user_id}", status_code=204)
async def follow_user(
    user_id: str,
    user: Dict = Depends(get_current_user),
    service: FollowService = Depends(get_follow_service)
):
    service.follow_user(user, user_id)
    return None


@router.delete("/{user_id}", status_code=204)
async def unfollow_user(
    user_id: str,
    user: Dict = Depends(get_current_user),
    service: FollowService = Depends(get_follow_service)
):
    service.unfollow_user(user["id"], user_id)
    return None


@router.get("/{user_id}/is-following", response_model=bool)
async def is_following(
    user_id: str,
    user: Optional[Dict] = Depends(get_optional_user),
    service: FollowService = Depends(get_follow_service)
):
    if not user:
        return False
    return service.is_following(user["id"], user_id)


@router.get("/{user_id}/followers/count", response_model=FollowCountResponse)
async def get_follower_count(
    user_id: str,
    service: FollowService = Depends(get_follow_service)
):
    return FollowCountResponse(count=service.get_follower_count(user_id))


@router.get("/{user_id}/following/count", response_model=FollowCountResponse)
async def get_following_count(
    user_id: str,
    service: FollowService = Depends(get_follow_service)
):
    return FollowCountResponse(count=service.get_following_count(user_id))


@router.get("/{user_id}/followers", response_model=List[FollowResponse])
async def get_followers(
    user_id: str,
    limit: int = Query(50, ge=1, le=200),
    service: FollowService = Depends(get_follow_service)
):
    return service.get_followers(user_id, limit)


@router.get("/{user_id}/following", response_model=List[FollowResponse])
async def get_following(
    user_id: str,
    limit: int = Query(50, ge=1, le=200),
    service: FollowService = Depends(get_follow_service)
):
    return service.get_following(user_id, limit)
