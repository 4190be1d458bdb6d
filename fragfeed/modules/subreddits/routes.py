from fastapi import APIRouter, Depends, Query
from fragfeed.database.supabase_client import get_supabase
from fragfeed.modules.subreddits.schemas import (
    SubredditCreate, SubredditCreatedResponse, SubredditResponse, SubredditSearchResult,
    SubredditBannerUpdate, SubredditLogoUpdate, SubredditGuidelinesUpdate, SubredditNameUpdate,
    MembershipSubredditResponse, MemberResponse, MemberCountResponse
)
from fragfeed.modules.subreddits.service import SubredditService
from fragfeed.core.dependencies import get_current_user, get_optional_user
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/subreddits", tags=["subreddits"])


def get_subreddit_service(supabase: Client = Depends(get_supabase)) -> SubredditService:
    return SubredditService(supabase)


@router.post("", response_model=SubredditCreatedResponse, status_code=201)
async def create_subreddit(
    subreddit_data: SubredditCreate,
    user: Dict = Depends(get_current_user),
    service: SubredditService = Depends(get_subreddit_service)
):
    """Create a community; the creator becomes its first member"""
    return SubredditCreatedResponse(id=service.create_subreddit(subreddit_data, user["id"]))


@router.get("/search", response_model=List[SubredditSearchResult])
async def search_subreddits(
    q: str = "",
    service: SubredditService = Depends(get_subreddit_service)
):
    return service.search(q)


@router.get("/r/{name}", response_model=SubredditResponse)
async def get_subreddit(
    name: str,
    service: SubredditService = Depends(get_subreddit_service)
):
    return service.get_subreddit(name)


@router.get("/memberships/{username}", response_model=List[MembershipSubredditResponse])
async def get_user_memberships(
    username: str,
    service: SubredditService = Depends(get_subreddit_service)
):
    return service.get_user_memberships(username)


@router.put("/{subreddit_id}/banner", response_model=SubredditResponse)
async def update_banner(
    subreddit_id: str,
    data: SubredditBannerUpdate,
    user: Dict = Depends(get_current_user),
    service: SubredditService = Depends(get_subreddit_service)
):
    return service.update_banner(subreddit_id, user["id"], data.banner_image)


@router.put("/{subreddit_id}/logo", response_model=SubredditResponse)
async def update_logo(
    subreddit_id: str,
    data: SubredditLogoUpdate,
    user: Dict = Depends(get_current_user),
    service: SubredditService = Depends(get_subreddit_service)
):
    return service.update_logo(subreddit_id, user["id"], data.logo_image)


@router.put("/{subreddit_id}/guidelines", response_model=SubredditResponse)
async def update_guidelines(
    subreddit_id: str,
    data: SubredditGuidelinesUpdate,
    user: Dict = Depends(get_current_user),
    service: SubredditService = Depends(get_subreddit_service)
):
    return service.update_guidelines(subreddit_id, user["id"], data.guidelines)


@router.put("/{subreddit_id}/name", response_model=SubredditResponse)
async def update_name(
    subreddit_id: str,
    data: SubredditNameUpdate,
    user: Dict = Depends(get_current_user),
    service: SubredditService = Depends(get_subreddit_service)
):
    return service.update_name(subreddit_id, user["id"], data.new_name)


@router.get("/{subreddit_id}/is-owner", response_model=bool)
async def is_owner(
    subreddit_id: str,
    user: Optional[Dict] = Depends(get_optional_user),
    service: SubredditService = Depends(get_subreddit_service)
):
    if not user:
        return False
    return service.is_owner(subreddit_id, user["id"])


@router.post("/{subreddit_id}/join", status_code=204)
async def join_subreddit(
    subreddit_id: str,
    user: Dict = Depends(get_current_user),
    service: SubredditService = Depends(get_subreddit_service)
):
    service.join(subreddit_id, user["id"])
    return None


@router.post("/{subreddit_id}/leave", status_code=204)
async def leave_subreddit(
    subreddit_id: str,
    user: Dict = Depends(get_current_user),
    service: SubredditService = Depends(get_subreddit_service)
):
    service.leave(subreddit_id, user["id"])
    return None


@router.get("/{subreddit_id}/is-member", response_model=bool)
async def is_member(
    subreddit_id: str,
    user: Optional[Dict] = Depends(get_optional_user),
    service: SubredditService = Depends(get_subreddit_service)
):
    if not user:
        return False
    return service.is_member(subreddit_id, user["id"])


@router.get("/{subreddit_id}/member-count", response_model=MemberCountResponse)
async def get_member_count(
    subreddit_id: str,
    service: SubredditService = Depends(get_subreddit_service)
):
    return MemberCountResponse(count=service.get_member_count(subreddit_id))


@router.get("/{subreddit_id}/members", response_model=List[MemberResponse])
async def get_members(
    subreddit_id: str,
    limit: int = Query(50, ge=1, le=200),
    service: SubredditService = Depends(get_subreddit_service)
):
    return service.get_members(subreddit_id, limit)
