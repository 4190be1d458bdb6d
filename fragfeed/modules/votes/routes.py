from fastapi import APIRouter, Depends
from fragfeed.database.supabase_client import get_supabase
from fragfeed.modules.votes.schemas import VoteCounts, VoteStatus, VoteToggleResponse
from fragfeed.modules.votes.service import VoteService
from fragfeed.core.dependencies import get_current_user, get_optional_user
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/votes", tags=["votes"])


def get_vote_service(supabase: Client = Depends(get_supabase)) -> VoteService:
    return VoteService(supabase)


@router.post("/{post_id}/upvote", response_model=VoteToggleResponse)
async def toggle_upvote(
    post_id: str,
    user: Dict = Depends(get_current_user),
    service: VoteService = Depends(get_vote_service)
):
    return VoteToggleResponse(active=service.toggle_upvote(post_id, user["id"]))


@router.post("/{post_id}/downvote", response_model=VoteToggleResponse)
async def toggle_downvote(
    post_id: str,
    user: Dict = Depends(get_current_user),
    service: VoteService = Depends(get_vote_service)
):
    return VoteToggleResponse(active=service.toggle_downvote(post_id, user["id"]))


@router.get("/{post_id}", response_model=VoteCounts)
async def get_vote_counts(
    post_id: str,
    service: VoteService = Depends(get_vote_service)
):
    return service.get_vote_counts(post_id)


@router.get("/{post_id}/status", response_model=VoteStatus)
async def get_vote_status(
    post_id: str,
    user: Optional[Dict] = Depends(get_optional_user),
    service: VoteService = Depends(get_vote_service)
):
    """Whether the caller has up- or downvoted; both false for anonymous callers"""
    if not user:
        return VoteStatus(upvoted=False, downvoted=False)
    return VoteStatus(
        upvoted=service.has_upvoted(post_id, user["id"]),
        downvoted=service.has_downvoted(post_id, user["id"]),
    )
