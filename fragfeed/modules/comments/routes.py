from fastapi import APIRouter, Depends, Query
from fragfeed.database.supabase_client import get_supabase
from fragfeed.modules.comments.schemas import CommentCreate, CommentResponse, CommentPage, CommentCountResponse
from fragfeed.modules.comments.service import CommentService
from fragfeed.core.dependencies import get_current_user
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/comments", tags=["comments"])


def get_comment_service(supabase: Client = Depends(get_supabase)) -> CommentService:
    return CommentService(supabase)


@router.post("", response_model=CommentResponse, status_code=201)
async def create_comment(
    comment_data: CommentCreate,
    user: Dict = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service)
):
    return service.create_comment(comment_data, user["id"])


@router.get("", response_model=CommentPage)
async def get_comments(
    post_id: str,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: CommentService = Depends(get_comment_service)
):
    return service.get_comments(post_id, limit, offset)


@router.get("/count", response_model=CommentCountResponse)
async def get_comment_count(
    post_id: str,
    service: CommentService = Depends(get_comment_service)
):
    return CommentCountResponse(count=service.get_comment_count(post_id))


@router.delete("/{comment_id}", status_code=204)
async def delete_comment(
    comment_id: str,
    user: Dict = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service)
):
    """Delete comment (author only)"""
    service.delete_comment(comment_id, user["id"])
    return None
