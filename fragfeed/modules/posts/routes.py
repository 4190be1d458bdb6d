from fastapi import APIRouter, Depends, Query
from fragfeed.database.supabase_client import get_supabase
from fragfeed.modules.posts.schemas import PostCreate, PostCreatedResponse, PostResponse, PostPage, PostSearchResult
from fragfeed.modules.posts.service import PostService
from fragfeed.core.dependencies import get_current_user
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/posts", tags=["posts"])


def get_post_service(supabase: Client = Depends(get_supabase)) -> PostService:
    return PostService(supabase)


@router.post("", response_model=PostCreatedResponse, status_code=201)
async def create_post(
    post_data: PostCreate,
    user: Dict = Depends(get_current_user),
    service: PostService = Depends(get_post_service)
):
    """Create a post (author must be a member of the subreddit)"""
    return PostCreatedResponse(id=service.create_post(post_data, user))


@router.get("/search", response_model=List[PostSearchResult])
async def search_posts(
    q: str = "",
    subreddit: str = "",
    service: PostService = Depends(get_post_service)
):
    return service.search(q, subreddit)


@router.get("/subreddit/{subreddit_name}", response_model=PostPage)
async def get_subreddit_posts(
    subreddit_name: str,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: PostService = Depends(get_post_service)
):
    return service.get_subreddit_posts(subreddit_name, limit, offset)


@router.get("/user/{username}", response_model=PostPage)
async def user_posts(
    username: str,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: PostService = Depends(get_post_service)
):
    return service.user_posts(username, limit, offset)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    service: PostService = Depends(get_post_service)
):
    return service.get_post(post_id)


@router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: str,
    user: Dict = Depends(get_current_user),
    service: PostService = Depends(get_post_service)
):
    """Delete post (author only)"""
    service.delete_post(post_id, user["id"])
    return None
