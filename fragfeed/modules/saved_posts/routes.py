from fastapi import APIRouter, Depends, Query
from fragfeed.database.supabase_client import get_supabase
from fragfeed.modules.saved_posts.schemas import SavedPostResponse
from fragfeed.modules.saved_posts.service import SavedPostService
from fragfeed.core.dependencies import get_current_user, get_optional_user
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/saved-posts", tags=["saved-posts"])


def get_saved_post_service(supabase: Client = Depends(get_supabase)) -> SavedPostService:
    return SavedPostService(supabase)


@router.get("", response_model=List[SavedPostResponse])
async def get_user_saved_posts(
    limit: int = Query(50, ge=1, le=200),
    user: Optional[Dict] = Depends(get_optional_user),
    service: SavedPostService = Depends(get_saved_post_service)
):
    if not user:
        return []
    return service.get_user_saved_posts(user["id"], limit)


@router.post("/{post_id}", status_code=204)
async def save_post(
    post_id: str,
    user: Dict = Depends(get_current_user),
    service: SavedPostService = Depends(get_saved_post_service)
):
    service.save_post(user["id"], post_id)
    return None


@router.delete("/{post_id}", status_code=204)
async def unsave_post(
    post_id: str,
    user: Dict = Depends(get_current_user),
    service: SavedPostService = Depends(get_saved_post_service)
):
    service.unsave_post(user["id"], post_id)
    return None


@router.get("/{post_id}/is-saved", response_model=bool)
async def is_post_saved(
    post_id: str,
    user: Optional[Dict] = Depends(get_optional_user),
    service: SavedPostService = Depends(get_saved_post_service)
):
    if not user:
        return False
    return service.is_post_saved(user["id"], post_id)
