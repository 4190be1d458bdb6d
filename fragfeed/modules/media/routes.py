from fastapi import APIRouter, Depends
from fragfeed.database.supabase_client import get_supabase
from fragfeed.modules.media.schemas import UploadUrlRequest, UploadUrlResponse
from fragfeed.modules.media.service import MediaService
from fragfeed.core.dependencies import get_current_user
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/media", tags=["media"])


def get_media_service(supabase: Client = Depends(get_supabase)) -> MediaService:
    return MediaService(supabase)


@router.post("/upload-url", response_model=UploadUrlResponse)
async def generate_upload_url(
    request: Optional[UploadUrlRequest] = None,
    user: Dict = Depends(get_current_user),
    service: MediaService = Depends(get_media_service)
):
    """Issue a URL the client uploads a file to; persist the returned storage_id on the owning record"""
    content_type = request.content_type if request else None
    return service.generate_upload_url(user["id"], content_type)
