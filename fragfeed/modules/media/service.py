from supabase import Client
from fragfeed.config import settings
from fragfeed.modules.media.schemas import UploadUrlResponse
from fragfeed.modules.media.s3_storage import S3Storage
from typing import Optional
from fastapi import HTTPException
import uuid
import logging

logger = logging.getLogger(__name__)


class MediaService:
    """Upload URLs and time-limited fetch URLs for stored media.

    A storage id is either an object path in the Supabase Storage bucket or,
    when S3 is configured, an s3://bucket/key URI.
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.bucket = settings.media_bucket
        self.ttl = settings.media_url_ttl_seconds

        # Initialize S3 storage if credentials are available
        self.s3_storage = None
        if settings.s3_configured:
            try:
                self.s3_storage = S3Storage()
            except Exception as e:
                logger.warning(f"S3 storage initialization failed ({str(e)}), will use Supabase Storage")
                self.s3_storage = None

    def generate_upload_url(self, user_id: str, content_type: Optional[str] = None) -> UploadUrlResponse:
        key = f"{user_id}/{uuid.uuid4().hex}"
        try:
            if self.s3_storage:
                upload_url = self.s3_storage.presigned_upload_url(key, content_type, self.ttl)
                return UploadUrlResponse(upload_url=upload_url, storage_id=self.s3_storage.storage_id(key))

            result = self.supabase.storage.from_(self.bucket).create_signed_upload_url(key)
            upload_url = result.get("signed_url") or result.get("signedUrl")
            if not upload_url:
                raise HTTPException(status_code=500, detail="Failed to create upload URL")
            return UploadUrlResponse(upload_url=upload_url, storage_id=key)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to create upload URL: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to create upload URL: {str(e)}")

    def get_url(self, storage_id: Optional[str]) -> Optional[str]:
        """Fetch URL for a storage id; None when the id is empty or cannot be signed"""
        if not storage_id:
            return None
        if storage_id.startswith("s3://"):
            if not self.s3_storage:
                logger.warning(f"S3 media reference {storage_id} but S3 is not configured")
                return None
            return self.s3_storage.presigned_get_url(self.s3_storage.key_from_storage_id(storage_id), self.ttl)
        try:
            result = self.supabase.storage.from_(self.bucket).create_signed_url(storage_id, self.ttl)
            return result.get("signedURL") or result.get("signedUrl")
        except Exception as e:
            logger.warning(f"Failed to sign media url for {storage_id}: {e}")
            return None
