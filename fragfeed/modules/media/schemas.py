from pydantic import BaseModel
from typing import Optional


class UploadUrlRequest(BaseModel):
    content_type: Optional[str] = None


class UploadUrlResponse(BaseModel):
    upload_url: str
    storage_id: str
