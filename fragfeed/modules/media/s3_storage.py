import boto3
from botocore.exceptions import ClientError
from fragfeed.config import settings
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class S3Storage:
    def __init__(self):
        if not settings.s3_configured:
            raise ValueError("AWS S3 credentials and bucket name must be configured")

        self.s3_client = boto3.client(
            's3',
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region
        )
        self.bucket_name = settings.s3_bucket_name

    def storage_id(self, key: str) -> str:
        return f"s3://{self.bucket_name}/{key}"

    def key_from_storage_id(self, storage_id: str) -> str:
        return storage_id.replace(f"s3://{self.bucket_name}/", "", 1)

    def presigned_upload_url(self, key: str, content_type: Optional[str] = None, expires_in: int = 3600) -> str:
        """Presigned PUT URL the client uploads the object to"""
        params = {"Bucket": self.bucket_name, "Key": key}
        if content_type:
            params["ContentType"] = content_type
        try:
            return self.s3_client.generate_presigned_url("put_object", Params=params, ExpiresIn=expires_in)
        except ClientError as e:
            logger.error(f"Failed to presign S3 upload: {str(e)}")
            raise

    def presigned_get_url(self, key: str, expires_in: int = 3600) -> Optional[str]:
        try:
            return self.s3_client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket_name, "Key": key},
                ExpiresIn=expires_in
            )
        except ClientError as e:
            logger.error(f"Failed to presign S3 download: {str(e)}")
            return None

