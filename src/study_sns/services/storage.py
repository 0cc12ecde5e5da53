"""
S3 storage for post images.

Dependencies: boto3
"""

from __future__ import annotations

import logging
import uuid
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from study_sns.core.settings import settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "post-images"

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


class StorageError(Exception):
    """Raised when an object cannot be written to the bucket."""


def build_object_key(user_id: str, content_type: str) -> str:
    """Return ``post-images/<user>/<uuid>.<ext>`` for a new upload."""
    ext = _EXTENSIONS.get(content_type, "bin")
    return f"{KEY_PREFIX}/{user_id}/{uuid.uuid4().hex}.{ext}"


class S3ImageStorage:
    """S3 client for the post image bucket."""

    def __init__(
        self,
        bucket: str,
        region: str,
        public_base_url: str,
        endpoint_url: str | None = None,
    ) -> None:
        """
        Args:
            bucket: S3 bucket name
            region: AWS region of the bucket
            public_base_url: Base URL objects are served from
            endpoint_url: Optional S3-compatible endpoint (MinIO, LocalStack)
        """
        self._bucket = bucket
        self._public_base_url = public_base_url.rstrip("/")
        self._s3_client = boto3.client("s3", region_name=region, endpoint_url=endpoint_url)

    def public_url(self, key: str) -> str:
        return f"{self._public_base_url}/{key}"

    def upload_image(self, user_id: str, data: bytes, content_type: str) -> tuple[str, str]:
        """
        Store an image and return its public URL and key.

        Raises:
            StorageError: If the put fails
        """
        key = build_object_key(user_id, content_type)
        try:
            self._s3_client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as exc:
            logger.error("S3 upload of %s failed: %s", key, exc)
            raise StorageError(f"Failed to store image: {exc}") from exc
        return self.public_url(key), key


@lru_cache(maxsize=1)
def get_image_storage() -> S3ImageStorage:
    """FastAPI dependency returning the process-wide storage client."""
    return S3ImageStorage(
        bucket=settings.s3_bucket,
        region=settings.s3_region,
        public_base_url=settings.s3_public_base,
        endpoint_url=settings.s3_endpoint_url,
    )
