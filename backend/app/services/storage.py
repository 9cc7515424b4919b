"""Room photo uploads to S3-compatible object storage (Cloudflare R2)."""

import logging
import time
from functools import lru_cache

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from app.config import settings
from app.exceptions import StorageError

logger = logging.getLogger(__name__)


class ObjectStorage:
    """Thin async wrapper around a boto3 S3 client."""

    def __init__(self, client, bucket: str, public_url: str) -> None:
        self._client = client
        self._bucket = bucket
        self._public_url = public_url.rstrip("/")

    @classmethod
    def from_settings(cls) -> "ObjectStorage":
        client = boto3.client(
            "s3",
            endpoint_url=settings.storage_endpoint or None,
            aws_access_key_id=settings.storage_access_key or None,
            aws_secret_access_key=settings.storage_secret_key or None,
            region_name="auto",
            config=Config(s3={"addressing_style": "path"}),
        )
        return cls(client, settings.storage_bucket, settings.storage_public_url)

    async def upload_image(self, data: bytes, filename: str, content_type: str | None) -> str:
        """Store ``data`` under ``images/`` and return its public URL.

        Raises:
            StorageError: If the object store rejects the upload.
        """
        key = f"images/{int(time.time() * 1000)}-{filename}"
        try:
            # boto3 is blocking; keep it off the event loop
            await run_in_threadpool(
                self._client.put_object,
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentType=content_type or "application/octet-stream",
                ContentLength=len(data),
            )
        except (BotoCoreError, ClientError) as exc:
            logger.exception("Upload of %s to bucket %s failed", key, self._bucket)
            raise StorageError("Failed to upload image to object storage") from exc

        logger.info("Uploaded room photo %s (%d bytes)", key, len(data))
        return f"{self._public_url}/{key}"


@lru_cache
def get_storage() -> ObjectStorage:
    """FastAPI dependency returning the process-wide storage client."""
    return ObjectStorage.from_settings()
