"""
Object storage gateway - deletes image blobs referenced by public Firebase URLs.

Public download URLs look like
https://firebasestorage.googleapis.com/v0/b/<bucket>/o/<url-encoded path>?alt=media&token=...
"""
import asyncio
import logging
import os
from urllib.parse import unquote

from google.api_core.exceptions import GoogleAPIError
from google.cloud import storage

from catalog.config import Config
from catalog.errors import ErrorType
from catalog.exceptions import AppException

logger = logging.getLogger(__name__)

OBJECT_PATH_DELIMITER = "/o/"


def extract_object_path(image_url: str) -> str | None:
    """Decode the bucket object path embedded in a public image URL."""
    parts = image_url.split(OBJECT_PATH_DELIMITER, 1)
    if len(parts) < 2:
        return None
    return unquote(parts[1].split("?")[0])


class StorageService:
    def __init__(self, bucket: storage.Bucket | None = None):
        self.bucket = bucket

    @classmethod
    def from_config(cls) -> "StorageService":
        """Open the bucket from the service account file, or run without one."""
        bucket_name = Config.STORAGE_BUCKET.removeprefix("gs://").rstrip("/")
        if not bucket_name or not os.path.exists(Config.FIREBASE_CREDENTIALS):
            logger.warning("Storage bucket not configured, image cleanup is disabled")
            return cls()

        client = storage.Client.from_service_account_json(Config.FIREBASE_CREDENTIALS)
        return cls(client.bucket(bucket_name))

    async def delete_by_url(self, image_url: str | None) -> None:
        """Delete the object behind a public URL.

        URLs that carry no object path are logged and ignored.

        Raises:
            AppException: NOT_CONFIGURED without a bucket, STORAGE_ERROR if the delete fails
        """
        if not image_url:
            logger.info("No image URL provided for deletion")
            return

        object_path = extract_object_path(image_url)
        if object_path is None:
            logger.info(f"Invalid image URL format: {image_url}")
            return

        if self.bucket is None:
            raise AppException(ErrorType.NOT_CONFIGURED, "Storage bucket not configured")

        try:
            await asyncio.to_thread(self.bucket.blob(object_path).delete)
        except GoogleAPIError as e:
            raise AppException(ErrorType.STORAGE_ERROR, f"Failed to delete {object_path}: {e}") from e

        logger.info(f"Deleted image from storage: {object_path}")

    async def discard_image(self, image_url: str | None) -> bool:
        """Best-effort delete; failures are logged and never reach the caller."""
        try:
            await self.delete_by_url(image_url)
        except Exception as e:
            logger.error(f"Error deleting image from storage: {e}")
            return False
        return True
