import asyncio

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import HTTPException

from expense_tracker.core.logger import logger
from expense_tracker.storage.cloud_storage import CloudStorageService, sanitize_filename
from expense_tracker.v1_0.entities import ReceiptUploadDTO


class ReceiptService:
    """Stores receipt images under ``<userId>/receipts/`` in the bucket."""

    def __init__(self, storage: CloudStorageService) -> None:
        self.storage = storage

    async def upload(
        self,
        user_id: str,
        *,
        filename: str | None,
        content_type: str,
        data: bytes,
    ) -> ReceiptUploadDTO:
        """
        Upload an already validated image and return its retrieval URL.

        Raises:
            HTTPException: 500 if the object store rejects the upload.
        """
        key = self.storage.receipt_key(user_id, sanitize_filename(filename))
        logger.info("[ReceiptService] upload key=%s bytes=%s ct=%s", key, len(data), content_type)
        try:
            await asyncio.to_thread(self.storage.put, key, data, content_type=content_type)
            url = await asyncio.to_thread(self.storage.view_url, key)
        except (BotoCoreError, ClientError) as e:
            logger.error("[ReceiptService] upload failed key=%s: %s", key, e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to upload receipt")

        return ReceiptUploadDTO(
            success=True,
            key=key,
            url=url,
            message="Receipt uploaded successfully",
        )
