from typing import Optional, Tuple
from fastapi import APIRouter, HTTPException, Depends, File, UploadFile, status
from dependency_injector.wiring import inject, Provide

from expense_tracker.core.security.deps import AuthUser, get_current_user
from expense_tracker.core.settings import settings
from expense_tracker.app_containers import ApplicationContainer
from expense_tracker.core.logger import logger

from expense_tracker.storage.cloud_storage import bytes_contradict_image, is_image_content_type
from expense_tracker.v1_0.entities import ReceiptUploadDTO
from expense_tracker.v1_0.services import ReceiptService

router = APIRouter(tags=["Receipts"])

MAX_BYTES = settings.RECEIPT_MAX_BYTES
MAX_MB = MAX_BYTES // (1024 * 1024)


async def _read_upload(img: UploadFile) -> Tuple[bytes, str]:
    data = await img.read(MAX_BYTES + 1)
    if not data:
        raise HTTPException(400, "No file uploaded")
    if len(data) > MAX_BYTES:
        raise HTTPException(400, f"File size must be less than {MAX_MB}MB")
    ct = (img.content_type or "").split(";")[0].strip().lower()
    if not is_image_content_type(ct) or bytes_contradict_image(data):
        raise HTTPException(400, "Only image files are allowed")
    return data, ct


@router.post(
    "/upload-receipt",
    response_model=ReceiptUploadDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a receipt image (multipart field 'receipt')",
)
@inject
async def upload_receipt(
    receipt: Optional[UploadFile] = File(None, description="Image file, at most 5MB"),
    user: AuthUser = Depends(get_current_user),
    service: ReceiptService = Depends(
        Provide[ApplicationContainer.api_container.receipt_service]
    ),
):
    if receipt is None:
        raise HTTPException(400, "No file uploaded")
    data, ct = await _read_upload(receipt)
    try:
        return await service.upload(
            user.user_id,
            filename=receipt.filename,
            content_type=ct,
            data=data,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[ReceiptRouter] upload error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to upload receipt")
