import time
from .s3_client import build_key, view_url, put_object_bytes

class CloudStorageService:
    """Receipt objects in the S3-compatible bucket."""

    def view_url(self, key: str) -> str:
        return view_url(key)

    def receipt_key(self, user_id: str, filename: str, *, now_ms: int | None = None) -> str:
        stamp = now_ms if now_ms is not None else int(time.time() * 1000)
        return build_key(user_id, "receipts", f"{stamp}-{filename}")

    def put(self, key: str, data: bytes, *, content_type: str) -> None:
        put_object_bytes(key, data, content_type=content_type)
