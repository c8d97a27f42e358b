from .service import CloudStorageService

from .types import (
    is_image_content_type,
    sniff_mime,
    bytes_contradict_image,
    sanitize_filename,
)

from .s3_client import (
    BUCKET,
    PREFIX,
    build_key,
    presigned_get,
    view_url,
    put_object_bytes,
)

__all__ = [
    "CloudStorageService",
    "is_image_content_type", "sniff_mime", "bytes_contradict_image", "sanitize_filename",
    "BUCKET", "PREFIX",
    "build_key", "presigned_get", "view_url",
    "put_object_bytes",
]
