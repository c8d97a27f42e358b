from typing import Optional
import boto3
from botocore.config import Config
from expense_tracker.core.settings import settings

def _client():
    secret = settings.AWS_SECRET_ACCESS_KEY.get_secret_value()
    access = settings.AWS_ACCESS_KEY_ID.get_secret_value()
    # empty credentials fall back to the default provider chain (env, profile, IAM role)
    return boto3.client(
        "s3",
        endpoint_url=settings.S3_ENDPOINT_URL,
        aws_access_key_id=access or None,
        aws_secret_access_key=secret or None,
        region_name=settings.AWS_REGION,
        config=Config(
            signature_version="s3v4",
            s3={"addressing_style": "path" if settings.S3_ENDPOINT_URL else "auto"},
            retries={"max_attempts": 3, "mode": "standard"},
            connect_timeout=5,
            read_timeout=15,
        ),
    )

S3 = _client()

BUCKET = settings.S3_BUCKET
PREFIX = settings.S3_PREFIX

def build_key(*parts: str) -> str:
    segs = [p.strip("/") for p in parts if p]
    return "/".join([p for p in ([PREFIX] + segs) if p])

def public_url(key: str) -> str:
    base = settings.MEDIA_PUBLIC_BASE_STRICT
    if not base:
        raise RuntimeError("MEDIA_PUBLIC_BASE is not set for policy 'public'")
    return f"{base.rstrip('/')}/{key.lstrip('/')}"

def presigned_get(key: str, ttl_sec: Optional[int] = None) -> str:
    return S3.generate_presigned_url(
        "get_object",
        Params={"Bucket": BUCKET, "Key": key},
        ExpiresIn=int(ttl_sec or settings.MEDIA_GET_TTL_SEC),
    )

def view_url(key: str, ttl_sec: Optional[int] = None) -> str:
    if settings.MEDIA_POLICY == "public":
        return public_url(key)
    return presigned_get(key, ttl_sec)

def put_object_bytes(key: str, body: bytes, *, content_type: str, cache_control: str | None = None):
    S3.put_object(
        Bucket=BUCKET,
        Key=key,
        Body=body,
        ContentType=content_type,
        **({"CacheControl": cache_control} if cache_control else {}),
    )