import re
from typing import Optional

import filetype

_UNSAFE_FILENAME = re.compile(r"[^a-zA-Z0-9.-]")


def is_image_content_type(content_type: str | None) -> bool:
    return bool(content_type) and content_type.lower().startswith("image/")


def sniff_mime(data: bytes) -> Optional[str]:
    kind = filetype.guess(data)
    return kind.mime if kind else None


def bytes_contradict_image(data: bytes) -> bool:
    """True when the payload is recognisable and is not an image."""
    m = sniff_mime(data)
    return m is not None and not m.startswith("image/")


def sanitize_filename(name: str | None) -> str:
    return _UNSAFE_FILENAME.sub("_", name or "receipt")
