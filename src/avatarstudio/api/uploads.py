"""Upload acceptance and transient storage for ``POST /api/generate-avatar``.

Route handlers call :func:`accept_upload` before looking at any other field.
It enforces the upload rules in this order:

1. the filename extension **and** the declared content type must both be
   JPEG/JPG/PNG (:class:`UnsupportedMediaError` otherwise)
2. the payload must not exceed ``max_upload_bytes``
   (:class:`UploadTooLargeError` otherwise)

Once the rest of the request is valid, :func:`store_upload` writes the bytes
to ``uploads_dir`` under a name built from a
strictly increasing millisecond timestamp, a random number and the original
extension, e.g. ``image-1718000000000-483920117.png``.  Files are never
cleaned up.
"""

from __future__ import annotations

import logging
import random
import time
from pathlib import Path

from fastapi import UploadFile

from avatarstudio.core.errors import UnsupportedMediaError, UploadTooLargeError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png"})
ALLOWED_CONTENT_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png"})
UNSUPPORTED_MEDIA_MESSAGE = "Only JPEG, JPG, and PNG files are allowed"

_last_timestamp_ms = 0


def _next_timestamp_ms() -> int:
    """Return the current epoch time in ms, strictly greater than the last call."""
    global _last_timestamp_ms
    now = time.time_ns() // 1_000_000
    _last_timestamp_ms = max(now, _last_timestamp_ms + 1)
    return _last_timestamp_ms


def is_allowed_media(filename: str, content_type: str | None) -> bool:
    """Return ``True`` only if both the extension and the content type are allowed."""
    extension = Path(filename).suffix.lower()
    return extension in ALLOWED_EXTENSIONS and (content_type or "").lower() in ALLOWED_CONTENT_TYPES


def unique_upload_name(filename: str, field_name: str = "image") -> str:
    """Build a collision-resistant storage name that keeps the original extension."""
    suffix = f"{_next_timestamp_ms()}-{random.randint(0, 10**9)}"
    return f"{field_name}-{suffix}{Path(filename).suffix}"


async def read_upload(upload: UploadFile, max_bytes: int) -> bytes:
    """Read an upload, refusing anything larger than *max_bytes*.

    Raises:
        UploadTooLargeError: If the payload exceeds *max_bytes*.
    """
    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise UploadTooLargeError(f"File too large: the limit is {max_bytes} bytes")
    return data


def store_upload(data: bytes, uploads_dir: Path, filename: str) -> Path:
    """Write *data* to a freshly named file in *uploads_dir* and return its path."""
    uploads_dir.mkdir(parents=True, exist_ok=True)
    path = uploads_dir / unique_upload_name(filename)
    # "x" refuses to overwrite an existing upload.
    with open(path, "xb") as f:
        f.write(data)
    logger.info(f"Stored upload '{filename}' as {path.name} ({len(data)} bytes)")
    return path


async def accept_upload(upload: UploadFile, max_bytes: int) -> bytes:
    """Validate an uploaded image and return its bytes.

    Args:
        upload: The ``image`` form field.
        max_bytes: Size limit in bytes.

    Returns:
        The uploaded bytes.

    Raises:
        UnsupportedMediaError: If the extension or content type is not allowed.
        UploadTooLargeError: If the payload is larger than *max_bytes*.
    """
    filename = upload.filename or ""
    if not is_allowed_media(filename, upload.content_type):
        logger.info(f"Rejected upload '{filename}' ({upload.content_type})")
        raise UnsupportedMediaError(UNSUPPORTED_MEDIA_MESSAGE)

    return await read_upload(upload, max_bytes)
