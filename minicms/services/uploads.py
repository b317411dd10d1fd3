"""Validation and storage of post images."""

import logging
import os
import uuid

from fastapi import UploadFile

from minicms.config import Settings
from minicms.exceptions import InvalidUploadError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"jpg", "jpeg", "png"}

# Leading bytes of each accepted format
IMAGE_SIGNATURES = {
    "image/jpeg": b"\xff\xd8\xff",
    "image/png": b"\x89PNG\r\n\x1a\n",
}


def sniff_image_type(data: bytes) -> str | None:
    """Return the MIME type of JPEG/PNG data, judged from its content."""
    for mime, signature in IMAGE_SIGNATURES.items():
        if data.startswith(signature):
            return mime
    return None


async def save_image(upload: UploadFile | None, settings: Settings) -> str | None:
    """Validate and store an uploaded image.

    Returns the stored file name, or None when no file was sent.
    """
    if upload is None or not upload.filename:
        return None

    data = await upload.read()
    if not data:
        return None
    if len(data) > settings.max_upload_bytes:
        max_mb = settings.max_upload_bytes / (1024 * 1024)
        raise InvalidUploadError(f"File too large. Max {max_mb:g}MB.")

    ext = os.path.splitext(upload.filename)[1].lower().lstrip(".")
    if ext not in ALLOWED_EXTENSIONS:
        raise InvalidUploadError("Invalid file extension.")

    if sniff_image_type(data) is None:
        raise InvalidUploadError("Invalid file type. File must be a valid JPEG or PNG image.")

    safe_name = f"img_{uuid.uuid4().hex}.{ext}"
    os.makedirs(settings.upload_dir, exist_ok=True)
    with open(os.path.join(settings.upload_dir, safe_name), "wb") as f:
        f.write(data)

    logger.info(f"Stored upload {upload.filename!r} as {safe_name}")
    return safe_name
