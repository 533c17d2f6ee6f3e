"""Image uploads to the configured object storage."""

import logging
import os
import time

from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile
from rest_framework.exceptions import ValidationError

logger = logging.getLogger(__name__)


def validate_image(upload: UploadedFile, max_bytes: int) -> None:
    """Reject anything that is not an image or is larger than ``max_bytes``."""

    content_type = getattr(upload, "content_type", "") or ""
    if not content_type.startswith("image/"):
        raise ValidationError({"file": ["Only image files can be uploaded."]})
    if upload.size > max_bytes:
        limit_mb = max_bytes / (1024 * 1024)
        raise ValidationError({"file": [f"Image must be smaller than {limit_mb:g} MB."]})


def store_image(upload: UploadedFile, folder: str, owner: str, max_bytes: int) -> str:
    """Validate and save an image, returning its public URL path."""

    validate_image(upload, max_bytes)
    _, ext = os.path.splitext(upload.name or "")
    filename = f"{owner}-{int(time.time() * 1000)}{ext.lower()}"
    saved_path = default_storage.save(f"{folder}/{filename}", upload)
    logger.info("Stored image %s (%d bytes)", saved_path, upload.size)
    return default_storage.url(saved_path)


__all__ = ["validate_image", "store_image"]
