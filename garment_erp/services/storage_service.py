import logging
import time
import uuid
from typing import Optional

from garment_erp.data.blob_store import BlobStore

logger = logging.getLogger(__name__)


def build_object_path(folder: str, content_type: str) -> str:
    """``<folder>/<epoch millis>-<uuid4>.<ext>`` with the extension taken from the MIME subtype."""
    ext = content_type.split("/", 1)[1].split(";")[0].strip()
    return f"{folder.strip('/')}/{int(time.time() * 1000)}-{uuid.uuid4()}.{ext}"


def upload_image(blobs: BlobStore, folder: str, data: Optional[bytes], content_type: Optional[str]) -> Optional[str]:
    """
    Store an image and return its public URL. Missing data or a content type
    without a subtype skips the upload and returns None.
    """
    if not data:
        return None
    if not content_type or "/" not in content_type or not content_type.split("/", 1)[1].strip():
        logger.warning(f"Invalid content type {content_type!r}, skipping upload to {folder}")
        return None

    path = build_object_path(folder, content_type)
    blobs.upload(path, data, content_type)
    return blobs.public_url(path)
