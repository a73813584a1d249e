import logging
from pathlib import Path
from typing import Protocol

from garment_erp.core.exceptions import ConflictError, DataStoreError

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    def upload(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> None:
        ...

    def public_url(self, path: str) -> str:
        ...


class LocalBlobStore:
    """Filesystem-backed bucket. Paths are relative to ``root_dir/bucket``; uploads never overwrite."""

    def __init__(self, root_dir: str, public_base_url: str, bucket: str):
        self.base = Path(root_dir) / bucket
        self.public_base_url = public_base_url.rstrip("/")
        self.bucket = bucket

    def _resolve(self, path: str) -> Path:
        target = (self.base / path).resolve()
        if self.base.resolve() not in target.parents:
            raise DataStoreError(f"Invalid storage path: {path}")
        return target

    def upload(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> None:
        target = self._resolve(path)
        if target.exists():
            raise ConflictError(f"Object already exists: {path}")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            logger.error(f"Blob upload failed for {path}: {e}")
            raise DataStoreError(f"Upload failed for {path}") from e
        logger.info(f"Stored {len(data)} bytes at {self.bucket}/{path} ({content_type})")

    def public_url(self, path: str) -> str:
        return f"{self.public_base_url}/{self.bucket}/{path.lstrip('/')}"
