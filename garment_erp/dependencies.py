"""
Request-scoped dependencies shared by the routers.

Routers never see the SQLAlchemy session: they receive a ``DataStore`` bound
to the per-request session, and a ``BlobStore`` for uploads.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from garment_erp.core.config import settings
from garment_erp.data.blob_store import BlobStore, LocalBlobStore
from garment_erp.data.sql_store import SqlAlchemyStore
from garment_erp.data.store import DataStore
from garment_erp.database import get_db


def get_store(db: Session = Depends(get_db)) -> DataStore:
    return SqlAlchemyStore(db)


def get_blob_store() -> BlobStore:
    return LocalBlobStore(
        root_dir=settings.storage.root_dir,
        public_base_url=settings.storage.public_url,
        bucket=settings.storage.bucket,
    )


__all__ = ["get_store", "get_blob_store"]
