from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.concurrency import run_in_threadpool

from garment_erp.core.exceptions import ValidationFailed
from garment_erp.core.limiter import limiter
from garment_erp.data.blob_store import BlobStore
from garment_erp.dependencies import get_blob_store
from garment_erp.schemas.people import UploadResult
from garment_erp.services import storage_service

router = APIRouter(prefix="/uploads", tags=["uploads"])

# Folders used by the worker, employee and product forms
UPLOAD_FOLDERS = ("workers", "employees", "products", "supervisors")


@router.post("/{folder}", response_model=UploadResult)
@limiter.limit("30/minute")
async def upload_image(
    request: Request,
    folder: str,
    file: UploadFile = File(...),
    blobs: BlobStore = Depends(get_blob_store),
):
    """Stores the image and returns its public URL; ``url`` is null when the file was skipped."""
    if folder not in UPLOAD_FOLDERS:
        raise ValidationFailed(f"Unknown upload folder '{folder}'", details={"allowed": list(UPLOAD_FOLDERS)})
    data = await file.read()
    # Blob writes are blocking file I/O
    url = await run_in_threadpool(storage_service.upload_image, blobs, folder, data, file.content_type)
    return UploadResult(url=url)
