from fastapi import APIRouter, Depends, HTTPException, status

from garment_erp.data.procedures import PASSWORD_INVALID, PASSWORD_SUCCESS, PASSWORD_USER_NOT_FOUND
from garment_erp.data.store import DataStore
from garment_erp.dependencies import get_store
from garment_erp.schemas.people import ChangePasswordRequest

router = APIRouter(prefix="/account", tags=["account"])


@router.post("/change-password")
def change_password(payload: ChangePasswordRequest, store: DataStore = Depends(get_store)):
    result = store.rpc("change_user_password", payload.model_dump())
    if result == PASSWORD_USER_NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if result == PASSWORD_INVALID:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")
    return {"status": PASSWORD_SUCCESS}
