# storefront/api/files.py
"""
Product image upload endpoints (Admin only).
"""
from fastapi import APIRouter, Depends, File, UploadFile

from storefront.core.security import CurrentUser, require_admin
from storefront.schemas import MessageResponse
from storefront.services import file_service
from storefront.services.file_service import StoredImage

router = APIRouter(prefix="/api/files", tags=["Files"])


@router.post("/upload-image", response_model=StoredImage)
async def upload_image(file: UploadFile = File(...), admin: CurrentUser = Depends(require_admin)):
    content = await file_service.read_upload(file)
    return await file_service.save_product_image(file.filename, content)


@router.delete("/delete-image/{file_name}", response_model=MessageResponse)
async def delete_image(file_name: str, admin: CurrentUser = Depends(require_admin)):
    await file_service.delete_product_image(file_name)
    return MessageResponse(message="Image deleted successfully")
