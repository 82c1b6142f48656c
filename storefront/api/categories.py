# storefront/api/categories.py
"""
Category endpoints. Reads are public, writes need the Admin role.
"""
from typing import List

from fastapi import APIRouter, Depends, status

from storefront.core.security import CurrentUser, require_admin
from storefront.schemas import CategoryCreate, CategoryResponse, CategoryUpdate, MessageResponse
from storefront.services import category_service

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=List[CategoryResponse])
async def list_categories():
    return await category_service.list_categories()


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str):
    return await category_service.get_category(category_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(data: CategoryCreate, admin: CurrentUser = Depends(require_admin)):
    return await category_service.create_category(data, user_id=admin.id)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(category_id: str, data: CategoryUpdate, admin: CurrentUser = Depends(require_admin)):
    return await category_service.update_category(category_id, data, user_id=admin.id)


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(category_id: str, admin: CurrentUser = Depends(require_admin)):
    await category_service.delete_category(category_id, user_id=admin.id)
    return MessageResponse(message="Category deleted successfully")
