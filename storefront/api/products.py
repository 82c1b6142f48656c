# storefront/api/products.py
"""
Product endpoints: filtered listing, featured products and admin CRUD.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from storefront.core.constants import Pagination
from storefront.core.security import CurrentUser, require_admin
from storefront.schemas import (
    CategoryResponse,
    DemoClearResponse,
    MessageResponse,
    PaginatedResponse,
    ProductCreate,
    ProductFilter,
    ProductListItem,
    ProductResponse,
    ProductUpdate,
)
from storefront.services import category_service, product_service

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=PaginatedResponse[ProductListItem])
async def list_products(
    search_term: Optional[str] = None,
    category_id: Optional[str] = None,
    brand: Optional[str] = None,
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    in_stock_only: bool = False,
    featured_only: bool = False,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    page: int = Pagination.MIN_PAGE,
    page_size: int = Pagination.DEFAULT_PAGE_SIZE,
):
    filters = ProductFilter(
        search_term=search_term,
        category_id=category_id,
        brand=brand,
        min_price=min_price,
        max_price=max_price,
        in_stock_only=in_stock_only,
        featured_only=featured_only,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        page_size=page_size,
    )
    return await product_service.list_products(filters)


@router.get("/featured", response_model=List[ProductListItem])
async def featured_products():
    return await product_service.featured_products()


@router.get("/categories", response_model=List[CategoryResponse])
async def product_categories():
    return await category_service.list_categories()


@router.delete("/demo/clear", response_model=DemoClearResponse)
async def clear_demo_products(admin: CurrentUser = Depends(require_admin)):
    deleted = await product_service.clear_demo_products(user_id=admin.id)
    return DemoClearResponse(message=f"{deleted} demo products removed", deleted_count=deleted)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str):
    return await product_service.get_product(product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(data: ProductCreate, admin: CurrentUser = Depends(require_admin)):
    return await product_service.create_product(data, user_id=admin.id)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, data: ProductUpdate, admin: CurrentUser = Depends(require_admin)):
    return await product_service.update_product(product_id, data, user_id=admin.id)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: str, admin: CurrentUser = Depends(require_admin)):
    await product_service.delete_product(product_id, user_id=admin.id)
    return MessageResponse(message="Product deleted successfully")
