import re
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from storefront.core.constants import Limits, Messages, Patterns, States


# ═══════════════════════════════════════════════════════════════════════════════
# CATEGORIES
# ═══════════════════════════════════════════════════════════════════════════════

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=Limits.CATEGORY_NAME_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=Limits.CATEGORY_DESCRIPTION_MAX_LENGTH)
    image: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Category name is required")
        return v


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=Limits.CATEGORY_NAME_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=Limits.CATEGORY_DESCRIPTION_MAX_LENGTH)
    image: Optional[str] = None
    state: Optional[str] = None

    @field_validator("state")
    @classmethod
    def validate_state(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in States.ALL:
            raise ValueError(f"State must be one of: {', '.join(States.ALL)}")
        return v


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    state: str
    product_count: int = 0
    created_at: datetime


# ═══════════════════════════════════════════════════════════════════════════════
# PRODUCTS
# ═══════════════════════════════════════════════════════════════════════════════

class _ProductFields(BaseModel):
    short_description: Optional[str] = Field(None, max_length=Limits.SHORT_DESCRIPTION_MAX_LENGTH)
    discount_price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    min_stock: Optional[int] = Field(None, ge=0)
    main_image: Optional[str] = None
    images: Optional[List[str]] = None
    brand: Optional[str] = Field(None, max_length=Limits.BRAND_MAX_LENGTH)
    is_featured: Optional[bool] = None
    weight: Optional[float] = Field(None, ge=0)
    length: Optional[float] = Field(None, ge=0)
    width: Optional[float] = Field(None, ge=0)
    height: Optional[float] = Field(None, ge=0)

    @field_validator("sku", check_fields=False)
    @classmethod
    def validate_sku(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return v
        if not re.match(Patterns.SKU, v):
            raise ValueError(Messages.INVALID_SKU)
        return v

    @model_validator(mode="after")
    def check_discount(self):
        price = getattr(self, "price", None)
        if price is not None and self.discount_price is not None and self.discount_price >= price:
            raise ValueError("Discount price must be lower than the price")
        return self


class ProductCreate(_ProductFields):
    name: str = Field(..., min_length=1, max_length=Limits.PRODUCT_NAME_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=Limits.DESCRIPTION_MAX_LENGTH)
    price: float = Field(..., gt=0)
    stock: int = Field(0, ge=0)
    min_stock: int = Field(5, ge=0)
    sku: str = Field(..., min_length=1, max_length=Limits.SKU_MAX_LENGTH)
    category_id: str
    is_featured: bool = False
    weight: float = Field(0, ge=0)
    length: float = Field(0, ge=0)
    width: float = Field(0, ge=0)
    height: float = Field(0, ge=0)


class ProductUpdate(_ProductFields):
    # Empty strings are accepted and mean "keep the current value"
    name: Optional[str] = Field(None, max_length=Limits.PRODUCT_NAME_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=Limits.DESCRIPTION_MAX_LENGTH)
    price: Optional[float] = Field(None, gt=0)
    sku: Optional[str] = Field(None, max_length=Limits.SKU_MAX_LENGTH)
    category_id: Optional[str] = None
    state: Optional[str] = None

    @field_validator("state")
    @classmethod
    def validate_state(cls, v: Optional[str]) -> Optional[str]:
        if v and v not in States.ALL:
            raise ValueError(f"State must be one of: {', '.join(States.ALL)}")
        return v


class ProductListItem(BaseModel):
    id: str
    name: str
    short_description: Optional[str] = None
    price: float
    discount_price: Optional[float] = None
    stock: int
    main_image: Optional[str] = None
    category_name: str = ""
    brand: Optional[str] = None
    is_featured: bool = False
    state: str


class ProductResponse(ProductListItem):
    description: str
    min_stock: int
    sku: str
    images: List[str] = Field(default_factory=list)
    category_id: str
    weight: float = 0
    length: float = 0
    width: float = 0
    height: float = 0
    created_at: datetime
    updated_at: Optional[datetime] = None


class ProductFilter(BaseModel):
    search_term: Optional[str] = None
    category_id: Optional[str] = None
    brand: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    in_stock_only: bool = False
    featured_only: bool = False
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
    page: int = 1
    page_size: int = 20


class DemoClearResponse(BaseModel):
    message: str
    deleted_count: int
