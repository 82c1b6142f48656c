from typing import List, Optional
from pydantic import BaseModel, Field


class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(1, ge=1, le=1000)


class UpdateCartItemRequest(BaseModel):
    cart_item_id: str
    quantity: int = Field(..., ge=1, le=1000)


class CartItemResponse(BaseModel):
    id: str
    product_id: str
    product_name: str
    product_image: Optional[str] = None
    quantity: int
    unit_price: float
    subtotal: float


class CartResponse(BaseModel):
    id: str
    user_id: str
    items: List[CartItemResponse] = Field(default_factory=list)
    total: float = 0
    total_items: int = 0
