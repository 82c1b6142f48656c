from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from storefront.core.constants import Limits, OrderStatus


class CreateOrderRequest(BaseModel):
    customer_name: str = Field(..., min_length=1, max_length=200)
    customer_email: EmailStr
    customer_phone: Optional[str] = Field(None, max_length=20)
    shipping_address: str = Field(..., min_length=1, max_length=500)
    city: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)
    payment_method: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("customer_email", mode="before")
    @classmethod
    def check_email_length(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if len(v) > Limits.CUSTOMER_EMAIL_MAX_LENGTH:
                raise ValueError(f"Email cannot exceed {Limits.CUSTOMER_EMAIL_MAX_LENGTH} characters")
        return v


class UpdateOrderStatusRequest(BaseModel):
    status: str
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in OrderStatus.ALL:
            raise ValueError(f"Invalid order status. Valid values: {', '.join(OrderStatus.ALL)}")
        return v


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    product_name: str
    product_image: Optional[str] = None
    quantity: int
    unit_price: float
    subtotal: float


class OrderResponse(BaseModel):
    id: str
    order_number: str
    user_id: str
    status: str
    total: float
    total_items: int
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    shipping_address: str
    city: str
    zip_code: str
    payment_method: str = ""
    notes: Optional[str] = None
    created_at: datetime
    shipped_date: Optional[datetime] = None
    delivered_date: Optional[datetime] = None
    items: List[OrderItemResponse] = Field(default_factory=list)
