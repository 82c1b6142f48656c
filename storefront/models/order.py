from datetime import datetime
from typing import List, Literal, Optional
from beanie import Indexed, PydanticObjectId
from pydantic import BaseModel, Field

from storefront.core.constants import OrderStatus
from storefront.models.base import AuditedDocument


OrderStatusValue = Literal["Pending", "Processing", "Shipped", "Delivered", "Cancelled"]


class OrderItem(BaseModel):
    id: PydanticObjectId = Field(default_factory=PydanticObjectId)
    product_id: PydanticObjectId
    product_name: str
    product_image: Optional[str] = None
    quantity: int = Field(ge=1)
    unit_price: float

    @property
    def subtotal(self) -> float:
        return round(self.quantity * self.unit_price, 2)


class Order(AuditedDocument):
    user_id: Indexed(PydanticObjectId)
    order_number: Indexed(str, unique=True)
    status: OrderStatusValue = OrderStatus.PENDING
    total: float
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    shipping_address: str
    city: str
    zip_code: str
    payment_method: str = ""
    notes: Optional[str] = None
    shipped_date: Optional[datetime] = None
    delivered_date: Optional[datetime] = None
    items: List[OrderItem] = Field(default_factory=list)

    class Settings:
        name = "orders"

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)
